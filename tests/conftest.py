"""Shared test fixtures for daybook."""

import os
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from daybook.core.exceptions import MediaIOError
from daybook.journal.models import ImageBlob

# Mid-month so "two days ago" stays in the current month
NOW = datetime(2026, 10, 18, 9, 30)


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "media_dir": os.path.join(tmp_dir, "media"),
        },
        "reminder": {
            "default_time": "21:15",
        },
        "journal": {
            "waveform_buckets": 30,
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def now():
    return NOW


# ---------------------------------------------------------------------------
# Fake audio recorder (other fakes live beside the tests that use them)
# ---------------------------------------------------------------------------


class FakeRecorder:
    """Writes a small file on stop, like a real recorder flushing its buffer.

    With ``write_on_start`` the file appears as soon as recording begins,
    which is what a streaming encoder does.
    """

    def __init__(self, fail_start: bool = False, fail_stop: bool = False, write_on_start: bool = False):
        self.fail_start = fail_start
        self.fail_stop = fail_stop
        self.write_on_start = write_on_start
        self.started: list[tuple[Path, object]] = []

    async def start(self, destination, fmt):
        if self.fail_start:
            raise MediaIOError("microphone unavailable")
        self.started.append((destination, fmt))
        if self.write_on_start:
            Path(destination).write_bytes(b"\x00partial")
        return {"path": destination}

    async def stop(self, handle):
        if self.fail_stop:
            raise MediaIOError("encoder crashed")
        path = Path(handle["path"])
        path.write_bytes(b"\x00\x01fake-aac")
        return path


@pytest.fixture
def recorder():
    return FakeRecorder()


@pytest.fixture
def make_recorder():
    """Factory for recorders with failure switches, e.g. ``make_recorder(fail_stop=True)``."""
    return FakeRecorder


@pytest.fixture
def media_dir(tmp_path):
    return tmp_path / "media"


@pytest.fixture
def png():
    return ImageBlob(b"\x89PNG fake image one", content_type="image/png")


@pytest.fixture
def jpeg():
    return ImageBlob(b"\xff\xd8 fake image two")
