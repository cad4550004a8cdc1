"""Tests for daybook.journal.models."""

from datetime import datetime
from pathlib import Path

import pytest

from daybook.journal.models import AudioClip, Entry, EntryGroup, ImageBlob, JournalStats


class TestImageBlob:
    def test_equal_by_content(self):
        a = ImageBlob(b"same bytes")
        b = ImageBlob(bytearray(b"same bytes"), content_type="image/png")
        assert a == b
        assert a.digest == b.digest
        assert a is not b

    def test_different_content(self):
        assert ImageBlob(b"one") != ImageBlob(b"two")

    def test_rejects_non_bytes(self):
        with pytest.raises(ValueError, match="bytes"):
            ImageBlob("not bytes")

    def test_repr(self):
        assert "10 bytes" in repr(ImageBlob(b"0123456789"))


class TestAudioClip:
    def test_name(self):
        clip = AudioClip(path=Path("/tmp/media/abc.m4a"))
        assert clip.name == "abc.m4a"

    def test_equal_by_path(self):
        assert AudioClip(Path("/a.m4a")) == AudioClip(Path("/a.m4a"), created_at=datetime(2020, 1, 1))


class TestEntry:
    def test_defaults(self):
        entry = Entry(title="Hello")
        assert entry.id is None
        assert entry.is_bookmarked is False
        assert entry.show_title is True
        assert entry.images == []
        assert entry.audio_clips == []

    def test_is_empty(self):
        assert Entry(title="", description="").is_empty
        assert Entry(title="  ", description="\n\t").is_empty
        assert not Entry(title="", description="body").is_empty
        assert not Entry(title="Title", description="").is_empty

    def test_day(self):
        entry = Entry(title="x", date=datetime(2026, 3, 4, 23, 59))
        assert entry.day.isoformat() == "2026-03-04"

    def test_repr_uses_description_when_untitled(self):
        entry = Entry(description="A very long body that keeps going and going", date=datetime(2026, 1, 2))
        text = repr(entry)
        assert "2026-01-02" in text
        assert "..." in text

    def test_media_lists_not_shared(self):
        a, b = Entry(), Entry()
        a.images.append(ImageBlob(b"x"))
        assert b.images == []


class TestEntryGroup:
    def test_len(self):
        group = EntryGroup(header="Today", entries=[Entry(title="a"), Entry(title="b")])
        assert len(group) == 2


class TestJournalStats:
    def test_defaults(self):
        stats = JournalStats()
        assert (stats.day_streak, stats.total_words, stats.days_journalled) == (0, 0, 0)
