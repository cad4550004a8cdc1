"""Device collaborator protocols.

The journal never talks to platform APIs directly. Host apps implement
these protocols (biometrics, photo picker, microphone, OS notifications,
printing) and hand them to the session. Every method is async: the
implementation may do its work elsewhere, but the awaiting code resumes
on the event loop that owns the journal state.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from datetime import time
from enum import StrEnum
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from daybook.journal.config import AudioFormat
from daybook.journal.models import ImageBlob


class NotificationPermission(StrEnum):
    NOT_DETERMINED = "not_determined"
    GRANTED = "granted"
    DENIED = "denied"


@runtime_checkable
class Authenticator(Protocol):
    """Biometric (or passcode) check."""

    async def authenticate(self, prompt: str) -> bool:
        """Return True on success.

        Raises:
            AuthenticationError: the check failed or is unavailable; the
                message is shown to the user.
        """
        ...


@runtime_checkable
class MediaPicker(Protocol):
    """System photo picker."""

    def pick(self, *, allow_multiple: bool = True, images_only: bool = True) -> AsyncIterator[ImageBlob]:
        """Yield the images the user selected, one at a time."""
        ...


@runtime_checkable
class AudioRecorder(Protocol):
    """Microphone capture."""

    async def start(self, destination: Path, fmt: AudioFormat) -> Any:
        """Begin recording into *destination*; returns an opaque handle."""
        ...

    async def stop(self, handle: Any) -> Path:
        """Finish recording and return the written file."""
        ...


@runtime_checkable
class AudioPlayer(Protocol):
    async def play(self, path: Path) -> None:
        """Play a clip; returns when playback finishes."""
        ...


@runtime_checkable
class AudioDecoder(Protocol):
    async def read_samples(self, path: Path) -> Sequence[float]:
        """Decode a clip into mono PCM samples."""
        ...


@runtime_checkable
class Notifier(Protocol):
    """OS local notification service."""

    async def permission_status(self) -> NotificationPermission: ...

    async def request_permission(self) -> bool:
        """Prompt the user; True when granted."""
        ...

    async def schedule_recurring(self, key: str, at: time, title: str, body: str) -> None:
        """Schedule a daily notification, replacing any existing one under *key*."""
        ...

    async def cancel(self, key: str) -> None: ...


@runtime_checkable
class PrintService(Protocol):
    async def print_html(self, html: str, job_name: str) -> None: ...
