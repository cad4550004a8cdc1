"""Core data models for journal entries.

Entries are plain dataclasses; identity is the ``id`` field, never the
position in a list. Media payloads are in-memory image bytes and file
references for recorded audio.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import date, datetime
from functools import cached_property
from pathlib import Path
from uuid import uuid4

from daybook.core.utils.text import is_blank, truncate_text


def new_entry_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class ImageBlob:
    """An attached image. Two blobs are equal when their bytes are equal."""

    data: bytes
    content_type: str = field(default="image/jpeg", compare=False)

    def __post_init__(self):
        if not isinstance(self.data, (bytes, bytearray)):
            raise ValueError("Image data must be bytes")
        object.__setattr__(self, "data", bytes(self.data))

    @cached_property
    def digest(self) -> str:
        return hashlib.sha256(self.data).hexdigest()

    def __repr__(self) -> str:
        return f"ImageBlob({self.content_type}, {len(self.data)} bytes, {self.digest[:8]})"


@dataclass(frozen=True)
class AudioClip:
    """Reference to a recorded audio file on disk."""

    path: Path
    created_at: datetime = field(default_factory=datetime.now, compare=False)

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class Entry:
    """One journal entry.

    Attributes:
        title: Optional heading, displayed only when ``show_title`` is set.
        description: The entry body.
        date: When the entry happened; only the calendar day drives grouping.
        id: Opaque unique identifier, assigned on insertion when None.
        is_bookmarked: Shown in the bookmarks filter.
        show_title: Per-entry title visibility.
        images: Attached images in display order.
        audio_clips: Attached recordings in display order.
    """

    title: str = ""
    description: str = ""
    date: datetime = field(default_factory=datetime.now)
    id: str | None = None
    is_bookmarked: bool = False
    show_title: bool = True
    images: list[ImageBlob] = field(default_factory=list)
    audio_clips: list[AudioClip] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when both title and description are blank."""
        return is_blank(self.title) and is_blank(self.description)

    @property
    def day(self) -> date:
        return self.date.date()

    def __repr__(self) -> str:
        label = self.title or truncate_text(self.description, 30)
        return f"Entry(id={self.id!r}, day={self.day.isoformat()}, title={label!r})"


@dataclass
class EntryGroup:
    """A labelled section of entries, in display order."""

    header: str
    entries: list[Entry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class JournalStats:
    """Summary numbers shown above the entry list.

    Attributes:
        day_streak: Longest run of consecutive days with at least one entry.
        total_words: Words across all titles and descriptions.
        days_journalled: Distinct days with at least one entry.
    """

    day_streak: int = 0
    total_words: int = 0
    days_journalled: int = 0
