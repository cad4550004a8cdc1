"""Editor state and the in-progress entry draft.

The editor is either closed, creating a new entry, or editing one
existing entry by id. Those are the only three states; "editing without
an entry" cannot be represented.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from daybook.core.exceptions import InvalidEntryError
from daybook.core.utils.text import is_blank

from .models import Entry


class EditorMode(StrEnum):
    CLOSED = "closed"
    CREATING = "creating"
    EDITING = "editing"


@dataclass(frozen=True)
class EditorState:
    mode: EditorMode = EditorMode.CLOSED
    entry_id: str | None = None

    def __post_init__(self):
        if (self.mode == EditorMode.EDITING) != (self.entry_id is not None):
            raise ValueError("entry_id is required when editing and only then")

    @classmethod
    def closed(cls) -> EditorState:
        return cls(EditorMode.CLOSED)

    @classmethod
    def creating(cls) -> EditorState:
        return cls(EditorMode.CREATING)

    @classmethod
    def editing(cls, entry_id: str) -> EditorState:
        return cls(EditorMode.EDITING, entry_id)

    @property
    def is_open(self) -> bool:
        return self.mode != EditorMode.CLOSED


@dataclass
class EntryDraft:
    """Text fields and flags being edited, applied to the entry on confirm."""

    title: str = ""
    description: str = ""
    date: datetime = field(default_factory=datetime.now)
    show_title: bool = True
    is_bookmarked: bool = False

    @property
    def is_blank(self) -> bool:
        return is_blank(self.title) and is_blank(self.description)

    @classmethod
    def from_entry(cls, entry: Entry) -> EntryDraft:
        return cls(
            title=entry.title,
            description=entry.description,
            date=entry.date,
            show_title=entry.show_title,
            is_bookmarked=entry.is_bookmarked,
        )

    def set_date(self, value: datetime, now: datetime | None = None) -> None:
        """Change the entry date; only today or earlier is allowed."""
        today = (now or datetime.now()).date()
        if value.date() > today:
            raise InvalidEntryError(f"Entry date {value.date().isoformat()} is in the future")
        self.date = value
