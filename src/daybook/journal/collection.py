"""Entry collection: the ordered, identity-keyed list of journal entries.

Storage order has no meaning for display (all ordering is derived by the
grouping pipeline), but it is preserved because it settles ties between
entries on the same date.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator
from datetime import datetime, timedelta

from loguru import logger

from daybook.core.exceptions import InvalidEntryError

from .models import Entry, new_entry_id

_MUTABLE_FIELDS = frozenset(f.name for f in dataclasses.fields(Entry)) - {"id"}


class EntryCollection:
    """Mutable list of entries addressed by id.

    Lookups that miss are no-ops, never errors: the caller may be holding
    an id for an entry another action already removed.
    """

    def __init__(self, entries: Iterable[Entry] | None = None) -> None:
        self._entries: list[Entry] = []
        self._issued: set[str] = set()
        for entry in reversed(list(entries or [])):
            self.insert_at_front(entry)

    # -- Read ---------------------------------------------------------------

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return self._index_of(entry_id) is not None

    def get(self, entry_id: str) -> Entry | None:
        idx = self._index_of(entry_id)
        return self._entries[idx] if idx is not None else None

    def ids(self) -> list[str]:
        return [e.id for e in self._entries]

    def snapshot(self) -> tuple[Entry, ...]:
        """Current entries in storage order."""
        return tuple(self._entries)

    def _index_of(self, entry_id: object) -> int | None:
        for idx, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return idx
        return None

    # -- Write --------------------------------------------------------------

    def insert_at_front(self, entry: Entry) -> Entry:
        """Insert *entry* at index 0, assigning a fresh id when it has none."""
        if entry.id is None:
            entry.id = self._fresh_id()
        elif entry.id in self._issued:
            raise InvalidEntryError(f"Entry id {entry.id!r} has already been used")
        self._issued.add(entry.id)
        self._entries.insert(0, entry)
        logger.debug(f"Inserted entry {entry.id}")
        return entry

    def remove_by_id(self, entry_id: str) -> Entry | None:
        """Remove and return the entry, or None if no such id exists."""
        idx = self._index_of(entry_id)
        if idx is None:
            logger.debug(f"remove_by_id: no entry {entry_id!r}")
            return None
        return self._entries.pop(idx)

    def mutate_by_id(self, entry_id: str, **changes) -> Entry | None:
        """Apply *changes* to one entry in a single step.

        Every field name and value is validated before anything changes, and
        the entry is swapped for an updated copy, so observers never see a
        half-applied edit.
        """
        unknown = set(changes) - _MUTABLE_FIELDS
        if unknown:
            raise InvalidEntryError(f"Cannot change fields: {', '.join(sorted(unknown))}")
        if "date" in changes and not isinstance(changes["date"], datetime):
            raise InvalidEntryError("date must be a datetime")

        idx = self._index_of(entry_id)
        if idx is None:
            logger.debug(f"mutate_by_id: no entry {entry_id!r}")
            return None

        for name in ("images", "audio_clips"):
            if name in changes:
                changes[name] = list(changes[name])
        updated = dataclasses.replace(self._entries[idx], **changes)
        self._entries[idx] = updated
        return updated

    def toggle_bookmark(self, entry_id: str) -> Entry | None:
        entry = self.get(entry_id)
        if entry is None:
            return None
        return self.mutate_by_id(entry_id, is_bookmarked=not entry.is_bookmarked)

    def toggle_show_title(self, entry_id: str) -> Entry | None:
        entry = self.get(entry_id)
        if entry is None:
            return None
        return self.mutate_by_id(entry_id, show_title=not entry.show_title)

    def _fresh_id(self) -> str:
        entry_id = new_entry_id()
        while entry_id in self._issued:
            entry_id = new_entry_id()
        return entry_id


def sample_entries(now: datetime | None = None) -> list[Entry]:
    """Starter entries shown on first launch, newest first."""
    now = now or datetime.now()
    return [
        Entry(title="Started Journal", description="Today I started my new journal app!", date=now),
        Entry(title="Walk in Park", description="Went for a walk in the park.", date=now - timedelta(days=1)),
        Entry(title="Read Book", description="Read a great book.", date=now - timedelta(days=2)),
    ]
