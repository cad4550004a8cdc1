"""Journal session: the view model behind the home screen and entry editor.

Owns the entry collection, the list filters, the editor state and, while
the editor is open, the draft and media session. Every mutation goes
through here and the derived views (groups, flat list, stats) are
recomputed on demand, never cached.

Usage::

    session = JournalSession(media_dir="~/.daybook-data/media", recorder=recorder)
    session.search_text = "park"
    for group in session.groups():
        print(group.header, [e.title for e in group.entries])

    session.open_new()
    session.draft.title = "Evening"
    await session.media.start_recording()
    await session.media.stop_recording()
    await session.confirm()
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger

from daybook.core.exceptions import InvalidEntryError
from daybook.core.result import ErrorKind, Result

from .collection import EntryCollection, sample_entries
from .config import JournalConfig
from .editor import EditorMode, EditorState, EntryDraft
from .grouping import filter_entries, format_footer_date, format_header_date, group_entries
from .media import MediaSession, delete_clip_file
from .models import Entry, EntryGroup, JournalStats
from .printing import print_entry
from .stats import compute_stats


class JournalSession:
    """Top-level journal state for one app run.

    Args:
        media_dir: Where new recordings are written.
        recorder: Audio capture collaborator handed to each media session.
        entries: Initial entries, newest first. None seeds the starter
            entries when ``config.seed_sample_entries`` is set.
        config: Journal settings.
        now: Reference time for the starter entries.
    """

    def __init__(
        self,
        media_dir: str | Path,
        recorder: Any = None,
        *,
        entries: Iterable[Entry] | None = None,
        config: JournalConfig | None = None,
        now: datetime | None = None,
    ):
        self.config = config or JournalConfig()
        self.media_dir = Path(media_dir).expanduser()
        self._recorder = recorder
        if entries is None and self.config.seed_sample_entries:
            entries = sample_entries(now)
        self.entries = EntryCollection(entries)

        self.search_text = ""
        self.bookmark_only = False
        self.sort_ascending = False

        self.editor = EditorState.closed()
        self.draft: EntryDraft | None = None
        self.media: MediaSession | None = None

    @classmethod
    def from_config(cls, config, recorder: Any = None, **kwargs) -> JournalSession:
        """Build from a :class:`daybook.core.config.Config`, creating its directories."""
        config.ensure_directories()
        return cls(
            config.get("paths.media_dir"),
            recorder,
            config=JournalConfig.from_config(config),
            **kwargs,
        )

    # -- Derived views ------------------------------------------------------

    def groups(self, now: datetime | None = None) -> list[EntryGroup]:
        return group_entries(
            self.entries,
            search_text=self.search_text,
            bookmark_only=self.bookmark_only,
            sort_ascending=self.sort_ascending,
            now=now,
        )

    def visible_entries(self) -> list[Entry]:
        return filter_entries(
            self.entries,
            search_text=self.search_text,
            bookmark_only=self.bookmark_only,
            sort_ascending=self.sort_ascending,
        )

    def stats(self) -> JournalStats:
        return compute_stats(self.entries)

    def header_date(self, value: datetime) -> str:
        return format_header_date(value, self.config.header_date_format)

    def footer_date(self, value: datetime) -> str:
        return format_footer_date(value, self.config.footer_date_format)

    # -- List actions -------------------------------------------------------

    def toggle_bookmark(self, entry_id: str) -> Entry | None:
        return self.entries.toggle_bookmark(entry_id)

    def toggle_show_title(self, entry_id: str) -> Entry | None:
        return self.entries.toggle_show_title(entry_id)

    async def remove(self, entry_id: str) -> Entry | None:
        """Delete an entry from the list, along with its recordings."""
        if self.editor.entry_id == entry_id:
            return await self.delete_editing()
        removed = self.entries.remove_by_id(entry_id)
        if removed is not None:
            await self._delete_files(removed)
        return removed

    async def print_entry(self, entry_id: str, service, template: str | None = None) -> Result[None]:
        """Print a stored entry. Unknown ids are a NOT_FOUND failure."""
        entry = self.entries.get(entry_id)
        if entry is None:
            return Result.failure(ErrorKind.NOT_FOUND, f"No entry {entry_id}")
        return await print_entry(entry, service, template, self.config.footer_date_format)

    # -- Editor -------------------------------------------------------------

    def _new_media_session(self, entry: Entry | None = None) -> MediaSession:
        return MediaSession(
            self.media_dir,
            self._recorder,
            images=entry.images if entry else (),
            audio_clips=entry.audio_clips if entry else (),
            audio_format=self.config.audio_format,
            waveform_buckets=self.config.waveform_buckets,
        )

    def _require_closed(self) -> None:
        if self.editor.is_open:
            raise InvalidEntryError(f"Editor already open ({self.editor.mode.value})")

    def open_new(self, now: datetime | None = None) -> EntryDraft:
        self._require_closed()
        self.editor = EditorState.creating()
        self.draft = EntryDraft(date=now or datetime.now())
        self.media = self._new_media_session()
        logger.debug("Editor opened for a new entry")
        return self.draft

    def open_edit(self, entry_id: str) -> bool:
        """Open the editor on an existing entry. Unknown ids leave it closed."""
        self._require_closed()
        entry = self.entries.get(entry_id)
        if entry is None:
            return False
        self.editor = EditorState.editing(entry_id)
        self.draft = EntryDraft.from_entry(entry)
        self.media = self._new_media_session(entry)
        logger.debug(f"Editor opened for entry {entry_id}")
        return True

    def toggle_draft_bookmark(self) -> None:
        """Bookmark toggle in the editor; applies to an existing entry immediately."""
        if self.draft is None:
            return
        self.draft.is_bookmarked = not self.draft.is_bookmarked
        if self.editor.mode == EditorMode.EDITING:
            self.entries.mutate_by_id(self.editor.entry_id, is_bookmarked=self.draft.is_bookmarked)

    def toggle_draft_show_title(self) -> None:
        """Show/hide title in the editor; applies to an existing entry immediately."""
        if self.draft is None:
            return
        self.draft.show_title = not self.draft.show_title
        if self.editor.mode == EditorMode.EDITING:
            self.entries.mutate_by_id(self.editor.entry_id, show_title=self.draft.show_title)

    async def confirm(self) -> Entry | None:
        """Apply the draft and attachments, then close the editor.

        A new entry is only created when it has a title or description.
        Returns the created or updated entry, or None when nothing was saved.
        """
        if not self.editor.is_open:
            return None
        draft, media, state = self.draft, self.media, self.editor

        if media.is_recording:
            await media.stop_recording()

        saved: Entry | None = None
        if state.mode == EditorMode.CREATING:
            if draft.is_blank:
                await media.discard()
            else:
                images, clips = media.commit()
                saved = self.entries.insert_at_front(
                    Entry(
                        title=draft.title,
                        description=draft.description,
                        date=draft.date,
                        is_bookmarked=draft.is_bookmarked,
                        show_title=draft.show_title,
                        images=images,
                        audio_clips=clips,
                    )
                )
        elif state.entry_id not in self.entries:
            # entry was removed while the editor was open
            await media.discard()
        else:
            images, clips = media.commit()
            saved = self.entries.mutate_by_id(
                state.entry_id,
                title=draft.title,
                description=draft.description,
                date=draft.date,
                show_title=draft.show_title,
                is_bookmarked=draft.is_bookmarked,
                images=images,
                audio_clips=clips,
            )
        logger.debug(f"Editor confirmed ({state.mode.value})")
        self._close()
        return saved

    async def cancel(self) -> None:
        """Close the editor without saving; new recordings are deleted."""
        if not self.editor.is_open:
            return
        await self.media.discard()
        if self.editor.mode == EditorMode.EDITING:
            self._drop_removed_clips(self.editor.entry_id, self.media.removed_clips)
        logger.debug(f"Editor cancelled ({self.editor.mode.value})")
        self._close()

    async def delete_editing(self) -> Entry | None:
        """Delete the entry open in the editor and close it."""
        if self.editor.mode != EditorMode.EDITING:
            return None
        await self.media.discard()
        removed = self.entries.remove_by_id(self.editor.entry_id)
        if removed is not None:
            await self._delete_files(removed)
        self._close()
        return removed

    def _drop_removed_clips(self, entry_id: str, removed: list) -> None:
        """Clip files deleted in the editor are gone even when the edit is cancelled."""
        entry = self.entries.get(entry_id)
        if entry is None or not removed:
            return
        kept = [clip for clip in entry.audio_clips if clip not in removed]
        if len(kept) != len(entry.audio_clips):
            self.entries.mutate_by_id(entry_id, audio_clips=kept)

    def _close(self) -> None:
        self.editor = EditorState.closed()
        self.draft = None
        self.media = None

    async def _delete_files(self, entry: Entry) -> None:
        for clip in entry.audio_clips:
            await delete_clip_file(clip)
