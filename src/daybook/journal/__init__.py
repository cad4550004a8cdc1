"""Journal entries and the view model around them.

Provides the entry model, an identity-keyed collection, the
filter/sort/group pipeline, statistics, editor-scoped media sessions,
and print rendering.
"""

from .collection import EntryCollection, sample_entries
from .config import AudioFormat, JournalConfig
from .editor import EditorMode, EditorState, EntryDraft
from .grouping import filter_entries, group_entries
from .media import MediaSession, RecorderState, waveform
from .models import AudioClip, Entry, EntryGroup, ImageBlob, JournalStats
from .session import JournalSession
from .stats import compute_stats

__all__ = [
    "AudioClip",
    "AudioFormat",
    "EditorMode",
    "EditorState",
    "Entry",
    "EntryCollection",
    "EntryDraft",
    "EntryGroup",
    "ImageBlob",
    "JournalConfig",
    "JournalSession",
    "JournalStats",
    "MediaSession",
    "RecorderState",
    "compute_stats",
    "filter_entries",
    "group_entries",
    "sample_entries",
    "waveform",
]
