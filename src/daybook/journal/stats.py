"""Journal statistics: streaks, word totals, days journalled.

Computed over every entry in the collection, independent of whatever
search or bookmark filter the list view is showing.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta

from daybook.core.utils.text import word_count

from .models import Entry, JournalStats


def day_streak(entries: Iterable[Entry]) -> int:
    """Longest run of consecutive calendar days with at least one entry."""
    days = sorted({e.day for e in entries}, reverse=True)
    if not days:
        return 0

    longest = current = 1
    for prev, day in zip(days, days[1:]):
        if prev - day == timedelta(days=1):
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def total_words(entries: Iterable[Entry]) -> int:
    return sum(word_count(e.title) + word_count(e.description) for e in entries)


def days_journalled(entries: Iterable[Entry]) -> int:
    return len({e.day for e in entries})


def compute_stats(entries: Iterable[Entry]) -> JournalStats:
    entries = list(entries)
    return JournalStats(
        day_streak=day_streak(entries),
        total_words=total_words(entries),
        days_journalled=days_journalled(entries),
    )
