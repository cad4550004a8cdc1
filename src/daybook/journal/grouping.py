"""Filter, sort and group entries for display.

Everything here is a pure function of its inputs. "Now" is read at call
time unless the caller passes one in, so bucket labels roll over at
midnight without any cached state.

Grouped view::

    Today       -> entries dated today
    Yesterday   -> entries dated the day before
    October     -> the rest of the current month
    September   -> one bucket per earlier month, newest first
    March 2025  -> earlier months of another year carry the year
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from daybook.core.utils.text import contains_casefold

from .config import FOOTER_DATE_FORMAT, HEADER_DATE_FORMAT
from .models import Entry, EntryGroup

TODAY = "Today"
YESTERDAY = "Yesterday"


def matches_search(entry: Entry, search_text: str) -> bool:
    """Empty text matches everything; otherwise title or description must contain it."""
    if not search_text:
        return True
    return contains_casefold(entry.title, search_text) or contains_casefold(entry.description, search_text)


def _visible(entries: Iterable[Entry], search_text: str, bookmark_only: bool) -> list[Entry]:
    return [
        e
        for e in entries
        if matches_search(e, search_text) and (not bookmark_only or e.is_bookmarked) and not e.is_empty
    ]


def filter_entries(
    entries: Iterable[Entry],
    search_text: str = "",
    bookmark_only: bool = False,
    sort_ascending: bool = False,
) -> list[Entry]:
    """Flat list view: filtered entries sorted by date in the requested direction.

    The sort is stable in both directions, so entries sharing a date keep
    their collection order.
    """
    visible = _visible(entries, search_text, bookmark_only)
    if sort_ascending:
        return sorted(visible, key=lambda e: e.date)
    return _newest_first(visible)


def _newest_first(entries: list[Entry]) -> list[Entry]:
    # sorted(reverse=True) keeps equal keys in original order
    return sorted(entries, key=lambda e: e.date, reverse=True)


def _month_key(day: date) -> tuple[int, int]:
    return (day.year, day.month)


def bucket_header(day: date, today: date) -> str:
    """Section label for a calendar day relative to *today*."""
    if day >= today:
        return TODAY
    if day == today - timedelta(days=1):
        return YESTERDAY
    if day.year == today.year:
        return day.strftime("%B")
    return day.strftime("%B %Y")


def _bucket_key(day: date, today: date) -> tuple[int, int, int]:
    """Sortable key, newest bucket first when sorted descending."""
    if day >= today:
        return (today.year, today.month, 3)
    if day == today - timedelta(days=1):
        return (today.year, today.month, 2)
    if _month_key(day) == _month_key(today):
        return (today.year, today.month, 1)
    return (day.year, day.month, 0)


def group_entries(
    entries: Iterable[Entry],
    search_text: str = "",
    bookmark_only: bool = False,
    sort_ascending: bool = False,
    now: datetime | None = None,
) -> list[EntryGroup]:
    """Partition visible entries into dated sections.

    Args:
        entries: Entries in collection order.
        search_text: Case-insensitive substring filter on title/description.
        bookmark_only: Keep only bookmarked entries.
        sort_ascending: Accepted for parity with :func:`filter_entries`; the
            sectioned view always lists newest first inside each section.
        now: Reference time, defaults to the current time.

    Returns:
        Non-empty groups, newest section first. Yesterday's entries land in
        ``Yesterday`` even when yesterday was in the previous month.
    """
    today = (now or datetime.now()).date()
    visible = _visible(entries, search_text, bookmark_only)

    buckets: dict[tuple[int, int, int], list[Entry]] = {}
    for entry in visible:
        buckets.setdefault(_bucket_key(entry.day, today), []).append(entry)

    groups = []
    for key in sorted(buckets, reverse=True):
        members = _newest_first(buckets[key])
        groups.append(EntryGroup(header=bucket_header(members[0].day, today), entries=members))
    return groups


def format_date(value: datetime | date, fmt: str) -> str:
    """Fill a ``{weekday} {day} {month} {year}`` template from *value*."""
    return fmt.format(weekday=f"{value:%A}", day=value.day, month=f"{value:%B}", year=value.year)


def format_header_date(value: datetime | date, fmt: str = HEADER_DATE_FORMAT) -> str:
    """Editor heading, e.g. ``Sunday 18 October``."""
    return format_date(value, fmt)


def format_footer_date(value: datetime | date, fmt: str = FOOTER_DATE_FORMAT) -> str:
    """Entry card footer, e.g. ``Sunday, 18 October``."""
    return format_date(value, fmt)
