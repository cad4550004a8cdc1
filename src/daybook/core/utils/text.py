"""Text utilities: blank checks, word counting, search matching, truncation."""

import re

_WORD_RE = re.compile(r"\S+")


def is_blank(text: str | None) -> bool:
    """True for None, empty, or whitespace-only text."""
    return not text or not text.strip()


def word_count(text: str | None) -> int:
    """Count maximal runs of non-whitespace characters."""
    if not text or not isinstance(text, str):
        return 0
    return len(_WORD_RE.findall(text))


def contains_casefold(haystack: str | None, needle: str) -> bool:
    """Case-insensitive substring check."""
    if not haystack:
        return False
    return needle.casefold() in haystack.casefold()


def truncate_text(text: str, max_length: int = 100, ellipsis: str = "...") -> str:
    """Truncate text to max_length, appending ellipsis if truncated."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ellipsis)] + ellipsis
