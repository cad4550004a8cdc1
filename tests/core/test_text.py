"""Tests for daybook.core.utils.text."""

from daybook.core.utils.text import contains_casefold, is_blank, truncate_text, word_count


class TestIsBlank:
    def test_blank_values(self):
        assert is_blank(None)
        assert is_blank("")
        assert is_blank("   \n\t")

    def test_non_blank(self):
        assert not is_blank(" a ")


class TestWordCount:
    def test_counts_runs_of_non_space(self):
        assert word_count("a b") == 2
        assert word_count("c") == 1
        assert word_count("  leading   and\ntrailing  ") == 3

    def test_empty(self):
        assert word_count("") == 0
        assert word_count(None) == 0

    def test_punctuation_stays_attached(self):
        assert word_count("well, that's it.") == 3


class TestContainsCasefold:
    def test_case_insensitive(self):
        assert contains_casefold("Walk in Park", "park")
        assert contains_casefold("STRASSE", "straße")

    def test_missing(self):
        assert not contains_casefold("Read Book", "park")
        assert not contains_casefold("", "park")


class TestTruncate:
    def test_short_text_untouched(self):
        assert truncate_text("short", 10) == "short"

    def test_long_text(self):
        assert truncate_text("x" * 20, 10) == "xxxxxxx..."
