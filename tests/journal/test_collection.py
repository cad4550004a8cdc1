"""Tests for daybook.journal.collection."""

from datetime import datetime, timedelta

import pytest

from daybook.core.exceptions import InvalidEntryError
from daybook.journal.collection import EntryCollection, sample_entries
from daybook.journal.models import Entry, ImageBlob


@pytest.fixture
def collection():
    return EntryCollection([Entry(title="first"), Entry(title="second"), Entry(title="third")])


class TestConstruction:
    def test_preserves_given_order(self, collection):
        assert [e.title for e in collection] == ["first", "second", "third"]

    def test_assigns_unique_ids(self, collection):
        ids = collection.ids()
        assert all(ids)
        assert len(set(ids)) == 3

    def test_empty(self):
        assert len(EntryCollection()) == 0


class TestInsertAtFront:
    def test_becomes_index_zero(self, collection):
        before = collection.snapshot()
        entry = collection.insert_at_front(Entry(title="new"))
        assert collection.snapshot()[0] is entry
        assert collection.snapshot()[1:] == before

    def test_keeps_existing_id(self):
        collection = EntryCollection()
        entry = collection.insert_at_front(Entry(title="x", id="custom-id"))
        assert entry.id == "custom-id"
        assert "custom-id" in collection

    def test_rejects_reused_id(self):
        collection = EntryCollection([Entry(title="x", id="dup")])
        collection.remove_by_id("dup")
        with pytest.raises(InvalidEntryError):
            collection.insert_at_front(Entry(title="y", id="dup"))


class TestRemoveById:
    def test_removes(self, collection):
        target = collection.ids()[1]
        removed = collection.remove_by_id(target)
        assert removed.title == "second"
        assert target not in collection
        assert len(collection) == 2

    def test_unknown_id_is_noop(self, collection):
        before = collection.snapshot()
        assert collection.remove_by_id("does-not-exist") is None
        assert collection.snapshot() == before


class TestMutateById:
    def test_applies_all_changes(self, collection):
        target = collection.ids()[0]
        when = datetime(2026, 1, 5, 8, 0)
        updated = collection.mutate_by_id(target, title="renamed", description="body", date=when)
        assert updated.title == "renamed"
        assert updated.description == "body"
        assert updated.date == when
        assert collection.get(target) is updated

    def test_replaces_rather_than_edits_in_place(self, collection):
        target = collection.ids()[0]
        original = collection.get(target)
        collection.mutate_by_id(target, title="renamed")
        assert original.title == "first"

    def test_unknown_field_changes_nothing(self, collection):
        target = collection.ids()[0]
        with pytest.raises(InvalidEntryError, match="colour"):
            collection.mutate_by_id(target, title="renamed", colour="red")
        assert collection.get(target).title == "first"

    def test_id_is_immutable(self, collection):
        target = collection.ids()[0]
        with pytest.raises(InvalidEntryError):
            collection.mutate_by_id(target, id="other")

    def test_bad_date_changes_nothing(self, collection):
        target = collection.ids()[0]
        with pytest.raises(InvalidEntryError):
            collection.mutate_by_id(target, title="renamed", date="yesterday")
        assert collection.get(target).title == "first"

    def test_unknown_id_is_noop(self, collection):
        before = [e.title for e in collection]
        assert collection.mutate_by_id("missing", title="x") is None
        assert [e.title for e in collection] == before

    def test_media_lists_are_copied(self, collection):
        target = collection.ids()[0]
        images = [ImageBlob(b"a")]
        collection.mutate_by_id(target, images=images)
        images.append(ImageBlob(b"b"))
        assert len(collection.get(target).images) == 1

    def test_position_unchanged(self, collection):
        target = collection.ids()[1]
        collection.mutate_by_id(target, title="middle")
        assert [e.title for e in collection] == ["first", "middle", "third"]


class TestToggles:
    def test_toggle_bookmark(self, collection):
        target = collection.ids()[2]
        assert collection.toggle_bookmark(target).is_bookmarked is True
        assert collection.toggle_bookmark(target).is_bookmarked is False

    def test_toggle_show_title(self, collection):
        target = collection.ids()[0]
        assert collection.toggle_show_title(target).show_title is False
        assert collection.get(target).show_title is False

    def test_toggle_unknown_id(self, collection):
        assert collection.toggle_bookmark("missing") is None
        assert collection.toggle_show_title("missing") is None


class TestSampleEntries:
    def test_three_consecutive_days(self, now):
        entries = sample_entries(now)
        assert [e.title for e in entries] == ["Started Journal", "Walk in Park", "Read Book"]
        assert [e.date for e in entries] == [now, now - timedelta(days=1), now - timedelta(days=2)]
