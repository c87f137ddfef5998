"""Tests for entries and the working set."""

import pytest
from PyQt6.QtGui import QColor

from batch_note.models.entry import Entry
from batch_note.models.entry_list import EntryList
from batch_note.models.stroke import Stroke


def test_display_image_falls_back_to_source(make_image):
    source = make_image()
    entry = Entry(source_image=source)
    assert entry.annotated_image is None
    assert entry.display_image is source


def test_apply_strokes_renders_annotated_copy(make_image):
    source = make_image(50, 50, (255, 255, 255))
    entry = Entry(source_image=source)

    entry.apply_strokes([Stroke(points=[(5, 25), (45, 25)], color="#FF0000", width=4)])

    annotated = entry.annotated_image
    assert annotated is not None
    assert entry.display_image is annotated
    assert annotated.size() == source.size()
    assert QColor(annotated.pixel(25, 25)).red() == 255
    assert QColor(annotated.pixel(25, 25)).green() < 100
    # Source stays untouched
    assert QColor(source.pixel(25, 25)) == QColor(255, 255, 255)


def test_clearing_strokes_releases_annotated_image(make_image):
    entry = Entry(source_image=make_image())
    entry.apply_strokes([Stroke(points=[(1, 1), (10, 10)])])
    assert entry.annotated_image is not None

    entry.apply_strokes([])
    assert entry.annotated_image is None
    assert entry.display_image is entry.source_image


def test_single_point_strokes_do_not_annotate(make_image):
    entry = Entry(source_image=make_image())
    entry.apply_strokes([Stroke(points=[(3, 3)])])
    assert entry.annotated_image is None
    assert len(entry.strokes) == 1


def test_text_only_entry_has_no_image(make_image):
    entry = Entry(is_text_only=True, comment="note")
    assert entry.display_image is None
    assert not entry.has_image
    with pytest.raises(ValueError):
        entry.set_source_image(make_image())


@pytest.mark.parametrize("comment, expected", [("", False), ("   \n", False), ("hi", True)])
def test_has_comment_ignores_whitespace(comment, expected):
    assert Entry(is_text_only=True, comment=comment).has_comment is expected


class TestEntryList:
    def test_indexes_are_dense_after_adds(self, event_bus, make_image):
        entries = EntryList(event_bus=event_bus)
        entries.add_image_entry(make_image())
        entries.add_text_entry("a")
        entries.add_text_entry("b")
        assert [e.index for e in entries] == [1, 2, 3]

    def test_remove_renumbers_and_releases_images(self, event_bus, make_image):
        entries = EntryList(event_bus=event_bus)
        first = entries.add_image_entry(make_image())
        second = entries.add_text_entry("b")
        third = entries.add_text_entry("c")

        entries.remove(first)

        assert len(entries) == 2
        assert first.source_image is None
        assert (second.index, third.index) == (1, 2)

    def test_move_keeps_identity(self, event_bus):
        entries = EntryList(event_bus=event_bus)
        a = entries.add_text_entry("a")
        b = entries.add_text_entry("b")
        c = entries.add_text_entry("c")

        entries.move(c, 0)

        assert list(entries) == [c, a, b]
        assert [e.index for e in entries] == [1, 2, 3]
        assert c.comment == "c"

    def test_move_clamps_position(self, event_bus):
        entries = EntryList(event_bus=event_bus)
        a = entries.add_text_entry("a")
        b = entries.add_text_entry("b")
        entries.move(a, 99)
        assert list(entries) == [b, a]

    def test_remove_unknown_entry_raises(self, event_bus):
        entries = EntryList(event_bus=event_bus)
        with pytest.raises(ValueError):
            entries.remove(Entry(is_text_only=True))

    def test_checked_entries(self, event_bus):
        entries = EntryList(event_bus=event_bus)
        entries.add_text_entry("a")
        b = entries.add_text_entry("b")
        b.is_checked = False
        assert entries.checked_count == 1
        assert [e.comment for e in entries.checked_entries()] == ["a"]

    def test_replace_all_renumbers_restored_entries(self, event_bus, make_image):
        entries = EntryList(event_bus=event_bus)
        old = entries.add_image_entry(make_image())

        restored = [Entry(index=7, is_text_only=True), Entry(index=9, is_text_only=True)]
        entries.replace_all(restored)

        assert list(entries) == restored
        assert [e.index for e in entries] == [1, 2]
        assert old.source_image is None

    def test_clear_emits_change(self, event_bus):
        counts = []
        event_bus.entries_changed.connect(counts.append)

        entries = EntryList(event_bus=event_bus)
        entries.add_text_entry("a")
        entries.clear()

        assert counts == [1, 0]
        assert len(entries) == 0
