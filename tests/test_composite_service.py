"""Tests for the composition engine."""

import pytest

from batch_note.core.composite_service import CompositeService
from batch_note.core.text_layout import measure_text_height
from batch_note.models.entry import Entry
from batch_note.models.stroke import Stroke


@pytest.fixture
def service(event_bus):
    return CompositeService(event_bus=event_bus)


def image_entry(make_image, width=120, height=80, comment='', checked=True):
    return Entry(source_image=make_image(width, height), comment=comment, is_checked=checked)


def text_entry(comment, checked=True):
    return Entry(is_text_only=True, comment=comment, is_checked=checked)


def test_nothing_checked_returns_none(service, make_image):
    assert service.composite([]) is None
    assert service.composite([image_entry(make_image, checked=False)]) is None


def test_small_images_use_minimum_width(service, make_image):
    result = service.composite([image_entry(make_image)])
    assert result.width() == 600 + 2 * 30


def test_wide_image_sets_canvas_width(service, make_image):
    result = service.composite([image_entry(make_image, width=900, height=50)])
    assert result.width() == 900 + 2 * 30


def test_single_image_entry_height(service, make_image):
    # title 48 + gap 15 + image 80 + gap 20, then separator band 15 + 8 + 40
    result = service.composite([image_entry(make_image)])
    assert result.height() == 30 + (48 + 15 + 80 + 20) + (15 + 8 + 40)


def test_text_only_entries_do_not_affect_width(service, make_image):
    long_comment = "word " * 400
    result = service.composite([text_entry(long_comment)])
    assert result.width() == 660

    with_image = service.composite([image_entry(make_image, width=700), text_entry(long_comment)])
    assert with_image.width() == 760


def test_height_grows_with_each_entry(service, make_image):
    entries = [image_entry(make_image), text_entry("second"), image_entry(make_image, 200, 300)]
    heights = [service.composite(entries[:n]).height() for n in range(1, len(entries) + 1)]
    assert heights == sorted(heights)
    assert len(set(heights)) == len(heights)


def test_comment_adds_measured_height(service, make_image):
    plain = service.composite([image_entry(make_image)])
    commented = service.composite([image_entry(make_image, comment="Header is misaligned")])

    layout = service.compute_layout([image_entry(make_image)])
    expected = measure_text_height("Header is misaligned", layout.content_width, layout.base_font_size)
    assert commented.height() - plain.height() == expected + 15


def test_whitespace_comment_is_ignored(service, make_image):
    plain = service.composite([image_entry(make_image)])
    blank = service.composite([image_entry(make_image, comment="   \n ")])
    assert blank.height() == plain.height()


def test_unchecked_entries_are_skipped(service, make_image):
    checked = image_entry(make_image, comment="keep")
    unchecked = image_entry(make_image, width=1200, height=900, checked=False)

    only_checked = service.composite([checked])
    mixed = service.composite([checked, unchecked])

    assert mixed.size() == only_checked.size()


def test_output_is_deterministic(service, make_image):
    entries = [image_entry(make_image, comment="first"), text_entry("a note")]
    entries[0].index, entries[1].index = 1, 2

    assert service.composite(entries) == service.composite(entries)


def test_font_scales_with_large_images(service, make_image):
    layout = service.compute_layout([image_entry(make_image, width=2000, height=1000)])
    assert layout.base_font_size == pytest.approx(40.0)
    assert layout.title_font_size == pytest.approx(48.0)
    assert layout.title_height == 96


def test_composite_created_event(service, event_bus, make_image):
    sizes = []
    event_bus.composite_created.connect(lambda w, h: sizes.append((w, h)))
    result = service.composite([image_entry(make_image)])
    assert sizes == [(result.width(), result.height())]


def test_annotated_image_is_used(service, make_image):
    entry = image_entry(make_image, width=50, height=50)
    entry.apply_strokes([Stroke(points=[(0, 25), (49, 25)], color="#00FF00", width=6)])
    result = service.composite([entry])

    # Image origin is (padding, padding + title height + title gap)
    pixel = result.pixelColor(30 + 25, 30 + 48 + 15 + 25)
    assert pixel.green() == 255
    assert pixel.red() < 100
