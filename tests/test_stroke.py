"""Tests for the stroke model."""

import pytest

from batch_note.models.stroke import Stroke, simplify_points


def test_stroke_needs_two_points_to_draw():
    stroke = Stroke()
    assert not stroke.is_drawable
    stroke.add_point(1, 1)
    assert not stroke.is_drawable
    stroke.add_point(5, 5)
    assert stroke.is_drawable


def test_restart_drops_points():
    stroke = Stroke(points=[(0, 0), (3, 4)])
    stroke.restart()
    assert stroke.points == []
    assert not stroke.is_drawable


@pytest.mark.parametrize("width", [0, -1.5])
def test_non_positive_width_rejected(width):
    with pytest.raises(ValueError):
        Stroke(width=width)


def test_simplify_keeps_endpoints_and_drops_collinear_points():
    points = [(0, 0), (1, 0.01), (2, 0), (3, 0.02), (10, 0)]
    assert simplify_points(points, epsilon=0.5) == [(0, 0), (10, 0)]


def test_simplify_keeps_corners():
    points = [(0, 0), (5, 0), (5, 5)]
    assert simplify_points(points, epsilon=0.5) == points


def test_simplified_returns_copy():
    stroke = Stroke(points=[(0, 0), (1, 0), (2, 0)], color="#00FF00", width=2)
    copy = stroke.simplified(0.5)
    assert copy is not stroke
    assert copy.points == [(0.0, 0.0), (2.0, 0.0)]
    assert copy.color == "#00FF00"
    assert copy.width == 2
    assert len(stroke.points) == 3


def test_simplified_with_zero_epsilon_keeps_all_points():
    stroke = Stroke(points=[(0, 0), (1, 0), (2, 0)])
    assert stroke.simplified(0).points == stroke.points
