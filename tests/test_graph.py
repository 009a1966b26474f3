"""Tests for the graph bounds, origin dragging and model/view transform."""

from __future__ import annotations

import pytest

pygame = pytest.importorskip("pygame")
from pygame.math import Vector2

from vectoraddition.world.graph import Graph
from vectoraddition.world.types import CoordinateSnapMode, GraphOrientation


def test_default_graph_layout():
    graph = Graph()
    assert graph.extent == (-5, -5, 45, 25)
    assert graph.view_extent == pytest.approx((30, 123, 755, 558))
    assert graph.coordinate_snap_mode is CoordinateSnapMode.CARTESIAN
    assert graph.orientation is GraphOrientation.TWO_DIMENSIONAL
    assert graph.active_vector is None


def test_transform_inverts_y_axis():
    transform = Graph().transform
    bottom_left = transform.model_to_view_position(Vector2(-5, -5))
    top_right = transform.model_to_view_position(Vector2(45, 25))
    origin = transform.model_to_view_position(Vector2(0, 0))
    assert (bottom_left.x, bottom_left.y) == pytest.approx((30, 558))
    assert (top_right.x, top_right.y) == pytest.approx((755, 123))
    assert (origin.x, origin.y) == pytest.approx((102.5, 485.5))

    back = transform.view_to_model_position(origin)
    assert (back.x, back.y) == pytest.approx((0, 0))
    assert transform.view_to_model_delta_x(14.5) == pytest.approx(1.0)


def test_move_origin_rounds_and_shifts_bounds():
    graph = Graph()
    changes = []
    graph.transform_property.lazy_link(lambda new, old: changes.append((new, old)))

    graph.move_origin_to_point(Vector2(3.4, 2.6))

    assert graph.extent == (-8, -8, 42, 22)
    assert len(changes) == 1
    # The graph stays where it is on screen.
    assert changes[0][0].view_extent == changes[0][1].view_extent


def test_move_origin_keeps_view_position_of_points():
    graph = Graph()
    old = graph.transform
    graph.move_origin_to_point(Vector2(10, 5))
    view = old.model_to_view_position(Vector2(12, 7))
    moved = graph.transform.view_to_model_position(view)
    assert (moved.x, moved.y) == pytest.approx((2, 2))


def test_move_origin_outside_bounds_raises():
    graph = Graph()
    with pytest.raises(ValueError, match="outside graph bounds"):
        graph.move_origin_to_point(Vector2(50, 0))


def test_reset_restores_bounds_and_selection():
    graph = Graph()
    graph.move_origin_to_point(Vector2(5, 5))
    graph.active_vector = object()
    graph.reset()
    assert graph.extent == (-5, -5, 45, 25)
    assert graph.active_vector is None


def test_bounds_are_copies():
    graph = Graph()
    bounds = graph.bounds
    bounds.move_ip(100, 100)
    assert graph.extent == (-5, -5, 45, 25)


def test_degenerate_bounds_rejected():
    with pytest.raises(ValueError, match="positive area"):
        Graph((0, 0, 0, 10))
