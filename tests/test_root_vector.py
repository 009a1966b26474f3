"""Tests for tail/tip/component consistency of the root vector."""

from __future__ import annotations

import math

import pytest

pygame = pytest.importorskip("pygame")
from pygame.math import Vector2

from vectoraddition.entities.root_vector import RootVector


def _xy(vector: Vector2):
    return (vector.x, vector.y)


def test_tip_is_tail_plus_components():
    vector = RootVector(Vector2(1, 2), Vector2(3, 4))
    assert _xy(vector.tip_position) == (4, 6)
    assert vector.magnitude == pytest.approx(5)


def test_set_tail_keeps_tip():
    vector = RootVector(Vector2(1, 2), Vector2(3, 4))
    vector.tail_position = Vector2(0, 0)
    assert _xy(vector.tip_position) == (4, 6)
    assert _xy(vector.xy_components) == (4, 6)


def test_set_tip_keeps_tail():
    vector = RootVector(Vector2(1, 2), Vector2(3, 4))
    vector.set_tip(Vector2(-1, 2))
    assert _xy(vector.tail_position) == (1, 2)
    assert _xy(vector.xy_components) == (-2, 0)


def test_move_to_tail_position_keeps_components():
    vector = RootVector(Vector2(1, 2), Vector2(3, 4))
    vector.move_to_tail_position(Vector2(10, 10))
    assert _xy(vector.xy_components) == (3, 4)
    assert _xy(vector.tip_position) == (13, 14)


def test_returned_vectors_are_copies():
    vector = RootVector(Vector2(1, 2), Vector2(3, 4))
    tail = vector.tail_position
    tail.x = 100
    assert vector.tail_position.x == 1


def test_zero_vector_has_no_angle():
    vector = RootVector(Vector2(0, 0), Vector2(0, 0))
    assert vector.angle is None
    assert vector.angle_degrees is None


def test_angle_is_in_half_open_range():
    assert RootVector(Vector2(0, 0), Vector2(-1, 0)).angle == pytest.approx(math.pi)
    assert RootVector(Vector2(0, 0), Vector2(-1, -0.0)).angle == pytest.approx(math.pi)
    assert RootVector(Vector2(0, 0), Vector2(0, -2)).angle_degrees == pytest.approx(-90)


def test_component_setters():
    vector = RootVector(Vector2(0, 0), Vector2(3, 4))
    vector.x_component = -2
    vector.y_component = 7
    assert _xy(vector.xy_components) == (-2, 7)


def test_geometry_change_emitted_once_per_mutation():
    vector = RootVector(Vector2(0, 0), Vector2(3, 4))
    changes = []
    vector.geometry_changed.add_listener(changes.append)

    vector.set_tail(Vector2(1, 1))
    assert len(changes) == 1
    change = changes[0]
    assert change.tail_changed and change.components_changed
    assert _xy(change.old_tip) == _xy(change.new_tip) == (3, 4)

    vector.move_to_tail_position(Vector2(1, 1))
    assert len(changes) == 1


def test_listeners_observe_fully_updated_state():
    vector = RootVector(Vector2(0, 0), Vector2(3, 4))
    tips = []
    vector.geometry_changed.add_listener(lambda change: tips.append(_xy(change.vector.tip_position)))
    vector.xy_components = Vector2(5, 5)
    assert tips == [(5, 5)]


def test_has_zero_component():
    assert RootVector(Vector2(0, 0), Vector2(3, 0)).has_zero_component()
    assert not RootVector(Vector2(0, 0), Vector2(3, 1)).has_zero_component()


def test_reset_restores_initial_geometry():
    vector = RootVector(Vector2(1, 1), Vector2(2, 2))
    vector.set_tip(Vector2(9, 9))
    vector.move_to_tail_position(Vector2(4, 4))
    vector.reset()
    assert _xy(vector.tail_position) == (1, 1)
    assert _xy(vector.xy_components) == (2, 2)


def test_label_requires_a_kind():
    with pytest.raises(NotImplementedError):
        RootVector(Vector2(0, 0), Vector2(1, 1)).get_label_display_data(True)
