"""Label display data and angle formatting."""

from __future__ import annotations

import pytest

pygame = pytest.importorskip("pygame")
from pygame.math import Vector2

from vectoraddition.config import settings
from vectoraddition.entities.labels import LabelDisplayData, format_angle_degrees, round_value
from vectoraddition.simulation.scene import create_explore_2d_scene, create_lab_scene
from vectoraddition.world.types import CoordinateSnapMode


@pytest.mark.parametrize(
    "angle, convention, expected",
    [
        (None, None, ""),
        (45, None, "45.0\N{DEGREE SIGN}"),
        (-90, "principalAngle", "-90.0\N{DEGREE SIGN}"),
        (-90, "fullRotation", "270.0\N{DEGREE SIGN}"),
        (180, "fullRotation", "180.0\N{DEGREE SIGN}"),
        (-0.01, None, "0.0\N{DEGREE SIGN}"),
    ],
)
def test_format_angle_degrees(angle, convention, expected):
    assert format_angle_degrees(angle, convention) == expected


def test_format_angle_uses_configured_places(monkeypatch):
    monkeypatch.setattr(settings, "VALUE_DECIMAL_PLACES", 2)
    assert format_angle_degrees(12.344) == "12.34\N{DEGREE SIGN}"
    assert format_angle_degrees(30) == "30.00\N{DEGREE SIGN}"


def test_round_value_drops_negative_zero():
    assert str(round_value(-0.04)) == "0.0"


def test_named_vector_label():
    scene = create_explore_2d_scene(CoordinateSnapMode.CARTESIAN)
    vector = scene.toolboxes[0].take_vector(0)
    assert vector.get_label_display_data(False) == LabelDisplayData(symbol="a")
    assert vector.get_label_display_data(True) == LabelDisplayData(
        symbol="a", magnitude=10.0, include_absolute_value_bars=True
    )


def test_unnamed_vector_shows_fallback_symbol_only_when_active():
    scene = create_lab_scene(CoordinateSnapMode.CARTESIAN)
    toolbox = scene.toolboxes[0]
    vector = toolbox.take_vector(0)
    assert vector.get_label_display_data(True) == LabelDisplayData(magnitude=10.0)

    toolbox.release(vector, Vector2(5, 5))
    assert scene.graph.active_vector is vector
    assert vector.get_label_display_data(True) == LabelDisplayData(
        symbol="v", magnitude=10.0, include_absolute_value_bars=True
    )


def test_single_set_sum_always_shows_symbol():
    scene = create_explore_2d_scene(CoordinateSnapMode.CARTESIAN)
    resultant = scene.vector_sets[0].resultant
    assert resultant.get_label_display_data(False).symbol == "s"


def test_lab_sum_symbol_follows_active_vector():
    scene = create_lab_scene(CoordinateSnapMode.CARTESIAN)
    first_set, second_set = scene.vector_sets
    assert first_set.resultant.get_label_display_data(False).symbol is None

    vector = scene.toolboxes[0].take_vector(0)
    scene.toolboxes[0].release(vector, Vector2(5, 5))
    assert first_set.resultant.get_label_display_data(False).symbol == "s1"
    assert second_set.resultant.get_label_display_data(False).symbol is None

    scene.graph.active_vector = second_set.resultant
    assert first_set.resultant.get_label_display_data(False).symbol is None
    assert second_set.resultant.get_label_display_data(False).symbol == "s2"
