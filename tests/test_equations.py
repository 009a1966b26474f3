"""Equation rules, coefficient-driven vectors and their base vectors."""

from __future__ import annotations

import math

import pytest

pygame = pytest.importorskip("pygame")
from pygame.math import Vector2

from vectoraddition.entities.base_vector import CartesianBaseVector, PolarBaseVector
from vectoraddition.entities.equations_vector import EquationsVector
from vectoraddition.entities.labels import LabelKind
from vectoraddition.entities.root_vector import VectorStateError
from vectoraddition.simulation.scene import create_equations_scene
from vectoraddition.simulation.vector_set import VectorSet
from vectoraddition.systems.observable import Property
from vectoraddition.world.graph import Graph
from vectoraddition.world.types import ComponentVectorStyle, CoordinateSnapMode, EquationType


def _xy(vector: Vector2):
    return (vector.x, vector.y)


@pytest.fixture
def cartesian_scene():
    return create_equations_scene(CoordinateSnapMode.CARTESIAN)


def _members(scene):
    vector_set = scene.vector_sets[0]
    first, second = vector_set.active_vectors
    return first, second, vector_set.resultant


# ----------------------------------------------------------------------
# Rules
# ----------------------------------------------------------------------
@pytest.mark.parametrize(
    "equation_type, expected",
    [
        (EquationType.ADDITION, (2, 3)),
        (EquationType.SUBTRACTION, (2, -3)),
        (EquationType.NEGATION, (-2, -3)),
    ],
)
def test_equation_rules(equation_type, expected):
    equation_type_property = Property(EquationType.ADDITION)
    vector_set = VectorSet(
        Graph(),
        Property(ComponentVectorStyle.INVISIBLE),
        equation_type_property=equation_type_property,
        fixed_membership=True,
    )
    for components in ((2, 0), (0, 3)):
        vector = vector_set.create_vector(Vector2(0, 0), Vector2(components), fixed=True)
        vector_set.add_vector(vector)

    equation_type_property.value = equation_type
    assert vector_set.resultant.rule == equation_type.value
    assert _xy(vector_set.resultant.xy_components) == expected
    assert vector_set.resultant.label_kind is LabelKind.EQUATIONS_SUM


def test_unknown_rule_rejected():
    with pytest.raises(ValueError, match="Unknown resultant rule"):
        VectorSet(Graph(), Property(ComponentVectorStyle.INVISIBLE), resultant_rule="product")


# ----------------------------------------------------------------------
# Equations scene
# ----------------------------------------------------------------------
def test_initial_equations_scene(cartesian_scene):
    a, b, c = _members(cartesian_scene)
    assert isinstance(a, EquationsVector)
    assert (a.symbol, b.symbol, c.symbol) == ("a", "b", "c")
    assert _xy(a.tail_position) == (5, 5)
    assert _xy(c.tail_position) == (25, 5)
    assert _xy(c.xy_components) == (5, 10)
    assert isinstance(a.base_vector, CartesianBaseVector)
    assert _xy(a.base_vector.tail_position) == (35, 15)


def test_coefficient_scales_base_vector(cartesian_scene):
    a, _, c = _members(cartesian_scene)
    a.coefficient_property.value = 2
    assert _xy(a.xy_components) == (0, 10)
    assert _xy(c.xy_components) == (5, 15)

    a.coefficient_property.value = -1
    assert _xy(a.xy_components) == (0, -5)


def test_base_vector_pickers_drive_components(cartesian_scene):
    a, _, c = _members(cartesian_scene)
    a.base_vector.x_component_property.value = -3
    assert _xy(a.base_vector.xy_components) == (-3, 5)
    assert _xy(a.xy_components) == (-3, 5)
    assert _xy(c.xy_components) == (2, 10)


def test_equation_type_switch_updates_resultant(cartesian_scene):
    _, _, c = _members(cartesian_scene)
    cartesian_scene.equation_type_property.value = EquationType.SUBTRACTION
    assert _xy(c.xy_components) == (-5, 0)
    cartesian_scene.equation_type_property.value = EquationType.NEGATION
    assert _xy(c.xy_components) == (-5, -10)


def test_equations_label_reads_current_coefficient(cartesian_scene):
    a, _, c = _members(cartesian_scene)
    assert a.get_label_display_data(False).coefficient == 1
    a.coefficient_property.value = 3
    label = a.get_label_display_data(True)
    assert label.coefficient == 3
    assert label.symbol == "a"
    assert label.magnitude == 15.0
    assert c.get_label_display_data(False).symbol == "c"


def test_equations_vectors_cannot_be_set_directly(cartesian_scene):
    a, _, _ = _members(cartesian_scene)
    with pytest.raises(VectorStateError, match="derived"):
        a.xy_components = Vector2(1, 1)
    with pytest.raises(VectorStateError, match="draggable tip"):
        a.move_tip_to(Vector2(1, 1))


def test_equations_tail_can_be_dragged(cartesian_scene):
    a, _, c = _members(cartesian_scene)
    a.move_tail_to(Vector2(0.4, 0.6))
    assert _xy(a.tail_position) == (0, 1)
    assert a.is_on_graph
    assert _xy(c.xy_components) == (5, 10)


def test_scene_reset_restores_pickers(cartesian_scene):
    a, _, c = _members(cartesian_scene)
    a.coefficient_property.value = 2
    a.base_vector.y_component_property.value = 8
    cartesian_scene.equation_type_property.value = EquationType.NEGATION
    cartesian_scene.reset()
    assert a.coefficient == 1
    assert _xy(a.xy_components) == (0, 5)
    assert _xy(c.xy_components) == (5, 10)


@pytest.mark.parametrize("value", [6, -6, 2.5])
def test_invalid_coefficients_rejected(cartesian_scene, value):
    a, _, _ = _members(cartesian_scene)
    with pytest.raises(ValueError, match="invalid value"):
        a.coefficient_property.value = value
    assert a.coefficient == 1


def test_polar_equations_scene():
    scene = create_equations_scene(CoordinateSnapMode.POLAR)
    d, e, f = _members(scene)
    assert (d.symbol, e.symbol, f.symbol) == ("d", "e", "f")
    assert isinstance(e.base_vector, PolarBaseVector)
    assert e.base_vector.magnitude_property.value == 8
    assert e.base_vector.angle_degrees_property.value == 45
    assert f.xy_components.x == pytest.approx(5 + 8 * math.cos(math.radians(45)))

    e.base_vector.angle_degrees_property.value = 90
    assert e.xy_components.x == pytest.approx(0, abs=1e-9)
    assert e.xy_components.y == pytest.approx(8)
    assert _xy(f.xy_components) == pytest.approx((5, 8))


# ----------------------------------------------------------------------
# Base vectors
# ----------------------------------------------------------------------
def _plain_set(snap_mode):
    return VectorSet(Graph(coordinate_snap_mode=snap_mode), Property(ComponentVectorStyle.INVISIBLE))


def test_base_vector_requires_matching_graph():
    cartesian = _plain_set(CoordinateSnapMode.CARTESIAN)
    polar = _plain_set(CoordinateSnapMode.POLAR)
    with pytest.raises(ValueError, match="polar graph"):
        PolarBaseVector(Vector2(0, 0), Vector2(1, 0), cartesian.graph, cartesian, "a")
    with pytest.raises(ValueError, match="Cartesian graph"):
        CartesianBaseVector(Vector2(0, 0), Vector2(1, 0), polar.graph, polar, "a")
    with pytest.raises(ValueError, match="non-zero"):
        PolarBaseVector(Vector2(0, 0), Vector2(0, 0), polar.graph, polar, "a")


def test_cartesian_base_vector_range():
    vector_set = _plain_set(CoordinateSnapMode.CARTESIAN)
    base = CartesianBaseVector(Vector2(0, 0), Vector2(3, 4), vector_set.graph, vector_set, "a")
    assert base.is_on_graph
    with pytest.raises(ValueError, match="invalid value"):
        base.x_component_property.value = 11
    base.y_component_property.value = -10
    assert _xy(base.xy_components) == (3, -10)
    assert base.to_state()["y_component"] == -10


def test_polar_base_vector_pickers():
    vector_set = _plain_set(CoordinateSnapMode.POLAR)
    base = PolarBaseVector(Vector2(0, 0), Vector2(0, -8), vector_set.graph, vector_set, "a")
    assert base.angle_degrees_property.value == -90
    with pytest.raises(ValueError, match="invalid value"):
        base.angle_degrees_property.value = 47
    with pytest.raises(ValueError, match="invalid value"):
        base.magnitude_property.value = 11

    base.magnitude_property.value = 4
    base.angle_degrees_property.value = 180
    assert base.xy_components.x == pytest.approx(-4)
    assert base.xy_components.y == pytest.approx(0, abs=1e-9)
    state = base.to_state()
    assert (state["magnitude"], state["angle_degrees"]) == (4, 180)


def test_polar_base_vector_reset_recomputes_components():
    vector_set = _plain_set(CoordinateSnapMode.POLAR)
    base = PolarBaseVector(Vector2(2, 3), Vector2(0, -8), vector_set.graph, vector_set, "a")
    base.magnitude_property.value = 4
    base.angle_degrees_property.value = 180
    base.move_tail_to(Vector2(10, 10))

    base.reset()
    assert (base.magnitude_property.value, base.angle_degrees_property.value) == (8, -90)
    assert _xy(base.tail_position) == (2, 3)
    assert base.xy_components.x == pytest.approx(0, abs=1e-9)
    assert base.xy_components.y == pytest.approx(-8)
