"""Vector set membership and the sum resultant."""

from __future__ import annotations

import pytest

pygame = pytest.importorskip("pygame")
from pygame.math import Vector2

from vectoraddition.entities.root_vector import VectorStateError
from vectoraddition.simulation.vector_set import ProjectionOffsets, VectorSet
from vectoraddition.systems.observable import Property
from vectoraddition.world.graph import Graph
from vectoraddition.world.types import ComponentVectorStyle


def _xy(vector: Vector2):
    return (vector.x, vector.y)


@pytest.fixture
def vector_set():
    return VectorSet(Graph(), Property(ComponentVectorStyle.INVISIBLE))


def _add_on_graph(vector_set, components, tail=(0, 0)):
    vector = vector_set.create_vector(Vector2(0, 0), Vector2(components))
    vector_set.add_vector(vector)
    vector.drop_onto_graph(Vector2(tail))
    return vector


def test_empty_set_has_undefined_resultant(vector_set):
    resultant = vector_set.resultant
    assert not resultant.is_defined
    assert _xy(resultant.xy_components) == (0, 0)
    assert _xy(resultant.tail_position) == (20, 10)
    assert vector_set.graph.vector_sets == [vector_set]


def test_resultant_sums_vectors_on_graph(vector_set):
    first = _add_on_graph(vector_set, (2, 3))
    second = _add_on_graph(vector_set, (-1, 4), tail=(10, 5))
    assert _xy(vector_set.resultant.xy_components) == (1, 7)
    assert vector_set.resultant.is_defined

    third = _add_on_graph(vector_set, (0, -7), tail=(20, 15))
    assert _xy(vector_set.resultant.xy_components) == (1, 0)

    vector_set.remove_vector(third)
    vector_set.remove_vector(second)
    assert _xy(vector_set.resultant.xy_components) == (2, 3)
    assert list(vector_set.active_vectors) == [first]


def test_vectors_off_graph_do_not_count(vector_set):
    vector = vector_set.create_vector(Vector2(0, 0), Vector2(2, 3))
    vector_set.add_vector(vector)
    assert not vector_set.resultant.is_defined
    assert vector_set.number_of_vectors_on_graph() == 0

    vector.drop_onto_graph(Vector2(0, 0))
    assert vector_set.number_of_vectors_on_graph() == 1
    assert _xy(vector_set.resultant.xy_components) == (2, 3)


def test_resultant_follows_tip_drags(vector_set):
    vector = _add_on_graph(vector_set, (2, 3))
    vector.move_tip_to(Vector2(5, 5))
    assert _xy(vector_set.resultant.xy_components) == (5, 5)


def test_membership_errors(vector_set):
    vector = vector_set.create_vector(Vector2(0, 0), Vector2(1, 1))
    vector_set.add_vector(vector)
    with pytest.raises(VectorStateError, match="already active"):
        vector_set.add_vector(vector)
    with pytest.raises(VectorStateError, match="resultant"):
        vector_set.add_vector(vector_set.resultant)

    other = VectorSet(vector_set.graph, vector_set.component_style_property)
    stranger = other.create_vector(Vector2(0, 0), Vector2(1, 1))
    with pytest.raises(VectorStateError, match="another vector set"):
        vector_set.add_vector(stranger)
    with pytest.raises(VectorStateError, match="not active"):
        vector_set.remove_vector(stranger)


def test_removed_vectors_are_disposed_or_reset(vector_set):
    transient = vector_set.create_vector(Vector2(0, 0), Vector2(1, 1))
    fixed = vector_set.create_vector(Vector2(0, 0), Vector2(2, 2), "a", fixed=True)
    for vector in (transient, fixed):
        vector_set.add_vector(vector)
        vector.drop_onto_graph(Vector2(5, 5))

    vector_set.remove_vector(transient)
    vector_set.remove_vector(fixed)

    assert transient.is_disposed
    assert not fixed.is_disposed
    assert not fixed.is_on_graph
    assert _xy(fixed.tail_position) == (0, 0)
    assert vector_set.all_vectors == [fixed]


def test_erase_empties_the_set(vector_set):
    _add_on_graph(vector_set, (2, 3))
    _add_on_graph(vector_set, (1, 1), tail=(10, 10))
    vector_set.erase()
    assert len(vector_set.active_vectors) == 0
    assert not vector_set.resultant.is_defined


def test_reset_restores_resultant_tail(vector_set):
    _add_on_graph(vector_set, (2, 3))
    vector_set.resultant.move_tail_to(Vector2(0, 0))
    vector_set.reset()
    assert _xy(vector_set.resultant.tail_position) == (20, 10)


def test_projection_offsets_from_graph(vector_set):
    head_width = 12 / 14.5
    start = head_width / 2 + 1.5 / 14.5
    offsets = vector_set.projection_offsets
    assert offsets.x_start == pytest.approx(-start)
    assert offsets.x_delta == pytest.approx(-head_width)
    assert offsets.resultant_y == pytest.approx(start)
    assert offsets.for_index(2) == pytest.approx((-start - 2 * head_width, -start - 2 * head_width))
    assert vector_set.resultant.x_component_vector.projection_y_offset == pytest.approx(start)


def test_members_get_offsets_by_position(vector_set):
    first = _add_on_graph(vector_set, (2, 3))
    second = _add_on_graph(vector_set, (1, 1), tail=(10, 10))
    offsets = vector_set.projection_offsets
    assert second.x_component_vector.projection_y_offset == pytest.approx(offsets.for_index(1)[1])

    vector_set.remove_vector(first)
    assert second.x_component_vector.projection_y_offset == pytest.approx(offsets.for_index(0)[1])


def test_projection_offsets_with_updates():
    offsets = ProjectionOffsets(-1, -1, -0.5, -0.5, 1, 1)
    moved = offsets.with_updates(x_start=-2)
    assert moved.x_start == -2
    assert moved.y_start == -1
    assert offsets.x_start == -1


def test_projection_offsets_are_evenly_staggered(vector_set):
    vector_set.component_style_property.value = ComponentVectorStyle.PROJECTION
    vectors = [_add_on_graph(vector_set, (2, 3), tail=(5 * index, 5)) for index in range(3)]
    offsets = [vector.y_component_vector.projection_x_offset for vector in vectors]
    start, delta = vector_set.projection_offsets.x_start, vector_set.projection_offsets.x_delta
    assert offsets == pytest.approx([start, start + delta, start + 2 * delta])
    assert vectors[2].y_component_vector.tail_position.x == pytest.approx(start + 2 * delta)


def test_resultant_cannot_be_disposed(vector_set):
    with pytest.raises(VectorStateError, match="fixed"):
        vector_set.resultant.dispose()
