"""Vector sets: active member vectors plus the resultant they produce."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from pygame.math import Vector2

from ..config.constants import COMPONENT_HEAD_WIDTH, PROJECTION_AXIS_SPACING, SUM_SYMBOL
from ..entities.resultant import SUM_RULE, ResultantVector
from ..entities.root_vector import GeometryChange, _require
from ..entities.vector import Vector
from ..systems.observable import ObservableList, Property
from ..world.graph import Graph
from ..world.types import ComponentVectorStyle, EquationType

logger = logging.getLogger("vectoraddition.sets")


@dataclass(frozen=True)
class ProjectionOffsets:
    """Where projection-style component vectors sit relative to the axes.

    Member ``i`` uses ``start + i * delta``; the resultant uses its own
    offset on the other side of the axis. All values are in graph units.
    """

    x_start: float
    y_start: float
    x_delta: float
    y_delta: float
    resultant_x: float
    resultant_y: float

    @classmethod
    def for_graph(cls, graph: Graph) -> "ProjectionOffsets":
        transform = graph.transform
        head_width = transform.view_to_model_delta_x(COMPONENT_HEAD_WIDTH)
        axis_spacing = transform.view_to_model_delta_x(PROJECTION_AXIS_SPACING)
        start = head_width / 2 + axis_spacing
        return cls(-start, -start, -head_width, -head_width, start, start)

    def for_index(self, index: int) -> Tuple[float, float]:
        return self.x_start + index * self.x_delta, self.y_start + index * self.y_delta

    def with_updates(self, **overrides: float) -> "ProjectionOffsets":
        return replace(self, **overrides)


class VectorSet:
    """Ordered active vectors sharing a resultant.

    ``all_vectors`` holds the fixed vectors created with the set; they are
    reset instead of disposed when they leave it. Vectors made on demand with
    :meth:`create_vector` are disposed when removed.
    """

    def __init__(
        self,
        graph: Graph,
        component_style_property: Property[ComponentVectorStyle],
        *,
        name: str = "vectors",
        resultant_tail_position: Optional[Vector2] = None,
        resultant_symbol: Optional[str] = SUM_SYMBOL,
        resultant_rule: str = SUM_RULE,
        equation_type_property: Optional[Property[EquationType]] = None,
        projection_offsets: Optional[ProjectionOffsets] = None,
        fixed_membership: bool = False,
    ) -> None:
        self.graph = graph
        self.name = name
        self.component_style_property = component_style_property
        self.fixed_membership = fixed_membership
        self.all_vectors: List[Vector] = []
        self.active_vectors: ObservableList[Vector] = ObservableList()
        self.projection_offsets = projection_offsets or ProjectionOffsets.for_graph(graph)
        self._member_listeners: Dict[Vector, object] = {}

        self.resultant: Optional[ResultantVector] = None
        if resultant_tail_position is None:
            resultant_tail_position = Vector2(graph.bounds.center)
        self.resultant = ResultantVector(
            resultant_tail_position,
            graph,
            self,
            symbol=resultant_symbol,
            rule=resultant_rule,
            equation_type_property=equation_type_property,
        )
        self.resultant.set_projection_offsets(
            self.projection_offsets.resultant_x, self.projection_offsets.resultant_y
        )
        self.active_vectors.length_property.lazy_link(self._on_length_changed)
        graph.vector_sets.append(self)
        self.resultant.update()

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------
    def create_vector(
        self,
        tail_position: Vector2,
        xy_components: Vector2,
        symbol: Optional[str] = None,
        *,
        fixed: bool = False,
    ) -> Vector:
        """Create a vector off the graph. Fixed vectors are kept in ``all_vectors``."""
        vector = Vector(tail_position, xy_components, self.graph, self, symbol=symbol, is_disposable=not fixed)
        if fixed:
            self.all_vectors.append(vector)
        return vector

    def add_vector(self, vector: Vector) -> None:
        _require(vector.vector_set is self, f"{vector!r} belongs to another vector set")
        _require(vector is not self.resultant, "the resultant cannot be a member of its own set")
        _require(vector not in self.active_vectors, f"{vector!r} is already active")

        def on_on_graph_changed(is_on_graph: bool, old_value: Optional[bool]) -> None:
            self._update_resultant()

        vector.geometry_changed.add_listener(self._on_member_geometry_changed)
        vector.is_on_graph_property.lazy_link(on_on_graph_changed)
        self._member_listeners[vector] = on_on_graph_changed
        self.active_vectors.append(vector)
        self._update_resultant()
        logger.debug("Added %r to %s (%d active)", vector, self.name, len(self.active_vectors))

    def remove_vector(self, vector: Vector) -> None:
        """Take ``vector`` out of the set; disposable vectors are disposed, fixed ones reset."""
        _require(vector in self.active_vectors, f"{vector!r} is not active in {self.name}")
        vector.geometry_changed.remove_listener(self._on_member_geometry_changed)
        vector.is_on_graph_property.unlink(self._member_listeners.pop(vector))
        self.active_vectors.remove(vector)
        self._update_resultant()
        logger.debug("Removed %r from %s (%d active)", vector, self.name, len(self.active_vectors))

        if vector.is_disposable:
            vector.dispose()
        else:
            vector.reset()

    def _on_member_geometry_changed(self, change: GeometryChange) -> None:
        if change.components_changed:
            self._update_resultant()

    def _update_resultant(self) -> None:
        if self.resultant is not None:
            self.resultant.update()

    def _on_length_changed(self, length: int, old_length: Optional[int]) -> None:
        for index, vector in enumerate(self.active_vectors):
            vector.set_projection_offsets(*self.projection_offsets.for_index(index))

    def number_of_vectors_on_graph(self) -> int:
        return sum(1 for vector in self.active_vectors if vector.is_on_graph)

    # ------------------------------------------------------------------
    # Erase / reset
    # ------------------------------------------------------------------
    def erase(self) -> None:
        """Return every vector to the toolbox."""
        if self.fixed_membership:
            for vector in self.active_vectors:
                vector.reset()
        else:
            for vector in reversed(list(self.active_vectors)):
                vector.stop_animation()
                self.remove_vector(vector)
            for vector in self.all_vectors:
                vector.reset()
        self._update_resultant()

    def reset(self) -> None:
        self.erase()
        if self.resultant is not None:
            self.resultant.reset()

    def __repr__(self) -> str:
        return f"VectorSet({self.name!r}, active={len(self.active_vectors)})"


__all__ = ["ProjectionOffsets", "VectorSet"]
