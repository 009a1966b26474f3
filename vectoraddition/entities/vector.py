"""Draggable vectors and the rules that keep dragged geometry valid.

Tail drags are constrained to the graph bounds (eroded by
``VECTOR_TAIL_DRAG_MARGIN``) and snapped either to the integer grid
(Cartesian) or, in polar scenes, to nearby tails and tips of sibling
vectors. Tip drags are snapped to the grid (Cartesian) or to an integer
magnitude at a multiple of ``POLAR_ANGLE_INTERVAL`` (polar). Dragging the
tail far enough past the bounds pops a removable vector off the graph.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional

from pygame.math import Vector2

from ..config import settings
from ..systems.animation import Animation
from ..systems.observable import Property
from ..utils.math_utils import (
    Extent,
    closest_point_in_extent,
    eroded_extent,
    intersect_extents,
    polar_to_cartesian,
    round_symmetric,
    rounded_vector,
)
from ..world.graph import Graph
from ..world.transform import CoordinateTransform
from ..world.types import ComponentAxis, CoordinateSnapMode, GraphOrientation
from .component_vector import ComponentVector
from .labels import LabelKind
from .root_vector import RootVector, _require

if TYPE_CHECKING:
    from ..simulation.vector_set import VectorSet

logger = logging.getLogger("vectoraddition.vectors")


class Vector(RootVector):
    """A vector that can sit in a tray or on a graph and be dragged around."""

    label_kind = LabelKind.VECTOR

    def __init__(
        self,
        tail_position: Vector2,
        xy_components: Vector2,
        graph: Graph,
        vector_set: "VectorSet",
        *,
        symbol: Optional[str] = None,
        is_tip_draggable: bool = True,
        is_removable: bool = True,
        is_on_graph: bool = False,
        is_disposable: bool = True,
    ) -> None:
        super().__init__(tail_position, xy_components, symbol=symbol)
        self.graph = graph
        self.vector_set = vector_set
        self.is_tip_draggable = is_tip_draggable
        self.is_removable = is_removable
        self.is_disposable = is_disposable
        self.is_on_graph_property: Property[bool] = Property(is_on_graph)
        self.animate_back_property: Property[bool] = Property(False)
        self._animation: Optional[Animation] = None
        self._disposed = False

        style_property = vector_set.component_style_property
        self.x_component_vector = ComponentVector(self, style_property, ComponentAxis.X)
        self.y_component_vector = ComponentVector(self, style_property, ComponentAxis.Y)

        graph.transform_property.lazy_link(self._on_transform_changed)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def coordinate_snap_mode(self) -> CoordinateSnapMode:
        return self.graph.coordinate_snap_mode

    @property
    def is_on_graph(self) -> bool:
        return self.is_on_graph_property.value

    @property
    def is_active(self) -> bool:
        return self.graph.active_vector is self

    @property
    def is_animating(self) -> bool:
        return self._animation is not None

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def _on_transform_changed(self, transform: CoordinateTransform, old_transform: Optional[CoordinateTransform]) -> None:
        # Keep the tail at the same place on screen; its graph coordinates change.
        if old_transform is None:
            return
        view_tail = old_transform.model_to_view_position(self._tail)
        self.move_to_tail_position(transform.view_to_model_position(view_tail))

    # ------------------------------------------------------------------
    # Tail dragging
    # ------------------------------------------------------------------
    def _constrained_tail_extent(self) -> Extent:
        """Where the tail may go: inside the eroded bounds with the tip still on the graph.

        If no such position exists the tip constraint is dropped.
        """
        bounds = self.graph.extent
        eroded = eroded_extent(bounds, settings.VECTOR_TAIL_DRAG_MARGIN)
        tip_inside = (
            bounds[0] - self._xy.x,
            bounds[1] - self._xy.y,
            bounds[2] - self._xy.x,
            bounds[3] - self._xy.y,
        )
        return intersect_extents(eroded, tip_inside) or eroded

    def _snap_candidates(self) -> Iterator[RootVector]:
        """Siblings on the graph, then the resultant; off-graph members and an undefined resultant are skipped."""
        for vector in self.vector_set.active_vectors:
            if vector is not self and vector.is_on_graph:
                yield vector
        resultant = self.vector_set.resultant
        if resultant is not None and resultant is not self and resultant.is_defined:
            yield resultant

    def _polar_snap_tail(self, tail: Vector2) -> Optional[Vector2]:
        tip = tail + self._xy
        snap_distance = settings.POLAR_SNAP_DISTANCE
        for other in self._snap_candidates():
            other_tail = other.tail_position
            other_tip = other.tip_position
            if other_tail.distance_to(tail) < snap_distance:
                logger.debug("%r snapped tail to tail of %r", self, other)
                return other_tail
            if other_tip.distance_to(tail) < snap_distance:
                logger.debug("%r snapped tail to tip of %r", self, other)
                return other_tip
            if other_tail.distance_to(tip) < snap_distance:
                logger.debug("%r snapped tip to tail of %r", self, other)
                return other_tail - self._xy
        return None

    def _set_tail_with_invariants(self, position: Vector2) -> None:
        _require(not self.is_animating, "cannot move the tail of an animating vector")
        tail = closest_point_in_extent(self._constrained_tail_extent(), Vector2(position))
        if self.graph.coordinate_snap_mode is CoordinateSnapMode.POLAR:
            snapped = self._polar_snap_tail(tail)
            if snapped is not None:
                self.move_to_tail_position(snapped)
                return
        self.move_to_tail_position(rounded_vector(tail))

    def move_tail_to(self, position: Vector2) -> None:
        """Drag the tail to ``position``; components are kept.

        A removable vector dragged more than ``VECTOR_DRAG_THRESHOLD`` outside
        the eroded graph bounds (on either axis) pops off the graph.
        """
        _require(self.is_on_graph, "cannot drag the tail of a vector that is not on the graph")
        position = Vector2(position)
        self._set_tail_with_invariants(position)

        if self.is_removable:
            eroded = eroded_extent(self.graph.extent, settings.VECTOR_TAIL_DRAG_MARGIN)
            drag_offset = closest_point_in_extent(eroded, position) - position
            threshold = settings.VECTOR_DRAG_THRESHOLD
            if abs(drag_offset.x) > threshold or abs(drag_offset.y) > threshold:
                self.pop_off_of_graph()

    # ------------------------------------------------------------------
    # Tip dragging
    # ------------------------------------------------------------------
    def _polar_tip(self, position: Vector2) -> Vector2:
        components = position - self._tail
        magnitude = round_symmetric(components.length())
        interval = math.radians(settings.POLAR_ANGLE_INTERVAL)
        angle = interval * round_symmetric(math.atan2(components.y, components.x) / interval)

        tip = self._tail + polar_to_cartesian(magnitude, angle)
        while magnitude > 0 and not self.graph.contains_point(tip):
            magnitude -= 1
            tip = self._tail + polar_to_cartesian(magnitude, angle)
        return tip

    def move_tip_to(self, position: Vector2) -> None:
        """Drag the tip to ``position``; the tail stays put.

        The result never has zero length: a drag that would put the tip on
        the tail is ignored.
        """
        _require(self.is_tip_draggable, f"{self!r} does not have a draggable tip")
        _require(self.is_on_graph, "cannot drag the tip of a vector that is not on the graph")
        _require(not self.is_animating, "cannot move the tip of an animating vector")
        position = Vector2(position)

        if self.graph.coordinate_snap_mode is CoordinateSnapMode.CARTESIAN:
            tip = rounded_vector(self.graph.closest_point(position))
        else:
            tip = self._polar_tip(position)

        if self.graph.orientation is GraphOrientation.HORIZONTAL:
            tip = Vector2(tip.x, self._tail.y)
        elif self.graph.orientation is GraphOrientation.VERTICAL:
            tip = Vector2(self._tail.x, tip.y)

        if tip.x == self._tail.x and tip.y == self._tail.y:
            return
        self._set_geometry(self._tail, tip - self._tail)

    # ------------------------------------------------------------------
    # Graph membership
    # ------------------------------------------------------------------
    def drop_onto_graph(self, tail_position: Vector2) -> None:
        _require(not self.is_on_graph, f"{self!r} is already on the graph")
        _require(not self.is_animating, "cannot drop an animating vector")
        self.is_on_graph_property.value = True
        self._set_tail_with_invariants(tail_position)
        self.graph.active_vector = self
        logger.debug("Dropped %r onto the graph", self)

    def pop_off_of_graph(self) -> None:
        _require(self.is_on_graph, f"{self!r} is not on the graph")
        _require(not self.is_animating, "cannot pop an animating vector off the graph")
        self.is_on_graph_property.value = False
        self.graph.active_vector = None
        logger.debug("Popped %r off the graph", self)

    def set_projection_offsets(self, x_offset: float, y_offset: float) -> None:
        self.x_component_vector.set_projection_offsets(x_offset, y_offset)
        self.y_component_vector.set_projection_offsets(x_offset, y_offset)

    # ------------------------------------------------------------------
    # Animation
    # ------------------------------------------------------------------
    def animate_to_point(self, point: Vector2, final_components: Vector2, on_complete: Callable[[], None]) -> Animation:
        """Move the vector so its mid point lands on ``point``.

        ``on_complete`` runs only when the animation reaches its end, never
        when it is stopped.
        """
        _require(not self.is_animating, f"{self!r} is already animating")
        _require(not self.is_on_graph, "cannot animate a vector that is on the graph")

        final_components = Vector2(final_components)
        target_tail = Vector2(point) - final_components / 2
        start_tail = self.tail_position
        start_components = self.xy_components

        distance = self.graph.transform.model_to_view_delta(target_tail - start_tail).length()
        duration = max(settings.MIN_ANIMATION_TIME, distance / settings.AVERAGE_ANIMATION_SPEED)

        def on_update(fraction: float) -> None:
            self._set_geometry(
                start_tail.lerp(target_tail, fraction),
                start_components.lerp(final_components, fraction),
            )

        def on_finished() -> None:
            self._animation = None
            self._set_geometry(target_tail, final_components)
            on_complete()

        animation = Animation(duration, on_update, name=f"{self!r} to {tuple(target_tail)}")
        animation.finished.add_listener(on_finished)
        animation.stopped.add_listener(self._clear_animation)
        self._animation = animation.start(self.graph.ticker)
        return animation

    def _clear_animation(self) -> None:
        self._animation = None

    def stop_animation(self) -> None:
        if self._animation is not None:
            self._animation.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.stop_animation()
        super().reset()
        self.is_on_graph_property.reset()
        self.animate_back_property.reset()

    def dispose(self) -> None:
        _require(self.is_disposable, f"{self!r} is fixed and cannot be disposed")
        _require(not self._disposed, f"{self!r} is already disposed")
        self.stop_animation()
        self.graph.transform_property.unlink(self._on_transform_changed)
        self.x_component_vector.dispose()
        self.y_component_vector.dispose()
        self.geometry_changed.dispose()
        if self.graph.active_vector is self:
            self.graph.active_vector = None
        self._disposed = True

    @property
    def component_vectors(self) -> List[ComponentVector]:
        return [self.x_component_vector, self.y_component_vector]

    def to_state(self) -> Dict[str, Any]:
        """Persisted fields only; tip and component vectors are derived."""
        return {
            "symbol": self.symbol,
            "tail": [self._tail.x, self._tail.y],
            "components": [self._xy.x, self._xy.y],
            "is_on_graph": self.is_on_graph,
        }


__all__ = ["Vector"]
