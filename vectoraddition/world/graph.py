"""Graph model: bounds, orientation and the model/view transform."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple, Union

import pygame
from pygame.math import Vector2

from ..config.constants import DEFAULT_BOTTOM_LEFT, DEFAULT_GRAPH_BOUNDS, MODEL_TO_VIEW_SCALE
from ..systems.animation import AnimationTicker
from ..systems.observable import DerivedProperty, Property
from ..utils.math_utils import (
    Extent,
    closest_point_in_extent,
    extent_contains,
    rect_extent,
    rect_from_extent,
    rounded_vector,
)
from .transform import CoordinateTransform
from .types import CoordinateSnapMode, GraphOrientation

if TYPE_CHECKING:
    from ..entities.root_vector import RootVector
    from ..simulation.vector_set import VectorSet

logger = logging.getLogger("vectoraddition.graph")

BoundsLike = Union[pygame.Rect, Sequence[int]]


def _as_rect(bounds: BoundsLike) -> pygame.Rect:
    if isinstance(bounds, pygame.Rect):
        return bounds.copy()
    min_x, min_y, max_x, max_y = bounds
    if max_x <= min_x or max_y <= min_y:
        raise ValueError(f"Graph bounds must have a positive area, got {tuple(bounds)}")
    return rect_from_extent(min_x, min_y, max_x, max_y)


class Graph:
    """A 2D graph whose origin can be dragged.

    The view extent is fixed when the graph is created: it is anchored at
    ``bottom_left`` and sized from the initial bounds at
    ``MODEL_TO_VIEW_SCALE``. Moving the origin shifts the model bounds, so the
    derived transform changes while the graph stays put on screen.
    """

    def __init__(
        self,
        initial_bounds: BoundsLike = DEFAULT_GRAPH_BOUNDS,
        coordinate_snap_mode: CoordinateSnapMode = CoordinateSnapMode.CARTESIAN,
        *,
        orientation: GraphOrientation = GraphOrientation.TWO_DIMENSIONAL,
        bottom_left: Tuple[float, float] = DEFAULT_BOTTOM_LEFT,
        ticker: Optional[AnimationTicker] = None,
    ) -> None:
        self.coordinate_snap_mode = CoordinateSnapMode(coordinate_snap_mode)
        self.orientation = GraphOrientation(orientation)
        self.initial_bounds = _as_rect(initial_bounds)
        self.ticker = ticker if ticker is not None else AnimationTicker()
        self.vector_sets: List["VectorSet"] = []

        anchor = Vector2(bottom_left)
        width = self.initial_bounds.width * MODEL_TO_VIEW_SCALE
        height = self.initial_bounds.height * MODEL_TO_VIEW_SCALE
        self.view_extent: Extent = (anchor.x, anchor.y - height, anchor.x + width, anchor.y)

        self.bounds_property: Property[pygame.Rect] = Property(self.initial_bounds.copy())
        self.transform_property: DerivedProperty[CoordinateTransform] = DerivedProperty(
            [self.bounds_property],
            lambda bounds: CoordinateTransform.from_bounds(bounds, self.view_extent),
        )
        self.active_vector_property: Property[Optional["RootVector"]] = Property(None)

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------
    @property
    def bounds(self) -> pygame.Rect:
        return self.bounds_property.value.copy()

    @property
    def extent(self) -> Extent:
        return rect_extent(self.bounds_property.value)

    @property
    def transform(self) -> CoordinateTransform:
        return self.transform_property.value

    @property
    def active_vector(self) -> Optional["RootVector"]:
        return self.active_vector_property.value

    @active_vector.setter
    def active_vector(self, vector: Optional["RootVector"]) -> None:
        self.active_vector_property.value = vector

    def contains_point(self, point: Vector2) -> bool:
        """Inclusive containment; points on the edges are inside."""
        return extent_contains(self.extent, point)

    def closest_point(self, point: Vector2) -> Vector2:
        return closest_point_in_extent(self.extent, point)

    # ------------------------------------------------------------------
    # Origin
    # ------------------------------------------------------------------
    def move_origin_to_point(self, point: Vector2) -> None:
        """Make ``point`` (rounded to the grid) the new origin."""
        point = Vector2(point)
        if not self.contains_point(point):
            raise ValueError(f"Origin {tuple(point)} is outside graph bounds {self.extent}")
        origin = rounded_vector(point)
        if origin.x == 0 and origin.y == 0:
            return
        self.bounds_property.value = self.bounds_property.value.move(-int(origin.x), -int(origin.y))
        logger.debug("Moved origin by (%d, %d); bounds now %s", origin.x, origin.y, self.extent)

    def reset(self) -> None:
        self.bounds_property.reset()
        self.active_vector_property.reset()


__all__ = ["BoundsLike", "Graph"]
