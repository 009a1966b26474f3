"""Mapping between graph (model) coordinates and view coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pygame
from pygame.math import Vector2

from ..utils.math_utils import Extent, rect_extent


@dataclass(frozen=True)
class CoordinateTransform:
    """Rectangle-to-rectangle mapping with the y axis inverted.

    Graph space has y pointing up; view space has y pointing down, so the
    model's minimum y lands on the view's bottom edge.
    """

    model_extent: Extent
    view_extent: Extent

    @classmethod
    def from_bounds(cls, model_bounds: pygame.Rect, view_extent: Extent) -> "CoordinateTransform":
        return cls(rect_extent(model_bounds), tuple(view_extent))

    @property
    def scale(self) -> Tuple[float, float]:
        model_min_x, model_min_y, model_max_x, model_max_y = self.model_extent
        view_min_x, view_min_y, view_max_x, view_max_y = self.view_extent
        return (
            (view_max_x - view_min_x) / (model_max_x - model_min_x),
            (view_max_y - view_min_y) / (model_max_y - model_min_y),
        )

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------
    def model_to_view_position(self, position: Vector2) -> Vector2:
        scale_x, scale_y = self.scale
        view_x = self.view_extent[0] + (position.x - self.model_extent[0]) * scale_x
        view_y = self.view_extent[3] - (position.y - self.model_extent[1]) * scale_y
        return Vector2(view_x, view_y)

    def view_to_model_position(self, position: Vector2) -> Vector2:
        scale_x, scale_y = self.scale
        model_x = self.model_extent[0] + (position.x - self.view_extent[0]) / scale_x
        model_y = self.model_extent[1] + (self.view_extent[3] - position.y) / scale_y
        return Vector2(model_x, model_y)

    # ------------------------------------------------------------------
    # Deltas
    # ------------------------------------------------------------------
    def model_to_view_delta_x(self, delta: float) -> float:
        return delta * self.scale[0]

    def view_to_model_delta_x(self, delta: float) -> float:
        return delta / self.scale[0]

    def model_to_view_delta(self, delta: Vector2) -> Vector2:
        scale_x, scale_y = self.scale
        return Vector2(delta.x * scale_x, -delta.y * scale_y)

    def view_to_model_delta(self, delta: Vector2) -> Vector2:
        scale_x, scale_y = self.scale
        return Vector2(delta.x / scale_x, -delta.y / scale_y)
