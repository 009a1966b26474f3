"""Geometry helpers shared by the graph and vector models.

Graph bounds are integer :class:`pygame.Rect` values expressed in graph
space, where ``top`` is the minimum y and ``bottom`` the maximum y. pygame's
own ``collidepoint``/``clamp`` treat the right and bottom edges as exclusive,
so the helpers here work on inclusive ``(min_x, min_y, max_x, max_y)``
extents instead.
"""

from __future__ import annotations

import math
from typing import Tuple

import pygame
from pygame.math import Vector2

Extent = Tuple[float, float, float, float]


def round_symmetric(value: float) -> int:
    """Round half away from zero (``2.5 -> 3``, ``-2.5 -> -3``).

    Python's built-in :func:`round` rounds half to even, which would make
    grid snapping depend on parity.
    """
    rounded = int(math.floor(abs(value) + 0.5))
    return rounded if value >= 0 else -rounded


def rounded_vector(vector: Vector2) -> Vector2:
    """Return a copy of ``vector`` snapped to the nearest integer grid point."""
    return Vector2(round_symmetric(vector.x), round_symmetric(vector.y))


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def polar_to_cartesian(magnitude: float, angle_radians: float) -> Vector2:
    return Vector2(magnitude * math.cos(angle_radians), magnitude * math.sin(angle_radians))


def rect_from_extent(min_x: int, min_y: int, max_x: int, max_y: int) -> pygame.Rect:
    return pygame.Rect(min_x, min_y, max_x - min_x, max_y - min_y)


def rect_extent(rect: pygame.Rect) -> Extent:
    return (rect.left, rect.top, rect.right, rect.bottom)


def eroded_extent(extent: Extent, margin: float) -> Extent:
    """Shrink ``extent`` by ``margin`` on every side.

    An extent too small to erode collapses onto its centre line.
    """
    min_x, min_y, max_x, max_y = extent
    if max_x - min_x < 2 * margin:
        min_x = max_x = (min_x + max_x) / 2
    else:
        min_x, max_x = min_x + margin, max_x - margin
    if max_y - min_y < 2 * margin:
        min_y = max_y = (min_y + max_y) / 2
    else:
        min_y, max_y = min_y + margin, max_y - margin
    return (min_x, min_y, max_x, max_y)


def intersect_extents(first: Extent, second: Extent) -> Extent | None:
    """Return the overlap of two extents, or ``None`` when they are disjoint."""
    min_x = max(first[0], second[0])
    min_y = max(first[1], second[1])
    max_x = min(first[2], second[2])
    max_y = min(first[3], second[3])
    if min_x > max_x or min_y > max_y:
        return None
    return (min_x, min_y, max_x, max_y)


def extent_contains(extent: Extent, point: Vector2) -> bool:
    min_x, min_y, max_x, max_y = extent
    return min_x <= point.x <= max_x and min_y <= point.y <= max_y


def closest_point_in_extent(extent: Extent, point: Vector2) -> Vector2:
    """Return the point of ``extent`` closest to ``point`` (``point`` itself if inside)."""
    min_x, min_y, max_x, max_y = extent
    return Vector2(clamp(point.x, min_x, max_x), clamp(point.y, min_y, max_y))


def signed_to_unsigned_degrees(signed_degrees: float) -> float:
    """Map (-180, 180] onto [0, 360). 0 stays 0."""
    if not -180 <= signed_degrees <= 180:
        raise ValueError(f"invalid signed angle: {signed_degrees}")
    return signed_degrees if signed_degrees >= 0 else signed_degrees + 360


def unsigned_to_signed_degrees(unsigned_degrees: float) -> float:
    """Map [0, 360] onto (-180, 180]. Both 0 and 360 map to 0."""
    if not 0 <= unsigned_degrees <= 360:
        raise ValueError(f"invalid unsigned angle: {unsigned_degrees}")
    if unsigned_degrees == 360:
        return 0
    return unsigned_degrees if unsigned_degrees <= 180 else unsigned_degrees - 360


__all__ = [
    "Extent",
    "clamp",
    "closest_point_in_extent",
    "eroded_extent",
    "extent_contains",
    "intersect_extents",
    "polar_to_cartesian",
    "rect_extent",
    "rect_from_extent",
    "round_symmetric",
    "rounded_vector",
    "signed_to_unsigned_degrees",
    "unsigned_to_signed_degrees",
]
