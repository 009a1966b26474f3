"""Root of every vector-like entity: a tail position plus xy components."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from pygame.math import Vector2

from ..config.constants import ZERO_THRESHOLD
from ..systems.observable import Emitter
from .labels import LABEL_STRATEGIES, LabelDisplayData, LabelKind


class VectorStateError(RuntimeError):
    """Raised when a vector operation is invoked in a state that forbids it."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise VectorStateError(message)


@dataclass(frozen=True)
class GeometryChange:
    """One atomic change of a vector's tail and/or components."""

    vector: "RootVector"
    old_tail: Vector2
    old_components: Vector2
    new_tail: Vector2
    new_components: Vector2

    @property
    def tail_changed(self) -> bool:
        return self.old_tail.x != self.new_tail.x or self.old_tail.y != self.new_tail.y

    @property
    def components_changed(self) -> bool:
        return self.old_components.x != self.new_components.x or self.old_components.y != self.new_components.y

    @property
    def old_tip(self) -> Vector2:
        return self.old_tail + self.old_components

    @property
    def new_tip(self) -> Vector2:
        return self.new_tail + self.new_components


class RootVector:
    """Tail position and xy components; the tip is always ``tail + components``.

    Geometry is stored as two private :class:`Vector2` values and is only
    ever handed out as copies. Every mutation goes through
    :meth:`_set_geometry`, which emits ``geometry_changed`` exactly once with
    both old values, after tail and components are both up to date.

    ``is_derived`` marks vectors whose components are owned by something else
    (a resultant rule, a pair of scalar pickers); public setters that would
    change their components raise :class:`VectorStateError`.
    """

    label_kind: Optional[LabelKind] = None
    is_derived = False

    def __init__(self, tail_position: Vector2, xy_components: Vector2, *, symbol: Optional[str] = None) -> None:
        self._tail = Vector2(tail_position)
        self._xy = Vector2(xy_components)
        self._initial_tail = Vector2(tail_position)
        self._initial_xy = Vector2(xy_components)
        self.symbol = symbol
        self.geometry_changed = Emitter()

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def tail_position(self) -> Vector2:
        return Vector2(self._tail)

    @tail_position.setter
    def tail_position(self, position: Vector2) -> None:
        self.set_tail(position)

    @property
    def xy_components(self) -> Vector2:
        return Vector2(self._xy)

    @xy_components.setter
    def xy_components(self, components: Vector2) -> None:
        self._require_writable_components()
        self._set_geometry(self._tail, components)

    @property
    def tip_position(self) -> Vector2:
        return self._tail + self._xy

    @property
    def x_component(self) -> float:
        return self._xy.x

    @x_component.setter
    def x_component(self, value: float) -> None:
        self.xy_components = Vector2(value, self._xy.y)

    @property
    def y_component(self) -> float:
        return self._xy.y

    @y_component.setter
    def y_component(self, value: float) -> None:
        self.xy_components = Vector2(self._xy.x, value)

    @property
    def magnitude(self) -> float:
        return self._xy.length()

    @property
    def angle(self) -> Optional[float]:
        """Signed angle in (-pi, pi], or ``None`` for a zero vector."""
        if self.magnitude < ZERO_THRESHOLD:
            return None
        angle = math.atan2(self._xy.y, self._xy.x)
        # atan2 returns -pi for a negative-zero y.
        return math.pi if angle == -math.pi else angle

    @property
    def angle_degrees(self) -> Optional[float]:
        angle = self.angle
        return None if angle is None else math.degrees(angle)

    @property
    def mid_point(self) -> Vector2:
        return self._tail + self._xy / 2

    def has_zero_component(self) -> bool:
        return abs(self._xy.x) < ZERO_THRESHOLD or abs(self._xy.y) < ZERO_THRESHOLD

    def move_to_tail_position(self, position: Vector2) -> None:
        """Translate the vector; components are kept and the tip moves."""
        self._set_geometry(position, self._xy)

    def set_tail(self, position: Vector2) -> None:
        """Move the tail while keeping the tip fixed."""
        self._require_writable_components()
        tip = self.tip_position
        position = Vector2(position)
        self._set_geometry(position, tip - position)

    def set_tip(self, position: Vector2) -> None:
        """Move the tip while keeping the tail fixed."""
        self._require_writable_components()
        self._set_geometry(self._tail, Vector2(position) - self._tail)

    def _require_writable_components(self) -> None:
        _require(not self.is_derived, f"{type(self).__name__} components are derived and cannot be set directly")

    def _set_geometry(self, tail: Vector2, components: Vector2) -> None:
        new_tail = Vector2(tail)
        new_xy = Vector2(components)
        if (
            new_tail.x == self._tail.x
            and new_tail.y == self._tail.y
            and new_xy.x == self._xy.x
            and new_xy.y == self._xy.y
        ):
            return
        change = GeometryChange(self, Vector2(self._tail), Vector2(self._xy), Vector2(new_tail), Vector2(new_xy))
        self._tail = new_tail
        self._xy = new_xy
        self.geometry_changed.emit(change)

    def reset(self) -> None:
        self._set_geometry(self._initial_tail, self._initial_xy)

    # ------------------------------------------------------------------
    # Labels
    # ------------------------------------------------------------------
    def get_label_display_data(self, values_visible: bool) -> LabelDisplayData:
        if self.label_kind is None:
            raise NotImplementedError(f"{type(self).__name__} does not define a label")
        return LABEL_STRATEGIES[self.label_kind](self, values_visible)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(symbol={self.symbol!r}, tail=({self._tail.x:g}, {self._tail.y:g}), "
            f"components=({self._xy.x:g}, {self._xy.y:g}))"
        )


__all__ = ["GeometryChange", "LabelDisplayData", "RootVector", "VectorStateError"]
