"""Base vectors whose components are driven by a pair of scalar pickers."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from pygame.math import Vector2

from ..config import settings
from ..config.constants import MAGNITUDE_RANGE, SIGNED_ANGLE_RANGE, XY_COMPONENT_RANGE
from ..systems.observable import Property
from ..utils.math_utils import polar_to_cartesian, round_symmetric
from ..world.graph import Graph
from ..world.types import CoordinateSnapMode
from .vector import Vector

if TYPE_CHECKING:
    from ..simulation.vector_set import VectorSet


def _in_range(bounds: Tuple[float, float]):
    low, high = bounds

    def validator(value: Any) -> bool:
        return low <= value <= high

    return validator


class BaseVector(Vector):
    """Fixed on-graph vector with a draggable tail and picker-driven components."""

    is_derived = True

    def __init__(
        self,
        tail_position: Vector2,
        xy_components: Vector2,
        graph: Graph,
        vector_set: "VectorSet",
        symbol: Optional[str],
    ) -> None:
        super().__init__(
            tail_position,
            xy_components,
            graph,
            vector_set,
            symbol=symbol,
            is_tip_draggable=False,
            is_removable=False,
            is_on_graph=True,
            is_disposable=False,
        )


class CartesianBaseVector(BaseVector):
    def __init__(
        self,
        tail_position: Vector2,
        xy_components: Vector2,
        graph: Graph,
        vector_set: "VectorSet",
        symbol: Optional[str],
    ) -> None:
        if graph.coordinate_snap_mode is not CoordinateSnapMode.CARTESIAN:
            raise ValueError("CartesianBaseVector requires a Cartesian graph")
        super().__init__(tail_position, xy_components, graph, vector_set, symbol)

        components = Vector2(xy_components)
        self.x_component_property: Property[int] = Property(
            round_symmetric(components.x), validator=_in_range(XY_COMPONENT_RANGE)
        )
        self.y_component_property: Property[int] = Property(
            round_symmetric(components.y), validator=_in_range(XY_COMPONENT_RANGE)
        )
        self.x_component_property.lazy_link(self._update_components)
        self.y_component_property.lazy_link(self._update_components)
        self._update_components()

    def _update_components(self, *_: Any) -> None:
        components = Vector2(self.x_component_property.value, self.y_component_property.value)
        self._set_geometry(self._tail, components)

    def reset(self) -> None:
        self.x_component_property.reset()
        self.y_component_property.reset()
        super().reset()
        self._update_components()

    def to_state(self) -> Dict[str, Any]:
        state = super().to_state()
        state["x_component"] = self.x_component_property.value
        state["y_component"] = self.y_component_property.value
        return state


class PolarBaseVector(BaseVector):
    """Components are ``magnitude * (cos angle, sin angle)``.

    The angle picker steps in multiples of ``POLAR_ANGLE_INTERVAL`` within
    [-180, 180].
    """

    def __init__(
        self,
        tail_position: Vector2,
        xy_components: Vector2,
        graph: Graph,
        vector_set: "VectorSet",
        symbol: Optional[str],
    ) -> None:
        if graph.coordinate_snap_mode is not CoordinateSnapMode.POLAR:
            raise ValueError("PolarBaseVector requires a polar graph")
        components = Vector2(xy_components)
        if components.length() == 0:
            raise ValueError("PolarBaseVector requires a non-zero initial vector")
        super().__init__(tail_position, components, graph, vector_set, symbol)

        interval = settings.POLAR_ANGLE_INTERVAL
        angle = math.degrees(math.atan2(components.y, components.x))
        self.magnitude_property: Property[int] = Property(
            round_symmetric(components.length()), validator=_in_range(MAGNITUDE_RANGE)
        )
        self.angle_degrees_property: Property[int] = Property(
            interval * round_symmetric(angle / interval), validator=self._is_valid_angle
        )
        self.magnitude_property.lazy_link(self._update_components)
        self.angle_degrees_property.lazy_link(self._update_components)
        self._update_components()

    @staticmethod
    def _is_valid_angle(value: Any) -> bool:
        low, high = SIGNED_ANGLE_RANGE
        return low <= value <= high and value % settings.POLAR_ANGLE_INTERVAL == 0

    def _update_components(self, *_: Any) -> None:
        components = polar_to_cartesian(
            self.magnitude_property.value, math.radians(self.angle_degrees_property.value)
        )
        self._set_geometry(self._tail, components)

    def reset(self) -> None:
        self.magnitude_property.reset()
        self.angle_degrees_property.reset()
        super().reset()
        self._update_components()

    def to_state(self) -> Dict[str, Any]:
        state = super().to_state()
        state["magnitude"] = self.magnitude_property.value
        state["angle_degrees"] = self.angle_degrees_property.value
        return state


__all__ = ["BaseVector", "CartesianBaseVector", "PolarBaseVector"]
