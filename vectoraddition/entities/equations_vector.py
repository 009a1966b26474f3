"""Vectors on the equations screen: an integer coefficient times a base vector."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

from pygame.math import Vector2

from ..config.constants import COEFFICIENT_RANGE, DEFAULT_COEFFICIENT
from ..systems.observable import Property
from ..world.graph import Graph
from ..world.types import CoordinateSnapMode
from .base_vector import BaseVector, CartesianBaseVector, PolarBaseVector
from .labels import LabelKind
from .root_vector import GeometryChange
from .vector import Vector

if TYPE_CHECKING:
    from ..simulation.vector_set import VectorSet


def _is_valid_coefficient(value: Any) -> bool:
    low, high = COEFFICIENT_RANGE
    return isinstance(value, int) and low <= value <= high


class EquationsVector(Vector):
    """Fixed vector whose components are ``coefficient * base_vector``.

    The base vector matches the graph's snap mode and is created with the
    same initial components, since the default coefficient is 1.
    """

    label_kind = LabelKind.EQUATIONS
    is_derived = True

    def __init__(
        self,
        tail_position: Vector2,
        xy_components: Vector2,
        base_tail_position: Vector2,
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
        self.coefficient_property: Property[int] = Property(DEFAULT_COEFFICIENT, validator=_is_valid_coefficient)

        base_class = (
            CartesianBaseVector if graph.coordinate_snap_mode is CoordinateSnapMode.CARTESIAN else PolarBaseVector
        )
        self.base_vector: BaseVector = base_class(
            base_tail_position, Vector2(xy_components) / DEFAULT_COEFFICIENT, graph, vector_set, symbol
        )
        self.base_vector.geometry_changed.add_listener(self._on_base_changed)
        self.coefficient_property.lazy_link(self._update_components)
        self._update_components()

    @property
    def coefficient(self) -> int:
        return self.coefficient_property.value

    def _on_base_changed(self, change: GeometryChange) -> None:
        if change.components_changed:
            self._update_components()

    def _update_components(self, *_: Any) -> None:
        self._set_geometry(self._tail, self.base_vector.xy_components * self.coefficient_property.value)

    def reset(self) -> None:
        self.coefficient_property.reset()
        self.base_vector.reset()
        super().reset()
        self._update_components()

    def to_state(self) -> Dict[str, Any]:
        state = super().to_state()
        state["coefficient"] = self.coefficient_property.value
        state["base_vector"] = self.base_vector.to_state()
        return state


__all__ = ["EquationsVector"]
