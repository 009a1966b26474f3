"""Per-axis component vectors derived from a parent vector."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from pygame.math import Vector2

from ..systems.observable import Property
from ..world.types import ComponentAxis, ComponentVectorStyle
from .labels import LabelKind
from .root_vector import GeometryChange, RootVector, _require

if TYPE_CHECKING:
    from .vector import Vector


class ComponentVector(RootVector):
    """The x or y projection of ``parent`` under the shared component style.

    Geometry is recomputed whenever the parent's tail or tip changes, the
    style changes, or the projection offsets are reassigned. While the style
    is ``invisible`` the last geometry is kept and nothing is recomputed.
    """

    label_kind = LabelKind.COMPONENT
    is_derived = True

    def __init__(
        self,
        parent: "Vector",
        component_style_property: Property[ComponentVectorStyle],
        axis: ComponentAxis,
    ) -> None:
        super().__init__(parent.tail_position, Vector2(0, 0))
        self.parent = parent
        self.axis = ComponentAxis(axis)
        self.component_style_property = component_style_property
        self.projection_x_offset = 0.0
        self.projection_y_offset = 0.0
        self._disposed = False

        parent.geometry_changed.add_listener(self._on_parent_changed)
        component_style_property.link(self._on_style_changed)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------
    def _on_parent_changed(self, change: GeometryChange) -> None:
        self.update_component()

    def _on_style_changed(self, style: ComponentVectorStyle, old_style: Optional[Any]) -> None:
        self.update_component()

    def set_projection_offsets(self, x_offset: float, y_offset: float) -> None:
        self.projection_x_offset = x_offset
        self.projection_y_offset = y_offset
        self.update_component()

    def update_component(self) -> None:
        style = ComponentVectorStyle(self.component_style_property.value)
        if style is ComponentVectorStyle.INVISIBLE:
            return

        parent_tail = self.parent.tail_position
        parent_tip = self.parent.tip_position

        if self.axis is ComponentAxis.X:
            if style is ComponentVectorStyle.PROJECTION:
                tail = Vector2(parent_tail.x, self.projection_y_offset)
                tip = Vector2(parent_tip.x, self.projection_y_offset)
            else:
                # Triangle and parallelogram share the x component.
                tail = parent_tail
                tip = Vector2(parent_tip.x, parent_tail.y)
        elif style is ComponentVectorStyle.TRIANGLE:
            tail = Vector2(parent_tip.x, parent_tail.y)
            tip = parent_tip
        elif style is ComponentVectorStyle.PARALLELOGRAM:
            tail = parent_tail
            tip = Vector2(parent_tail.x, parent_tip.y)
        else:
            tail = Vector2(self.projection_x_offset, parent_tail.y)
            tip = Vector2(self.projection_x_offset, parent_tip.y)

        self._set_geometry(tail, tip - tail)

    def reset(self) -> None:
        self.update_component()

    # ------------------------------------------------------------------
    # Parent helpers
    # ------------------------------------------------------------------
    def is_parent_active(self) -> bool:
        return self.parent.is_active

    @property
    def parent_tail(self) -> Vector2:
        return self.parent.tail_position

    @property
    def parent_tip(self) -> Vector2:
        return self.parent.tip_position

    @property
    def parent_mid_point(self) -> Vector2:
        return self.parent.mid_point

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        _require(not self._disposed, "component vector is already disposed")
        self.parent.geometry_changed.remove_listener(self._on_parent_changed)
        self.component_style_property.unlink(self._on_style_changed)
        self.geometry_changed.dispose()
        self._disposed = True


__all__ = ["ComponentVector"]
