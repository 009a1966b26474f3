"""Label data for the vector arrows.

Each vector kind picks one of the strategies below through its
``label_kind`` tag; the rendering layer only ever sees
:class:`LabelDisplayData`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from ..config import settings
from ..config.constants import FALLBACK_SYMBOL
from ..utils.math_utils import signed_to_unsigned_degrees
from ..world.types import AngleConvention, ComponentAxis

if TYPE_CHECKING:
    from .component_vector import ComponentVector


@dataclass(frozen=True)
class LabelDisplayData:
    coefficient: Optional[int] = None
    symbol: Optional[str] = None
    magnitude: Optional[float] = None
    include_absolute_value_bars: bool = False


class LabelKind(str, Enum):
    VECTOR = "vector"
    SUM = "sum"
    COMPONENT = "component"
    EQUATIONS = "equations"
    EQUATIONS_SUM = "equationsSum"


def round_value(value: float) -> float:
    rounded = round(value, settings.VALUE_DECIMAL_PLACES)
    # Avoid handing "-0.0" to the label.
    return 0.0 if rounded == 0 else rounded


def format_angle_degrees(angle_degrees: Optional[float], convention: Optional[str] = None) -> str:
    """Render an angle for display; a zero vector has no angle and renders as ''."""
    if angle_degrees is None:
        return ""
    convention = AngleConvention(convention or settings.ANGLE_CONVENTION)
    value = round_value(angle_degrees)
    if convention is AngleConvention.FULL_ROTATION:
        value = round_value(signed_to_unsigned_degrees(value))
    return f"{value:.{settings.VALUE_DECIMAL_PLACES}f}\N{DEGREE SIGN}"


def _magnitude_and_symbol(symbol: Optional[str], magnitude: float, values_visible: bool) -> LabelDisplayData:
    shown_magnitude = round_value(magnitude) if values_visible else None
    return LabelDisplayData(
        symbol=symbol,
        magnitude=shown_magnitude,
        include_absolute_value_bars=symbol is not None and shown_magnitude is not None,
    )


def vector_label(vector: Any, values_visible: bool) -> LabelDisplayData:
    symbol = None
    if vector.symbol or vector.is_active:
        symbol = vector.symbol or FALLBACK_SYMBOL
    return _magnitude_and_symbol(symbol, vector.magnitude, values_visible)


def sum_label(resultant: Any, values_visible: bool) -> LabelDisplayData:
    graph = resultant.graph
    active = graph.active_vector
    vector_set = resultant.vector_set
    show_symbol = (
        len(graph.vector_sets) == 1
        or active is resultant
        or (active is not None and vector_set is not None and active in vector_set.active_vectors)
    )
    return _magnitude_and_symbol(resultant.symbol if show_symbol else None, resultant.magnitude, values_visible)


def component_label(component: "ComponentVector", values_visible: bool) -> LabelDisplayData:
    if not values_visible:
        return LabelDisplayData()
    raw = component.parent.x_component if component.axis is ComponentAxis.X else component.parent.y_component
    value = round_value(raw)
    return LabelDisplayData(magnitude=value if value != 0 else None)


def equations_label(vector: Any, values_visible: bool) -> LabelDisplayData:
    base = vector_label(vector, values_visible)
    return LabelDisplayData(
        coefficient=vector.coefficient_property.value,
        symbol=base.symbol,
        magnitude=base.magnitude,
        include_absolute_value_bars=base.include_absolute_value_bars,
    )


def equations_sum_label(resultant: Any, values_visible: bool) -> LabelDisplayData:
    return _magnitude_and_symbol(resultant.symbol, resultant.magnitude, values_visible)


LABEL_STRATEGIES: Dict[LabelKind, Callable[[Any, bool], LabelDisplayData]] = {
    LabelKind.VECTOR: vector_label,
    LabelKind.SUM: sum_label,
    LabelKind.COMPONENT: component_label,
    LabelKind.EQUATIONS: equations_label,
    LabelKind.EQUATIONS_SUM: equations_sum_label,
}


__all__ = [
    "LABEL_STRATEGIES",
    "LabelDisplayData",
    "LabelKind",
    "component_label",
    "equations_label",
    "equations_sum_label",
    "format_angle_degrees",
    "round_value",
    "sum_label",
    "vector_label",
]
