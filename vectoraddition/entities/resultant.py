"""Resultant vectors and the rules that compute them from a vector set."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, Optional, Sequence, Tuple

from pygame.math import Vector2

from ..config.constants import SUM_SYMBOL
from ..systems.observable import Property
from ..world.graph import Graph
from ..world.types import EquationType
from .labels import LabelKind
from .vector import Vector

if TYPE_CHECKING:
    from ..simulation.vector_set import VectorSet

logger = logging.getLogger("vectoraddition.vectors")

ResultantRule = Callable[[Sequence[Vector]], Tuple[Vector2, bool]]

SUM_RULE = "sum"


def sum_rule(vectors: Sequence[Vector]) -> Tuple[Vector2, bool]:
    """Sum of the members that are on the graph; undefined when there are none."""
    total = Vector2(0, 0)
    count = 0
    for vector in vectors:
        if vector.is_on_graph:
            total += vector.xy_components
            count += 1
    return total, count > 0


def addition_rule(vectors: Sequence[Vector]) -> Tuple[Vector2, bool]:
    total = Vector2(0, 0)
    for vector in vectors:
        total += vector.xy_components
    return total, True


def subtraction_rule(vectors: Sequence[Vector]) -> Tuple[Vector2, bool]:
    """First member minus every other member."""
    if not vectors:
        return Vector2(0, 0), True
    difference = vectors[0].xy_components
    for vector in vectors[1:]:
        difference -= vector.xy_components
    return difference, True


def negation_rule(vectors: Sequence[Vector]) -> Tuple[Vector2, bool]:
    # a + b + c = 0, so c = -(a + b)
    total, _ = addition_rule(vectors)
    return -total, True


RESULTANT_RULES: Dict[str, ResultantRule] = {
    SUM_RULE: sum_rule,
    EquationType.ADDITION.value: addition_rule,
    EquationType.SUBTRACTION.value: subtraction_rule,
    EquationType.NEGATION.value: negation_rule,
}


class ResultantVector(Vector):
    """A vector whose components come from the other members of its set.

    The tail can still be dragged around the graph, but the tip cannot, and
    the vector never leaves the graph. With an ``equation_type_property`` the
    rule follows the selected equation type; otherwise ``rule`` names one of
    :data:`RESULTANT_RULES`.
    """

    is_derived = True
    label_kind = LabelKind.SUM

    def __init__(
        self,
        tail_position: Vector2,
        graph: Graph,
        vector_set: "VectorSet",
        *,
        symbol: Optional[str] = SUM_SYMBOL,
        rule: str = SUM_RULE,
        equation_type_property: Optional[Property[EquationType]] = None,
    ) -> None:
        if rule not in RESULTANT_RULES:
            raise ValueError(f"Unknown resultant rule: {rule}")
        super().__init__(
            tail_position,
            Vector2(0, 0),
            graph,
            vector_set,
            symbol=symbol,
            is_tip_draggable=False,
            is_removable=False,
            is_on_graph=True,
            is_disposable=False,
        )
        self._rule = rule
        self.is_defined_property: Property[bool] = Property(False)
        self.equation_type_property = equation_type_property
        if equation_type_property is not None:
            self.label_kind = LabelKind.EQUATIONS_SUM
            equation_type_property.lazy_link(self._on_equation_type_changed)

    @property
    def rule(self) -> str:
        if self.equation_type_property is not None:
            return EquationType(self.equation_type_property.value).value
        return self._rule

    @property
    def is_defined(self) -> bool:
        return self.is_defined_property.value

    def _on_equation_type_changed(self, equation_type: EquationType, old_type: Optional[EquationType]) -> None:
        logger.debug("%r now follows %s", self, EquationType(equation_type).value)
        self.update()

    def update(self) -> None:
        components, defined = RESULTANT_RULES[self.rule](list(self.vector_set.active_vectors))
        self._set_geometry(self._tail, components)
        self.is_defined_property.value = defined

    def reset(self) -> None:
        super().reset()
        self.update()


__all__ = [
    "RESULTANT_RULES",
    "ResultantRule",
    "ResultantVector",
    "SUM_RULE",
    "addition_rule",
    "negation_rule",
    "subtraction_rule",
    "sum_rule",
]
