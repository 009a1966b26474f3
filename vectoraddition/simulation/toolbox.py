"""The tray vectors are taken from and animate back to."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from pygame.math import Vector2

from ..entities.root_vector import _require
from ..entities.vector import Vector
from .vector_set import VectorSet

logger = logging.getLogger("vectoraddition.sets")


@dataclass
class ToolboxSlot:
    """One tray slot, fixed on screen.

    A slot with a ``vector`` hands out that fixed vector (at most once at a
    time); a slot without one creates a new vector on every take.
    """

    view_position: Vector2
    components: Vector2
    symbol: Optional[str] = None
    vector: Optional[Vector] = None
    taken: List[Vector] = field(default_factory=list)


class VectorToolbox:
    def __init__(self, vector_set: VectorSet, slots: Sequence[ToolboxSlot]) -> None:
        self.vector_set = vector_set
        self.slots: List[ToolboxSlot] = list(slots)
        self._slot_of: Dict[Vector, ToolboxSlot] = {}

    def slot_position(self, slot: ToolboxSlot) -> Vector2:
        """The slot's position in graph coordinates under the current transform."""
        return self.vector_set.graph.transform.view_to_model_position(slot.view_position)

    def is_slot_empty(self, index: int) -> bool:
        slot = self.slots[index]
        return slot.vector is not None and slot.vector in self.vector_set.active_vectors

    def take_vector(self, index: int, tail_position: Optional[Vector2] = None) -> Vector:
        """Pull a vector out of slot ``index`` and make it an active, off-graph member."""
        slot = self.slots[index]
        if tail_position is None:
            tail_position = self.slot_position(slot) - slot.components / 2
        if slot.vector is not None:
            if self.is_slot_empty(index):
                raise ValueError(f"{slot.vector!r} has already been taken from the toolbox")
            vector = slot.vector
        else:
            vector = self.vector_set.create_vector(tail_position, slot.components, slot.symbol)
        vector.move_to_tail_position(tail_position)
        self._slot_of[vector] = slot
        slot.taken.append(vector)
        self.vector_set.add_vector(vector)
        return vector

    def grab(self, vector: Vector) -> None:
        """Catch a vector that is on its way back; its return callback never runs."""
        vector.stop_animation()
        vector.animate_back_property.value = False

    def release(self, vector: Vector, tail_position: Vector2) -> None:
        """Drop ``vector`` on the graph if its tail is over it, otherwise send it back."""
        _require(not vector.is_on_graph, f"{vector!r} is already on the graph")
        tail_position = Vector2(tail_position)
        if self.vector_set.graph.contains_point(tail_position):
            vector.drop_onto_graph(tail_position)
        else:
            vector.move_to_tail_position(tail_position)
            self.animate_back(vector)

    def animate_back(self, vector: Vector) -> None:
        slot = self._slot_of.get(vector)
        _require(slot is not None, f"{vector!r} did not come from this toolbox")
        if vector.is_on_graph:
            vector.pop_off_of_graph()
        vector.animate_back_property.value = True
        logger.debug("Returning %r to the toolbox", vector)
        vector.animate_to_point(self.slot_position(slot), slot.components, lambda: self._on_returned(vector))

    def _on_returned(self, vector: Vector) -> None:
        slot = self._slot_of.pop(vector)
        slot.taken.remove(vector)
        vector.animate_back_property.value = False
        self.vector_set.remove_vector(vector)

    def clear(self) -> None:
        """Forget vectors handed out; used after the set has been erased."""
        for slot in self.slots:
            slot.taken.clear()
        self._slot_of.clear()


__all__ = ["ToolboxSlot", "VectorToolbox"]
