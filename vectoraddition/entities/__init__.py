"""Vector entities: root, draggable, component, resultant and picker-driven vectors."""

from __future__ import annotations

from .base_vector import BaseVector, CartesianBaseVector, PolarBaseVector
from .component_vector import ComponentVector
from .equations_vector import EquationsVector
from .labels import LabelDisplayData, LabelKind, format_angle_degrees
from .resultant import RESULTANT_RULES, ResultantVector
from .root_vector import GeometryChange, RootVector, VectorStateError
from .vector import Vector

__all__ = [
    "BaseVector",
    "CartesianBaseVector",
    "ComponentVector",
    "EquationsVector",
    "GeometryChange",
    "LabelDisplayData",
    "LabelKind",
    "PolarBaseVector",
    "RESULTANT_RULES",
    "ResultantVector",
    "RootVector",
    "Vector",
    "VectorStateError",
    "format_angle_degrees",
]
