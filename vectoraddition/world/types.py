"""Closed sets of tags shared by the graph and vector models."""

from __future__ import annotations

from enum import Enum


class GraphOrientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    TWO_DIMENSIONAL = "twoDimensional"


class CoordinateSnapMode(str, Enum):
    """How editable vector geometry is disciplined."""

    CARTESIAN = "cartesian"
    POLAR = "polar"


class ComponentVectorStyle(str, Enum):
    INVISIBLE = "invisible"
    TRIANGLE = "triangle"
    PARALLELOGRAM = "parallelogram"
    PROJECTION = "projection"


class ComponentAxis(str, Enum):
    X = "x"
    Y = "y"


class EquationType(str, Enum):
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    NEGATION = "negation"


class AngleConvention(str, Enum):
    PRINCIPAL_ANGLE = "principalAngle"  # (-180, 180]
    FULL_ROTATION = "fullRotation"  # [0, 360)


__all__ = [
    "AngleConvention",
    "ComponentAxis",
    "ComponentVectorStyle",
    "CoordinateSnapMode",
    "EquationType",
    "GraphOrientation",
]
