"""Graph, coordinate transform and shared enum tags."""

from __future__ import annotations

from .graph import Graph
from .transform import CoordinateTransform
from .types import (
    AngleConvention,
    ComponentAxis,
    ComponentVectorStyle,
    CoordinateSnapMode,
    EquationType,
    GraphOrientation,
)

__all__ = [
    "AngleConvention",
    "ComponentAxis",
    "ComponentVectorStyle",
    "CoordinateSnapMode",
    "CoordinateTransform",
    "EquationType",
    "Graph",
    "GraphOrientation",
]
