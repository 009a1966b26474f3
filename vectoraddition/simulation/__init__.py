"""Simulation package: vector sets, scenes, the model and the headless runner."""

from __future__ import annotations

from .model import VectorAdditionModel
from .runner import run

__all__ = [
    "model",
    "runner",
    "scene",
    "storage",
    "toolbox",
    "vector_set",
]
