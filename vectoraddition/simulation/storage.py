"""JSON snapshots of scene state.

Only source-of-truth fields are written: graph bounds, tails, components,
on-graph flags, picker values and coefficients. Tips, transforms,
component vectors and resultant components are recomputed on restore.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pygame.math import Vector2

from ..entities.base_vector import CartesianBaseVector, PolarBaseVector
from ..entities.equations_vector import EquationsVector
from ..entities.vector import Vector
from ..utils.math_utils import rect_from_extent
from ..world.types import AngleConvention, ComponentVectorStyle, EquationType
from .scene import Scene
from .toolbox import VectorToolbox
from .vector_set import VectorSet

if TYPE_CHECKING:
    from .model import VectorAdditionModel

logger = logging.getLogger("vectoraddition.simulation")

SNAPSHOT_VERSION = 1


def _point(values: Any, field: str) -> Vector2:
    try:
        x, y = values
        return Vector2(float(x), float(y))
    except (TypeError, ValueError):
        raise ValueError(f"Snapshot field '{field}' must be a pair of numbers, got {values!r}") from None


def snapshot_scene(scene: Scene) -> Dict[str, Any]:
    sets: List[Dict[str, Any]] = []
    for vector_set in scene.vector_sets:
        resultant = vector_set.resultant
        sets.append(
            {
                "name": vector_set.name,
                "resultant_tail": [resultant.tail_position.x, resultant.tail_position.y],
                "vectors": [vector.to_state() for vector in vector_set.active_vectors],
            }
        )
    equation_type = scene.equation_type_property
    return {
        "name": scene.name,
        "bounds": list(scene.graph.extent),
        "equation_type": None if equation_type is None else EquationType(equation_type.value).value,
        "vector_sets": sets,
    }


def _toolbox_for(scene: Scene, vector_set: VectorSet) -> Optional[VectorToolbox]:
    for toolbox in scene.toolboxes:
        if toolbox.vector_set is vector_set:
            return toolbox
    return None


def _restore_equations_vector(vector_set: VectorSet, state: Dict[str, Any]) -> None:
    symbol = state.get("symbol")
    matches = [vector for vector in vector_set.active_vectors if vector.symbol == symbol]
    if not matches or not isinstance(matches[0], EquationsVector):
        raise ValueError(f"Snapshot names unknown equations vector {symbol!r}")
    vector = matches[0]
    base_state = state.get("base_vector", {})
    base = vector.base_vector
    if isinstance(base, CartesianBaseVector):
        base.x_component_property.value = int(base_state["x_component"])
        base.y_component_property.value = int(base_state["y_component"])
    elif isinstance(base, PolarBaseVector):
        base.magnitude_property.value = int(base_state["magnitude"])
        base.angle_degrees_property.value = int(base_state["angle_degrees"])
    base.move_to_tail_position(_point(base_state.get("tail"), "base_vector.tail"))
    vector.coefficient_property.value = int(state.get("coefficient", 1))
    vector.move_to_tail_position(_point(state.get("tail"), "tail"))


def _slot_index(toolbox: VectorToolbox, symbol: Optional[str]) -> int:
    for index, slot in enumerate(toolbox.slots):
        if slot.vector is not None and slot.vector.symbol == symbol:
            return index
    for index, slot in enumerate(toolbox.slots):
        if slot.vector is None:
            return index
    raise ValueError(f"Snapshot names unknown vector {symbol!r}")


def _restore_toolbox_vector(scene: Scene, vector_set: VectorSet, state: Dict[str, Any]) -> Vector:
    toolbox = _toolbox_for(scene, vector_set)
    if toolbox is None:
        raise ValueError(f"Vector set {vector_set.name!r} has no toolbox to restore vectors from")
    tail = _point(state.get("tail"), "tail")
    vector = toolbox.take_vector(_slot_index(toolbox, state.get("symbol")), tail)
    components = _point(state.get("components"), "components")
    vector.xy_components = components
    if state.get("is_on_graph", False):
        vector.is_on_graph_property.value = True
    return vector


def restore_scene(scene: Scene, data: Dict[str, Any]) -> None:
    """Reset ``scene`` and rebuild the state described by :func:`snapshot_scene`."""
    if data.get("name") != scene.name:
        raise ValueError(f"Snapshot is for scene {data.get('name')!r}, not {scene.name!r}")
    sets = data.get("vector_sets", [])
    if len(sets) != len(scene.vector_sets):
        raise ValueError(f"Snapshot has {len(sets)} vector sets, scene {scene.name!r} has {len(scene.vector_sets)}")

    scene.reset()
    bounds = data.get("bounds")
    if bounds is not None:
        min_x, min_y, max_x, max_y = (int(value) for value in bounds)
        scene.graph.bounds_property.value = rect_from_extent(min_x, min_y, max_x, max_y)
    if data.get("equation_type") is not None:
        if scene.equation_type_property is None:
            raise ValueError(f"Scene {scene.name!r} has no equation type")
        scene.equation_type_property.value = EquationType(data["equation_type"])

    for vector_set, set_data in zip(scene.vector_sets, sets):
        for state in set_data.get("vectors", []):
            if vector_set.fixed_membership:
                _restore_equations_vector(vector_set, state)
            else:
                _restore_toolbox_vector(scene, vector_set, state)
        if set_data.get("resultant_tail") is not None:
            vector_set.resultant.move_to_tail_position(_point(set_data["resultant_tail"], "resultant_tail"))
    scene.graph.active_vector = None


def save_snapshot(model: "VectorAdditionModel", path: Path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "version": SNAPSHOT_VERSION,
        "component_style": ComponentVectorStyle(model.component_style_property.value).value,
        "values_visible": bool(model.values_visible_property.value),
        "angle_convention": AngleConvention(model.angle_convention_property.value).value,
        "scenes": {name: snapshot_scene(scene) for name, scene in model.scenes.items()},
    }
    with target.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2)
    logger.info("Saved snapshot to %s", target)
    return target


def load_snapshot(model: "VectorAdditionModel", path: Path) -> None:
    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(f"Snapshot not found at {source}")
    with source.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict) or data.get("version") != SNAPSHOT_VERSION:
        raise ValueError(f"Unsupported snapshot format in {source}")

    scenes = data.get("scenes", {})
    unknown = sorted(set(scenes) - set(model.scenes))
    if unknown:
        raise ValueError(f"Unknown scene(s) in snapshot: {', '.join(unknown)}")

    model.ticker.stop_all()
    model.component_style_property.value = ComponentVectorStyle(data.get("component_style", "invisible"))
    model.values_visible_property.value = bool(data.get("values_visible", False))
    model.angle_convention_property.value = AngleConvention(
        data.get("angle_convention", AngleConvention.PRINCIPAL_ANGLE.value)
    )
    for name, scene_data in scenes.items():
        restore_scene(model.scenes[name], scene_data)
    logger.info("Loaded snapshot from %s (%d scenes)", source, len(scenes))


__all__ = ["SNAPSHOT_VERSION", "load_snapshot", "restore_scene", "save_snapshot", "snapshot_scene"]
