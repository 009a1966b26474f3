"""Scenes: a graph, its vector sets and their toolboxes.

Factories build the scenes of the four screens (explore 1D, explore 2D,
lab and equations) with their graph bounds, initial vectors and tray
slots.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from pygame.math import Vector2

from ..config.constants import (
    COMPONENT_HEAD_WIDTH,
    DEFAULT_BOTTOM_LEFT,
    DEFAULT_GRAPH_BOUNDS,
    SUM_SYMBOL,
)
from ..entities.equations_vector import EquationsVector
from ..systems.animation import AnimationTicker
from ..systems.observable import Property
from ..utils.math_utils import polar_to_cartesian, round_symmetric
from ..world.graph import Graph
from ..world.types import ComponentVectorStyle, CoordinateSnapMode, EquationType, GraphOrientation
from .toolbox import ToolboxSlot, VectorToolbox
from .vector_set import ProjectionOffsets, VectorSet

logger = logging.getLogger("vectoraddition.simulation")

# Tray slots sit to the right of the graph, stacked downward (view units).
TOOLBOX_LEFT_MARGIN = 70
TOOLBOX_SLOT_SPACING = 90

EQUATIONS_BOTTOM_LEFT = (DEFAULT_BOTTOM_LEFT[0], DEFAULT_BOTTOM_LEFT[1] + 40)
EQUATIONS_SUM_TAIL = (25, 5)

# (symbol, components, tail, base tail)
EquationsEntry = Tuple[str, Vector2, Vector2, Vector2]


def _polar(magnitude: float, angle_degrees: float) -> Vector2:
    return polar_to_cartesian(magnitude, math.radians(angle_degrees))


class Scene:
    """One graph with its vector sets, sharing the screen's component style."""

    def __init__(
        self,
        name: str,
        graph: Graph,
        component_style_property: Property[ComponentVectorStyle],
        *,
        equation_type_property: Optional[Property[EquationType]] = None,
    ) -> None:
        self.name = name
        self.graph = graph
        self.component_style_property = component_style_property
        self.equation_type_property = equation_type_property
        self.toolboxes: List[VectorToolbox] = []

    @property
    def vector_sets(self) -> List[VectorSet]:
        return self.graph.vector_sets

    @property
    def coordinate_snap_mode(self) -> CoordinateSnapMode:
        return self.graph.coordinate_snap_mode

    def _slot_view_position(self, index: int) -> Vector2:
        right = self.graph.view_extent[2]
        top = self.graph.view_extent[1]
        return Vector2(right + TOOLBOX_LEFT_MARGIN, top + TOOLBOX_SLOT_SPACING * (index + 0.5))

    def add_toolbox(self, vector_set: VectorSet, slots: Sequence[ToolboxSlot]) -> VectorToolbox:
        toolbox = VectorToolbox(vector_set, slots)
        self.toolboxes.append(toolbox)
        return toolbox

    def erase(self) -> None:
        for vector_set in self.vector_sets:
            vector_set.erase()
        for toolbox in self.toolboxes:
            toolbox.clear()
        self.graph.active_vector = None

    def reset(self) -> None:
        self.graph.reset()
        if self.equation_type_property is not None:
            self.equation_type_property.reset()
        for vector_set in self.vector_sets:
            vector_set.reset()
        for toolbox in self.toolboxes:
            toolbox.clear()
        logger.info("Reset scene %s", self.name)

    def __repr__(self) -> str:
        return f"Scene({self.name!r}, sets={len(self.vector_sets)})"


def _default_style(component_style_property: Optional[Property[ComponentVectorStyle]]) -> Property[ComponentVectorStyle]:
    if component_style_property is not None:
        return component_style_property
    return Property(ComponentVectorStyle.INVISIBLE)


def _fixed_vector_scene(
    name: str,
    graph: Graph,
    component_style_property: Property[ComponentVectorStyle],
    vectors: Sequence[Tuple[str, Vector2]],
) -> Scene:
    scene = Scene(name, graph, component_style_property)
    vector_set = VectorSet(graph, component_style_property, name=f"{name} vectors")
    slots = []
    for index, (symbol, components) in enumerate(vectors):
        vector = vector_set.create_vector(Vector2(0, 0), components, symbol, fixed=True)
        slots.append(ToolboxSlot(scene._slot_view_position(index), Vector2(components), symbol, vector=vector))
    scene.add_toolbox(vector_set, slots)
    return scene


def create_explore_1d_scene(
    orientation: GraphOrientation,
    component_style_property: Optional[Property[ComponentVectorStyle]] = None,
    *,
    ticker: Optional[AnimationTicker] = None,
) -> Scene:
    """Cartesian graph centred on the origin with vectors a, b and c along one axis."""
    orientation = GraphOrientation(orientation)
    if orientation is GraphOrientation.TWO_DIMENSIONAL:
        raise ValueError("Explore 1D scenes are horizontal or vertical")
    min_x, min_y, max_x, max_y = DEFAULT_GRAPH_BOUNDS
    half_width = (max_x - min_x) // 2
    half_height = (max_y - min_y) // 2
    graph = Graph(
        (-half_width, -half_height, half_width, half_height),
        CoordinateSnapMode.CARTESIAN,
        orientation=orientation,
        ticker=ticker,
    )
    components = Vector2(5, 0) if orientation is GraphOrientation.HORIZONTAL else Vector2(0, 5)
    return _fixed_vector_scene(
        f"explore1d-{orientation.value}",
        graph,
        _default_style(component_style_property),
        [(symbol, Vector2(components)) for symbol in ("a", "b", "c")],
    )


def create_explore_2d_scene(
    coordinate_snap_mode: CoordinateSnapMode,
    component_style_property: Optional[Property[ComponentVectorStyle]] = None,
    *,
    ticker: Optional[AnimationTicker] = None,
) -> Scene:
    """Three fixed vectors: a, b, c (Cartesian) or d, e, f (polar)."""
    snap_mode = CoordinateSnapMode(coordinate_snap_mode)
    graph = Graph(DEFAULT_GRAPH_BOUNDS, snap_mode, ticker=ticker)
    if snap_mode is CoordinateSnapMode.CARTESIAN:
        vectors = [("a", Vector2(6, 8)), ("b", Vector2(8, 6)), ("c", Vector2(0, -10))]
    else:
        vectors = [("d", _polar(8, 30)), ("e", _polar(8, 60)), ("f", _polar(8, -90))]
    return _fixed_vector_scene(f"explore2d-{snap_mode.value}", graph, _default_style(component_style_property), vectors)


def create_lab_scene(
    coordinate_snap_mode: CoordinateSnapMode,
    component_style_property: Optional[Property[ComponentVectorStyle]] = None,
    *,
    ticker: Optional[AnimationTicker] = None,
) -> Scene:
    """Two vector sets, each with an unlimited tray of unnamed vectors."""
    snap_mode = CoordinateSnapMode(coordinate_snap_mode)
    component_style_property = _default_style(component_style_property)
    graph = Graph(DEFAULT_GRAPH_BOUNDS, snap_mode, ticker=ticker)
    scene = Scene(f"lab-{snap_mode.value}", graph, component_style_property)

    min_x, min_y, max_x, max_y = DEFAULT_GRAPH_BOUNDS
    width = max_x - min_x
    center_y = round_symmetric((min_y + max_y) / 2)
    head_width = graph.transform.view_to_model_delta_x(COMPONENT_HEAD_WIDTH)
    offset_delta = -(head_width / 2)

    first_offsets = ProjectionOffsets.for_graph(graph).with_updates(x_delta=offset_delta, y_delta=offset_delta)
    second_offsets = first_offsets.with_updates(
        x_start=first_offsets.x_start + offset_delta / 2,
        y_start=first_offsets.y_start + offset_delta / 2,
        resultant_x=first_offsets.resultant_x + head_width,
        resultant_y=first_offsets.resultant_y + head_width,
    )

    components = Vector2(8, 6) if snap_mode is CoordinateSnapMode.CARTESIAN else _polar(8, 45)
    for index, offsets in enumerate((first_offsets, second_offsets)):
        set_number = index + 1
        vector_set = VectorSet(
            graph,
            component_style_property,
            name=f"lab set {set_number}",
            resultant_tail_position=Vector2(round_symmetric(min_x + set_number * width / 3), center_y),
            resultant_symbol=f"{SUM_SYMBOL}{set_number}",
            projection_offsets=offsets,
        )
        scene.add_toolbox(vector_set, [ToolboxSlot(scene._slot_view_position(index), Vector2(components))])
    return scene


def create_equations_scene(
    coordinate_snap_mode: CoordinateSnapMode,
    component_style_property: Optional[Property[ComponentVectorStyle]] = None,
    *,
    ticker: Optional[AnimationTicker] = None,
) -> Scene:
    """Two coefficient-driven vectors whose resultant follows the equation type."""
    snap_mode = CoordinateSnapMode(coordinate_snap_mode)
    component_style_property = _default_style(component_style_property)
    graph = Graph(DEFAULT_GRAPH_BOUNDS, snap_mode, bottom_left=EQUATIONS_BOTTOM_LEFT, ticker=ticker)
    equation_type_property: Property[EquationType] = Property(EquationType.ADDITION)
    scene = Scene(
        f"equations-{snap_mode.value}",
        graph,
        component_style_property,
        equation_type_property=equation_type_property,
    )

    if snap_mode is CoordinateSnapMode.CARTESIAN:
        symbols = ("a", "b", "c")
        first, second = Vector2(0, 5), Vector2(5, 5)
    else:
        symbols = ("d", "e", "f")
        first, second = _polar(5, 0), _polar(8, 45)
    entries: List[EquationsEntry] = [
        (symbols[0], first, Vector2(5, 5), Vector2(35, 15)),
        (symbols[1], second, Vector2(15, 5), Vector2(35, 5)),
    ]

    vector_set = VectorSet(
        graph,
        component_style_property,
        name=f"{scene.name} vectors",
        resultant_tail_position=Vector2(EQUATIONS_SUM_TAIL),
        resultant_symbol=symbols[2],
        equation_type_property=equation_type_property,
        fixed_membership=True,
    )
    for symbol, components, tail, base_tail in entries:
        vector = EquationsVector(tail, components, base_tail, graph, vector_set, symbol)
        vector_set.all_vectors.append(vector)
        vector_set.add_vector(vector)
    return scene


__all__ = [
    "Scene",
    "create_equations_scene",
    "create_explore_1d_scene",
    "create_explore_2d_scene",
    "create_lab_scene",
]
