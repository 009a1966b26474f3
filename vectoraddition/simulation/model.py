"""Top-level model holding every screen's scenes and the shared settings."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional

from ..config import settings
from ..systems.animation import AnimationTicker
from ..systems.observable import Property
from ..world.types import AngleConvention, ComponentVectorStyle, CoordinateSnapMode, GraphOrientation
from .scene import (
    Scene,
    create_equations_scene,
    create_explore_1d_scene,
    create_explore_2d_scene,
    create_lab_scene,
)

logger = logging.getLogger("vectoraddition.simulation")


class VectorAdditionModel:
    """All scenes, one animation ticker, and the view-wide toggles.

    Scenes are keyed by name (``explore1d-horizontal``, ``lab-polar``, ...).
    """

    def __init__(self, ticker: Optional[AnimationTicker] = None) -> None:
        self.ticker = ticker if ticker is not None else AnimationTicker()
        self.component_style_property: Property[ComponentVectorStyle] = Property(ComponentVectorStyle.INVISIBLE)
        self.values_visible_property: Property[bool] = Property(False)
        self.angle_convention_property: Property[AngleConvention] = Property(
            AngleConvention(settings.ANGLE_CONVENTION)
        )

        style = self.component_style_property
        scenes = [
            create_explore_1d_scene(GraphOrientation.HORIZONTAL, style, ticker=self.ticker),
            create_explore_1d_scene(GraphOrientation.VERTICAL, style, ticker=self.ticker),
        ]
        for snap_mode in CoordinateSnapMode:
            scenes.append(create_explore_2d_scene(snap_mode, style, ticker=self.ticker))
        for snap_mode in CoordinateSnapMode:
            scenes.append(create_lab_scene(snap_mode, style, ticker=self.ticker))
        for snap_mode in CoordinateSnapMode:
            scenes.append(create_equations_scene(snap_mode, style, ticker=self.ticker))
        self.scenes: Dict[str, Scene] = {scene.name: scene for scene in scenes}
        logger.info("Created %d scenes", len(self.scenes))

    def scene(self, name: str) -> Scene:
        try:
            return self.scenes[name]
        except KeyError:
            raise ValueError(f"Unknown scene: {name}") from None

    def __iter__(self) -> Iterator[Scene]:
        return iter(self.scenes.values())

    def step(self, delta: float) -> None:
        """Advance running animations by ``delta`` seconds."""
        self.ticker.step(delta)

    def reset(self) -> None:
        self.ticker.stop_all()
        self.component_style_property.reset()
        self.values_visible_property.reset()
        self.angle_convention_property.reset()
        for scene in self.scenes.values():
            scene.reset()
        logger.info("Model reset")


__all__ = ["VectorAdditionModel"]
