"""Frame-driven tweens for the return-to-toolbox animation."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .observable import Emitter

logger = logging.getLogger("vectoraddition.animation")

Easing = Callable[[float], float]


def linear(fraction: float) -> float:
    return fraction


def quadratic_in_out(fraction: float) -> float:
    if fraction < 0.5:
        return 2.0 * fraction * fraction
    return 1.0 - 2.0 * (1.0 - fraction) * (1.0 - fraction)


class AnimationTicker:
    """Advances every running animation by the frame delta given to :meth:`step`."""

    def __init__(self) -> None:
        self._animations: List[Animation] = []

    def add(self, animation: "Animation") -> None:
        if animation not in self._animations:
            self._animations.append(animation)

    def discard(self, animation: "Animation") -> None:
        if animation in self._animations:
            self._animations.remove(animation)

    @property
    def running(self) -> List["Animation"]:
        return list(self._animations)

    def step(self, delta: float) -> None:
        for animation in list(self._animations):
            animation.step(delta)

    def stop_all(self) -> None:
        for animation in list(self._animations):
            animation.stop()


class Animation:
    """Interpolates from 0 to 1 over ``duration`` seconds.

    ``on_update`` receives the eased fraction each step. ``finished`` fires only
    when the animation reaches its end; :meth:`stop` ends it early and fires
    ``stopped`` instead.
    """

    def __init__(
        self,
        duration: float,
        on_update: Callable[[float], None],
        *,
        easing: Easing = quadratic_in_out,
        name: str = "animation",
    ) -> None:
        if duration <= 0:
            raise ValueError(f"duration must be positive, got {duration}")
        self.duration = duration
        self.name = name
        self.elapsed = 0.0
        self.finished = Emitter()
        self.stopped = Emitter()
        self._on_update = on_update
        self._easing = easing
        self._ticker: Optional[AnimationTicker] = None

    @property
    def is_running(self) -> bool:
        return self._ticker is not None

    def start(self, ticker: AnimationTicker) -> "Animation":
        self._ticker = ticker
        ticker.add(self)
        logger.debug("Started %s (%.2fs)", self.name, self.duration)
        return self

    def step(self, delta: float) -> None:
        if self._ticker is None:
            return
        self.elapsed = min(self.duration, self.elapsed + delta)
        fraction = self.elapsed / self.duration
        self._on_update(self._easing(fraction))
        if fraction >= 1.0:
            self._detach()
            logger.debug("Finished %s", self.name)
            self.finished.emit()

    def stop(self) -> None:
        if self._ticker is None:
            return
        self._detach()
        logger.debug("Stopped %s after %.2fs", self.name, self.elapsed)
        self.stopped.emit()

    def _detach(self) -> None:
        if self._ticker is not None:
            self._ticker.discard(self)
        self._ticker = None


__all__ = ["Animation", "AnimationTicker", "linear", "quadratic_in_out"]
