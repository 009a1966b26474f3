"""Headless runner: build the model, optionally restore a snapshot, tick, summarise."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..config import settings
from ..config.settings import RuntimeSettings
from ..entities.labels import format_angle_degrees
from .model import VectorAdditionModel
from .storage import load_snapshot


def _initialise_logger() -> logging.Logger:
    log_dir = settings.LOG_DIRECTORY
    if not isinstance(log_dir, Path):
        log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / settings.DEBUG_LOG_FILE

    logger = logging.getLogger("vectoraddition")
    if logger.handlers:
        return logger

    level_name = str(settings.DEBUG_LOG_LEVEL).upper()
    level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)

    file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    file_handler.setLevel(level)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    logger.propagate = False

    logger.info("Debug logging initialised at %s", log_path)
    return logger


def summarise(model: VectorAdditionModel) -> None:
    logger = logging.getLogger("vectoraddition.simulation")
    for scene in model:
        for vector_set in scene.vector_sets:
            resultant = vector_set.resultant
            if not resultant.is_defined:
                logger.info("%s / %s: resultant undefined", scene.name, vector_set.name)
                continue
            logger.info(
                "%s / %s: %d on graph, resultant %s = (%.2f, %.2f), |%s| = %.2f, angle %s",
                scene.name,
                vector_set.name,
                vector_set.number_of_vectors_on_graph(),
                resultant.symbol,
                resultant.x_component,
                resultant.y_component,
                resultant.symbol,
                resultant.magnitude,
                format_angle_degrees(resultant.angle_degrees, model.angle_convention_property.value) or "-",
            )


def run(
    sim_settings: Optional[RuntimeSettings] = None,
    *,
    snapshot: Optional[str] = None,
    frames: int = 0,
) -> VectorAdditionModel:
    """Run the model without a display and log a summary of every scene."""
    runtime = sim_settings or settings.current_settings()
    logger = _initialise_logger()

    model = VectorAdditionModel()
    if snapshot:
        load_snapshot(model, Path(snapshot))

    delta = 1.0 / runtime.FPS
    for _ in range(max(0, frames)):
        model.step(delta)
    logger.info("Ran %d frames at %d FPS", max(0, frames), runtime.FPS)

    summarise(model)
    return model


__all__ = ["run", "summarise"]
