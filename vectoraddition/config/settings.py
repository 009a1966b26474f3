"""Runtime configuration for the vector addition model."""

from __future__ import annotations

import argparse
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Sequence

import yaml

from .constants import DEFAULTS

_PATH_FIELDS = {"LOG_DIRECTORY"}
_STRING_FIELDS = {"DEBUG_LOG_FILE", "DEBUG_LOG_LEVEL", "ANGLE_CONVENTION"}
_FLOAT_FIELDS = {
    "POLAR_SNAP_DISTANCE",
    "AVERAGE_ANIMATION_SPEED",
    "MIN_ANIMATION_TIME",
}

VECTOR_DRAG_THRESHOLD = int(os.getenv("VECTORADDITION_VECTOR_DRAG_THRESHOLD", str(DEFAULTS["VECTOR_DRAG_THRESHOLD"])))
POLAR_SNAP_DISTANCE = float(os.getenv("VECTORADDITION_POLAR_SNAP_DISTANCE", str(DEFAULTS["POLAR_SNAP_DISTANCE"])))
POLAR_ANGLE_INTERVAL = int(os.getenv("VECTORADDITION_POLAR_ANGLE_INTERVAL", str(DEFAULTS["POLAR_ANGLE_INTERVAL"])))
VECTOR_TAIL_DRAG_MARGIN = int(DEFAULTS["VECTOR_TAIL_DRAG_MARGIN"])
AVERAGE_ANIMATION_SPEED = float(DEFAULTS["AVERAGE_ANIMATION_SPEED"])
MIN_ANIMATION_TIME = float(DEFAULTS["MIN_ANIMATION_TIME"])
VALUE_DECIMAL_PLACES = int(DEFAULTS["VALUE_DECIMAL_PLACES"])
ANGLE_CONVENTION = str(DEFAULTS["ANGLE_CONVENTION"])
FPS = int(DEFAULTS["FPS"])

CONFIG_ENV_VAR = "VECTORADDITION_CONFIG_FILE"
DEFAULT_CONFIG_FILE = Path("configs/default.yaml")
LOG_DIRECTORY = Path(os.getenv("VECTORADDITION_LOG_DIR", "logs"))
DEBUG_LOG_FILE = os.getenv("VECTORADDITION_DEBUG_LOG", "vectoraddition_debug.log")
DEBUG_LOG_LEVEL = os.getenv("VECTORADDITION_DEBUG_LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class RuntimeSettings:
    VECTOR_DRAG_THRESHOLD: int = VECTOR_DRAG_THRESHOLD
    POLAR_SNAP_DISTANCE: float = POLAR_SNAP_DISTANCE
    POLAR_ANGLE_INTERVAL: int = POLAR_ANGLE_INTERVAL
    VECTOR_TAIL_DRAG_MARGIN: int = VECTOR_TAIL_DRAG_MARGIN
    AVERAGE_ANIMATION_SPEED: float = AVERAGE_ANIMATION_SPEED
    MIN_ANIMATION_TIME: float = MIN_ANIMATION_TIME
    VALUE_DECIMAL_PLACES: int = VALUE_DECIMAL_PLACES
    ANGLE_CONVENTION: str = ANGLE_CONVENTION
    FPS: int = FPS
    LOG_DIRECTORY: Path = LOG_DIRECTORY
    DEBUG_LOG_FILE: str = DEBUG_LOG_FILE
    DEBUG_LOG_LEVEL: str = DEBUG_LOG_LEVEL

    def with_updates(self, overrides: Dict[str, Any]) -> "RuntimeSettings":
        merged = asdict(self)
        merged.update(overrides)
        _validate_settings_dict(merged)
        return RuntimeSettings(**merged)


_ACTIVE_SETTINGS = RuntimeSettings()
_ENV_VARS: Dict[str, str] = {
    "VECTOR_DRAG_THRESHOLD": "VECTORADDITION_VECTOR_DRAG_THRESHOLD",
    "POLAR_SNAP_DISTANCE": "VECTORADDITION_POLAR_SNAP_DISTANCE",
    "POLAR_ANGLE_INTERVAL": "VECTORADDITION_POLAR_ANGLE_INTERVAL",
    "VECTOR_TAIL_DRAG_MARGIN": "VECTORADDITION_VECTOR_TAIL_DRAG_MARGIN",
    "AVERAGE_ANIMATION_SPEED": "VECTORADDITION_AVERAGE_ANIMATION_SPEED",
    "MIN_ANIMATION_TIME": "VECTORADDITION_MIN_ANIMATION_TIME",
    "VALUE_DECIMAL_PLACES": "VECTORADDITION_VALUE_DECIMAL_PLACES",
    "ANGLE_CONVENTION": "VECTORADDITION_ANGLE_CONVENTION",
    "FPS": "VECTORADDITION_FPS",
}


def _coerce(value: str, field: str) -> Any:
    if field in _PATH_FIELDS:
        return Path(value)
    if field in _STRING_FIELDS:
        return value
    if field in _FLOAT_FIELDS:
        return float(value)
    return int(value)


def _collect_env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for field, env_name in _ENV_VARS.items():
        raw = env.get(env_name)
        if raw is not None:
            overrides[field] = _coerce(raw, field)
    return overrides


def _normalize_numeric(value: Any, caster: type[float | int]) -> float | int:
    if isinstance(value, bool):
        raise ValueError("Invalid numeric value in config")
    if isinstance(value, (int, float)):
        return caster(value)
    if isinstance(value, str):
        return caster(float(value) if caster is float else int(float(value)))
    raise ValueError("Invalid numeric value in config")


def _normalize_config_value(field: str, value: Any) -> Any:
    if field in _PATH_FIELDS:
        if isinstance(value, Path):
            return value
        if isinstance(value, str):
            return Path(value)
        raise ValueError(f"Field {field} must be a path or string")
    if field in _STRING_FIELDS:
        if isinstance(value, str):
            return value
        raise ValueError(f"Field {field} must be a string")
    if field in _FLOAT_FIELDS:
        return float(_normalize_numeric(value, float))
    return int(_normalize_numeric(value, int))


_NUMERIC_BOUNDS: Dict[str, tuple[float, float]] = {
    "VECTOR_DRAG_THRESHOLD": (1, 100),
    "POLAR_SNAP_DISTANCE": (0.0, 10.0),
    "POLAR_ANGLE_INTERVAL": (1, 90),
    "VECTOR_TAIL_DRAG_MARGIN": (0, 10),
    "AVERAGE_ANIMATION_SPEED": (1.0, 100000.0),
    "MIN_ANIMATION_TIME": (0.01, 10.0),
    "VALUE_DECIMAL_PLACES": (0, 6),
    "FPS": (1, 360),
}

_CHOICE_FIELDS: Dict[str, set[str]] = {
    "DEBUG_LOG_LEVEL": {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"},
}

_ANGLE_CONVENTIONS = {"principalAngle", "fullRotation"}


def _validate_settings_dict(values: Dict[str, Any]) -> None:
    for field, (lower, upper) in _NUMERIC_BOUNDS.items():
        current = values.get(field)
        if current is None:
            continue
        if not (lower <= current <= upper):
            raise ValueError(f"{field} must be between {lower} and {upper}, got {current}")
    for field, choices in _CHOICE_FIELDS.items():
        current = values.get(field)
        if current is None:
            continue
        if isinstance(current, str) and current.upper() in choices:
            values[field] = current.upper()
            continue
        raise ValueError(f"{field} must be one of {sorted(choices)} (got {current})")
    convention = values.get("ANGLE_CONVENTION")
    if convention is not None and convention not in _ANGLE_CONVENTIONS:
        raise ValueError(f"ANGLE_CONVENTION must be one of {sorted(_ANGLE_CONVENTIONS)} (got {convention})")
    _validate_relationships(values)


def _validate_relationships(values: Mapping[str, Any]) -> None:
    interval = values.get("POLAR_ANGLE_INTERVAL")
    if interval and 360 % interval != 0:
        raise ValueError("POLAR_ANGLE_INTERVAL must divide 360 evenly")


def _load_config_overrides(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as error:
            raise ValueError(f"Invalid YAML in config file {path}") from error
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must define a mapping")
    valid_fields = set(RuntimeSettings.__dataclass_fields__.keys())
    overrides: Dict[str, Any] = {}
    for raw_key, value in data.items():
        key = str(raw_key).upper()
        if key not in valid_fields:
            raise ValueError(f"Unknown config field: {raw_key}")
        overrides[key] = _normalize_config_value(key, value)
    return overrides


def _resolve_config_path(cli_value: str | None, env: Mapping[str, str]) -> Path | None:
    candidate_strings = [cli_value, env.get(CONFIG_ENV_VAR)]
    for candidate in candidate_strings:
        if not candidate:
            continue
        path = Path(candidate).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path
    if DEFAULT_CONFIG_FILE.exists():
        return DEFAULT_CONFIG_FILE
    return None


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the vector addition model with runtime overrides")
    parser.add_argument("--config", type=str, help="Path to a YAML config file with runtime settings")
    parser.add_argument("--vector-drag-threshold", type=int, help="Drag distance past the graph that removes a vector")
    parser.add_argument("--polar-snap-distance", type=float, help="Distance at which polar vectors snap to each other")
    parser.add_argument("--polar-angle-interval", type=int, help="Angle interval (degrees) for polar tip snapping")
    parser.add_argument("--vector-tail-drag-margin", type=int, help="Margin between the tail and the graph edge")
    parser.add_argument("--average-animation-speed", type=float, help="Return-to-toolbox speed in view units/s")
    parser.add_argument("--min-animation-time", type=float, help="Minimum return-to-toolbox duration in seconds")
    parser.add_argument("--value-decimal-places", type=int, help="Decimal places shown in vector labels")
    parser.add_argument("--angle-convention", type=str, help="principalAngle or fullRotation")
    parser.add_argument("--fps", type=int, help="Ticker frames per second")
    parser.add_argument("--snapshot", type=str, help="JSON snapshot to restore before running")
    parser.add_argument("--frames", type=int, default=0, help="Number of ticker frames to run")
    return parser


def load_runtime_settings(args: Sequence[str] | None = None, env: Mapping[str, str] | None = None) -> RuntimeSettings:
    env_mapping = os.environ if env is None else env
    parser = build_arg_parser()
    parsed = parser.parse_args(args=args)
    overrides: Dict[str, Any] = {}
    config_path = _resolve_config_path(parsed.config, env_mapping)
    if config_path is not None:
        overrides.update(_load_config_overrides(config_path))
    overrides.update(_collect_env_overrides(env_mapping))
    cli_mapping = {
        "VECTOR_DRAG_THRESHOLD": parsed.vector_drag_threshold,
        "POLAR_SNAP_DISTANCE": parsed.polar_snap_distance,
        "POLAR_ANGLE_INTERVAL": parsed.polar_angle_interval,
        "VECTOR_TAIL_DRAG_MARGIN": parsed.vector_tail_drag_margin,
        "AVERAGE_ANIMATION_SPEED": parsed.average_animation_speed,
        "MIN_ANIMATION_TIME": parsed.min_animation_time,
        "VALUE_DECIMAL_PLACES": parsed.value_decimal_places,
        "ANGLE_CONVENTION": parsed.angle_convention,
        "FPS": parsed.fps,
    }
    overrides.update({k: v for k, v in cli_mapping.items() if v is not None})
    return _ACTIVE_SETTINGS.with_updates(overrides)


def apply_runtime_settings(new_settings: RuntimeSettings) -> RuntimeSettings:
    global _ACTIVE_SETTINGS
    global VECTOR_DRAG_THRESHOLD, POLAR_SNAP_DISTANCE, POLAR_ANGLE_INTERVAL, VECTOR_TAIL_DRAG_MARGIN
    global AVERAGE_ANIMATION_SPEED, MIN_ANIMATION_TIME, VALUE_DECIMAL_PLACES, ANGLE_CONVENTION, FPS
    global LOG_DIRECTORY, DEBUG_LOG_FILE, DEBUG_LOG_LEVEL

    _ACTIVE_SETTINGS = new_settings
    VECTOR_DRAG_THRESHOLD = new_settings.VECTOR_DRAG_THRESHOLD
    POLAR_SNAP_DISTANCE = new_settings.POLAR_SNAP_DISTANCE
    POLAR_ANGLE_INTERVAL = new_settings.POLAR_ANGLE_INTERVAL
    VECTOR_TAIL_DRAG_MARGIN = new_settings.VECTOR_TAIL_DRAG_MARGIN
    AVERAGE_ANIMATION_SPEED = new_settings.AVERAGE_ANIMATION_SPEED
    MIN_ANIMATION_TIME = new_settings.MIN_ANIMATION_TIME
    VALUE_DECIMAL_PLACES = new_settings.VALUE_DECIMAL_PLACES
    ANGLE_CONVENTION = new_settings.ANGLE_CONVENTION
    FPS = new_settings.FPS
    LOG_DIRECTORY = new_settings.LOG_DIRECTORY
    DEBUG_LOG_FILE = new_settings.DEBUG_LOG_FILE
    DEBUG_LOG_LEVEL = new_settings.DEBUG_LOG_LEVEL
    return _ACTIVE_SETTINGS


def current_settings() -> RuntimeSettings:
    return _ACTIVE_SETTINGS
