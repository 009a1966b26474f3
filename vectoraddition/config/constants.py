"""Constant values for the vector addition model."""

from __future__ import annotations

DEFAULT_GRAPH_BOUNDS = (-5, -5, 45, 25)  # min_x, min_y, max_x, max_y in graph units

# Screen layout the graph is anchored to, in view coordinates.
SCREEN_VIEW_SIZE = (1024, 618)
AXES_ARROW_X_EXTENSION = 20
AXES_ARROW_Y_EXTENSION = 15
DEFAULT_BOTTOM_LEFT = (
    AXES_ARROW_X_EXTENSION + 10,
    SCREEN_VIEW_SIZE[1] - AXES_ARROW_Y_EXTENSION - 45,
)
MODEL_TO_VIEW_SCALE = 14.5

# Component arrow geometry, used to space projection-style component vectors.
COMPONENT_HEAD_WIDTH = 12
PROJECTION_AXIS_SPACING = 1.5

ZERO_THRESHOLD = 1e-10

XY_COMPONENT_RANGE = (-10, 10)
MAGNITUDE_RANGE = (0, 10)
SIGNED_ANGLE_RANGE = (-180, 180)
COEFFICIENT_RANGE = (-5, 5)
DEFAULT_COEFFICIENT = 1

FALLBACK_SYMBOL = "v"
SUM_SYMBOL = "s"

DEFAULTS = {
    "VECTOR_DRAG_THRESHOLD": 10,
    "POLAR_SNAP_DISTANCE": 1.0,
    "POLAR_ANGLE_INTERVAL": 5,
    "VECTOR_TAIL_DRAG_MARGIN": 1,
    "AVERAGE_ANIMATION_SPEED": 1600.0,
    "MIN_ANIMATION_TIME": 0.9,
    "VALUE_DECIMAL_PLACES": 1,
    "ANGLE_CONVENTION": "principalAngle",
    "FPS": 60,
}
