"""Field geometry for robots and the ball as drawn on the scene."""

from __future__ import annotations

import math
from typing import NamedTuple, Optional

__all__ = [
    "ROBOT_RADIUS",
    "SUBTEND_ANGLE",
    "transform_from_scene",
    "bounding_square",
    "robot_outline",
    "Robot",
    "Ball",
]

ROBOT_RADIUS = 10
SUBTEND_ANGLE = 30.0

_FIELD_HALF_LENGTH = 4.5
_FIELD_HALF_WIDTH = 3.0
_SCENE_UNITS_PER_METRE = 100

Rect = tuple[float, float, float, float]
Coord = tuple[float, float]


class _Outline(NamedTuple):
    rect: Rect
    start_angle: float
    sweep_angle: float
    chord: tuple[Coord, Coord]


def transform_from_scene(x: float, y: float) -> Coord:
    """Scene coordinates (top-left origin, centimetres) to field metres (centre origin)."""
    return (
        x / _SCENE_UNITS_PER_METRE - _FIELD_HALF_LENGTH,
        y / _SCENE_UNITS_PER_METRE - _FIELD_HALF_WIDTH,
    )


def bounding_square(cx: float, cy: float, half_side: float) -> Rect:
    """Square ``(x, y, width, height)`` around a centre; ``half_side`` is truncated to an integer."""
    half = int(half_side)
    return (cx - half, cy - half, 2 * half, 2 * half)


def robot_outline(radius: float = ROBOT_RADIUS, subtend_angle: float = SUBTEND_ANGLE) -> _Outline:
    """Outline of a robot body: a circular arc with a flat front chord.

    The arc starts at ``subtend_angle`` degrees and sweeps
    ``360 - 2 * subtend_angle`` degrees; the chord closes the front.
    """
    rect = (-radius, -radius, 2 * radius, 2 * radius)
    a = math.radians(subtend_angle)
    cx = radius * math.cos(a)
    sy = radius * math.sin(a)
    return _Outline(rect, subtend_angle, 360 - 2 * subtend_angle, ((cx, sy), (cx, -sy)))


class Robot:
    """A robot of either team, with its pose in scene coordinates."""

    def __init__(self, x: float, y: float, orientation: float, robot_id: int, is_blue: bool) -> None:
        self.id = robot_id
        self.is_blue = is_blue
        self.outline = robot_outline()
        self.x = x
        self.y = y
        self.orientation = orientation

    @property
    def color(self) -> str:
        return "blue" if self.is_blue else "yellow"

    @property
    def rotation(self) -> float:
        """Orientation in degrees."""
        return math.degrees(self.orientation)

    @property
    def field_position(self) -> Coord:
        """Position in field metres."""
        return transform_from_scene(self.x, self.y)

    def update_position(self, x: float, y: float, orientation: float) -> None:
        """Move the robot to ``(x, y)`` facing ``orientation`` radians."""
        self.x = x
        self.y = y
        self.orientation = orientation

    def __repr__(self) -> str:
        return f"Robot(id={self.id}, {self.color}, x={self.x}, y={self.y})"


class Ball:
    """The ball; without a position it has not been placed on the scene."""

    color = "black"

    def __init__(self, x: Optional[float] = None, y: Optional[float] = None, radius: float = 5) -> None:
        self.radius = radius
        self.x = x
        self.y = y
        self.rect: Optional[Rect] = None
        if x is not None and y is not None:
            self.rect = (x - radius, y - radius, 2 * radius, 2 * radius)

    @property
    def placed(self) -> bool:
        return self.rect is not None

    def update_position(self, x: float, y: float) -> None:
        """Move the ball; raises ValueError if it was never placed."""
        if not self.placed:
            raise ValueError("ball not added to scene!")
        self.x = x
        self.y = y
        self.rect = bounding_square(x, y, self.radius)

    def __repr__(self) -> str:
        return f"Ball(x={self.x}, y={self.y}, radius={self.radius})"