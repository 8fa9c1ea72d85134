"""Heat-map cells whose shade follows an intensity value."""

from __future__ import annotations

import colorsys

__all__ = ["YELLOW", "BLUE", "darker", "lighter", "heat_color", "HeatCell"]

RGB = tuple[int, int, int]

YELLOW: RGB = (255, 255, 0)
BLUE: RGB = (0, 0, 255)

_MAX_VALUE = 200


def _from_hsv(h: float, s: float, v: float) -> RGB:
    r, g, b = colorsys.hsv_to_rgb(h, s, v)
    return round(r * 255), round(g * 255), round(b * 255)


def _to_hsv(color: RGB) -> tuple[float, float, float]:
    r, g, b = color
    return colorsys.rgb_to_hsv(r / 255, g / 255, b / 255)


def lighter(color: RGB, factor: float) -> RGB:
    """Brighten ``color`` by ``factor`` percent (150 is 50 % brighter).

    A factor below 100 darkens instead; a factor of zero or less leaves
    the colour as it is. Once the value saturates, the excess is taken
    out of the saturation.
    """
    factor = int(factor)
    if factor <= 0:
        return color
    if factor < 100:
        return darker(color, 10000 // factor)
    h, s, v = _to_hsv(color)
    v = factor * v / 100
    if v > 1.0:
        s = max(0.0, s - (v - 1.0))
        v = 1.0
    return _from_hsv(h, s, v)


def darker(color: RGB, factor: float) -> RGB:
    """Darken ``color`` by ``factor`` percent (200 halves its value).

    A factor below 100 brightens instead; a factor of zero or less leaves
    the colour as it is.
    """
    factor = int(factor)
    if factor <= 0:
        return color
    if factor < 100:
        return lighter(color, 10000 // factor)
    h, s, v = _to_hsv(color)
    return _from_hsv(h, s, v * 100 / factor)


def heat_color(intensity: float) -> RGB:
    """Shade for an intensity: yellow above zero, blue at zero or below.

    The magnitude is clamped to 200; above 100 the base colour is
    darkened, otherwise it is lightened.
    """
    if intensity <= 0:
        base = BLUE
        value = _MAX_VALUE if intensity < -_MAX_VALUE else -intensity
    else:
        base = YELLOW
        value = _MAX_VALUE if intensity >= _MAX_VALUE else intensity
    if value > 100:
        return darker(base, value)
    return lighter(base, 200 - value)


class HeatCell:
    """A square heat-map cell centred on ``(x, y)``."""

    def __init__(self, x: float, y: float, intensity: float, width: float, radius: float) -> None:
        self.x = x
        self.y = y
        self.intensity = intensity
        self.width = width
        self.radius = radius
        self.rect = (x - radius, y - radius, 2 * radius, 2 * radius)
        self.color = heat_color(intensity)

    def update_color(self, intensity: float, paint: bool) -> RGB:
        """Shade for ``intensity``; applied to the cell only when ``paint`` is true."""
        color = heat_color(intensity)
        if paint:
            self.color = color
        return color

    def __repr__(self) -> str:
        return f"HeatCell(x={self.x}, y={self.y}, color={self.color})"