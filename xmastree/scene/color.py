"""Colour helpers shared by the scene layers."""

import colorsys
from typing import Tuple

from xmastree.config import SKY_BASE

Color = Tuple[int, int, int]

SKY_TINT = (40, 50, 80)


def clamp_color(color) -> Color:
    return tuple(max(0, min(255, int(component))) for component in color)


def hsv_to_rgb(hue: float, saturation: float, value: float) -> Color:
    """Convert a hue in degrees (any range, wrapped to [0, 360)) to an RGB tuple."""
    r, g, b = colorsys.hsv_to_rgb((hue % 360.0) / 360.0, saturation, value)
    return clamp_color((round(r * 255), round(g * 255), round(b * 255)))


def sky_tint(brightness: float, base: Color = SKY_BASE) -> Color:
    """Lift the sky base colour toward a lighter blue by ``brightness``."""
    return clamp_color(
        channel + brightness * tint for channel, tint in zip(base, SKY_TINT)
    )
