"""Parametric orbit of the rainbow star around the tree."""

import math
from dataclasses import dataclass

from xmastree.config import (
    ASPECT_STRETCH,
    HUE_RATE,
    ROTATE_SPEED,
    TREE_BASE_WIDTH,
    TREE_HEIGHT,
    VERTICAL_SPEED,
)
from xmastree.scene.color import Color, hsv_to_rgb
from xmastree.scene.vector import Vector3


@dataclass(frozen=True)
class LightState:
    """Where the star is this tick.

    ``relative`` is tree-local: x across, y rows below the tree top, z toward
    the viewer (negative z is behind the tree).
    """

    relative: Vector3
    screen_x: float
    screen_y: float
    color: Color
    progress: float
    radius: float

    @property
    def occluded(self) -> bool:
        return self.relative.z < 0.0

    @property
    def cell(self):
        # Nearest cell, halves rounding up
        return math.floor(self.screen_x + 0.5), math.floor(self.screen_y + 0.5)


class OrbitController:
    """Spirals the star up and down a cone wrapped around the canopy."""

    MIN_PROGRESS = 0.05
    PROGRESS_SPAN = 0.9

    def __init__(self, tree_height: int = TREE_HEIGHT,
                 base_width: int = TREE_BASE_WIDTH,
                 vertical_speed: float = VERTICAL_SPEED,
                 rotate_speed: float = ROTATE_SPEED,
                 hue_rate: float = HUE_RATE,
                 aspect: float = ASPECT_STRETCH):
        self.tree_height = tree_height
        self.base_width = base_width
        self.vertical_speed = vertical_speed
        self.rotate_speed = rotate_speed
        self.hue_rate = hue_rate
        self.aspect = aspect

    def progress(self, t: float) -> float:
        """Fraction of the way from tree top to base, kept inside [0.05, 0.95]."""
        raw = (math.sin(t * self.vertical_speed) + 1) / 2
        return self.MIN_PROGRESS + raw * self.PROGRESS_SPAN

    def radius(self, t: float) -> float:
        return self._radius_at(self.progress(t))

    def _radius_at(self, progress: float) -> float:
        return 2.0 + progress * (self.base_width // 2 + 2)

    def hue(self, t: float) -> int:
        return int(t * self.hue_rate) % 360

    def step(self, t: float, center_x: int, top_y: int) -> LightState:
        progress = self.progress(t)
        radius = self._radius_at(progress)
        angle = t * self.rotate_speed
        relative = Vector3(
            math.cos(angle) * radius,
            progress * self.tree_height,
            math.sin(angle) * radius,
        )
        return LightState(
            relative=relative,
            screen_x=center_x + relative.x * self.aspect,
            screen_y=top_y + relative.y,
            color=hsv_to_rgb(self.hue(t), 1.0, 1.0),
            progress=progress,
            radius=radius,
        )
