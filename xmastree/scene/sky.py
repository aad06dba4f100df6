"""Sparse twinkling star field above the tree."""

import math
import random
from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from xmastree.config import (
    SKY_GLOW_RADIUS,
    SKY_STAR_COUNT,
    SKY_TWINKLE_SPEED,
    TREE_TOP_MARGIN,
)


@dataclass(frozen=True)
class SkyStar:
    x: int
    y: int
    phase: float
    speed: float


@dataclass(frozen=True)
class SkyLayout:
    """Star positions plus their glow footprint for one ``(width, top_y)`` key."""

    key: Tuple[int, int]
    stars: Tuple[SkyStar, ...]
    occupied: FrozenSet[Tuple[int, int]]


class SkyField:
    """Places background stars and computes their twinkle.

    A layout is only regenerated when the terminal width or the tree-top row
    changes, so stars hold still between frames at a constant size.
    """

    SPEED_RANGE = (0.8, 1.6)

    def __init__(self, rng: Optional[random.Random] = None,
                 count: int = SKY_STAR_COUNT,
                 top_margin: int = TREE_TOP_MARGIN,
                 glow_radius: int = SKY_GLOW_RADIUS,
                 twinkle_speed: float = SKY_TWINKLE_SPEED):
        self.random = rng or random.Random()
        self.count = count
        self.top_margin = top_margin
        self.glow_radius = glow_radius
        self.twinkle_speed = twinkle_speed
        self.regenerations = 0

    def ensure(self, layout: Optional[SkyLayout], width: int, top_y: int) -> SkyLayout:
        if layout is not None and layout.key == (width, top_y):
            return layout
        return self.regenerate(width, top_y)

    def regenerate(self, width: int, top_y: int) -> SkyLayout:
        self.regenerations += 1
        key = (width, top_y)
        if top_y <= self.top_margin or width <= 0:
            return SkyLayout(key, tuple(), frozenset())

        band = max(1, top_y - self.top_margin)
        low, high = self.SPEED_RANGE
        stars = tuple(
            SkyStar(
                x=self.random.randrange(width),
                y=self.top_margin + self.random.randrange(band),
                phase=self.random.random() * math.tau,
                speed=low + self.random.random() * (high - low),
            )
            for _ in range(self.count)
        )
        return SkyLayout(key, stars, self._footprint(stars, width, top_y))

    def _footprint(self, stars, width: int, top_y: int) -> FrozenSet[Tuple[int, int]]:
        cells = set()
        radius = self.glow_radius
        for star in stars:
            for dy in range(-radius, radius + 1):
                for dx in range(-radius, radius + 1):
                    x = star.x + dx
                    y = star.y + dy
                    if 0 <= x < width and 0 <= y < top_y:
                        cells.add((x, y))
        return frozenset(cells)

    def brightness(self, star: SkyStar, t: float) -> float:
        """Twinkle level in [0.4, 1.0] at clock ``t``."""
        phase = star.phase + t * star.speed * self.twinkle_speed
        return 0.4 + 0.6 * (0.5 * (1 + math.sin(phase)))
