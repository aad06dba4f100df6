"""Per-frame layout and the simulation state carried between ticks."""

from dataclasses import dataclass
from typing import Optional, Tuple

from xmastree.config import BASE_BOTTOM_MARGIN, TREE_HEIGHT
from xmastree.scene.particles import Particle
from xmastree.scene.sky import SkyLayout


@dataclass(frozen=True)
class FrameLayout:
    """Screen anchors for the tree at a given terminal size."""

    width: int
    height: int
    center_x: int
    base_y: int
    top_y: int

    @classmethod
    def from_size(cls, width: int, height: int,
                  tree_height: int = TREE_HEIGHT) -> "FrameLayout":
        base_y = height - BASE_BOTTOM_MARGIN
        return cls(
            width=width,
            height=height,
            center_x=width // 2,
            base_y=base_y,
            top_y=base_y - tree_height,
        )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height


@dataclass(frozen=True)
class SimulationState:
    """Everything that survives from one tick to the next.

    Owned by the render loop; each tick produces a new instance.
    """

    t: float = 0.0
    particles: Tuple[Particle, ...] = tuple()
    sky: Optional[SkyLayout] = None
    frame_count: int = 0
