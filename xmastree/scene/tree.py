"""Static tree geometry: canopy, ornaments, trunk and presents."""

import random
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Tuple

from xmastree.config import TREE_BASE_WIDTH, TREE_HEIGHT
from xmastree.scene.color import Color


class CellKind(Enum):
    NEEDLE = "needle"
    TRUNK = "trunk"
    ORNAMENT = "ornament"
    GIFT = "gift"


# Only these kinds pick up the orbiting star's light
ILLUMINATED_KINDS = frozenset({CellKind.NEEDLE, CellKind.TRUNK})


@dataclass(frozen=True)
class SceneCell:
    """One glyph of the tree, positioned relative to the base-centre anchor.

    ``offset_y`` is negative above the base row.
    """

    kind: CellKind
    glyph: str
    base_color: Color
    lit_color: Color
    offset_x: int
    offset_y: int

    @property
    def illuminable(self) -> bool:
        return self.kind in ILLUMINATED_KINDS


class SceneBuilder:
    """Generates the decorated tree once; decoration is drawn from ``rng``."""

    NEEDLE_COLOR: Color = (0, 128, 0)
    NEEDLE_LIT_COLOR: Color = (100, 255, 100)
    TRUNK_COLOR: Color = (101, 67, 33)
    TRUNK_LIT_COLOR: Color = (200, 150, 50)
    BULB_COLOR: Color = (255, 215, 0)

    ORNAMENT_GLYPHS: Tuple[str, ...] = ('o', '@', 'O', '8', '&', '$')
    ORNAMENT_COLORS: Tuple[Color, ...] = (
        (255, 0, 0),
        (255, 255, 0),
        (255, 105, 180),
        (0, 255, 255),
    )

    ORNAMENT_CHANCE = 0.10
    BULB_CHANCE = 0.03

    TRUNK_HEIGHT = 4
    TRUNK_WIDTH = 5

    GIFT_SPECS: Tuple[dict, ...] = (
        {'offset': -8, 'width': 3, 'height': 2, 'color': (255, 0, 0)},
        {'offset': 6, 'width': 4, 'height': 2, 'color': (0, 0, 255)},
    )

    def __init__(self, rng: Optional[random.Random] = None,
                 height: int = TREE_HEIGHT, base_width: int = TREE_BASE_WIDTH):
        self.random = rng or random.Random()
        self.height = height
        self.base_width = base_width

    def build(self) -> Tuple[SceneCell, ...]:
        cells: List[SceneCell] = []
        cells.extend(self._build_canopy())
        cells.extend(self._build_trunk())
        cells.extend(self._build_gifts())
        return tuple(cells)

    def row_half_width(self, row: int) -> int:
        return max(1, int(row / self.height * self.base_width))

    def _build_canopy(self) -> Iterable[SceneCell]:
        for row in range(self.height):
            offset_y = -(self.height - row)
            half_width = self.row_half_width(row)
            for offset_x in range(-half_width, half_width + 1):
                yield self._canopy_cell(offset_x, offset_y, half_width)

    def _canopy_cell(self, offset_x: int, offset_y: int, half_width: int) -> SceneCell:
        if self.random.random() < self.ORNAMENT_CHANCE:
            color = self.random.choice(self.ORNAMENT_COLORS)
            return SceneCell(CellKind.ORNAMENT, self.random.choice(self.ORNAMENT_GLYPHS),
                             color, color, offset_x, offset_y)

        if self.random.random() < self.BULB_CHANCE:
            return SceneCell(CellKind.ORNAMENT, '•', self.BULB_COLOR, self.BULB_COLOR,
                             offset_x, offset_y)

        glyph = '*'
        if offset_x == -half_width:
            glyph = '/'
        elif offset_x == half_width:
            glyph = '\\'
        return SceneCell(CellKind.NEEDLE, glyph, self.NEEDLE_COLOR, self.NEEDLE_LIT_COLOR,
                         offset_x, offset_y)

    def _build_trunk(self) -> Iterable[SceneCell]:
        half = self.TRUNK_WIDTH // 2
        for offset_y in range(self.TRUNK_HEIGHT):
            for offset_x in range(-half, half + 1):
                yield SceneCell(CellKind.TRUNK, '#', self.TRUNK_COLOR, self.TRUNK_LIT_COLOR,
                                offset_x, offset_y)

    def _build_gifts(self) -> Iterable[SceneCell]:
        for spec in self.GIFT_SPECS:
            width = spec['width']
            height = spec['height']
            for dy in range(height):
                for dx in range(width):
                    glyph = 'H'
                    if dy == height // 2:
                        glyph = '-'
                    if dx == width // 2:
                        glyph = '|'
                    # Presents sit on the trunk's bottom row
                    yield SceneCell(CellKind.GIFT, glyph, spec['color'], spec['color'],
                                    spec['offset'] + dx, self.TRUNK_HEIGHT - dy - 1)


def occupied_offsets(cells: Iterable[SceneCell]) -> FrozenSet[Tuple[int, int]]:
    """Anchor-relative footprint of a scene, used by the compositor's fill pass."""
    return frozenset((cell.offset_x, cell.offset_y) for cell in cells)
