"""Layered painter that turns the scene state into one terminal frame.

Layers are painted into an in-memory frame in a fixed order (later layers win
on the same cell), then every painted cell is written to the controller and the
frame is presented:

1. sky base above the tree top
2. sky stars and their background glow
3. sky fill for the tree band, wherever the tree and stars leave gaps
4. tree, trunk and presents, lit by the star
5. trail particles
6. the star itself, unless it is behind the tree
"""

import math
from dataclasses import dataclass, replace
from typing import Dict, FrozenSet, Iterable, Optional, Sequence, Tuple

from xmastree.config import (
    FILL_DEPTH,
    LIGHT_RADIUS,
    SKY_BASE,
    SKY_GLOW_DAMPENING,
    SKY_GLOW_RADIUS,
)
from xmastree.core.state import FrameLayout
from xmastree.scene.color import Color, clamp_color, sky_tint
from xmastree.scene.orbit import LightState
from xmastree.scene.particles import Particle
from xmastree.scene.sky import SkyField, SkyLayout
from xmastree.scene.tree import SceneCell, occupied_offsets


@dataclass(frozen=True)
class Cell:
    glyph: str
    fg: Color
    bg: Color
    bold: bool = False


Frame = Dict[Tuple[int, int], Cell]


def illumination_distance(dx: float, dy: float) -> float:
    """Distance with horizontal steps weighted down for tall terminal cells."""
    return math.sqrt((dx * 0.5) ** 2 + dy ** 2)


class Compositor:
    def __init__(self, sky_field: SkyField,
                 sky_base: Color = SKY_BASE,
                 light_radius: float = LIGHT_RADIUS,
                 glow_radius: int = SKY_GLOW_RADIUS,
                 glow_dampening: float = SKY_GLOW_DAMPENING,
                 fill_depth: int = FILL_DEPTH,
                 trail_glyph: str = '.',
                 light_glyph: str = '★'):
        self.sky_field = sky_field
        self.sky_base = sky_base
        self.light_radius = light_radius
        self.glow_radius = glow_radius
        self.glow_dampening = glow_dampening
        self.fill_depth = fill_depth
        self.trail_glyph = trail_glyph
        self.light_glyph = light_glyph
        self._scene_footprint: Optional[FrozenSet[Tuple[int, int]]] = None
        self._footprint_source: Optional[Sequence[SceneCell]] = None

    def render_frame(self, controller, layout: FrameLayout, scene: Sequence[SceneCell],
                     sky: Optional[SkyLayout], light: LightState,
                     particles: Iterable[Particle], t: float) -> Frame:
        frame = self.compose(layout, scene, sky, light, particles, t)
        for (x, y), cell in frame.items():
            controller.set_cell(x, y, cell.glyph, cell.fg, cell.bg, cell.bold)
        controller.show()
        return frame

    def compose(self, layout: FrameLayout, scene: Sequence[SceneCell],
                sky: Optional[SkyLayout], light: LightState,
                particles: Iterable[Particle], t: float) -> Frame:
        frame: Frame = {}
        self._paint_sky_base(frame, layout)
        if sky is not None:
            self._paint_sky_stars(frame, layout, sky, t)
        self._paint_fill(frame, layout, scene, sky)
        self._paint_scene(frame, layout, scene, light)
        self._paint_particles(frame, layout, particles)
        self._paint_light(frame, layout, light)
        return frame

    def is_lit(self, cell: SceneCell, x: int, y: int, light: LightState) -> bool:
        if not cell.illuminable:
            return False
        distance = illumination_distance(x - light.screen_x, y - light.screen_y)
        return distance < self.light_radius

    def _put(self, frame: Frame, layout: FrameLayout, x: int, y: int, cell: Cell):
        if layout.in_bounds(x, y):
            frame[(x, y)] = cell

    def _paint_sky_base(self, frame: Frame, layout: FrameLayout):
        blank = Cell(' ', self.sky_base, self.sky_base)
        for y in range(max(0, layout.top_y)):
            for x in range(layout.width):
                self._put(frame, layout, x, y, blank)

    def _paint_sky_stars(self, frame: Frame, layout: FrameLayout, sky: SkyLayout, t: float):
        radius = self.glow_radius
        for star in sky.stars:
            brightness = self.sky_field.brightness(star, t)
            level = 200 + int(brightness * 55)
            self._put(frame, layout, star.x, star.y,
                      Cell('.', clamp_color((level, level, level)), self.sky_base))

            if radius <= 0:
                continue
            for dy in range(-radius, radius + 1):
                for dx in range(-radius, radius + 1):
                    x = star.x + dx
                    y = star.y + dy
                    if not (0 <= x < layout.width and 0 <= y < layout.top_y):
                        continue
                    distance = math.sqrt(dx * dx + dy * dy)
                    if distance > radius:
                        continue
                    glow = (1.0 - distance / radius) * brightness * self.glow_dampening
                    background = sky_tint(glow, self.sky_base)
                    existing = frame.get((x, y))
                    if existing is None:
                        frame[(x, y)] = Cell(' ', self.sky_base, background)
                    else:
                        # Overlapping glows only ever brighten
                        lifted = tuple(max(a, b) for a, b in zip(existing.bg, background))
                        frame[(x, y)] = replace(existing, bg=lifted)

    def _paint_fill(self, frame: Frame, layout: FrameLayout,
                    scene: Sequence[SceneCell], sky: Optional[SkyLayout]):
        footprint = self._footprint_for(scene)
        sky_cells = sky.occupied if sky is not None else frozenset()
        blank = Cell(' ', self.sky_base, self.sky_base)
        bottom = min(layout.base_y + self.fill_depth, layout.height - 1)
        for y in range(max(0, layout.top_y), bottom + 1):
            for x in range(layout.width):
                if (x - layout.center_x, y - layout.base_y) in footprint:
                    continue
                if (x, y) in sky_cells:
                    continue
                frame[(x, y)] = blank

    def _footprint_for(self, scene: Sequence[SceneCell]) -> FrozenSet[Tuple[int, int]]:
        # The scene never changes, so its footprint is computed once
        if self._footprint_source is not scene:
            self._scene_footprint = occupied_offsets(scene)
            self._footprint_source = scene
        return self._scene_footprint

    def _paint_scene(self, frame: Frame, layout: FrameLayout,
                     scene: Sequence[SceneCell], light: LightState):
        for cell in scene:
            x = layout.center_x + cell.offset_x
            y = layout.base_y + cell.offset_y
            if not layout.in_bounds(x, y):
                continue
            color = cell.lit_color if self.is_lit(cell, x, y, light) else cell.base_color
            frame[(x, y)] = Cell(cell.glyph, color, self.sky_base)

    def _paint_particles(self, frame: Frame, layout: FrameLayout, particles: Iterable[Particle]):
        for particle in particles:
            px, py = particle.pos.x, particle.pos.y
            if 0 <= px < layout.width and 0 <= py < layout.height:
                frame[(int(px), int(py))] = Cell(self.trail_glyph, particle.color, self.sky_base)

    def _paint_light(self, frame: Frame, layout: FrameLayout, light: LightState):
        if light.occluded:
            return
        x, y = light.cell
        self._put(frame, layout, x, y, Cell(self.light_glyph, light.color, self.sky_base, bold=True))
