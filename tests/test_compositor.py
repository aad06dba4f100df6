import random

import pytest

from xmastree.config import SKY_BASE
from xmastree.core.state import FrameLayout
from xmastree.drivers.memory_controller import MemoryController
from xmastree.scene.compositor import Compositor, illumination_distance
from xmastree.scene.particles import Particle
from xmastree.scene.sky import SkyField
from xmastree.scene.tree import CellKind, SceneBuilder, SceneCell
from xmastree.scene.vector import Vector3

from conftest import make_light

GREEN = (0, 128, 0)
LIT_GREEN = (100, 255, 100)
GOLD = (255, 215, 0)

APEX = SceneCell(CellKind.NEEDLE, '*', GREEN, LIT_GREEN, 0, -22)
APEX_ORNAMENT = SceneCell(CellKind.ORNAMENT, 'o', GOLD, GOLD, 0, -22)


@pytest.fixture
def sky_field():
    return SkyField(random.Random(21))


@pytest.fixture
def compositor(sky_field):
    return Compositor(sky_field)


@pytest.fixture
def layout():
    return FrameLayout.from_size(120, 40)


def trail(x, y, color=(0, 0, 255)):
    return Particle(pos=Vector3(x, y, 0.0), velocity=Vector3(), life=1.0, color=color)


def test_layout_for_120_by_40(layout):
    assert (layout.center_x, layout.base_y, layout.top_y) == (60, 36, 14)


def test_apex_lands_on_tree_top(compositor, layout):
    far_light = make_light(0.0, 39.0)
    frame = compositor.compose(layout, (APEX,), None, far_light, (), 0.0)
    cell = frame[(60, 14)]
    assert cell.glyph == '*'
    assert cell.fg == GREEN
    assert cell.bg == SKY_BASE


def test_illumination_distance_weights_horizontal_steps():
    assert illumination_distance(8.0, 0.0) == pytest.approx(4.0)
    assert illumination_distance(0.0, 3.0) == pytest.approx(3.0)
    assert illumination_distance(6.0, 4.0) == pytest.approx(5.0)


def test_needle_exactly_at_radius_stays_unlit(compositor, layout):
    light = make_light(60.0, 22.0)
    frame = compositor.compose(layout, (APEX,), None, light, (), 0.0)
    assert frame[(60, 14)].fg == GREEN


def test_needle_just_inside_radius_is_lit(compositor, layout):
    light = make_light(60.0, 21.999)
    frame = compositor.compose(layout, (APEX,), None, light, (), 0.0)
    assert frame[(60, 14)].fg == LIT_GREEN


def test_ornaments_ignore_the_light(compositor, layout):
    light = make_light(60.0, 15.0)
    frame = compositor.compose(layout, (APEX_ORNAMENT,), None, light, (), 0.0)
    assert frame[(60, 14)].fg == GOLD


def test_light_behind_tree_is_not_drawn(compositor, layout):
    hidden = make_light(60.0, 20.0, z=-0.001)
    frame = compositor.compose(layout, (), None, hidden, (), 0.0)
    assert frame[(60, 20)].glyph == ' '


def test_light_on_the_front_plane_is_drawn(compositor, layout):
    visible = make_light(60.0, 20.0, z=0.0, color=(0, 255, 0))
    frame = compositor.compose(layout, (), None, visible, (), 0.0)
    cell = frame[(60, 20)]
    assert cell.glyph == '★'
    assert cell.fg == (0, 255, 0)
    assert cell.bg == SKY_BASE
    assert cell.bold


def test_light_uses_rounded_position(compositor, layout):
    frame = compositor.compose(layout, (), None, make_light(59.6, 20.4), (), 0.0)
    assert frame[(60, 20)].glyph == '★'


def test_hidden_light_still_illuminates(compositor, layout):
    hidden = make_light(60.0, 15.0, z=-3.0)
    frame = compositor.compose(layout, (APEX,), None, hidden, (), 0.0)
    assert frame[(60, 14)].fg == LIT_GREEN


def test_layers_stack_scene_then_particle_then_light(compositor, layout):
    far_light = make_light(0.0, 39.0)
    particle = trail(60.4, 14.7)

    with_particle = compositor.compose(layout, (APEX,), None, far_light, (particle,), 0.0)
    assert with_particle[(60, 14)].glyph == '.'
    assert with_particle[(60, 14)].fg == (0, 0, 255)
    assert with_particle[(60, 14)].bg == SKY_BASE

    light_on_apex = make_light(60.0, 14.0)
    with_light = compositor.compose(layout, (APEX,), None, light_on_apex, (particle,), 0.0)
    assert with_light[(60, 14)].glyph == '★'


def test_particles_outside_screen_are_skipped(compositor, layout):
    particles = (trail(-0.5, 3.0), trail(120.0, 3.0), trail(5.0, -0.1), trail(5.0, 40.0))
    frame = compositor.compose(layout, (), None, make_light(0.0, 39.0, z=-1.0), particles, 0.0)
    assert all(cell.glyph != '.' for cell in frame.values())
    assert all(layout.in_bounds(x, y) for x, y in frame)


def test_every_cell_is_painted_on_sky_background(compositor, layout, sky_field):
    scene = SceneBuilder(random.Random(22)).build()
    sky = sky_field.regenerate(layout.width, layout.top_y)
    frame = compositor.compose(layout, scene, sky, make_light(70.0, 20.0), (trail(10, 30),), 1.0)

    assert len(frame) == layout.width * layout.height
    for cell in frame.values():
        assert all(channel >= base for channel, base in zip(cell.bg, SKY_BASE))


def test_fill_band_covers_gaps_around_tree(compositor, layout):
    frame = compositor.compose(layout, (APEX,), None, make_light(0.0, 39.0, z=-1.0), (), 0.0)
    for y in range(layout.top_y, layout.height):
        for x in range(layout.width):
            if (x, y) == (60, 14):
                continue
            assert frame[(x, y)].glyph == ' '
            assert frame[(x, y)].bg == SKY_BASE


def test_star_glow_brightens_background_but_keeps_glyph(compositor, layout, sky_field):
    sky = sky_field.regenerate(layout.width, layout.top_y)
    frame = compositor.compose(layout, (), sky, make_light(0.0, 39.0, z=-1.0), (), 0.0)
    for star in sky.stars:
        cell = frame[(star.x, star.y)]
        assert cell.glyph == '.'
        assert cell.bg != SKY_BASE
        assert cell.fg[0] >= 200


def test_tiny_screen_clips_everything(compositor):
    small = FrameLayout.from_size(6, 3)
    scene = SceneBuilder(random.Random(23)).build()
    frame = compositor.compose(small, scene, None, make_light(2.0, 1.0), (trail(1, 1),), 0.0)
    assert all(small.in_bounds(x, y) for x, y in frame)


def test_render_frame_writes_and_presents(compositor, layout):
    controller = MemoryController(layout.width, layout.height)
    frame = compositor.render_frame(controller, layout, (APEX,), None,
                                    make_light(0.0, 39.0), (), 0.0)
    assert controller.frames_shown == 1
    assert len(controller.cells) == len(frame)
    glyph, fg, bg, bold = controller.cell_at(60, 14)
    assert (glyph, fg, bg, bold) == ('*', GREEN, SKY_BASE, False)
