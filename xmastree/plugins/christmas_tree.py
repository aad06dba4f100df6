#!/usr/bin/env python3
"""Christmas tree with an orbiting rainbow star, sparkle trail and twinkling sky."""

import random
from typing import Any, Dict, Optional, Tuple

from xmastree.config import LIGHT_RADIUS, STAR_TIME_STEP
from xmastree.core.base import AnimationBase
from xmastree.core.state import FrameLayout, SimulationState
from xmastree.scene.compositor import Compositor
from xmastree.scene.orbit import LightState, OrbitController
from xmastree.scene.particles import ParticleSystem
from xmastree.scene.sky import SkyField
from xmastree.scene.tree import SceneBuilder


class ChristmasTreeAnimation(AnimationBase):
    """Festive scene: decorated tree, presents, night sky and a star circling the tree."""

    ANIMATION_NAME = "Christmas Tree"
    ANIMATION_DESCRIPTION = "Decorated tree lit by a rainbow star spiralling around it"
    ANIMATION_AUTHOR = "Terminal Tree Team"
    ANIMATION_VERSION = "1.0"

    def __init__(self, controller, config: Dict[str, Any] = None,
                 rng: Optional[random.Random] = None):
        super().__init__(controller, config)

        self.default_params.update({
            'speed': 1.0,
            'time_step': STAR_TIME_STEP,
            'light_radius': LIGHT_RADIUS,
            'seed': None,
        })
        self.params = {**self.default_params, **self.config}

        # One generator feeds every random decision so a seed reproduces a run
        self.random = rng or random.Random(self.params.get('seed'))

        self.orbit = OrbitController()
        self.sky_field = SkyField(self.random)
        self.particle_system = ParticleSystem(self.random)
        self.compositor = Compositor(self.sky_field,
                                     light_radius=float(self.params['light_radius']))
        self.scene = SceneBuilder(self.random,
                                  height=self.orbit.tree_height,
                                  base_width=self.orbit.base_width).build()

        self.last_layout: Optional[FrameLayout] = None
        self.last_light: Optional[LightState] = None

    def get_parameter_schema(self) -> Dict[str, Dict[str, Any]]:
        schema = super().get_parameter_schema()
        schema.update({
            'time_step': {
                'type': 'float',
                'min': 0.01,
                'max': 0.5,
                'default': STAR_TIME_STEP,
                'description': 'Clock advance per frame (smaller is slower)'
            },
            'light_radius': {
                'type': 'float',
                'min': 1.0,
                'max': 20.0,
                'default': LIGHT_RADIUS,
                'description': 'How far the star lights up needles and trunk'
            },
            'seed': {
                'type': 'int',
                'default': None,
                'description': 'Random seed for decoration, sky and trail'
            },
        })
        return schema

    def update_parameters(self, params: Dict[str, Any]):
        super().update_parameters(params)
        if 'light_radius' in params:
            self.compositor.light_radius = float(self.params['light_radius'])

    def initial_state(self) -> SimulationState:
        return SimulationState()

    def advance(self, state: SimulationState, width: int,
                height: int) -> Tuple[SimulationState, FrameLayout, LightState]:
        """Step the clock and everything driven by it, without drawing."""
        step = float(self.params['time_step']) * float(self.params['speed'])
        t = state.t + step

        layout = FrameLayout.from_size(width, height, self.orbit.tree_height)
        sky = self.sky_field.ensure(state.sky, width, layout.top_y)
        light = self.orbit.step(t, layout.center_x, layout.top_y)

        particles = self.particle_system.spawn(
            state.particles, light.screen_x, light.screen_y, light.relative.z, light.color
        )
        particles = self.particle_system.advance(particles)

        new_state = SimulationState(
            t=t,
            particles=particles,
            sky=sky,
            frame_count=state.frame_count + 1,
        )
        return new_state, layout, light

    def generate_frame(self, state: SimulationState) -> SimulationState:
        width, height = self.get_grid_info()
        new_state, layout, light = self.advance(state, width, height)
        self.compositor.render_frame(
            self.controller, layout, self.scene, new_state.sky, light,
            new_state.particles, new_state.t,
        )
        self.last_layout = layout
        self.last_light = light
        return new_state
