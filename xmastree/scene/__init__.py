"""Scene layers: tree geometry, sky, orbiting star, trail and compositing."""

from xmastree.scene.color import hsv_to_rgb, sky_tint
from xmastree.scene.orbit import LightState, OrbitController
from xmastree.scene.particles import Particle, ParticleSystem
from xmastree.scene.sky import SkyField, SkyLayout, SkyStar
from xmastree.scene.tree import CellKind, SceneBuilder, SceneCell
from xmastree.scene.vector import Vector3

__all__ = [
    "hsv_to_rgb",
    "sky_tint",
    "LightState",
    "OrbitController",
    "Particle",
    "ParticleSystem",
    "SkyField",
    "SkyLayout",
    "SkyStar",
    "CellKind",
    "SceneBuilder",
    "SceneCell",
    "Vector3",
]
