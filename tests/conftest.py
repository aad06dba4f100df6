import random

from xmastree.scene.orbit import LightState
from xmastree.scene.vector import Vector3


class FixedRandom(random.Random):
    """Random whose ``random()`` always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def make_light(x: float, y: float, z: float = 1.0, color=(255, 0, 0)) -> LightState:
    return LightState(
        relative=Vector3(0.0, 0.0, z),
        screen_x=x,
        screen_y=y,
        color=color,
        progress=0.5,
        radius=2.0,
    )
