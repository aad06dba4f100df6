"""Short-lived trail particles left behind by the orbiting star."""

import random
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

from xmastree.config import (
    PARTICLE_FRONT_EXTRA,
    PARTICLE_INITIAL_LIFE,
    PARTICLE_LIFE_DECAY,
)
from xmastree.scene.color import Color
from xmastree.scene.vector import Vector3


@dataclass(frozen=True)
class Particle:
    pos: Vector3
    velocity: Vector3
    life: float
    color: Color


class ParticleSystem:
    """Spawns and ages trail particles.

    The live set is passed in and a new tuple is handed back each call, so the
    render loop owns it as part of the simulation state.
    """

    MIN_SPAWN = 2
    MAX_SPAWN = 4
    JITTER_X = 2.0
    JITTER_Y = 1.0
    DRIFT_X = 0.2
    DRIFT_Y = 0.2

    def __init__(self, rng: Optional[random.Random] = None,
                 initial_life: float = PARTICLE_INITIAL_LIFE,
                 decay: float = PARTICLE_LIFE_DECAY,
                 front_extra: int = PARTICLE_FRONT_EXTRA):
        self.random = rng or random.Random()
        self.initial_life = initial_life
        self.decay = decay
        self.front_extra = front_extra

    def spawn(self, particles: Iterable[Particle], x: float, y: float, z: float,
              color: Color) -> Tuple[Particle, ...]:
        count = self.random.randint(self.MIN_SPAWN, self.MAX_SPAWN)
        # Front-facing passes leave a denser trail
        if z >= 0:
            count += self.front_extra

        spawned: List[Particle] = list(particles)
        for _ in range(count):
            offset_x = (self.random.random() - 0.5) * self.JITTER_X
            offset_y = (self.random.random() - 0.5) * self.JITTER_Y
            velocity = Vector3(
                (self.random.random() - 0.5) * self.DRIFT_X,
                self.random.random() * self.DRIFT_Y,
                0.0,
            )
            spawned.append(Particle(
                pos=Vector3(x + offset_x, y + offset_y, z),
                velocity=velocity,
                life=self.initial_life,
                color=color,
            ))
        return tuple(spawned)

    def advance(self, particles: Iterable[Particle]) -> Tuple[Particle, ...]:
        alive = []
        for particle in particles:
            moved = replace(particle,
                            pos=particle.pos + particle.velocity,
                            life=particle.life - self.decay)
            if moved.life > 0:
                alive.append(moved)
        return tuple(alive)
