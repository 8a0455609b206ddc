"""Decorative orbital kinematics.

Orbital angle is a pure function of elapsed time. Self-spin is not: it grows
by a fixed step per render tick, so bodies spin faster on faster displays.
The two are kept apart on purpose; unifying them would change the visible
animation speed.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from core.scene.bodies import DEFAULT_BODIES
from core.types import BodyPose, CelestialBody

ORBIT_RATE = 0.2  # rad per second per unit of body speed
SPIN_PER_TICK = 0.01  # rad


def orbital_angle(body: CelestialBody, elapsed_s: float) -> float:
    return elapsed_s * body.speed * ORBIT_RATE


def orbital_position(body: CelestialBody, angle: float) -> np.ndarray:
    """Position on the orbit plane (y = 0), before the group transform."""
    return np.array(
        [body.distance * math.cos(angle), 0.0, body.distance * math.sin(angle)],
        dtype=np.float64,
    )


class OrbitSimulator:
    """Advance every body's orbit and spin once per render tick.

    Usage:
        >>> sim = OrbitSimulator()
        >>> poses = sim.step(elapsed_s=1.5)
        >>> poses[3].position  # EARTH
    """

    def __init__(
        self,
        bodies: Sequence[CelestialBody] = DEFAULT_BODIES,
        spin_per_tick: float = SPIN_PER_TICK,
    ) -> None:
        if not bodies:
            raise ValueError("OrbitSimulator needs at least one body")
        self._bodies = tuple(bodies)
        self._spin_per_tick = spin_per_tick
        self._spins = [0.0] * len(self._bodies)
        self._ticks = 0

    @property
    def bodies(self) -> tuple[CelestialBody, ...]:
        return self._bodies

    @property
    def ticks(self) -> int:
        return self._ticks

    def step(self, elapsed_s: float) -> list[BodyPose]:
        """Compute this tick's poses and accumulate one spin increment.

        Args:
            elapsed_s: Wall-clock seconds since the scene started.

        Returns:
            One BodyPose per body, in declaration order.
        """
        self._ticks += 1
        poses: list[BodyPose] = []
        for i, body in enumerate(self._bodies):
            self._spins[i] += self._spin_per_tick
            angle = orbital_angle(body, elapsed_s)
            poses.append(
                BodyPose(
                    name=body.name,
                    angle=angle,
                    position=orbital_position(body, angle),
                    spin=self._spins[i],
                )
            )
        return poses

    def reset(self) -> None:
        self._spins = [0.0] * len(self._bodies)
        self._ticks = 0
