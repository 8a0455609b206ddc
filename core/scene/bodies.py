"""Catalogue of the bodies shown in the orrery."""

from __future__ import annotations

from collections.abc import Sequence

from core.types import CelestialBody

DEFAULT_BODIES: tuple[CelestialBody, ...] = (
    CelestialBody(
        name="SOL",
        distance=0.0,
        size=2.5,
        speed=0.0,
        color="#FFD700",
        description="G2V main-sequence star at the core of the system.",
        temperature="5778 K",
        gravity="274 m/s²",
    ),
    CelestialBody(
        name="MERCURY",
        distance=4.0,
        size=0.5,
        speed=0.8,
        color="#A5A5A5",
        description="Closest to the sun, with extreme surface temperature swings.",
        temperature="440 K",
        gravity="3.7 m/s²",
    ),
    CelestialBody(
        name="VENUS",
        distance=6.0,
        size=0.9,
        speed=0.6,
        color="#E3BB76",
        description="Thick atmosphere with a runaway greenhouse effect.",
        temperature="737 K",
        gravity="8.87 m/s²",
    ),
    CelestialBody(
        name="EARTH",
        distance=8.0,
        size=1.0,
        speed=0.4,
        color="#22A6B3",
        description="The only known world to harbour life.",
        temperature="288 K",
        gravity="9.8 m/s²",
    ),
    CelestialBody(
        name="MARS",
        distance=11.0,
        size=0.7,
        speed=0.3,
        color="#EB4D4B",
        description="The red planet, destination of the current mission.",
        temperature="210 K",
        gravity="3.71 m/s²",
    ),
)


def find_body(name: str, bodies: Sequence[CelestialBody] = DEFAULT_BODIES) -> CelestialBody:
    """Look up a body by name, falling back to the first one."""
    for body in bodies:
        if body.name == name:
            return body
    return bodies[0]
