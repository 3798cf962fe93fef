"""
Asteroids entities.

Positions and velocities are complex numbers (x + 1j*y) in pixels and pixels
per tick, matching the vector arithmetic used throughout the simulation.
"""

from dataclasses import dataclass, field
from enum import StrEnum

import numpy as np


class AsteroidSize(StrEnum):
    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"


@dataclass(frozen=True)
class AsteroidSizeSpec:
    radius: float
    points: int
    speed: float
    child: AsteroidSize | None


ASTEROID_SIZES: dict[AsteroidSize, AsteroidSizeSpec] = {
    AsteroidSize.LARGE: AsteroidSizeSpec(radius=40.0, points=20, speed=1.0, child=AsteroidSize.MEDIUM),
    AsteroidSize.MEDIUM: AsteroidSizeSpec(radius=20.0, points=50, speed=2.0, child=AsteroidSize.SMALL),
    AsteroidSize.SMALL: AsteroidSizeSpec(radius=10.0, points=100, speed=3.0, child=None),
}

# Fragments produced when an asteroid breaks (small asteroids produce none)
SPLIT_COUNT = 2

MIN_VERTICES = 8
MAX_VERTICES = 12


@dataclass
class Ship:
    position: complex
    velocity: complex = 0j
    rotation: float = -np.pi / 2  # pointing up
    radius: float = 10.0
    thrusting: bool = False

    @property
    def heading(self) -> complex:
        return complex(np.cos(self.rotation), np.sin(self.rotation))

    def get_state(self) -> dict:
        return {
            "x": self.position.real,
            "y": self.position.imag,
            "vx": self.velocity.real,
            "vy": self.velocity.imag,
            "rotation": self.rotation,
            "thrusting": self.thrusting,
        }


@dataclass
class Asteroid:
    position: complex
    velocity: complex
    size: AsteroidSize
    vertices: np.ndarray  # (n,) complex offsets from the centre, fixed for life
    rotation: float = 0.0
    rotation_speed: float = 0.0
    alive: bool = True

    @property
    def spec(self) -> AsteroidSizeSpec:
        return ASTEROID_SIZES[self.size]

    @property
    def radius(self) -> float:
        return self.spec.radius

    @property
    def points(self) -> int:
        return self.spec.points

    def get_state(self) -> dict:
        return {
            "x": self.position.real,
            "y": self.position.imag,
            "vx": self.velocity.real,
            "vy": self.velocity.imag,
            "size": str(self.size),
            "radius": self.radius,
            "points": self.points,
            "rotation": self.rotation,
            "num_vertices": len(self.vertices),
        }


@dataclass
class Bullet:
    position: complex
    velocity: complex
    lifetime: float  # ms remaining
    alive: bool = True

    def get_state(self) -> dict:
        return {
            "x": self.position.real,
            "y": self.position.imag,
            "vx": self.velocity.real,
            "vy": self.velocity.imag,
            "lifetime": self.lifetime,
        }


@dataclass
class Ufo:
    position: complex
    velocity: complex
    is_small: bool
    radius: float
    points: int
    direction_timer: float = 1000.0
    fire_timer: float = 1000.0

    def get_state(self) -> dict:
        return {
            "x": self.position.real,
            "y": self.position.imag,
            "vx": self.velocity.real,
            "vy": self.velocity.imag,
            "is_small": self.is_small,
            "radius": self.radius,
            "points": self.points,
        }


UFO_SMALL = {"radius": 15.0, "points": 1000}
UFO_LARGE = {"radius": 25.0, "points": 200}


def make_outline(radius: float, rng: np.random.Generator) -> np.ndarray:
    """
    Random polygon outline around the origin.

    Args:
        radius: Nominal radius; each vertex sits at 0.7 to 1.0 of it.
        rng: Random source.

    Returns:
        Complex array of 8 to 12 vertex offsets, evenly spaced in angle.
    """
    num_vertices = int(rng.integers(MIN_VERTICES, MAX_VERTICES, endpoint=True))
    angles = np.arange(num_vertices) / num_vertices * 2 * np.pi
    radii = radius * (0.7 + 0.3 * rng.random(num_vertices))
    return radii * np.exp(1j * angles)


def circles_overlap(a: complex, radius_a: float, b: complex, radius_b: float) -> bool:
    return abs(a - b) <= radius_a + radius_b


def wrap_coordinate(value: float, extent: float, margin: float) -> float:
    """
    Toroidal wrap over [-margin, extent).

    Crossing the far edge lands in the hidden band before the near edge, so an
    object leaving on the right re-enters from the left at once and slides in.
    """
    return (value + margin) % (extent + margin) - margin


def wrap_position(position: complex, size: tuple[float, float], margin: float) -> complex:
    return complex(
        wrap_coordinate(position.real, size[0], margin),
        wrap_coordinate(position.imag, size[1], margin),
    )
