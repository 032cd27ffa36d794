"""
Point-mass attractors and the inverse-square force law.

All quantities live in simulation space. Attractors and points are
frozen values so a single attractor tuple can be shared by every
worker without copying or locking.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

# Gravitational constant
G = 1.0


@dataclass(frozen=True)
class Point:
    """A position or velocity in simulation space."""
    x: float
    y: float


@dataclass(frozen=True)
class Attractor:
    """A fixed point mass pulling on test particles."""
    x: float
    y: float
    mass: float

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def distance_to(self, x: float, y: float) -> float:
        dx = x - self.x
        dy = y - self.y
        return math.sqrt(dx * dx + dy * dy)


def force(attractor: Attractor, point: Point) -> Point:
    """
    Force exerted by one attractor on a unit test mass at `point`.

    Magnitude is mass / distance**2, direction is the unit vector from
    `point` toward the attractor. At zero distance the force is nan, which
    is what IEEE arithmetic gives for the same expression.
    """
    dx = attractor.x - point.x
    dy = attractor.y - point.y
    distance = math.sqrt(dx * dx + dy * dy)
    if distance == 0.0:
        # IEEE result of the expression below (inf * 0 / 0)
        return Point(math.nan, math.nan)
    f = G * attractor.mass / (distance * distance)
    return Point(f * dx / distance, f * dy / distance)


def force_many(
    attractor: Attractor, xs: np.ndarray, ys: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorized `force` over arrays of particle positions."""
    dx = attractor.x - xs
    dy = attractor.y - ys
    distance = np.sqrt(dx * dx + dy * dy)
    f = G * attractor.mass / (distance * distance)
    return f * dx / distance, f * dy / distance


def make_attractors(specs: Iterable[Tuple[float, float, float]]) -> Tuple[Attractor, ...]:
    """Build an ordered attractor tuple from (x, y, mass) triples."""
    return tuple(Attractor(float(x), float(y), float(m)) for x, y, m in specs)


def perturb(
    attractor: Attractor,
    amount: float,
    rng: np.random.Generator,
) -> Attractor:
    """Jitter position and mass uniformly within +/- amount / 2."""
    x = attractor.x + (rng.random() - 0.5) * amount
    y = attractor.y + (rng.random() - 0.5) * amount
    mass = attractor.mass + (rng.random() - 0.5) * amount
    return Attractor(x, y, mass)
