"""Simulation core: force law, integrator and classifier."""

from basinscope.core.classifier import classify, classify_many, color_for, colors_for
from basinscope.core.field import Attractor, Point, force, perturb
from basinscope.core.integrator import simulate, simulate_many

__all__ = [
    "Attractor",
    "Point",
    "force",
    "perturb",
    "simulate",
    "simulate_many",
    "classify",
    "classify_many",
    "color_for",
    "colors_for",
]
