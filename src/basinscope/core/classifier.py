"""
Nearest-attractor classification and the basin color palette.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from basinscope.core.field import Attractor, Point

# Class index -> RGB. Index 4 is a placeholder that nothing assigns yet.
PALETTE = {
    0: (255, 255, 255),
    1: (0, 0, 0),
    2: (0, 0, 255),
    3: (255, 255, 0),
    4: (255, 255, 255),
}
FALLBACK_COLOR = (0, 0, 0)

# Attractor classes with a dedicated color
MAX_ATTRACTORS = 4


def classify(attractors: Sequence[Attractor], point: Point) -> int:
    """Index of the attractor nearest to `point`, lowest index on ties."""
    if not attractors:
        raise ValueError("classify needs at least one attractor")

    closest = 0
    closest_distance = math.inf
    for i, attractor in enumerate(attractors):
        distance = attractor.distance_to(point.x, point.y)
        if distance < closest_distance:
            closest_distance = distance
            closest = i
    return closest


def classify_many(
    attractors: Sequence[Attractor], xs: np.ndarray, ys: np.ndarray
) -> np.ndarray:
    """Vectorized `classify`; returns an int array of class indices."""
    if not attractors:
        raise ValueError("classify needs at least one attractor")

    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    distances = np.empty((len(attractors),) + xs.shape, dtype=np.float64)
    for i, attractor in enumerate(attractors):
        dx = xs - attractor.x
        dy = ys - attractor.y
        distances[i] = np.sqrt(dx * dx + dy * dy)

    # argmin returns the first minimum, which is the lowest index on ties
    return np.argmin(distances, axis=0)


def color_for(index: int) -> Tuple[int, int, int]:
    return PALETTE.get(index, FALLBACK_COLOR)


def colors_for(indices: np.ndarray) -> np.ndarray:
    """Map class indices to an (N, 3) uint8 RGB array."""
    lut = np.zeros((max(PALETTE) + 1, 3), dtype=np.uint8)
    for index, rgb in PALETTE.items():
        lut[index] = rgb

    indices = np.asarray(indices)
    colors = np.empty(indices.shape + (3,), dtype=np.uint8)
    colors[:] = FALLBACK_COLOR
    known = (indices >= 0) & (indices < len(lut))
    colors[known] = lut[indices[known]]
    return colors
