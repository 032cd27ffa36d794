"""
Fixed-step trajectory integration for test particles.

`simulate` follows a single particle and is the reference form.
`simulate_many` runs a whole batch with numpy using the same arithmetic
in the same order, so both produce bit-identical terminal points.

Per step each attractor's force is added to the velocity in turn, and
the near-radius check runs right after that attractor's contribution.
Forces are not summed into a net vector first.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from basinscope.core.field import Attractor, Point, force, force_many

STEPS = 3000
STEP_SIZE = 0.01
CAPTURE_RADIUS = 0.1
NEAR_RADIUS = 0.02
ESCAPE_RADIUS = 1500.0
DAMPENING = 1.0


def _captured(attractors: Sequence[Attractor], x: float, y: float, radius: float):
    for attractor in attractors:
        if attractor.distance_to(x, y) < radius:
            return attractor
    return None


def simulate(
    attractors: Sequence[Attractor],
    start_x: float,
    start_y: float,
    steps: int = STEPS,
    step_size: float = STEP_SIZE,
    capture_radius: float = CAPTURE_RADIUS,
    near_radius: float = NEAR_RADIUS,
    escape_radius: float = ESCAPE_RADIUS,
    dampening: float = DAMPENING,
) -> Point:
    """
    Integrate one particle released at rest and return its terminal point.

    Stops early when the particle starts inside `capture_radius` of an
    attractor, passes within `near_radius` of one, or leaves the disc of
    radius `escape_radius` around the origin. Otherwise returns the
    position after `steps` steps.
    """
    captured = _captured(attractors, start_x, start_y, capture_radius)
    if captured is not None:
        return captured.position

    x, y = float(start_x), float(start_y)
    vx = vy = 0.0

    for _ in range(steps):
        for attractor in attractors:
            f = force(attractor, Point(x, y))
            vx += f.x * step_size
            vy += f.y * step_size
            if attractor.distance_to(x, y) < near_radius:
                return attractor.position

        vx *= dampening
        vy *= dampening
        x += vx * step_size
        y += vy * step_size

        if math.sqrt(x * x + y * y) > escape_radius:
            return Point(x, y)

    return Point(x, y)


def simulate_many(
    attractors: Sequence[Attractor],
    start_x: np.ndarray,
    start_y: np.ndarray,
    steps: int = STEPS,
    step_size: float = STEP_SIZE,
    capture_radius: float = CAPTURE_RADIUS,
    near_radius: float = NEAR_RADIUS,
    escape_radius: float = ESCAPE_RADIUS,
    dampening: float = DAMPENING,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Vectorized `simulate` over 1-D arrays of starting coordinates.

    Particles that terminate are dropped from the working set, so late
    steps only touch the particles still in flight.
    """
    out_x = np.array(start_x, dtype=np.float64).ravel()
    out_y = np.array(start_y, dtype=np.float64).ravel()
    if out_x.shape != out_y.shape:
        raise ValueError(
            f"start_x and start_y differ in shape: {out_x.shape} vs {out_y.shape}"
        )

    idx = np.arange(out_x.size)

    for attractor in attractors:
        dx = out_x[idx] - attractor.x
        dy = out_y[idx] - attractor.y
        hit = np.sqrt(dx * dx + dy * dy) < capture_radius
        if np.any(hit):
            out_x[idx[hit]] = attractor.x
            out_y[idx[hit]] = attractor.y
            idx = idx[~hit]

    x = out_x[idx]
    y = out_y[idx]
    vx = np.zeros_like(x)
    vy = np.zeros_like(y)

    # An exact hit on an attractor gives a nan force, as in `simulate`;
    # the near check right after it still snaps the particle.
    with np.errstate(divide="ignore", invalid="ignore"):
        for _ in range(steps):
            if idx.size == 0:
                break

            for attractor in attractors:
                fx, fy = force_many(attractor, x, y)
                vx += fx * step_size
                vy += fy * step_size

                dx = x - attractor.x
                dy = y - attractor.y
                near = np.sqrt(dx * dx + dy * dy) < near_radius
                if np.any(near):
                    out_x[idx[near]] = attractor.x
                    out_y[idx[near]] = attractor.y
                    keep = ~near
                    idx, x, y, vx, vy = idx[keep], x[keep], y[keep], vx[keep], vy[keep]

            vx *= dampening
            vy *= dampening
            x += vx * step_size
            y += vy * step_size

            escaped = np.sqrt(x * x + y * y) > escape_radius
            if np.any(escaped):
                out_x[idx[escaped]] = x[escaped]
                out_y[idx[escaped]] = y[escaped]
                keep = ~escaped
                idx, x, y, vx, vy = idx[keep], x[keep], y[keep], vx[keep], vy[keep]

    out_x[idx] = x
    out_y[idx] = y
    return out_x, out_y
