"""
Run configuration for the basin renderer.

Every run parameter lives in one dataclass. The defaults describe the
full-size render; tests and previews shrink the image.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from basinscope.core.classifier import MAX_ATTRACTORS
from basinscope.core.field import Attractor, make_attractors, perturb
from basinscope.errors import ConfigError

DEFAULT_ATTRACTORS: Tuple[Tuple[float, float, float], ...] = (
    (1.0, 1.0, 1.0),
    (-1.0, -1.0, 1.0),
)


@dataclass
class RenderConfig:
    """Configuration for a basin-of-attraction render."""

    width: int = 10000
    height: int = 10000
    zoom: float = 3.0
    attractors: Tuple[Attractor, ...] = field(
        default_factory=lambda: make_attractors(DEFAULT_ATTRACTORS)
    )

    # Integration
    steps: int = 3000
    step_size: float = 0.01
    capture_radius: float = 0.1
    near_radius: float = 0.02
    escape_radius: float = 1500.0
    dampening: float = 1.0

    # Parallelism
    workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    chunk_rows: int = 1  # image rows per pool task

    # Progress / output
    progress_interval: float = 0.2
    output_dir: str = "figs"

    # Attractor jitter, off by default
    perturb_amount: float = 0.0
    seed: Optional[int] = None

    @property
    def total_pixels(self) -> int:
        return self.width * self.height

    @property
    def buffer_size(self) -> int:
        return self.width * self.height * 3

    def integrator_params(self) -> dict:
        """Keyword arguments for `simulate` / `simulate_many`."""
        return {
            "steps": self.steps,
            "step_size": self.step_size,
            "capture_radius": self.capture_radius,
            "near_radius": self.near_radius,
            "escape_radius": self.escape_radius,
            "dampening": self.dampening,
        }

    def resolved_attractors(self) -> Tuple[Attractor, ...]:
        """The attractor set for this run, jittered if perturbation is on."""
        if self.perturb_amount <= 0:
            return tuple(self.attractors)
        rng = np.random.default_rng(self.seed)
        return tuple(perturb(a, self.perturb_amount, rng) for a in self.attractors)

    def validate(self) -> "RenderConfig":
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.steps < 1:
            raise ConfigError(f"steps must be >= 1, got {self.steps}")
        if self.step_size <= 0:
            raise ConfigError(f"step_size must be > 0, got {self.step_size}")
        if not self.attractors:
            raise ConfigError("At least one attractor is required")
        if len(self.attractors) > MAX_ATTRACTORS:
            raise ConfigError(
                f"At most {MAX_ATTRACTORS} attractors have a color class, "
                f"got {len(self.attractors)}"
            )
        if self.workers < 1:
            raise ConfigError(f"workers must be >= 1, got {self.workers}")
        if self.chunk_rows < 1:
            raise ConfigError(f"chunk_rows must be >= 1, got {self.chunk_rows}")
        if self.progress_interval <= 0:
            raise ConfigError(
                f"progress_interval must be > 0, got {self.progress_interval}"
            )
        if self.perturb_amount < 0:
            raise ConfigError(f"perturb_amount must be >= 0, got {self.perturb_amount}")
        return self
