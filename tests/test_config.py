"""Tests for the render configuration."""

import pytest

from basinscope.config import RenderConfig
from basinscope.core.field import Attractor
from basinscope.errors import ConfigError


class TestRenderConfig:
    def test_defaults(self, default_attractors):
        cfg = RenderConfig()
        assert (cfg.width, cfg.height) == (10000, 10000)
        assert cfg.zoom == 3.0
        assert cfg.attractors == default_attractors
        assert cfg.steps == 3000
        assert cfg.step_size == 0.01
        assert cfg.capture_radius == 0.1
        assert cfg.near_radius == 0.02
        assert cfg.escape_radius == 1500.0
        assert cfg.dampening == 1.0
        assert cfg.workers >= 1

    def test_sizes(self):
        cfg = RenderConfig(width=4, height=3)
        assert cfg.total_pixels == 12
        assert cfg.buffer_size == 36

    def test_integrator_params(self):
        params = RenderConfig(steps=10).integrator_params()
        assert params["steps"] == 10
        assert set(params) == {
            "steps", "step_size", "capture_radius",
            "near_radius", "escape_radius", "dampening",
        }

    def test_validate_returns_self(self):
        cfg = RenderConfig(width=2, height=2)
        assert cfg.validate() is cfg

    @pytest.mark.parametrize(
        "overrides",
        [
            {"width": 0},
            {"height": -1},
            {"steps": -1},
            {"steps": 0},
            {"step_size": 0.0},
            {"attractors": ()},
            {"workers": 0},
            {"chunk_rows": 0},
            {"progress_interval": 0.0},
            {"perturb_amount": -1.0},
        ],
    )
    def test_invalid(self, overrides):
        with pytest.raises(ConfigError):
            RenderConfig(**overrides).validate()

    def test_too_many_attractors(self):
        attractors = tuple(Attractor(float(i), 0.0, 1.0) for i in range(5))
        with pytest.raises(ConfigError):
            RenderConfig(attractors=attractors).validate()

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            RenderConfig(width=0).validate()


class TestResolvedAttractors:
    def test_unperturbed_by_default(self, default_attractors):
        assert RenderConfig().resolved_attractors() == default_attractors

    def test_perturb_is_seeded(self):
        a = RenderConfig(perturb_amount=2.0, seed=42).resolved_attractors()
        b = RenderConfig(perturb_amount=2.0, seed=42).resolved_attractors()
        assert a == b
        assert a != RenderConfig().resolved_attractors()
