"""Pytest configuration and shared fixtures."""

import io

import pytest

from basinscope.config import RenderConfig
from basinscope.core.field import Attractor


@pytest.fixture
def default_attractors() -> tuple[Attractor, ...]:
    """The two-attractor set used by the full-size render."""
    return (Attractor(1.0, 1.0, 1.0), Attractor(-1.0, -1.0, 1.0))


@pytest.fixture
def small_config() -> RenderConfig:
    """A tiny, short-integration render that finishes in well under a second."""
    return RenderConfig(
        width=8,
        height=8,
        steps=200,
        workers=2,
        progress_interval=0.01,
    )


@pytest.fixture
def progress_stream() -> io.StringIO:
    """Non-TTY sink for progress output."""
    return io.StringIO()
