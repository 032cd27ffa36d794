"""Basin-of-attraction renderer for point-mass attractors."""

from basinscope.config import RenderConfig
from basinscope.core.classifier import classify, color_for
from basinscope.core.field import Attractor, Point, force
from basinscope.core.integrator import simulate, simulate_many
from basinscope.errors import BasinscopeError, ConfigError, PixelBufferError
from basinscope.io.exporter import save_artifact, save_image
from basinscope.progress import ProgressMonitor
from basinscope.rasterizer import BasinRasterizer, RenderedArtifact, rasterize

__version__ = "0.1.0"
__all__ = [
    "Attractor",
    "Point",
    "force",
    "simulate",
    "simulate_many",
    "classify",
    "color_for",
    "RenderConfig",
    "BasinRasterizer",
    "RenderedArtifact",
    "rasterize",
    "ProgressMonitor",
    "save_image",
    "save_artifact",
    "BasinscopeError",
    "ConfigError",
    "PixelBufferError",
]
