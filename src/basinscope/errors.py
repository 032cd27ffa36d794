"""Exceptions raised by basinscope."""


class BasinscopeError(Exception):
    """Base class for all basinscope errors."""


class ConfigError(BasinscopeError, ValueError):
    """A render configuration that cannot produce an image."""


class PixelBufferError(BasinscopeError, ValueError):
    """A pixel buffer whose length does not match its declared dimensions."""
