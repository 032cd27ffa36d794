"""Image output."""

from basinscope.io.exporter import pixels_to_image, save_artifact, save_image

__all__ = ["pixels_to_image", "save_artifact", "save_image"]
