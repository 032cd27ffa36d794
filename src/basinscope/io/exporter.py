"""
Image export for finished renders.

Reinterprets the flat RGB buffer as an image, checking its length
first, and writes a PNG named after the run timestamp.
"""

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from basinscope.errors import PixelBufferError

CHANNELS = 3


def pixels_to_image(pixels, width: int, height: int) -> Image.Image:
    """
    Build an RGB image from a flat row-major buffer.

    Args:
        pixels: bytes-like or uint8 array of length width * height * 3.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A PIL image in RGB mode.

    Raises:
        PixelBufferError: If the buffer length does not match the dimensions.
    """
    data = np.frombuffer(memoryview(pixels).cast("B"), dtype=np.uint8)
    expected = width * height * CHANNELS
    if width <= 0 or height <= 0 or data.size != expected:
        raise PixelBufferError(
            f"Pixel buffer holds {data.size} bytes, expected {expected} "
            f"for a {width}x{height} RGB image"
        )
    return Image.fromarray(data.reshape(height, width, CHANNELS))


def output_path_for(timestamp: int, output_dir: Union[str, Path] = "figs") -> Path:
    return Path(output_dir) / f"attractors_{timestamp}.png"


def save_image(
    pixels,
    width: int,
    height: int,
    timestamp: int,
    output_dir: Union[str, Path] = "figs",
) -> Path:
    """
    Persist a finished buffer as PNG.

    The buffer is validated before anything touches the filesystem, so
    a bad buffer never leaves a partial file behind.

    Returns:
        Path to the written file.
    """
    img = pixels_to_image(pixels, width, height)

    output_path = output_path_for(timestamp, output_dir)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(output_path, format="PNG")
    return output_path


def save_artifact(artifact, output_dir: Union[str, Path] = "figs") -> Path:
    """Persist a `RenderedArtifact`."""
    return save_image(
        artifact.pixels,
        artifact.width,
        artifact.height,
        artifact.timestamp,
        output_dir=output_dir,
    )
