"""Image export utilities for rendered buffers.

This module turns the renderer's flat 8-bit RGB buffer into a Pillow image
and writes it to disk. Gamma correction and quantization already happened in
the renderer, so the bytes are written unchanged.

Supported formats:
    - PNG (8-bit sRGB via Pillow)

Example:
    >>> from pathtracer.core.renderer import RenderConfig, render
    >>> from pathtracer.preview.export import save_png
    >>>
    >>> config = RenderConfig(width=64, height=36, samples_per_pixel=4)
    >>> buffer = render(world, camera, config)
    >>> save_png(buffer, config.width, config.height, "output.png")
"""

from __future__ import annotations

import logging
import os

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from pathtracer.core.color import COLOR_CHANNELS

logger = logging.getLogger(__name__)


class ImageWriteError(OSError):
    """Raised when an encoded image cannot be written to its destination."""

    def __init__(self, filepath: str | os.PathLike[str], reason: str) -> None:
        super().__init__(f"Failed to write image to {os.fspath(filepath)}: {reason}")
        self.filepath = os.fspath(filepath)


def buffer_to_image(
    buffer: npt.NDArray[np.uint8] | bytes,
    width: int,
    height: int,
) -> PILImage.Image:
    """Wrap a flat row-major RGB buffer in a Pillow image.

    Args:
        buffer: width * height * 3 bytes, top row first.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        An RGB image of size (width, height).

    Raises:
        ValueError: If the dimensions are not positive or the buffer size
            does not match them.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions ({width}x{height}) must be positive")

    pixels = np.frombuffer(buffer, dtype=np.uint8) if isinstance(buffer, bytes) else buffer
    expected = width * height * COLOR_CHANNELS
    if pixels.size != expected:
        raise ValueError(
            f"Buffer has {pixels.size} bytes, expected {expected} for {width}x{height} RGB"
        )

    image = np.ascontiguousarray(pixels, dtype=np.uint8).reshape(height, width, COLOR_CHANNELS)
    return PILImage.fromarray(image)


def save_png(
    buffer: npt.NDArray[np.uint8] | bytes,
    width: int,
    height: int,
    filepath: str | os.PathLike[str],
) -> None:
    """Save a rendered buffer as a PNG file.

    Args:
        buffer: width * height * 3 bytes, top row first.
        width: Image width in pixels.
        height: Image height in pixels.
        filepath: Output file path (should end in .png).

    Raises:
        ValueError: If the buffer does not match the dimensions.
        ImageWriteError: If the file cannot be written.
    """
    image = buffer_to_image(buffer, width, height)
    try:
        image.save(filepath, format="PNG")
    except OSError as e:
        raise ImageWriteError(filepath, str(e)) from e
    logger.info("Wrote %dx%d PNG to %s", width, height, os.fspath(filepath))
