"""Conversion of accumulated linear radiance into 8-bit output color.

The output pipeline is:
    1. Average the summed samples.
    2. Gamma correct with gamma 2 (component-wise square root).
    3. Clamp to [0, 0.999] so that 1.0 does not overflow a byte.
    4. Scale by 256 and truncate.
"""

from __future__ import annotations

import math

from pathtracer.core.vector import Color

# Number of bytes written per pixel
COLOR_CHANNELS = 3

# Upper clamp applied after gamma correction
MAX_INTENSITY = 0.999


def average_samples(total: Color, num_samples: int) -> Color:
    """Divide a sum of radiance samples by the sample count.

    Raises:
        ValueError: If num_samples is not positive.
    """
    if num_samples <= 0:
        raise ValueError(f"num_samples = {num_samples} must be positive")
    return total / num_samples


def gamma_correct(color: Color) -> Color:
    """Apply gamma-2 correction; negative and NaN components become 0."""
    return Color(*(0.0 if math.isnan(c) else c for c in color)).sqrt()


def quantize(color: Color) -> tuple[int, int, int]:
    """Convert a linear color to an (R, G, B) byte triple.

    Example:
        >>> quantize(Color(1.0, 1.0, 1.0))
        (255, 255, 255)
    """
    c = gamma_correct(color).clamp(0.0, MAX_INTENSITY) * 256.0
    return int(c.x), int(c.y), int(c.z)
