"""Shared material types: the scatter result and parameter validation."""

from __future__ import annotations

from dataclasses import dataclass

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vec3


@dataclass(frozen=True, slots=True)
class ScatterResult:
    """Outcome of a successful scatter event.

    Attributes:
        attenuation: Color multiplier applied to the scattered ray's radiance.
        scattered: The outgoing ray, starting at the hit point.
    """

    attenuation: Color
    scattered: Ray


def validate_albedo(albedo: Vec3 | tuple[float, float, float]) -> Color:
    """Convert an albedo to a Color, checking every component is in [0, 1].

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """
    color = Color.of(albedo)
    for name, value in zip("rgb", color):
        if not 0.0 <= value <= 1.0:
            raise ValueError(
                f"Albedo component {name} = {value} is outside [0, 1]. "
                "Albedo values must be in [0, 1] for energy conservation."
            )
    return color
