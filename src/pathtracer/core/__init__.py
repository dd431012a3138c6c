"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Immutable 3D vector and color type
    ray: Ray data structure, reflection/refraction and random sampling
    color: Gamma correction and 8-bit quantization
    integrator: Depth-bounded light transport (ray_color)
    renderer: Tile-parallel renderer driving worker threads

Note: integrator and renderer are NOT imported here to avoid circular imports
with the scene package. Import them directly from pathtracer.core.integrator
or pathtracer.core.renderer.
"""

from .color import COLOR_CHANNELS, average_samples, gamma_correct, quantize
from .ray import (
    Ray,
    Rng,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    reflect,
    refract,
    schlick_reflectance,
)
from .vector import Color, Vec3

__all__ = [
    "Vec3",
    "Color",
    "Ray",
    "Rng",
    "reflect",
    "refract",
    "schlick_reflectance",
    "random_in_unit_disk",
    "random_in_unit_sphere",
    "random_unit_vector",
    "COLOR_CHANNELS",
    "average_samples",
    "gamma_correct",
    "quantize",
]
