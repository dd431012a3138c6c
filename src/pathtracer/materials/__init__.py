"""Materials module for light scattering models.

This module implements the material models used by the path tracer:

Components:
    lambertian: Ideal diffuse (Lambertian) reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like materials with refraction (Schlick Fresnel)
    material: Scatter result type and shared parameter validation

Each material provides:
    - scatter(ray_in, hit, rng): returns a ScatterResult (attenuation and
      outgoing ray) or None when the ray is absorbed

The set of materials is closed; Material is the union of the three variants.
"""

from typing import Union

from .dielectric import Dielectric
from .lambertian import Lambertian
from .material import ScatterResult, validate_albedo
from .metal import Metal

Material = Union[Lambertian, Metal, Dielectric]

__all__ = [
    "Material",
    "ScatterResult",
    "validate_albedo",
    "Lambertian",
    "Metal",
    "Dielectric",
]
