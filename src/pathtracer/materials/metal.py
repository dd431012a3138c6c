"""Metal (specular reflective) material implementation.

This module implements the metal BSDF, which models specular reflection with
optional fuzziness. Perfect metals (fuzz=0) produce mirror-like reflections,
while fuzzier metals scatter reflected rays within a sphere around the mirror
direction.

The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the surface normal.

The ray is absorbed when the perturbed direction ends up below the surface,
which darkens grazing and rough reflections.
"""

from __future__ import annotations

from pathtracer.core.ray import Ray, Rng, random_in_unit_sphere, reflect
from pathtracer.core.vector import Vec3
from pathtracer.geometry.sphere import HitRecord
from pathtracer.materials.material import ScatterResult, validate_albedo


class Metal:
    """Metal material properties.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: The surface fuzziness in [0, 1]. 0 = perfect mirror.
    """

    __slots__ = ("albedo", "fuzz")

    def __init__(self, albedo: Vec3 | tuple[float, float, float], fuzz: float = 0.0) -> None:
        if not 0.0 <= fuzz <= 1.0:
            raise ValueError(f"Fuzz = {fuzz} is outside [0, 1]")
        self.albedo = validate_albedo(albedo)
        self.fuzz = float(fuzz)

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: Rng) -> ScatterResult | None:
        """Compute the scattered ray for a metal surface.

        Args:
            ray_in: The incoming ray.
            hit: The intersection record.
            rng: The caller's random number generator.

        Returns:
            The albedo and the reflected ray, or None if the perturbed
            direction points into the surface (absorbed).
        """
        reflected = reflect(ray_in.direction, hit.normal).normalize()
        direction = reflected
        if self.fuzz > 0.0:
            direction = reflected + random_in_unit_sphere(rng) * self.fuzz

        if direction.dot(hit.normal) <= 0.0:
            return None

        return ScatterResult(self.albedo, Ray(hit.point, direction, ray_in.time))

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo!r}, fuzz={self.fuzz})"
