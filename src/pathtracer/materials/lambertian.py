"""Lambertian (ideal diffuse) material implementation.

The scattered direction is the surface normal plus a random unit vector, which
yields a cosine-weighted distribution over the hemisphere around the normal.
The attenuation is simply the albedo; the 1/pi of the BRDF cancels against the
cosine-weighted sampling density.

Example:
    >>> import random
    >>> from pathtracer.materials.lambertian import Lambertian
    >>> material = Lambertian((0.8, 0.3, 0.3))
    >>> # result = material.scatter(ray_in, hit, random.Random(0))
"""

from __future__ import annotations

from pathtracer.core.ray import Ray, Rng, random_unit_vector
from pathtracer.core.vector import Vec3
from pathtracer.geometry.sphere import HitRecord
from pathtracer.materials.material import ScatterResult, validate_albedo

# Scatter directions shorter than this (squared) fall back to the normal
DEGENERATE_DIRECTION_EPSILON = 1e-3


class Lambertian:
    """Ideal diffuse reflector.

    Attributes:
        albedo: The diffuse reflectance color, each component in [0, 1].
    """

    __slots__ = ("albedo",)

    def __init__(self, albedo: Vec3 | tuple[float, float, float]) -> None:
        self.albedo = validate_albedo(albedo)

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: Rng) -> ScatterResult:
        """Scatter a ray according to the Lambertian model.

        Never absorbs: a result is returned for every hit.

        Args:
            ray_in: The incoming ray.
            hit: The intersection record.
            rng: The caller's random number generator.

        Returns:
            The albedo and a ray leaving the hit point.
        """
        direction = hit.normal + random_unit_vector(rng)

        # The random vector can nearly cancel the normal
        if direction.length_squared() < DEGENERATE_DIRECTION_EPSILON:
            direction = hit.normal

        return ScatterResult(self.albedo, Ray(hit.point, direction, ray_in.time))

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo!r})"
