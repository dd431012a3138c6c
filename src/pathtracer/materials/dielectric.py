"""Dielectric (glass/water) material implementation.

This module implements the dielectric BSDF, which models transparent materials
like glass and water with refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when sin(theta_t) > 1

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.
"""

from __future__ import annotations

import math

from pathtracer.core.ray import Ray, Rng, reflect, refract, schlick_reflectance
from pathtracer.core.vector import Color
from pathtracer.geometry.sphere import HitRecord
from pathtracer.materials.material import ScatterResult

# Dielectrics don't absorb light
WHITE = Color(1.0, 1.0, 1.0)


class Dielectric:
    """Dielectric (glass/water) material properties.

    Attributes:
        ior: Index of refraction. Common values:
            - Air: 1.0
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
    """

    __slots__ = ("ior",)

    def __init__(self, ior: float = 1.5) -> None:
        if ior <= 0.0:
            raise ValueError(f"Index of refraction = {ior} must be positive")
        self.ior = float(ior)

    def refraction_ratio(self, front_face: bool) -> float:
        """Ratio n_incident / n_transmitted for the side the ray arrives on.

        Hitting from outside (air to glass) gives 1/ior; from inside, ior.
        """
        return 1.0 / self.ior if front_face else self.ior

    @staticmethod
    def reflectance(cos_theta: float, refraction_ratio: float) -> float:
        """Schlick reflectance for the given incidence cosine."""
        return schlick_reflectance(cos_theta, refraction_ratio)

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: Rng) -> ScatterResult:
        """Reflect or refract the incoming ray.

        Reflects on total internal reflection or when the Schlick reflectance
        beats a uniform random draw; refracts otherwise. Never absorbs.

        Args:
            ray_in: The incoming ray.
            hit: The intersection record; front_face selects the ratio.
            rng: The caller's random number generator.

        Returns:
            White attenuation and the reflected or refracted ray.
        """
        ratio = self.refraction_ratio(hit.front_face)

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(hit.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = ratio * sin_theta > 1.0
        if cannot_refract or self.reflectance(cos_theta, ratio) > rng.random():
            direction = reflect(unit_direction, hit.normal)
        else:
            direction = refract(unit_direction, hit.normal, ratio)

        return ScatterResult(WHITE, Ray(hit.point, direction, ray_in.time))

    def __repr__(self) -> str:
        return f"Dielectric(ior={self.ior})"
