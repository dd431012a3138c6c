"""Ray data structure and vector utilities for Monte Carlo ray tracing.

This module provides the fundamental Ray dataclass together with the reflection,
refraction and random sampling helpers shared by the camera and the materials.

Randomness is never drawn from global state: every sampling function receives
the caller's random number generator, so each worker thread can own an
independent, seedable stream.

Example:
    >>> import random
    >>> from pathtracer.core.ray import Ray, random_in_unit_disk
    >>> from pathtracer.core.vector import Vec3
    >>> ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)
    Vec3(0.0, 0.0, -5.0)
    >>> p = random_in_unit_disk(random.Random(7))
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from pathtracer.core.vector import Vec3


class Rng(Protocol):
    """Source of uniform random numbers.

    ``random.Random`` satisfies this protocol.
    """

    def random(self) -> float: ...

    def uniform(self, a: float, b: float) -> float: ...

    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray with an origin point, a direction and a time sample.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be
            unit length.
        time: Time sample inside the camera shutter interval, used to
            position moving spheres (motion blur).
    """

    origin: Vec3
    direction: Vec3
    time: float = 0.0

    def at(self, t: float) -> Vec3:
        """Compute the point origin + t * direction."""
        return self.origin + self.direction * t


# =============================================================================
# Reflection and Refraction
# =============================================================================


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector.
    """
    return incident - normal * (2.0 * incident.dot(normal))


def refract(incident: Vec3, normal: Vec3, eta: float) -> Vec3:
    """Refract a unit incident vector through a surface using Snell's law.

    The perpendicular and parallel parts of the transmitted direction are
    computed separately. The caller is responsible for checking total internal
    reflection first; the absolute value under the square root only keeps the
    result finite when it did not.

    Args:
        incident: The incoming direction (normalized).
        normal: The surface normal facing the incident ray (normalized).
        eta: Ratio of refractive indices (n_incident / n_transmitted).

    Returns:
        The refracted direction vector.
    """
    cos_theta = min(-incident.dot(normal), 1.0)
    perpendicular = (incident + normal * cos_theta) * eta
    parallel = normal * -math.sqrt(abs(1.0 - perpendicular.length_squared()))
    return perpendicular + parallel


def schlick_reflectance(cosine: float, ref_idx: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between incident direction and normal.
        ref_idx: Ratio of refractive indices.

    Returns:
        The approximate reflectance; exactly r0 at normal incidence.
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_in_unit_disk(rng: Rng) -> Vec3:
    """Generate a random point strictly inside the unit disk in the xy-plane.

    Uses rejection sampling over the square [-1, 1]^2. Used for thin-lens
    depth of field.

    Returns:
        A random point (x, y, 0) with x^2 + y^2 < 1.
    """
    while True:
        x = rng.uniform(-1.0, 1.0)
        y = rng.uniform(-1.0, 1.0)
        if x * x + y * y < 1.0:
            return Vec3(x, y, 0.0)


def random_in_unit_sphere(rng: Rng) -> Vec3:
    """Generate a random point inside the unit sphere.

    Points too close to the center are rejected as well, so the result can be
    normalized without producing NaN or infinite components.

    Returns:
        A random point with 1e-4 < length < 1.
    """
    while True:
        p = Vec3(rng.uniform(-1.0, 1.0), rng.uniform(-1.0, 1.0), rng.uniform(-1.0, 1.0))
        length_sq = p.length_squared()
        if 1e-8 < length_sq < 1.0:
            return p


def random_unit_vector(rng: Rng) -> Vec3:
    """Generate a random unit vector uniformly distributed on the sphere."""
    return random_in_unit_sphere(rng).normalize()
