"""Sphere primitive with ray-sphere intersection.

This module provides the Sphere surface and the HitRecord produced by its
intersection query. A sphere may move linearly between two centers over the
shutter interval; the ray's time sample selects the center used for the test
(motion blur).

The ray-sphere intersection is found by solving:
    |ray_origin + t * ray_direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + 2*h*t + c = 0

where:
    a = dot(direction, direction)
    h = dot(direction, oc)  (half of traditional b)
    c = dot(oc, oc) - radius^2
    oc = origin - center

Example:
    >>> from pathtracer.core.ray import Ray
    >>> from pathtracer.core.vector import Vec3
    >>> from pathtracer.geometry.sphere import Sphere
    >>> sphere = Sphere(Vec3(0.0, 0.0, -1.0), 0.5)
    >>> rec = sphere.hit(Ray(Vec3(0, 0, 0), Vec3(0, 0, -1)), 0.001, float("inf"))
    >>> rec.t
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vec3


@dataclass(frozen=True, slots=True)
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        point: The 3D point where the ray intersected the surface.
        normal: The surface normal at the intersection point (unit length for
            spheres). Always points against the incoming ray, so
            dot(normal, ray.direction) <= 0.
        t: The parameter value along the ray where intersection occurred.
        front_face: Whether the un-flipped outward normal already opposed the
            ray, i.e. the ray arrived from outside the surface.
    """

    point: Vec3
    normal: Vec3
    t: float
    front_face: bool

    @classmethod
    def from_outward_normal(
        cls, point: Vec3, outward_normal: Vec3, t: float, ray: Ray
    ) -> HitRecord:
        """Build a record, flipping the normal to face the incoming ray."""
        front_face = ray.direction.dot(outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal
        return cls(point=point, normal=normal, t=t, front_face=front_face)


class Sphere:
    """A sphere defined by center point and radius.

    A negative radius is allowed and flips the outward normal inward, which is
    how a hollow glass shell is modelled (a second, slightly smaller sphere
    with negative radius inside a dielectric sphere).

    Attributes:
        center: The center of the sphere at time 0.
        radius: The radius of the sphere (non-zero).
        center_end: The center at time 1 for a moving sphere, or None for a
            stationary one.
    """

    __slots__ = ("center", "radius", "center_end")

    def __init__(self, center: Vec3, radius: float, center_end: Vec3 | None = None) -> None:
        if radius == 0.0:
            raise ValueError("Sphere radius must be non-zero")
        self.center = center
        self.radius = float(radius)
        self.center_end = center_end

    @property
    def is_moving(self) -> bool:
        """Whether the sphere center moves over the shutter interval."""
        return self.center_end is not None

    def center_at(self, time: float) -> Vec3:
        """Get the sphere center at the given time sample."""
        if self.center_end is None:
            return self.center
        return self.center.lerp(self.center_end, time)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Test for the nearest ray-sphere intersection in [t_min, t_max).

        The smaller root is tried first; if it lies outside the range the
        larger root is tried; if both are outside there is no hit.

        Args:
            ray: The ray to test. Its time sample positions a moving sphere.
            t_min: Minimum t value to consider a valid hit (avoids
                self-intersection).
            t_max: Exclusive upper bound on t (the nearest hit found so far).

        Returns:
            A HitRecord for the nearest valid root, or None on a miss.
        """
        center = self.center_at(ray.time)
        oc = ray.origin - center

        # Quadratic coefficients using half-b formulation for numerical stability
        a = ray.direction.length_squared()
        h = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0.0 or a == 0.0:
            return None

        sqrt_d = math.sqrt(discriminant)

        root = (-h - sqrt_d) / a
        if root < t_min or root >= t_max:
            root = (-h + sqrt_d) / a
            if root < t_min or root >= t_max:
                return None

        point = ray.at(root)
        outward_normal = (point - center) / self.radius
        return HitRecord.from_outward_normal(point, outward_normal, root, ray)

    def __repr__(self) -> str:
        if self.center_end is None:
            return f"Sphere(center={self.center!r}, radius={self.radius})"
        return (
            f"Sphere(center={self.center!r}, radius={self.radius}, "
            f"center_end={self.center_end!r})"
        )


# Closed set of surface variants
Surface = Sphere
