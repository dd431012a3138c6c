"""Thin-lens camera model for perspective ray generation.

This module implements a thin-lens camera that generates primary rays for
rendering. The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view specification
- Arbitrary aspect ratios
- Depth of field through a finite lens aperture focused at focus_dist
- Motion blur through a per-ray time sample drawn from the shutter interval

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

If the view direction is parallel to vup the basis degenerates (u and v become
zero vectors). This is the caller's responsibility; the camera does not raise
and simply produces rays along the view direction.

Example:
    >>> import random
    >>> from pathtracer.camera.thin_lens import ThinLensCamera
    >>> from pathtracer.core.vector import Vec3
    >>>
    >>> camera = ThinLensCamera(
    ...     lookfrom=Vec3(0.0, 0.0, 3.0),
    ...     lookat=Vec3(0.0, 0.0, 0.0),
    ...     vup=Vec3(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> ray = camera.get_ray(0.5, 0.5, random.Random(1))  # Ray through image center
"""

from __future__ import annotations

import math

from pathtracer.core.ray import Ray, Rng, random_in_unit_disk
from pathtracer.core.vector import Vec3

# =============================================================================
# Thin-Lens Camera
# =============================================================================


class ThinLensCamera:
    """Thin-lens camera with depth of field and a shutter interval.

    All derived state is computed once in the constructor; the camera is
    read-only afterwards and may be shared by all worker threads.

    Attributes:
        lookfrom: Camera position in world space.
        lookat: Point the camera is looking at in world space.
        vup: Up direction hint for camera orientation.
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter. 0 gives a pinhole camera (no blur).
        focus_dist: Distance from lookfrom to the plane of perfect focus.
        shutter: (open, close) times. Equal values disable motion blur.
        lens_radius: aperture / 2.
    """

    def __init__(
        self,
        lookfrom: Vec3 | tuple[float, float, float],
        lookat: Vec3 | tuple[float, float, float],
        vup: Vec3 | tuple[float, float, float] = (0.0, 1.0, 0.0),
        vfov: float = 90.0,
        aspect_ratio: float = 1.0,
        aperture: float = 0.0,
        focus_dist: float = 1.0,
        shutter: tuple[float, float] = (0.0, 0.0),
    ) -> None:
        if not 0.0 < vfov < 180.0:
            raise ValueError(f"Vertical field of view = {vfov} must be in (0, 180) degrees")
        if aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio = {aspect_ratio} must be positive")
        if aperture < 0.0:
            raise ValueError(f"Aperture = {aperture} must be non-negative")
        if focus_dist <= 0.0:
            raise ValueError(f"Focus distance = {focus_dist} must be positive")
        if shutter[0] > shutter[1]:
            raise ValueError(f"Shutter interval {shutter} must satisfy open <= close")

        self.lookfrom = Vec3.of(lookfrom)
        self.lookat = Vec3.of(lookat)
        self.vup = Vec3.of(vup)
        self.vfov = float(vfov)
        self.aspect_ratio = float(aspect_ratio)
        self.aperture = float(aperture)
        self.focus_dist = float(focus_dist)
        self.shutter = (float(shutter[0]), float(shutter[1]))
        self.lens_radius = self.aperture / 2.0

        # Viewport dimensions at unit distance
        h = math.tan(math.radians(self.vfov) / 2.0)
        viewport_height = 2.0 * h
        viewport_width = self.aspect_ratio * viewport_height

        # Orthonormal basis
        self._w = (self.lookfrom - self.lookat).normalize()
        self._u = self.vup.cross(self._w).normalize()
        self._v = self._w.cross(self._u)

        # Viewport spans, scaled out to the focus plane
        self._horizontal = self._u * (self.focus_dist * viewport_width)
        self._vertical = self._v * (self.focus_dist * viewport_height)
        self._lower_left = (
            self.lookfrom
            - self._horizontal / 2.0
            - self._vertical / 2.0
            - self._w * self.focus_dist
        )

    @property
    def origin(self) -> Vec3:
        """The camera position (center of the lens)."""
        return self.lookfrom

    @property
    def motion_blur(self) -> bool:
        """Whether rays carry a randomly sampled time."""
        return self.shutter[1] > self.shutter[0]

    def basis(self) -> tuple[Vec3, Vec3, Vec3]:
        """Get the camera's orthonormal basis vectors.

        Returns:
            A tuple (u, v, w) where:
            - u: Right direction in world space
            - v: Up direction in world space
            - w: Backward direction (opposite view direction)
        """
        return self._u, self._v, self._w

    def viewport(self) -> tuple[Vec3, Vec3, Vec3]:
        """Get (lower_left, horizontal, vertical) of the focus-plane viewport."""
        return self._lower_left, self._horizontal, self._vertical

    # =========================================================================
    # Ray Generation
    # =========================================================================

    def get_ray(self, s: float, t: float, rng: Rng) -> Ray:
        """Generate a ray through normalized image coordinates (s, t).

        The coordinates are normalized:
        - s = 0: left edge of image, s = 1: right edge
        - t = 0: bottom edge of image, t = 1: top edge

        The ray origin is jittered across the lens disk (depth of field) and
        the ray direction aims at the corresponding point on the focus plane,
        so points on that plane stay sharp.

        Args:
            s: Horizontal coordinate in [0, 1] (left to right).
            t: Vertical coordinate in [0, 1] (bottom to top).
            rng: The caller's random number generator.

        Returns:
            A Ray with a lens-offset origin and a shutter time sample.
        """
        origin = self.lookfrom
        if self.lens_radius > 0.0:
            rd = random_in_unit_disk(rng) * self.lens_radius
            origin = origin + self._u * rd.x + self._v * rd.y

        target = self._lower_left + self._horizontal * s + self._vertical * t

        if self.motion_blur:
            time = rng.uniform(self.shutter[0], self.shutter[1])
        else:
            time = self.shutter[0]

        return Ray(origin, target - origin, time)

    def __repr__(self) -> str:
        return (
            f"ThinLensCamera(lookfrom={self.lookfrom!r}, lookat={self.lookat!r}, "
            f"vfov={self.vfov}, aspect_ratio={self.aspect_ratio}, "
            f"aperture={self.aperture}, focus_dist={self.focus_dist}, "
            f"shutter={self.shutter})"
        )
