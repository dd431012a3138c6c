"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive (optionally moving) with ray-sphere intersection

Ray-object intersection follows the pattern:
    record = surface.hit(ray, t_min, t_max)  # HitRecord or None
"""

from .sphere import HitRecord, Sphere, Surface

__all__ = [
    "Sphere",
    "Surface",
    "HitRecord",
]
