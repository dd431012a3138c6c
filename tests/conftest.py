"""Pytest configuration for path tracer tests.

This module provides shared fixtures: a seeded random number generator, small
worlds and a camera small enough to render in a test.
"""

import random

import pytest

from pathtracer.camera.thin_lens import ThinLensCamera
from pathtracer.core.vector import Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials import Dielectric, Lambertian, Metal
from pathtracer.scene.world import World


@pytest.fixture
def rng():
    """A seeded generator so every test sees the same random stream."""
    return random.Random(42)


@pytest.fixture
def empty_world():
    return World()


@pytest.fixture
def single_sphere_world():
    """One diffuse sphere of radius 0.5 at (0, 0, -1)."""
    world = World()
    world.add(Sphere(Vec3(0.0, 0.0, -1.0), 0.5), Lambertian((0.5, 0.5, 0.5)))
    return world


@pytest.fixture
def small_world():
    """Ground, a diffuse sphere, a glass sphere and a metal sphere."""
    world = World()
    world.add(Sphere(Vec3(0.0, -100.5, -1.0), 100.0), Lambertian((0.8, 0.8, 0.0)))
    world.add(Sphere(Vec3(0.0, 0.0, -1.0), 0.5), Lambertian((0.1, 0.2, 0.5)))
    world.add(Sphere(Vec3(-1.0, 0.0, -1.0), 0.5), Dielectric(1.5))
    world.add(Sphere(Vec3(1.0, 0.0, -1.0), 0.5), Metal((0.8, 0.6, 0.2), 0.3))
    return world


@pytest.fixture
def front_camera():
    """Pinhole camera at the origin looking down -z."""
    return ThinLensCamera(
        lookfrom=Vec3(0.0, 0.0, 0.0),
        lookat=Vec3(0.0, 0.0, -1.0),
        vup=Vec3(0.0, 1.0, 0.0),
        vfov=90.0,
        aspect_ratio=4.0 / 3.0,
    )
