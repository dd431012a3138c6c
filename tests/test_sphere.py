"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (front face)
- Ray missing sphere
- Ray starting inside sphere (back face)
- t range bounds (t_min inclusive, t_max exclusive)
- Negative radius and moving spheres
"""

import math

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vec3
from pathtracer.geometry.sphere import HitRecord, Sphere

INF = math.inf


class TestSphereBasics:
    """Tests for Sphere construction."""

    def test_zero_radius_rejected(self):
        with pytest.raises(ValueError, match="non-zero"):
            Sphere(Vec3(0.0, 0.0, 0.0), 0.0)

    def test_stationary_center(self):
        sphere = Sphere(Vec3(1.0, 2.0, 3.0), 0.5)
        assert not sphere.is_moving
        assert sphere.center_at(0.7) == Vec3(1.0, 2.0, 3.0)

    def test_moving_center_interpolates(self):
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), 0.5, Vec3(0.0, 2.0, 0.0))
        assert sphere.is_moving
        assert sphere.center_at(0.0) == Vec3(0.0, 0.0, 0.0)
        assert sphere.center_at(0.5) == Vec3(0.0, 1.0, 0.0)
        assert sphere.center_at(1.0) == Vec3(0.0, 2.0, 0.0)


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_hit_sphere_direct_hit(self):
        """Ray from z=5 toward a unit sphere at the origin hits at t=4."""
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), 1.0)
        rec = sphere.hit(Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0)), 0.001, INF)

        assert rec is not None
        assert math.isclose(rec.t, 4.0)
        assert rec.point == Vec3(0.0, 0.0, 1.0)
        assert rec.normal == Vec3(0.0, 0.0, 1.0)
        assert rec.front_face

    def test_through_center_distance(self):
        """For a ray through the center, t = |O - C| - r and the normal opposes the ray."""
        center = Vec3(1.0, 2.0, -3.0)
        origin = Vec3(4.0, 6.0, -3.0)
        sphere = Sphere(center, 2.0)
        direction = (center - origin).normalize()

        rec = sphere.hit(Ray(origin, direction), 0.001, INF)

        assert rec is not None
        assert math.isclose(rec.t, (origin - center).length() - 2.0)
        assert math.isclose(rec.normal.dot(direction), -1.0)

    def test_hit_sphere_miss(self):
        sphere = Sphere(Vec3(0.0, 0.0, -1.0), 0.5)
        assert sphere.hit(Ray(Vec3(0.0, 2.0, 0.0), Vec3(0.0, 0.0, -1.0)), 0.001, INF) is None

    def test_sphere_behind_ray_misses(self):
        sphere = Sphere(Vec3(0.0, 0.0, 5.0), 1.0)
        assert sphere.hit(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0)), 0.001, INF) is None

    def test_hit_from_inside_is_back_face(self):
        """A ray starting inside hits the far side; the normal is flipped inward."""
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), 1.0)
        rec = sphere.hit(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0)), 0.001, INF)

        assert rec is not None
        assert math.isclose(rec.t, 1.0)
        assert not rec.front_face
        assert rec.normal == Vec3(0.0, 0.0, 1.0)

    def test_normal_always_opposes_ray(self):
        sphere = Sphere(Vec3(0.0, 0.0, -2.0), 1.0)
        for origin in (Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -2.0), Vec3(0.3, 0.2, -2.5)):
            direction = Vec3(0.1, -0.05, -1.0)
            rec = sphere.hit(Ray(origin, direction), 0.001, INF)
            assert rec is not None
            assert rec.normal.dot(direction) <= 0.0

    def test_t_max_is_exclusive(self):
        sphere = Sphere(Vec3(0.0, 0.0, -5.0), 1.0)
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        # Near root at t=4, far root at t=6
        assert sphere.hit(ray, 0.001, 4.0) is None
        assert math.isclose(sphere.hit(ray, 0.001, 4.5).t, 4.0)

    def test_near_root_below_t_min_uses_far_root(self):
        sphere = Sphere(Vec3(0.0, 0.0, -5.0), 1.0)
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        rec = sphere.hit(ray, 4.5, INF)
        assert rec is not None
        assert math.isclose(rec.t, 6.0)
        assert not rec.front_face

    def test_tangent_ray_hits(self):
        sphere = Sphere(Vec3(0.0, 1.0, -5.0), 1.0)
        rec = sphere.hit(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0)), 0.001, INF)
        assert rec is not None
        assert math.isclose(rec.t, 5.0)

    def test_zero_direction_misses(self):
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), 1.0)
        assert sphere.hit(Ray(Vec3(0.0, 0.0, 0.5), Vec3(0.0, 0.0, 0.0)), 0.001, INF) is None


class TestNegativeAndMovingSpheres:
    """Tests for hollow shells and motion blur."""

    def test_negative_radius_flips_normal(self):
        """The outward normal of a negative-radius sphere points inward."""
        sphere = Sphere(Vec3(0.0, 0.0, 0.0), -1.0)
        rec = sphere.hit(Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0)), 0.001, INF)

        assert rec is not None
        assert math.isclose(rec.t, 4.0)
        # The inward-pointing outward normal agrees with the ray: back face
        assert not rec.front_face
        assert rec.normal == Vec3(0.0, 0.0, 1.0)

    def test_moving_sphere_uses_ray_time(self):
        """At time 1 the sphere has moved to center_end."""
        sphere = Sphere(Vec3(0.0, 0.0, -5.0), 1.0, Vec3(0.0, 10.0, -5.0))
        down_z = Vec3(0.0, 0.0, -1.0)

        assert sphere.hit(Ray(Vec3(), down_z, 0.0), 0.001, INF) is not None
        assert sphere.hit(Ray(Vec3(), down_z, 1.0), 0.001, INF) is None

        rec = sphere.hit(Ray(Vec3(0.0, 10.0, 0.0), down_z, 1.0), 0.001, INF)
        assert rec is not None
        assert math.isclose(rec.t, 4.0)


class TestHitRecord:
    """Tests for HitRecord construction."""

    def test_from_outward_normal_front(self):
        ray = Ray(Vec3(), Vec3(0.0, 0.0, -1.0))
        rec = HitRecord.from_outward_normal(Vec3(0.0, 0.0, -1.0), Vec3(0.0, 0.0, 1.0), 1.0, ray)
        assert rec.front_face
        assert rec.normal == Vec3(0.0, 0.0, 1.0)

    def test_from_outward_normal_back(self):
        ray = Ray(Vec3(), Vec3(0.0, 0.0, -1.0))
        rec = HitRecord.from_outward_normal(Vec3(0.0, 0.0, -1.0), Vec3(0.0, 0.0, -1.0), 1.0, ray)
        assert not rec.front_face
        assert rec.normal == Vec3(0.0, 0.0, 1.0)
