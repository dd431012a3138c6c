"""Tests for the thin-lens camera.

Tests cover:
- Parameter validation
- Orthonormal basis construction
- Ray through the image center points at lookat
- Aperture 0 gives a pinhole (origin fixed at lookfrom)
- Shutter interval drives the ray time sample
"""

import math
import random

import pytest

from pathtracer.camera.thin_lens import ThinLensCamera
from pathtracer.core.vector import Vec3


def make_camera(**overrides):
    params = {
        "lookfrom": Vec3(0.0, 0.0, 0.0),
        "lookat": Vec3(0.0, 0.0, -1.0),
        "vup": Vec3(0.0, 1.0, 0.0),
        "vfov": 90.0,
        "aspect_ratio": 2.0,
    }
    params.update(overrides)
    return ThinLensCamera(**params)


class TestCameraValidation:
    """Tests for constructor argument validation."""

    @pytest.mark.parametrize("vfov", [0.0, 180.0, -10.0, 200.0])
    def test_invalid_vfov(self, vfov):
        with pytest.raises(ValueError, match="field of view"):
            make_camera(vfov=vfov)

    def test_invalid_aspect_ratio(self):
        with pytest.raises(ValueError, match="Aspect ratio"):
            make_camera(aspect_ratio=0.0)

    def test_invalid_aperture(self):
        with pytest.raises(ValueError, match="Aperture"):
            make_camera(aperture=-0.1)

    def test_invalid_focus_dist(self):
        with pytest.raises(ValueError, match="Focus distance"):
            make_camera(focus_dist=0.0)

    def test_invalid_shutter(self):
        with pytest.raises(ValueError, match="Shutter"):
            make_camera(shutter=(1.0, 0.0))

    def test_degenerate_basis_does_not_raise(self, rng):
        """Looking along vup collapses u and v to zero; rays still go along the view."""
        camera = ThinLensCamera(
            Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0), Vec3(0.0, 1.0, 0.0), 60.0, 1.0, aperture=0.2
        )
        u, v, _ = camera.basis()
        assert u == Vec3()
        assert v == Vec3()

        ray = camera.get_ray(0.3, 0.7, rng)
        assert all(math.isfinite(c) for c in (*ray.origin, *ray.direction))
        assert ray.origin == Vec3(0.0, 0.0, 0.0)
        assert ray.direction == Vec3(0.0, 1.0, 0.0)

    def test_accepts_tuples(self):
        camera = make_camera(lookfrom=(0.0, 0.0, 1.0), lookat=(0.0, 0.0, 0.0))
        assert camera.origin == Vec3(0.0, 0.0, 1.0)


class TestCameraBasis:
    """Tests for the (u, v, w) basis."""

    def test_default_basis(self):
        u, v, w = make_camera().basis()
        assert u == Vec3(1.0, 0.0, 0.0)
        assert v == Vec3(0.0, 1.0, 0.0)
        assert w == Vec3(0.0, 0.0, 1.0)

    def test_basis_is_orthonormal(self):
        camera = make_camera(lookfrom=Vec3(13.0, 2.0, 3.0), lookat=Vec3(0.0, 0.0, 0.0))
        u, v, w = camera.basis()
        for a in (u, v, w):
            assert math.isclose(a.length(), 1.0)
        assert math.isclose(u.dot(v), 0.0, abs_tol=1e-12)
        assert math.isclose(u.dot(w), 0.0, abs_tol=1e-12)
        assert math.isclose(v.dot(w), 0.0, abs_tol=1e-12)

    def test_viewport_size(self):
        """vfov 90 at focus distance 1 gives a viewport 2 high and 2 * aspect wide."""
        _, horizontal, vertical = make_camera().viewport()
        assert math.isclose(horizontal.length(), 4.0)
        assert math.isclose(vertical.length(), 2.0)


class TestRayGeneration:
    """Tests for get_ray."""

    def test_center_ray_points_at_lookat(self, rng):
        camera = make_camera()
        ray = camera.get_ray(0.5, 0.5, rng)
        direction = ray.direction.normalize()
        assert ray.origin == Vec3(0.0, 0.0, 0.0)
        assert math.isclose(direction.x, 0.0, abs_tol=1e-12)
        assert math.isclose(direction.y, 0.0, abs_tol=1e-12)
        assert math.isclose(direction.z, -1.0)

    def test_corners(self, rng):
        """s=0, t=0 is the lower left; s=1, t=1 the upper right."""
        camera = make_camera()
        lower_left = camera.get_ray(0.0, 0.0, rng).direction
        upper_right = camera.get_ray(1.0, 1.0, rng).direction
        assert lower_left.x < 0.0 and lower_left.y < 0.0
        assert upper_right.x > 0.0 and upper_right.y > 0.0

    def test_pinhole_origin_is_lookfrom(self):
        camera = make_camera(lookfrom=Vec3(1.0, 2.0, 3.0), aperture=0.0)
        rng = random.Random(9)
        for _ in range(50):
            assert camera.get_ray(rng.random(), rng.random(), rng).origin == Vec3(1.0, 2.0, 3.0)

    def test_lens_offset_within_radius(self):
        """With an aperture the origin moves within lens_radius in the u-v plane."""
        camera = make_camera(aperture=0.5, focus_dist=2.0)
        rng = random.Random(4)
        origins = [camera.get_ray(0.5, 0.5, rng).origin for _ in range(100)]
        for origin in origins:
            assert origin.z == 0.0
            assert origin.length() < 0.25
        assert any(origin != Vec3(0.0, 0.0, 0.0) for origin in origins)

    def test_lens_rays_converge_on_focus_plane(self):
        """Every lens sample aims at the same point on the focus plane."""
        camera = make_camera(aperture=0.5, focus_dist=3.0)
        rng = random.Random(8)
        for _ in range(20):
            ray = camera.get_ray(0.5, 0.5, rng)
            focus_point = ray.at(1.0)
            assert math.isclose(focus_point.x, 0.0, abs_tol=1e-9)
            assert math.isclose(focus_point.y, 0.0, abs_tol=1e-9)
            assert math.isclose(focus_point.z, -3.0)

    def test_closed_shutter_fixes_time(self, rng):
        camera = make_camera(shutter=(0.5, 0.5))
        assert not camera.motion_blur
        assert all(camera.get_ray(0.5, 0.5, rng).time == 0.5 for _ in range(20))

    def test_open_shutter_samples_time(self, rng):
        camera = make_camera(shutter=(0.0, 1.0))
        assert camera.motion_blur
        times = [camera.get_ray(0.5, 0.5, rng).time for _ in range(100)]
        assert all(0.0 <= t <= 1.0 for t in times)
        assert len(set(times)) > 1
