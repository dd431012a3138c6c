"""Tests for the demo scenes and their cameras."""

import math
import random

import pytest

from pathtracer.core.vector import Vec3
from pathtracer.materials import Dielectric, Lambertian, Metal
from pathtracer.scene import (
    random_scene,
    random_scene_camera,
    three_sphere_camera,
    three_sphere_scene,
)


class TestThreeSphereScene:
    """Tests for the three-sphere scene."""

    def test_object_count(self):
        assert len(three_sphere_scene()) == 5

    def test_hollow_glass_shell(self):
        """The left sphere is a glass shell with a negative-radius inner surface."""
        objects = three_sphere_scene().objects
        left = [obj for obj in objects if obj.surface.center == Vec3(-1.0, 0.0, -1.0)]
        assert sorted(obj.surface.radius for obj in left) == [-0.45, 0.5]
        assert all(isinstance(obj.material, Dielectric) for obj in left)

    def test_camera_focuses_on_lookat(self):
        camera = three_sphere_camera(16.0 / 9.0)
        assert camera.lookfrom == Vec3(3.0, 3.0, 2.0)
        assert math.isclose(camera.focus_dist, math.sqrt(27.0))
        assert camera.vfov == 20.0
        assert not camera.motion_blur


class TestRandomScene:
    """Tests for the random many-spheres scene."""

    def test_object_count(self):
        assert len(random_scene(random.Random(0))) == 1 + 23 * 23 + 3

    def test_same_seed_same_scene(self):
        a = random_scene(random.Random(5))
        b = random_scene(random.Random(5))
        assert [repr(obj) for obj in a] == [repr(obj) for obj in b]

    def test_small_spheres_on_grid(self):
        objects = random_scene(random.Random(1)).objects[1:-3]
        for obj in objects:
            assert obj.surface.radius == 0.2
            assert obj.surface.center.y == 0.2

    def test_only_diffuse_spheres_move(self):
        objects = random_scene(random.Random(2)).objects[1:-3]
        for obj in objects:
            if obj.surface.is_moving:
                assert isinstance(obj.material, Lambertian)
                delta = obj.surface.center_end - obj.surface.center
                assert delta.x == 0.0 and delta.z == 0.0
                assert 0.0 <= delta.y <= 0.5

    def test_material_mix(self):
        objects = random_scene(random.Random(3)).objects[1:-3]
        counts = {
            kind: sum(isinstance(obj.material, kind) for obj in objects)
            for kind in (Lambertian, Metal, Dielectric)
        }
        assert counts[Lambertian] > counts[Metal] > counts[Dielectric] > 0

    def test_feature_spheres(self):
        big = random_scene(random.Random(4)).objects[-3:]
        assert [obj.surface.center for obj in big] == [
            Vec3(0.0, 1.0, 0.0),
            Vec3(-4.0, 1.0, 0.0),
            Vec3(4.0, 1.0, 0.0),
        ]
        assert [type(obj.material) for obj in big] == [Dielectric, Lambertian, Metal]

    def test_camera_has_open_shutter(self):
        camera = random_scene_camera(3.0 / 2.0)
        assert camera.shutter == (0.0, 1.0)
        assert camera.focus_dist == 10.0
        assert camera.aperture == 0.1


class FixedRollRng:
    """Generator whose material roll is fixed; other draws come from a seeded stream."""

    def __init__(self, roll):
        self.roll = roll
        self._stream = random.Random(0)

    def random(self):
        return self._stream.random()

    def uniform(self, a, b):
        return self._stream.uniform(a, b)

    def randint(self, a, b):
        assert (a, b) == (0, 100)
        return self.roll


class TestMaterialRoll:
    """Tests for the 0..=100 material roll of the grid spheres."""

    @pytest.mark.parametrize(
        "roll, kind",
        [
            (0, Lambertian),
            (79, Lambertian),
            (80, Metal),
            (94, Metal),
            (95, Dielectric),
            (100, Dielectric),
        ],
    )
    def test_roll_boundaries(self, roll, kind):
        objects = random_scene(FixedRollRng(roll)).objects[1:-3]
        assert all(isinstance(obj.material, kind) for obj in objects)
