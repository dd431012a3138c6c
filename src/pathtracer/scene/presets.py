"""Ready-made demo scenes and their cameras.

Two scenes are provided:

- The three-sphere scene: a large ground sphere with a diffuse sphere in the
  middle, a hollow glass sphere on the left and a polished gold sphere on the
  right, viewed from above with a slight depth of field.
- The random scene: a ground plane sphere covered by a 23x23 grid of small
  randomly placed spheres (mostly diffuse and bouncing upward during the
  shutter interval, some metal, a few glass) plus three large feature spheres.

Example:
    >>> import random
    >>> from pathtracer.scene.presets import random_scene, random_scene_camera
    >>>
    >>> world = random_scene(random.Random(42))
    >>> camera = random_scene_camera(16.0 / 9.0)
"""

from __future__ import annotations

from pathtracer.camera.thin_lens import ThinLensCamera
from pathtracer.core.ray import Rng
from pathtracer.core.vector import Color, Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials import Dielectric, Lambertian, Material, Metal
from pathtracer.scene.world import World

# =============================================================================
# Scene Constants
# =============================================================================

GLASS_IOR = 1.5

# Three-sphere scene materials
GROUND_ALBEDO = (0.8, 0.8, 0.0)
CENTER_ALBEDO = (0.1, 0.2, 0.5)
GOLD_ALBEDO = (0.8, 0.6, 0.2)

# Random scene layout
GRID_EXTENT = 11
SMALL_RADIUS = 0.2
MAX_BOUNCE_HEIGHT = 0.5

# Material roll for grid spheres, uniform over 0..=MAX_MATERIAL_ROLL
MAX_MATERIAL_ROLL = 100
DIFFUSE_ROLLS = 80
METAL_ROLLS = 15

# Default camera aperture for both scenes
DEFAULT_APERTURE = 0.1


# =============================================================================
# Three-Sphere Scene
# =============================================================================


def three_sphere_scene() -> World:
    """Create the three-sphere scene.

    The left sphere is a hollow glass shell: a dielectric sphere with a
    slightly smaller negative-radius dielectric sphere inside it.

    Returns:
        A new World with five objects.
    """
    world = World()
    glass = Dielectric(GLASS_IOR)

    # Ground
    world.add(Sphere(Vec3(0.0, -100.5, -1.0), 100.0), Lambertian(GROUND_ALBEDO))
    # Center
    world.add(Sphere(Vec3(0.0, 0.0, -1.0), 0.5), Lambertian(CENTER_ALBEDO))
    # Left (hollow glass)
    world.add(Sphere(Vec3(-1.0, 0.0, -1.0), 0.5), glass)
    world.add(Sphere(Vec3(-1.0, 0.0, -1.0), -0.45), glass)
    # Right
    world.add(Sphere(Vec3(1.0, 0.0, -1.0), 0.5), Metal(GOLD_ALBEDO, 0.0))

    return world


def three_sphere_camera(aspect_ratio: float, aperture: float = DEFAULT_APERTURE) -> ThinLensCamera:
    """Camera for the three-sphere scene, focused on the center sphere."""
    lookfrom = Vec3(3.0, 3.0, 2.0)
    lookat = Vec3(0.0, 0.0, -1.0)
    return ThinLensCamera(
        lookfrom=lookfrom,
        lookat=lookat,
        vup=Vec3(0.0, 1.0, 0.0),
        vfov=20.0,
        aspect_ratio=aspect_ratio,
        aperture=aperture,
        focus_dist=(lookfrom - lookat).length(),
    )


# =============================================================================
# Random Scene
# =============================================================================


def _random_color(rng: Rng) -> Color:
    return Color(rng.random(), rng.random(), rng.random())


def _random_small_sphere(rng: Rng, center: Vec3) -> tuple[Sphere, Material]:
    """Pick a material for one grid sphere from a roll in 0..=100.

    Rolls 0-79 give diffuse, 80-94 metal and 95-100 glass.
    """
    roll = rng.randint(0, MAX_MATERIAL_ROLL)

    if roll < DIFFUSE_ROLLS:
        # Diffuse spheres bounce upward during the shutter interval
        albedo = _random_color(rng) * _random_color(rng)
        velocity = Vec3(0.0, rng.uniform(0.0, MAX_BOUNCE_HEIGHT), 0.0)
        return Sphere(center, SMALL_RADIUS, center + velocity), Lambertian(albedo)

    if roll < DIFFUSE_ROLLS + METAL_ROLLS:
        albedo = _random_color(rng).lerp(Color(1.0, 1.0, 1.0), 0.4)
        fuzz = rng.uniform(0.0, 0.2)
        return Sphere(center, SMALL_RADIUS), Metal(albedo, fuzz)

    return Sphere(center, SMALL_RADIUS), Dielectric(GLASS_IOR)


def random_scene(rng: Rng) -> World:
    """Create the random many-spheres scene.

    Args:
        rng: Random number generator driving placement and materials. The
            same seed always produces the same scene.

    Returns:
        A new World with 1 + 23 * 23 + 3 objects.
    """
    world = World()
    world.add(Sphere(Vec3(0.0, -1000.0, 0.0), 1000.0), Lambertian((0.5, 0.5, 0.5)))

    for a in range(-GRID_EXTENT, GRID_EXTENT + 1):
        for b in range(-GRID_EXTENT, GRID_EXTENT + 1):
            center = Vec3(a + rng.uniform(0.0, 0.9), SMALL_RADIUS, b + rng.uniform(0.0, 0.9))
            world.add(*_random_small_sphere(rng, center))

    world.add(Sphere(Vec3(0.0, 1.0, 0.0), 1.0), Dielectric(GLASS_IOR))
    world.add(Sphere(Vec3(-4.0, 1.0, 0.0), 1.0), Lambertian((0.4, 0.2, 0.1)))
    world.add(Sphere(Vec3(4.0, 1.0, 0.0), 1.0), Metal((0.7, 0.6, 0.5), 0.0))

    return world


def random_scene_camera(aspect_ratio: float, aperture: float = DEFAULT_APERTURE) -> ThinLensCamera:
    """Camera for the random scene with the shutter open over [0, 1]."""
    return ThinLensCamera(
        lookfrom=Vec3(13.0, 2.0, 3.0),
        lookat=Vec3(0.0, 0.0, 0.0),
        vup=Vec3(0.0, 1.0, 0.0),
        vfov=20.0,
        aspect_ratio=aspect_ratio,
        aperture=aperture,
        focus_dist=10.0,
        shutter=(0.0, 1.0),
    )
