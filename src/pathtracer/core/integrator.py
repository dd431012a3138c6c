"""Path tracing integrator for Monte Carlo light transport.

This module implements ray_color, the radiance estimate for a single ray:
trace the ray into the world, let the material at each hit scatter it, and
multiply the attenuations along the path until the ray escapes to the sky or
is absorbed.

Key features:
    - Material dispatch through each material's scatter()
    - Depth-bounded termination (bounded bounce count, returns black)
    - Sky gradient background for escaped rays
    - Self-intersection avoidance with a minimum t ("shadow acne")

The recursion ray_color(r, d) = attenuation * ray_color(scattered, d - 1) is
evaluated as a loop that accumulates the attenuation product, so large maximum
depths do not grow the Python stack.

Example:
    >>> import random
    >>> from pathtracer.core.integrator import ray_color
    >>> from pathtracer.scene.presets import three_sphere_scene, three_sphere_camera
    >>>
    >>> world = three_sphere_scene()
    >>> camera = three_sphere_camera(16.0 / 9.0)
    >>> rng = random.Random(123)
    >>> color = ray_color(camera.get_ray(0.5, 0.5, rng), world, rng, depth=32)
"""

from __future__ import annotations

from pathtracer.core.ray import Ray, Rng
from pathtracer.core.vector import Color
from pathtracer.scene.world import World

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum ray bounces (path length)
MAX_DEPTH = 32

# t_min for ray intersection, excludes self-intersections from rounding error
T_MIN = 1e-3

# Background gradient endpoints
HORIZON_COLOR = Color(1.0, 1.0, 1.0)
ZENITH_COLOR = Color(0.5, 0.7, 1.0)

BLACK = Color(0.0, 0.0, 0.0)


def background(ray: Ray) -> Color:
    """Sky color for a ray that escapes the scene.

    Interpolates from white (straight down) to sky blue (straight up) by
    0.5 * (unit_direction.y + 1), independent of azimuth.

    Args:
        ray: The escaping ray.

    Returns:
        The background radiance.
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return HORIZON_COLOR.lerp(ZENITH_COLOR, t)


def ray_color(
    ray: Ray,
    world: World,
    rng: Rng,
    depth: int = MAX_DEPTH,
    t_min: float = T_MIN,
) -> Color:
    """Estimate the radiance arriving along a ray.

    Args:
        ray: The ray to trace.
        world: The scene to trace against.
        rng: The caller's random number generator.
        depth: Remaining bounce budget. 0 returns black immediately.
        t_min: Minimum hit distance for every intersection query.

    Returns:
        The estimated radiance (RGB) for this path sample.

    Raises:
        ValueError: If depth is negative.
    """
    if depth < 0:
        raise ValueError(f"depth = {depth} must be non-negative")

    # Product of all attenuations along the path
    throughput = Color(1.0, 1.0, 1.0)

    for _ in range(depth):
        found = world.traverse(ray, t_min)

        if found is None:
            # Ray escaped - sky contribution
            return throughput * background(ray)

        hit, material = found
        result = material.scatter(ray, hit, rng)
        if result is None:
            # Ray was absorbed
            return BLACK

        throughput = throughput * result.attenuation
        ray = result.scattered

    # Bounce budget exhausted
    return BLACK
