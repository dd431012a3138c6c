"""Scene-level nearest-hit queries over an ordered list of objects.

The world stores (surface, material) bindings in insertion order. A traversal
tests every object, shrinking the upper end of the valid t range each time a
closer hit is found, so the returned hit is the nearest one regardless of the
order in which objects were added.

The world is append-only while a scene is being built. The renderer freezes it
before starting worker threads; after that it is only read, which makes
concurrent traversals safe without locking.

Example:
    >>> from pathtracer.core.vector import Vec3
    >>> from pathtracer.geometry.sphere import Sphere
    >>> from pathtracer.materials import Lambertian
    >>> from pathtracer.scene.world import World
    >>> world = World()
    >>> world.add(Sphere(Vec3(0.0, 0.0, -1.0), 0.5), Lambertian((0.5, 0.5, 0.5)))
    0
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from pathtracer.core.ray import Ray
from pathtracer.geometry.sphere import HitRecord, Surface
from pathtracer.materials import Material


@dataclass(frozen=True, slots=True)
class SceneObject:
    """A surface bound to the material that shades it.

    Attributes:
        surface: The geometric primitive.
        material: The scattering model applied at hits on the surface.
    """

    surface: Surface
    material: Material


class World:
    """Ordered, append-only collection of scene objects."""

    def __init__(self, objects: Iterable[SceneObject] = ()) -> None:
        self._objects: list[SceneObject] = list(objects)
        self._frozen = False

    def add(self, surface: Surface, material: Material) -> int:
        """Bind a surface to a material and append it to the scene.

        Args:
            surface: The primitive to add.
            material: The material assigned to the primitive.

        Returns:
            The index of the added object.

        Raises:
            RuntimeError: If the world has been frozen for rendering.
        """
        if self._frozen:
            raise RuntimeError("Cannot add objects to a world that is being rendered")
        self._objects.append(SceneObject(surface, material))
        return len(self._objects) - 1

    def freeze(self) -> None:
        """Make the world read-only. Idempotent."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def objects(self) -> tuple[SceneObject, ...]:
        return tuple(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[SceneObject]:
        return iter(self._objects)

    def traverse(
        self,
        ray: Ray,
        t_min: float,
        t_max: float = math.inf,
    ) -> tuple[HitRecord, Material] | None:
        """Find the nearest intersection along a ray.

        Args:
            ray: The ray to trace.
            t_min: Minimum t value to consider a valid hit.
            t_max: Exclusive upper bound on t.

        Returns:
            The closest hit record and the material of the object hit, or
            None if the ray hits nothing in [t_min, t_max).
        """
        closest_t = t_max
        result = None

        for obj in self._objects:
            rec = obj.surface.hit(ray, t_min, closest_t)
            if rec is not None:
                closest_t = rec.t
                result = (rec, obj.material)

        return result

    def __repr__(self) -> str:
        return f"World(objects={len(self._objects)}, frozen={self._frozen})"
