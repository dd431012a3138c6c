"""Scene module for object storage and demo scenes.

Components:
    world: Ordered (surface, material) bindings and nearest-hit traversal
    presets: Demo scenes (three spheres, random spheres) and their cameras
"""

from .presets import (
    random_scene,
    random_scene_camera,
    three_sphere_camera,
    three_sphere_scene,
)
from .world import SceneObject, World

__all__ = [
    "World",
    "SceneObject",
    "three_sphere_scene",
    "three_sphere_camera",
    "random_scene",
    "random_scene_camera",
]
