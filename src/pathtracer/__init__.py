"""A Monte Carlo path tracer for scenes of spheres.

This package renders spheres with diffuse, metal and glass materials into an
8-bit RGB image, with support for:
- Thin-lens depth of field and motion blur
- Depth-bounded path tracing against a sky gradient
- Tile-based rendering on a pool of worker threads

Subpackages:
    core: Vectors, rays, the integrator, color output and the renderer
    geometry: Sphere primitive and hit records
    materials: Lambertian, metal and dielectric scattering models
    scene: Object storage, nearest-hit traversal and demo scenes
    camera: Thin-lens camera with ray generation
    preview: PNG export
"""

__version__ = "0.1.0"
