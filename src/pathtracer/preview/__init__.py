"""Preview module for output of rendered images.

Components:
    export: PNG export of the renderer's 8-bit RGB buffer (Pillow)

Example:
    >>> from pathtracer.preview import save_png
    >>> save_png(buffer, 400, 225, "spheres.png")
"""

from pathtracer.preview.export import ImageWriteError, buffer_to_image, save_png

__all__ = [
    "ImageWriteError",
    "buffer_to_image",
    "save_png",
]
