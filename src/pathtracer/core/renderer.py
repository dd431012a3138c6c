"""Tile-parallel renderer driving a fixed pool of worker threads.

This module partitions the output pixel buffer into contiguous tiles,
distributes them through a lock-protected work queue to worker threads, and
writes gamma-corrected 8-bit colors straight into the shared buffer.

Concurrency model:
    - The only shared mutable structure is the WorkQueue; its lock is held
      only while popping one tile.
    - Every tile owns a disjoint numpy view of the buffer, so writes from
      different workers never alias and need no locking.
    - Each worker owns one random.Random and reseeds it from (seed, tile index)
      before rendering a tile. Output is therefore byte-identical for a fixed
      configuration, independent of scheduling order and worker count.

Python threads share the interpreter lock, so on a standard build the pool
gives the scheduling structure rather than a CPU speed-up.

Example:
    >>> from pathtracer.core.renderer import RenderConfig, Renderer
    >>> from pathtracer.scene.presets import three_sphere_scene, three_sphere_camera
    >>>
    >>> config = RenderConfig.from_aspect_ratio(64, 16.0 / 9.0, samples_per_pixel=4)
    >>> renderer = Renderer(three_sphere_scene(), three_sphere_camera(16.0 / 9.0), config)
    >>> buffer = renderer.render()  # flat uint8 array, width * height * 3 bytes
"""

from __future__ import annotations

import logging
import os
import random
import threading
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from pathtracer.camera.thin_lens import ThinLensCamera
from pathtracer.core.color import COLOR_CHANNELS, average_samples, quantize
from pathtracer.core.integrator import MAX_DEPTH, T_MIN, ray_color
from pathtracer.core.vector import Color
from pathtracer.scene.world import World

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (finished_tiles, total_tiles)
ProgressCallback = Callable[[int, int], None]

# Default number of pixels per tile
DEFAULT_TILE_SIZE = 4096

# Default base seed for the per-tile random streams
DEFAULT_SEED = 123

# Spacing between the seeds of consecutive tiles
TILE_SEED_STRIDE = 1 << 32


# =============================================================================
# Render Configuration
# =============================================================================


@dataclass
class RenderConfig:
    """Configuration for a render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of jittered camera rays averaged per pixel.
        max_depth: Maximum number of bounces per path.
        tile_size: Number of pixels per tile (the last tile may be shorter).
        workers: Number of worker threads. None uses os.cpu_count().
        seed: Base seed for the per-tile random streams.
        t_min: Minimum hit distance, excludes self-intersections.
    """

    width: int
    height: int
    samples_per_pixel: int = 64
    max_depth: int = MAX_DEPTH
    tile_size: int = DEFAULT_TILE_SIZE
    workers: int | None = None
    seed: int = DEFAULT_SEED
    t_min: float = T_MIN

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions ({self.width}x{self.height}) must be positive"
            )
        if self.samples_per_pixel <= 0:
            raise ValueError(f"samples_per_pixel = {self.samples_per_pixel} must be positive")
        if self.max_depth < 0:
            raise ValueError(f"max_depth = {self.max_depth} must be non-negative")
        if self.tile_size <= 0:
            raise ValueError(f"tile_size = {self.tile_size} must be positive")
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers = {self.workers} must be positive")
        if self.t_min < 0.0:
            raise ValueError(f"t_min = {self.t_min} must be non-negative")

    @classmethod
    def from_aspect_ratio(cls, width: int, aspect_ratio: float, **kwargs) -> RenderConfig:
        """Create a configuration with height derived from width / aspect_ratio.

        Raises:
            ValueError: If aspect_ratio is not positive.
        """
        if aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio = {aspect_ratio} must be positive")
        height = max(1, int(width / aspect_ratio))
        return cls(width=width, height=height, **kwargs)

    @property
    def num_workers(self) -> int:
        """Worker count with the host parallelism default applied."""
        if self.workers is not None:
            return self.workers
        return os.cpu_count() or 1

    @property
    def num_pixels(self) -> int:
        return self.width * self.height

    @property
    def buffer_size(self) -> int:
        """Size of the output buffer in bytes."""
        return self.num_pixels * COLOR_CHANNELS


# =============================================================================
# Tiles and Work Queue
# =============================================================================


@dataclass
class Tile:
    """A contiguous run of pixels owned by exactly one worker.

    Attributes:
        index: Position of the tile in the buffer (0 = first tile).
        start: Index of the tile's first pixel in row-major order.
        pixels: Writable uint8 view of the tile's bytes in the shared buffer.
    """

    index: int
    start: int
    pixels: npt.NDArray[np.uint8] = field(repr=False)

    @property
    def num_pixels(self) -> int:
        return len(self.pixels) // COLOR_CHANNELS


def make_tiles(buffer: npt.NDArray[np.uint8], tile_size: int) -> list[Tile]:
    """Partition a flat RGB buffer into disjoint tiles of tile_size pixels.

    Args:
        buffer: Flat uint8 buffer of num_pixels * 3 bytes.
        tile_size: Pixels per tile.

    Returns:
        Tiles in buffer order. Their views cover the buffer exactly once.

    Raises:
        ValueError: If the buffer length is not a multiple of 3 or tile_size
            is not positive.
    """
    if tile_size <= 0:
        raise ValueError(f"tile_size = {tile_size} must be positive")
    if len(buffer) % COLOR_CHANNELS != 0:
        raise ValueError(f"Buffer length {len(buffer)} is not a multiple of {COLOR_CHANNELS}")

    chunk_bytes = tile_size * COLOR_CHANNELS
    return [
        Tile(index=i, start=offset // COLOR_CHANNELS, pixels=buffer[offset : offset + chunk_bytes])
        for i, offset in enumerate(range(0, len(buffer), chunk_bytes))
    ]


class WorkQueue:
    """Pending tiles shared by all workers, drained to empty and never refilled."""

    def __init__(self, tiles: Iterable[Tile]) -> None:
        self._tiles = list(tiles)
        self._lock = threading.Lock()

    def pop(self) -> Tile | None:
        """Remove and return one tile, or None once the queue is drained."""
        with self._lock:
            if not self._tiles:
                return None
            return self._tiles.pop()

    def cancel(self) -> int:
        """Drop all pending tiles so workers stop; returns how many were dropped."""
        with self._lock:
            dropped = len(self._tiles)
            self._tiles.clear()
            return dropped

    def empty(self) -> bool:
        with self._lock:
            return not self._tiles

    def __len__(self) -> int:
        with self._lock:
            return len(self._tiles)


def tile_seed(seed: int, tile_index: int) -> int:
    """Seed of the random stream used for one tile."""
    return seed * TILE_SEED_STRIDE + tile_index


# =============================================================================
# Renderer
# =============================================================================


class Renderer:
    """Renders a world through a camera into an 8-bit RGB buffer.

    Attributes:
        world: The scene. Frozen when rendering starts.
        camera: The camera generating primary rays.
        config: Image size, sampling and scheduling parameters.
    """

    def __init__(self, world: World, camera: ThinLensCamera, config: RenderConfig) -> None:
        self.world = world
        self.camera = camera
        self.config = config
        self._buffer: npt.NDArray[np.uint8] | None = None

    @property
    def buffer(self) -> npt.NDArray[np.uint8] | None:
        """The buffer of the last render, or None before the first render."""
        return self._buffer

    def sample_pixel(self, x: int, y: int, rng: random.Random) -> Color:
        """Average samples_per_pixel jittered rays through pixel (x, y).

        Args:
            x: Pixel column (0 = left).
            y: Pixel row measured from the bottom (0 = bottom).
            rng: The worker's random number generator.

        Returns:
            The averaged linear radiance.
        """
        config = self.config
        total = Color(0.0, 0.0, 0.0)
        for _ in range(config.samples_per_pixel):
            s = (x + rng.random()) / config.width
            t = (y + rng.random()) / config.height
            ray = self.camera.get_ray(s, t, rng)
            total = total + ray_color(ray, self.world, rng, config.max_depth, config.t_min)
        return average_samples(total, config.samples_per_pixel)

    def render_tile(self, tile: Tile, rng: random.Random) -> None:
        """Render every pixel of a tile and write its bytes into the tile view.

        The generator is reseeded from (seed, tile index) first, so a tile's
        bytes do not depend on which worker renders it.
        """
        width = self.config.width
        height = self.config.height
        rng.seed(tile_seed(self.config.seed, tile.index))

        pixels = tile.pixels
        for i in range(tile.num_pixels):
            pixel = tile.start + i
            x = pixel % width
            y = height - 1 - pixel // width
            offset = i * COLOR_CHANNELS
            pixels[offset : offset + COLOR_CHANNELS] = quantize(self.sample_pixel(x, y, rng))

    def _worker(
        self,
        worker_id: int,
        queue: WorkQueue,
        progress: Callable[[], None],
    ) -> int:
        """Worker loop: pop tiles until the queue is empty.

        The generator is reseeded by render_tile before each tile, so it is
        created unseeded.
        """
        rng = random.Random()
        rendered = 0
        try:
            while (tile := queue.pop()) is not None:
                self.render_tile(tile, rng)
                rendered += 1
                logger.debug("Worker %d finished tile %d", worker_id, tile.index)
                progress()
        except Exception:
            dropped = queue.cancel()
            logger.error("Worker %d failed; dropped %d pending tiles", worker_id, dropped)
            raise
        logger.debug("Worker %d exiting after %d tiles", worker_id, rendered)
        return rendered

    def render(self, progress: ProgressCallback | None = None) -> npt.NDArray[np.uint8]:
        """Render the full image.

        Args:
            progress: Optional callback called after each finished tile with
                (finished_tiles, total_tiles). Calls are serialized.

        Returns:
            Flat uint8 array of width * height * 3 bytes, row-major with the
            top row first.

        Raises:
            Exception: Any exception raised inside a worker is re-raised here
                after all workers have stopped.
        """
        config = self.config
        self.world.freeze()

        buffer = np.zeros(config.buffer_size, dtype=np.uint8)
        tiles = make_tiles(buffer, config.tile_size)
        queue = WorkQueue(tiles)
        total_tiles = len(tiles)
        num_workers = min(config.num_workers, total_tiles)

        progress_lock = threading.Lock()
        finished = 0

        def report() -> None:
            nonlocal finished
            with progress_lock:
                finished += 1
                if progress is not None:
                    progress(finished, total_tiles)

        logger.info(
            "Rendering %dx%d, %d spp, max depth %d: %d tiles on %d workers",
            config.width,
            config.height,
            config.samples_per_pixel,
            config.max_depth,
            total_tiles,
            num_workers,
        )
        start_time = time.perf_counter()

        with ThreadPoolExecutor(max_workers=num_workers, thread_name_prefix="render") as pool:
            futures = [pool.submit(self._worker, i, queue, report) for i in range(num_workers)]
        for future in futures:
            future.result()

        logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
        self._buffer = buffer
        return buffer

    def render_image(self, progress: ProgressCallback | None = None) -> npt.NDArray[np.uint8]:
        """Render and return the buffer shaped (height, width, 3)."""
        buffer = self.render(progress)
        return buffer.reshape(self.config.height, self.config.width, COLOR_CHANNELS)

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self.config.width}, height={self.config.height}, "
            f"samples_per_pixel={self.config.samples_per_pixel}, objects={len(self.world)})"
        )


def render(
    world: World,
    camera: ThinLensCamera,
    config: RenderConfig,
    progress: ProgressCallback | None = None,
) -> npt.NDArray[np.uint8]:
    """Render a world through a camera; see Renderer.render."""
    return Renderer(world, camera, config).render(progress)
