#!/usr/bin/env python3
"""Render one of the demo sphere scenes.

This script renders either the three-sphere scene or the random many-spheres
scene with the tile-parallel renderer and writes the result as a PNG.

Usage:
    python examples/render_spheres.py [options]

Options:
    --scene {three,random}  Scene to render (default: random)
    --width WIDTH           Image width in pixels (default: 400)
    --aspect-ratio RATIO    Width / height (default: 16/9)
    --samples SAMPLES       Samples per pixel (default: 64)
    --max-depth DEPTH       Maximum bounces per path (default: 32)
    --tile-size PIXELS      Pixels per tile (default: 4096)
    --workers N             Worker threads (default: CPU count)
    --seed SEED             Base random seed (default: 123)
    --output OUTPUT         Output file path (default: spheres.png)
    --quiet                 Suppress progress output

Example:
    python examples/render_spheres.py --scene three --width 200 --samples 16
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from pathlib import Path

from pathtracer.core.renderer import DEFAULT_SEED, DEFAULT_TILE_SIZE, RenderConfig, Renderer
from pathtracer.preview.export import save_png
from pathtracer.scene.presets import (
    random_scene,
    random_scene_camera,
    three_sphere_camera,
    three_sphere_scene,
)

logger = logging.getLogger("render_spheres")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a demo sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=("three", "random"),
        default="random",
        help="Scene to render (default: random)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--aspect-ratio",
        type=float,
        default=16.0 / 9.0,
        help="Width / height (default: 16/9)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=64,
        help="Samples per pixel (default: 64)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=32,
        help="Maximum bounces per path (default: 32)",
    )
    parser.add_argument(
        "--tile-size",
        type=int,
        default=DEFAULT_TILE_SIZE,
        help=f"Pixels per tile (default: {DEFAULT_TILE_SIZE})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads (default: CPU count)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help=f"Base random seed (default: {DEFAULT_SEED})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path (default: spheres.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_spheres(
    scene: str = "random",
    width: int = 400,
    aspect_ratio: float = 16.0 / 9.0,
    num_samples: int = 64,
    max_depth: int = 32,
    tile_size: int = DEFAULT_TILE_SIZE,
    workers: int | None = None,
    seed: int = DEFAULT_SEED,
    output_path: str = "spheres.png",
    quiet: bool = False,
) -> Path:
    """Render a demo scene and save it to file.

    Args:
        scene: "three" for the three-sphere scene, "random" for the random scene.
        width: Image width in pixels.
        aspect_ratio: Width / height; the height is derived from it.
        num_samples: Number of samples per pixel.
        max_depth: Maximum bounces per path.
        tile_size: Pixels per tile.
        workers: Worker thread count, None for the CPU count.
        seed: Base seed for scene generation and sampling.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    config = RenderConfig.from_aspect_ratio(
        width,
        aspect_ratio,
        samples_per_pixel=num_samples,
        max_depth=max_depth,
        tile_size=tile_size,
        workers=workers,
        seed=seed,
    )

    if scene == "three":
        world = three_sphere_scene()
        camera = three_sphere_camera(aspect_ratio)
    else:
        world = random_scene(random.Random(seed))
        camera = random_scene_camera(aspect_ratio)

    logger.info("Scene %r: %d objects", scene, len(world))

    start_time = time.time()

    def progress_callback(current: int, total: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / total) * 100 if total > 0 else 0
            print(
                f"\r  Progress: {current}/{total} tiles ({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    renderer = Renderer(world, camera, config)
    buffer = renderer.render(progress=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    save_png(buffer, config.width, config.height, output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        render_spheres(
            scene=args.scene,
            width=args.width,
            aspect_ratio=args.aspect_ratio,
            num_samples=args.samples,
            max_depth=args.max_depth,
            tile_size=args.tile_size,
            workers=args.workers,
            seed=args.seed,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, OSError) as e:
        logger.error("Render failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
