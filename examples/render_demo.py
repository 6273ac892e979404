#!/usr/bin/env python3
"""Render the Whitted demo scene.

This script renders the demo scene end to end: a checkerboard floor, a
mirror sphere, a glass sphere and a plastic box under two point lights.
It creates the scene, generates the primary rays with Taichi, traces them
recursively and writes a PNG.

Usage:
    python -m examples.render_demo [options]

Options:
    --width WIDTH         Image width in pixels (default: 400)
    --height HEIGHT       Image height in pixels (default: 300)
    --max-depth DEPTH     Maximum recursion depth (default: 6)
    --output OUTPUT       Output file path (default: whitted_demo.png)
    --scene SCENE         Optional JSON scene file replacing the demo scene
    --tone-map METHOD     none, reinhard or exposure (default: none)
    --preview             Show the result in a Matplotlib window
    --quiet               Suppress progress output

Example:
    python -m examples.render_demo --width 200 --height 150 --max-depth 4
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import taichi as ti

logger = logging.getLogger("whitted.examples.render_demo")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the Whitted demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=300,
        help="Image height in pixels (default: 300)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=6,
        help="Maximum recursion depth (default: 6)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="whitted_demo.png",
        help="Output file path (default: whitted_demo.png)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (as written by Scene.to_dict) to render instead",
    )
    parser.add_argument(
        "--tone-map",
        choices=("none", "reinhard", "exposure"),
        default="none",
        help="Tone mapping applied before saving (default: none)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered image with Matplotlib",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_demo(
    width: int = 400,
    height: int = 300,
    max_depth: int = 6,
    output_path: str = "whitted_demo.png",
    scene_path: str | None = None,
    tone_map: str = "none",
    preview: bool = False,
    quiet: bool = False,
) -> Path:
    """Render the demo scene (or a scene file) and save it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        max_depth: Maximum recursion depth of the integrator.
        output_path: Output file path (PNG).
        scene_path: Optional JSON scene to load instead of the demo scene.
        tone_map: Tone mapping method used for the saved image.
        preview: If True, show the image after saving.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from whitted.core.integrator import TraceSettings
    from whitted.core.render import Renderer
    from whitted.preview.export import save_png
    from whitted.scene.demo import DemoSceneParams, create_demo_scene

    scene, camera = create_demo_scene(DemoSceneParams(aspect_ratio=width / height))
    if scene_path is not None:
        with open(scene_path, encoding="utf-8") as f:
            scene.from_dict(json.load(f))

    logger.info(
        "Rendering %dx%d (%d objects, %d lights, max depth %d)",
        width,
        height,
        scene.get_object_count(),
        scene.get_light_count(),
        max_depth,
    )

    renderer = Renderer(width, height, TraceSettings(max_depth=max_depth))

    def progress_callback(done: int, total: int) -> None:
        if not quiet:
            print(f"\r  Progress: {done}/{total} rows ({100.0 * done / total:.1f}%)", end="", flush=True)

    image = renderer.render(scene, camera, callback=progress_callback)
    if not quiet:
        print()  # Newline after progress

    output_file = save_png(image, output_path, tone_map=tone_map, gamma=2.2)

    if preview:
        from whitted.preview.display import show_preview

        show_preview(image, tone_map=tone_map)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    from whitted.logging_config import setup_logging

    setup_logging("WARNING" if args.quiet else "INFO")

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
    except Exception:
        logger.info("GPU backend unavailable, using CPU")
        ti.init(arch=ti.cpu)

    try:
        output = render_demo(
            width=args.width,
            height=args.height,
            max_depth=args.max_depth,
            output_path=args.output,
            scene_path=args.scene,
            tone_map=args.tone_map,
            preview=args.preview,
            quiet=args.quiet,
        )
    except (OSError, ValueError) as e:
        logger.error("Render failed: %s", e)
        return 1

    logger.info("Saved to %s", output.absolute())
    return 0


if __name__ == "__main__":
    sys.exit(main())
