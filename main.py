#!/usr/bin/env python3
"""
raylite - A Monte-Carlo ray tracer in Python

Main entry point for rendering scenes.
"""

import argparse
import sys
import time
from dataclasses import replace
from typing import List, Optional

import numpy as np

from raylite.camera import Camera
from raylite.image import save_image
from raylite.scene_parser import SceneParseError, load_scene
from raylite.scenes import SCENES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='raylite - A Monte-Carlo ray tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene spheres --output render.png
  python main.py --scene three --width 800 --samples 100 --output three.png
  python main.py --file scenes/glass.yaml --seed 42 --output glass.png
        '''
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument('--scene', type=str, default='spheres', choices=sorted(SCENES),
                        help='Built-in scene to render (default: spheres)')
    source.add_argument('--file', type=str, help='Scene description file (YAML or JSON)')

    parser.add_argument('--width', type=int, help='Image width (default: from scene)')
    parser.add_argument('--samples', type=int, help='Samples per pixel (default: from scene)')
    parser.add_argument('--depth', type=int, help='Max ray depth (default: from scene)')
    parser.add_argument('--seed', type=int, help='Random seed for reproducible renders')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    print("=" * 60)
    print("raylite Ray Tracer")
    print("=" * 60)

    try:
        if args.file:
            print(f"\nLoading scene: {args.file}")
            world, settings = load_scene(args.file)
        else:
            print(f"\nCreating scene: {args.scene}")
            world, settings = SCENES[args.scene](np.random.default_rng(args.seed))

        overrides = {
            'image_width': args.width,
            'samples_per_pixel': args.samples,
            'max_depth': args.depth,
            'seed': args.seed,
        }
        settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})
    except (SceneParseError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"  Objects in scene: {len(world)}")

    camera = Camera(settings)

    print(f"\nRender Settings:")
    print(f"  Resolution: {camera.image_width}x{camera.image_height}")
    print(f"  Samples: {camera.samples_per_pixel}")
    print(f"  Max Depth: {camera.max_depth}")

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    camera.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    image = camera.render(world)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    rays = camera.image_width * camera.image_height * camera.samples_per_pixel
    print(f"  Camera rays per second: {rays / max(elapsed, 1e-9):.0f}")

    print(f"\nSaving to: {args.output}")
    try:
        save_image(image, args.output)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
