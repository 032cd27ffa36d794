"""
CLI entry point for the basin-of-attraction renderer.

Usage:
    basinscope [options]
    python -m basinscope [options]

Attractor positions and masses are fixed; the options only size the run.
"""

import argparse
import sys
import time
from pathlib import Path

from basinscope.config import RenderConfig
from basinscope.errors import BasinscopeError
from basinscope.io.exporter import save_artifact
from basinscope.rasterizer import BasinRasterizer


def build_parser() -> argparse.ArgumentParser:
    defaults = RenderConfig()
    parser = argparse.ArgumentParser(
        prog="basinscope",
        description="Render the basins of attraction of fixed point-mass attractors",
    )

    # Resolution
    parser.add_argument("--width", type=int, default=defaults.width, help=f"Image width (default: {defaults.width})")
    parser.add_argument("--height", type=int, default=defaults.height, help=f"Image height (default: {defaults.height})")
    parser.add_argument("--zoom", type=float, default=defaults.zoom, help=f"Half-span of the simulated square (default: {defaults.zoom})")

    # Execution
    parser.add_argument("-j", "--workers", type=int, default=defaults.workers, help="Worker processes (default: CPU count)")

    # Output
    parser.add_argument("-o", "--output-dir", type=Path, default=Path(defaults.output_dir), help="Output directory (default: figs)")

    # Attractor jitter
    parser.add_argument("--perturb", type=float, default=0.0, help="Randomly jitter attractors by up to this amount (default: off)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for --perturb")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = RenderConfig(
        width=args.width,
        height=args.height,
        zoom=args.zoom,
        workers=args.workers,
        output_dir=str(args.output_dir),
        perturb_amount=args.perturb,
        seed=args.seed,
    )

    try:
        rasterizer = BasinRasterizer(config)
    except BasinscopeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Rendering {config.width}x{config.height} at zoom {config.zoom} on {config.workers} workers")
    for i, attractor in enumerate(rasterizer.attractors):
        print(f"  Attractor {i}: x={attractor.x:g} y={attractor.y:g} mass={attractor.mass:g}")

    t0 = time.time()
    try:
        artifact = rasterizer.render()
        output = save_artifact(artifact, config.output_dir)
    except (BasinscopeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    elapsed = time.time() - t0
    print(f"\nDone! Render took {elapsed:.1f}s")
    print(f"  Output: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
