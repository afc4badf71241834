#!/usr/bin/env python3
"""
Decompose a panel outline into Wren blocks, corners, reinforcers and walls.

Usage:
    python scripts/decompose_polygon.py --points "0,0 100,0 100,100 0,100"
    python scripts/decompose_polygon.py --input outline.json --fin-width 10
    python scripts/decompose_polygon.py --input outline.json --json > wren.json
"""
import sys
import json
import argparse
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from geometry_primitives import WrenGeometryError
from wren import Wren, WrenConfig


def parse_points(text: str):
    """Parse "x,y x,y ..." into a list of (x, y) floats."""
    points = []
    for pair in text.split():
        x, y = pair.split(",")
        points.append((float(x), float(y)))
    return points


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Decompose a polygon outline into Wren fabrication pieces.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input",
        help="JSON file containing a list of [x, y] points",
    )
    source.add_argument(
        "--points",
        help='Inline outline, e.g. "0,0 100,0 100,100 0,100"',
    )
    parser.add_argument(
        "--point-distance", type=float, default=15.0,
        help="Sub-point spacing unit (default: 15)",
    )
    parser.add_argument(
        "--fin-width", type=float, default=12.5,
        help="Fin half-width either side of an edge (default: 12.5)",
    )
    parser.add_argument(
        "--wall-distance", type=float, default=120.0,
        help="Perimeter wall offset (default: 120)",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Reject edges too short to carry any blocks",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print the full decomposition as JSON",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    # Logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.input:
        input_path = Path(args.input)
        if not input_path.is_file():
            parser.error(f"Input file not found: {input_path}")
        with open(input_path) as f:
            points = json.load(f)
    else:
        try:
            points = parse_points(args.points)
        except ValueError:
            parser.error(f"Could not parse --points: {args.points!r}")

    try:
        config = WrenConfig(
            point_distance=args.point_distance,
            fin_width=args.fin_width,
            wall_distance=args.wall_distance,
            allow_short_edges=not args.strict,
        )
        wren = Wren(points, config)
    except WrenGeometryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except ValueError as exc:
        parser.error(str(exc))

    if args.json:
        print(json.dumps(wren.to_dict(), indent=2))
        return 0

    # Summary
    print(f"Outline: {len(wren.points)} vertices")
    for i, line in enumerate(wren.lines):
        print(f"  edge {i}: length {line.length:.1f}, "
              f"{len(line.sub_points)} sub-points, {len(line.blocks)} blocks")
    print(f"Reinforcers: {len(wren.reinforcers)}")
    print(f"Fin pieces: {len(wren.fin_pieces)}")
    print(f"Walls: {len(wren.outer_walls)} outer, {len(wren.inner_walls)} inner")

    issues = wren.validate_geometry()
    if issues:
        print(f"Validation warnings: {issues}")

    print("\nDone.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
