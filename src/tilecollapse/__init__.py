"""Wave Function Collapse tile generator.

Generates a new tile grid that locally resembles a small example grid: every pair of
adjacent tiles in the output was also seen adjacent, in the same direction, in the
example.  Cells are collapsed lowest-entropy first, constraints are propagated to their
neighbors, and the whole attempt is restarted whenever a cell is left with no possible
tile.
"""

import argparse
import sys

from .example import Example, load_ascii, load_image, parse_ascii
from .grid import DIRECTIONS, Coord, Grid, rotate90, translate
from .model import CompatibilityModel, Histogram
from .render import print_ascii, render_ascii, render_image
from .solver.solver import (
    AttemptsExhausted,
    Contradiction,
    GenerationStats,
    generate,
    generate_from_example,
    run,
)

__all__ = [
    "AttemptsExhausted",
    "CompatibilityModel",
    "Contradiction",
    "Coord",
    "DIRECTIONS",
    "Example",
    "GenerationStats",
    "Grid",
    "Histogram",
    "generate",
    "generate_from_example",
    "load_ascii",
    "load_image",
    "main",
    "parse_ascii",
    "print_ascii",
    "render_ascii",
    "render_image",
    "rotate90",
    "run",
    "translate",
]

__version__ = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    """Command-line interface of the generator."""
    parser = argparse.ArgumentParser(
        prog="tilecollapse",
        description="Generate a tile grid that locally looks like an example grid.",
    )
    parser.add_argument("example", help="Example file (ASCII grid, or an image with --image)")
    parser.add_argument("rows", type=int, help="Number of rows of the generated grid")
    parser.add_argument("cols", type=int, help="Number of columns of the generated grid")
    parser.add_argument(
        "--image", action="store_true", help="Read the example as an image of pixel tiles"
    )
    parser.add_argument(
        "--tile-size", type=int, default=1, help="Side length in pixels of each image tile"
    )
    parser.add_argument("--seed", type=int, help="Seed for the random generator")
    parser.add_argument(
        "--max-attempts",
        type=int,
        help="Maximum number of attempts (0 to retry until success)",
    )
    parser.add_argument(
        "--randomize-ties", action="store_true", help="Break entropy ties randomly"
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Write the result to this file instead of printing it (required with --image)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the tile generator."""
    args = build_parser().parse_args(argv)

    if args.image and not args.output:
        print("Image examples need --output to write the result.", file=sys.stderr)
        return 2

    kwargs = {}
    if args.seed is not None:
        kwargs["seed"] = args.seed
    if args.max_attempts is not None:
        if args.max_attempts < 0:
            print("--max-attempts must not be negative.", file=sys.stderr)
            return 2
        kwargs["max_attempts"] = args.max_attempts or None
    if args.randomize_ties:
        kwargs["randomize_ties"] = True

    try:
        example, output = run(
            args.example,
            args.cols,
            args.rows,
            image=args.image,
            tile_size=args.tile_size,
            **kwargs,
        )
    except AttemptsExhausted as e:
        print(e, file=sys.stderr)
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.image:
        render_image(output, example.palette).save(args.output)
        print(f"Wrote {args.output}", file=sys.stderr)
    elif args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            print_ascii(output, example.palette, file=f)
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        print_ascii(output, example.palette)
    return 0
