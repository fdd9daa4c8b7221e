"""Rendering of generated grids as text or images."""

import sys
from collections.abc import Sequence
from typing import Any, TextIO

import numpy as np
from PIL import Image

from tilecollapse.grid import Grid


def render_ascii(grid: Grid[int], palette: Sequence[str]) -> str:
    """Render a grid of tile ids as lines of characters, one line per row."""
    return "\n".join("".join(palette[tile] for tile in row) for row in grid.rows())


def print_ascii(grid: Grid[int], palette: Sequence[str], file: TextIO | None = None) -> None:
    """Print the grid to `file` (stdout by default)."""
    print(render_ascii(grid, palette), file=file if file is not None else sys.stdout)


def render_image(grid: Grid[int], palette: Sequence[Any]) -> Image.Image:
    """Stitch the pixel blocks of `palette` into an image of the grid.

    Args:
        grid: Grid of tile ids.
        palette: Pixel block (an (h, w, channels) uint8 array) for each tile id, as
            produced by `tilecollapse.example.load_image()`.
    """
    blocks = [np.asarray(block, dtype=np.uint8) for block in palette]
    tile_h, tile_w, channels = blocks[0].shape
    pixels = np.zeros((grid.n_rows * tile_h, grid.n_cols * tile_w, channels), dtype=np.uint8)
    for (row, col), tile in grid.items():
        pixels[row * tile_h : (row + 1) * tile_h, col * tile_w : (col + 1) * tile_w] = blocks[tile]

    if channels == 1:
        return Image.fromarray(pixels[:, :, 0])
    return Image.fromarray(pixels)
