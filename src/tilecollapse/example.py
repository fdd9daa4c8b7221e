"""Loaders for example grids, from ASCII text or from image pixel blocks."""

from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image, UnidentifiedImageError

from tilecollapse.grid import Grid
from tilecollapse.model import Histogram


@dataclass(eq=False)
class Example:
    """An example grid, ready to be learned from."""

    grid: Grid[int]
    """The example as tile ids, assigned in first-seen (row-major) order."""

    palette: list[Any]
    """Tile data by tile id: a character for text examples, an RGBA pixel block for images."""

    histogram: Histogram = field(init=False)
    """Frequency of each tile in the example."""

    tile_size: int = 1
    """Side length in pixels of each tile (image examples only)."""

    def __post_init__(self) -> None:
        """Validate the grid against the palette and compute the histogram."""
        if not self.palette:
            raise ValueError("Example palette is empty.")
        tile_count = len(self.palette)
        bad = {t for t in self.grid.data if not (isinstance(t, int) and 0 <= t < tile_count)}
        if bad:
            raise ValueError(f"Example contains tile ids outside [0, {tile_count}): {bad}")
        self.histogram = Histogram.from_grid(self.grid, tile_count)

    @property
    def tile_count(self) -> int:
        """Number of distinct tiles K."""
        return len(self.palette)

    def __str__(self) -> str:
        return (
            f"Example {self.grid.n_rows}x{self.grid.n_cols}, {self.tile_count} tiles, "
            f"histogram {[round(p, 4) for p in self.histogram.probabilities]}"
        )


def from_rows(rows: Iterable[Sequence[Hashable]]) -> tuple[Grid[int], list[Hashable]]:
    """Assign tile ids to the values of `rows`, in first-seen order.

    Returns:
        The grid of tile ids, and the distinct values by tile id.
    """
    ids: dict[Hashable, int] = {}
    palette: list[Hashable] = []
    id_rows = []
    for row in rows:
        id_row = []
        for value in row:
            if value not in ids:
                ids[value] = len(palette)
                palette.append(value)
            id_row.append(ids[value])
        id_rows.append(id_row)
    return Grid.from_rows(id_rows), palette


def parse_ascii(text: str) -> Example:
    """Parse an ASCII example.

    The text starts with the dimensions as `rows cols`, followed by `rows * cols`
    non-whitespace characters, one per cell in row-major order; any whitespace between
    them is ignored.

    Raises:
        ValueError: If the header or the number of cells is invalid.
    """
    tokens = text.split()
    try:
        n_rows, n_cols = int(tokens[0]), int(tokens[1])
    except (IndexError, ValueError):
        # Covers both missing values and non-integer values
        raise ValueError(f"Invalid dimensions header: '{' '.join(tokens[:2])}'") from None
    if n_rows <= 0 or n_cols <= 0:
        raise ValueError(f"Example dimensions must be positive, got {n_rows}x{n_cols}.")

    cells = "".join(tokens[2:])
    if len(cells) != n_rows * n_cols:
        raise ValueError(
            f"Expected {n_rows * n_cols} cells for a {n_rows}x{n_cols} example, got {len(cells)}."
        )
    grid, palette = from_rows(cells[r * n_cols : (r + 1) * n_cols] for r in range(n_rows))
    return Example(grid=grid, palette=palette)


def load_ascii(path: str | PathLike) -> Example:
    """Load an ASCII example from a file.  See `parse_ascii()` for the format."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Example file not found: {path}")
    return parse_ascii(path.read_text(encoding="utf-8"))


def from_pixels(pixels: np.ndarray, tile_size: int = 1) -> Example:
    """Cut an (height, width, channels) pixel array into square tiles.

    Each distinct `tile_size` x `tile_size` block becomes one tile.

    Raises:
        ValueError: If the image size is not a multiple of `tile_size`.
    """
    if tile_size < 1:
        raise ValueError(f"Tile size must be positive, got {tile_size}.")
    if pixels.ndim == 2:
        pixels = pixels[:, :, np.newaxis]
    height, width = pixels.shape[:2]
    if height % tile_size or width % tile_size:
        raise ValueError(f"Image size {width}x{height} is not a multiple of tile size {tile_size}.")

    n_rows, n_cols = height // tile_size, width // tile_size
    blocks: dict[bytes, np.ndarray] = {}
    key_rows = []
    for r in range(n_rows):
        key_row = []
        for c in range(n_cols):
            block = pixels[
                r * tile_size : (r + 1) * tile_size, c * tile_size : (c + 1) * tile_size
            ]
            key = block.tobytes()
            blocks.setdefault(key, block.copy())
            key_row.append(key)
        key_rows.append(key_row)

    grid, keys = from_rows(key_rows)
    return Example(grid=grid, palette=[blocks[key] for key in keys], tile_size=tile_size)


def load_image(path: str | PathLike, tile_size: int = 1) -> Example:
    """Load an image example, cut into `tile_size` x `tile_size` pixel tiles."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Example image not found: {path}")
    try:
        with Image.open(path) as img:
            pixels = np.asarray(img.convert("RGBA"))
    except UnidentifiedImageError as e:
        raise ValueError(f"Cannot read image {path}") from e
    return from_pixels(pixels, tile_size)
