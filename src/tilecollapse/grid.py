"""Classes and functions for representing 2D grids of cells."""

from collections.abc import Hashable, Iterable, Iterator, Sequence
from typing import Generic, NamedTuple, TypeVar

T = TypeVar("T")


class Coord(NamedTuple):
    """A (row, column) position, also used as a direction step."""

    row: int
    col: int


def rotate90(step: tuple[int, int]) -> Coord:
    """Rotate a direction step to the next cardinal direction.

    Starting from (0, 1) (right), successive rotations give down, left, up and then
    right again.
    """
    return Coord(step[1], -step[0])


def translate(a: tuple[int, int], b: tuple[int, int]) -> Coord:
    """Vector addition of two coordinates."""
    return Coord(a[0] + b[0], a[1] + b[1])


START_RIGHT = Coord(0, 1)
"""Step from which the four cardinal directions are enumerated."""


def _directions() -> tuple[Coord, ...]:
    steps = []
    step = START_RIGHT
    for _ in range(4):
        steps.append(step)
        step = rotate90(step)
    return tuple(steps)


DIRECTIONS: tuple[Coord, ...] = _directions()
"""The four cardinal steps, indexed by direction: right, down, left, up.

Direction `d` and direction `(d + 2) % 4` are opposites.
"""


def opposite(direction: int) -> int:
    """Index of the direction opposite to `direction`."""
    return (direction + 2) % 4


class Grid(Generic[T]):
    """Store a 2D matrix of values as a 1D list.

    Contains support for both 1D (row-major) and 2D indexing.
    """

    def __init__(self, n_rows: int, n_cols: int, fill: T | None = None) -> None:
        """Create a grid with every cell set to `fill`.

        The same `fill` object is stored in every cell, so it must be immutable.  To give
        each cell its own mutable value, assign `data` afterwards.

        Raises:
            ValueError: If a dimension is not positive.
            TypeError: If `fill` is mutable (unhashable).
        """
        if n_rows <= 0 or n_cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {n_rows}x{n_cols}.")
        if not isinstance(fill, Hashable):
            raise TypeError(f"Grid fill must be immutable, got {type(fill).__name__}.")
        self.n_rows: int = n_rows
        """Number of rows in the grid."""

        self.n_cols: int = n_cols
        """Number of columns in the grid."""

        self.data: list = [fill] * (n_rows * n_cols)
        """Cell values in row-major order."""

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[T]]) -> "Grid[T]":
        """Build a grid from a sequence of equally long rows."""
        rows = [list(row) for row in rows]
        if not rows or not rows[0]:
            raise ValueError("Cannot build a grid from empty rows.")
        n_cols = len(rows[0])
        if any(len(row) != n_cols for row in rows):
            raise ValueError("All rows must have the same length.")
        grid: Grid[T] = cls(len(rows), n_cols)
        grid.data = [value for row in rows for value in row]
        return grid

    @property
    def height(self) -> int:
        return self.n_rows

    @property
    def width(self) -> int:
        return self.n_cols

    def __len__(self) -> int:
        return len(self.data)

    def inside(self, coord: tuple[int, int]) -> bool:
        """Whether `coord` lies within the grid bounds."""
        row, col = coord
        return 0 <= row < self.n_rows and 0 <= col < self.n_cols

    def _idx(self, idx: int | tuple[int, int]) -> int:
        if isinstance(idx, int):
            if not 0 <= idx < len(self.data):
                raise IndexError(f"Index {idx} out of range for grid of {len(self.data)} cells.")
            return idx
        if isinstance(idx, tuple) and len(idx) == 2:
            if not self.inside(idx):
                raise IndexError(
                    f"Coordinate {tuple(idx)} outside grid of {self.n_rows}x{self.n_cols}."
                )
            return self.get_1d_idx(*idx)
        raise IndexError("Invalid index type for Grid.")

    def __getitem__(self, idx: int | tuple[int, int]) -> T:
        """Get cell content by 1D (row-major order) or 2D index."""
        return self.data[self._idx(idx)]

    def __setitem__(self, idx: int | tuple[int, int], value: T) -> None:
        """Set cell content by 1D (row-major order) or 2D index."""
        self.data[self._idx(idx)] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.n_rows, self.n_cols, self.data) == (other.n_rows, other.n_cols, other.data)

    def __repr__(self) -> str:
        return f"Grid({self.n_rows}x{self.n_cols})"

    def get_2d_idx(self, one_d_idx: int) -> Coord:
        """Convert a 1D index to a (row, col) coordinate."""
        return Coord(*divmod(one_d_idx, self.n_cols))

    def get_1d_idx(self, row: int, col: int) -> int:
        """Convert a (row, col) coordinate to a 1D index."""
        return row * self.n_cols + col

    def coords(self) -> Iterator[Coord]:
        """Iterate over all coordinates in row-major order."""
        for row in range(self.n_rows):
            for col in range(self.n_cols):
                yield Coord(row, col)

    def items(self) -> Iterator[tuple[Coord, T]]:
        """Iterate over (coordinate, value) pairs in row-major order."""
        for idx, value in enumerate(self.data):
            yield self.get_2d_idx(idx), value

    def rows(self) -> list[list[T]]:
        """The grid contents as a list of rows."""
        return [self.data[r * self.n_cols : (r + 1) * self.n_cols] for r in range(self.n_rows)]

    def neighbors(self, coord: tuple[int, int]) -> Iterator[tuple[int, Coord]]:
        """Yield (direction, neighbor) for each in-bounds cardinal neighbor of `coord`."""
        for direction, step in enumerate(DIRECTIONS):
            neighbor = translate(coord, step)
            if self.inside(neighbor):
                yield direction, neighbor
