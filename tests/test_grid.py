"""Tests for grids, coordinates and directions."""

import pytest
from bitarray import bitarray, frozenbitarray

from tilecollapse.grid import DIRECTIONS, START_RIGHT, Coord, Grid, opposite, rotate90, translate


class TestDirections:
    """Test direction steps and their rotation."""

    @pytest.mark.parametrize("step", [(0, 1), (1, 0), (2, -3), (-5, 7), (0, 0)])
    def test_four_rotations_return_original(self, step):
        """Rotating any vector four times gives it back."""
        rotated = step
        for _ in range(4):
            rotated = rotate90(rotated)
        assert rotated == step

    def test_rotation_from_start_step(self):
        """Rotating right gives down, then left, then up."""
        assert rotate90(START_RIGHT) == (1, 0)
        assert rotate90((1, 0)) == (0, -1)
        assert rotate90((0, -1)) == (-1, 0)
        assert rotate90((-1, 0)) == (0, 1)

    def test_directions_order(self):
        """Directions are enumerated by rotating the start step."""
        assert DIRECTIONS == ((0, 1), (1, 0), (0, -1), (-1, 0))

    def test_opposite_directions_cancel(self):
        """A step followed by its opposite step returns to the origin."""
        for direction, step in enumerate(DIRECTIONS):
            back = DIRECTIONS[opposite(direction)]
            assert translate(step, back) == (0, 0)

    def test_translate(self):
        assert translate((2, 3), (-1, 4)) == Coord(1, 7)


class TestGrid:
    """Test the grid container."""

    def test_rejects_non_positive_dimensions(self):
        with pytest.raises(ValueError):
            Grid(0, 3)
        with pytest.raises(ValueError):
            Grid(2, -1)

    @pytest.mark.parametrize("fill", [[], bytearray(b"ab"), bitarray("01")])
    def test_rejects_mutable_fill(self, fill):
        """A mutable fill would be shared by every cell."""
        with pytest.raises(TypeError):
            Grid(2, 2, fill=fill)

    def test_immutable_fill_is_accepted(self):
        grid = Grid(2, 2, fill=frozenbitarray("01"))
        assert all(cell == frozenbitarray("01") for cell in grid.data)

    def test_fill_and_dimensions(self):
        grid = Grid(2, 3, fill=7)
        assert grid.height == 2
        assert grid.width == 3
        assert len(grid) == 6
        assert all(value == 7 for value in grid.data)

    def test_2d_and_1d_indexing_agree(self):
        grid = Grid(2, 3, fill=0)
        grid[1, 2] = 5
        assert grid[Coord(1, 2)] == 5
        assert grid[grid.get_1d_idx(1, 2)] == 5
        assert grid.get_2d_idx(5) == (1, 2)

    def test_out_of_bounds_access_raises(self):
        grid = Grid(2, 2, fill=0)
        with pytest.raises(IndexError):
            grid[2, 0]
        with pytest.raises(IndexError):
            grid[0, -1]
        with pytest.raises(IndexError):
            grid[4]

    def test_inside(self):
        grid = Grid(2, 3)
        assert grid.inside((0, 0))
        assert grid.inside((1, 2))
        assert not grid.inside((2, 0))
        assert not grid.inside((0, 3))
        assert not grid.inside((-1, 1))

    def test_from_rows(self):
        grid = Grid.from_rows([[1, 2, 3], [4, 5, 6]])
        assert (grid.n_rows, grid.n_cols) == (2, 3)
        assert grid[1, 0] == 4
        assert grid.rows() == [[1, 2, 3], [4, 5, 6]]

    def test_from_rows_rejects_ragged_rows(self):
        with pytest.raises(ValueError):
            Grid.from_rows([[1, 2], [3]])

    def test_items_are_row_major(self):
        grid = Grid.from_rows([["a", "b"], ["c", "d"]])
        assert list(grid.items()) == [
            ((0, 0), "a"),
            ((0, 1), "b"),
            ((1, 0), "c"),
            ((1, 1), "d"),
        ]
        assert list(grid.coords()) == [pos for pos, _ in grid.items()]

    def test_neighbors_of_corner(self):
        """The top-left corner only has right and down neighbors."""
        grid = Grid(3, 3)
        assert list(grid.neighbors((0, 0))) == [(0, (0, 1)), (1, (1, 0))]
        assert len(list(grid.neighbors((1, 1)))) == 4
