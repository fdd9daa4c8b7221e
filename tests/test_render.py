"""Tests for rendering generated grids."""

import io

import numpy as np

from tilecollapse.example import from_pixels
from tilecollapse.grid import Grid
from tilecollapse.render import print_ascii, render_ascii, render_image


class TestRender:
    """Test text and image rendering."""

    def test_render_ascii(self):
        grid = Grid.from_rows([[0, 1, 1], [1, 0, 2]])
        assert render_ascii(grid, ["#", ".", "~"]) == "#..\n.#~"

    def test_print_ascii(self):
        out = io.StringIO()
        print_ascii(Grid.from_rows([[1, 0]]), ["A", "B"], file=out)
        assert out.getvalue() == "BA\n"

    def test_render_image_stitches_blocks(self):
        red = np.full((2, 2, 4), [255, 0, 0, 255], dtype=np.uint8)
        blue = np.full((2, 2, 4), [0, 0, 255, 255], dtype=np.uint8)
        image = render_image(Grid.from_rows([[0, 1, 0]]), [red, blue])

        assert image.size == (6, 2)
        assert image.mode == "RGBA"
        pixels = np.asarray(image)
        assert (pixels[:, 0:2] == red).all()
        assert (pixels[:, 2:4] == blue).all()
        assert (pixels[:, 4:6] == red).all()

    def test_render_grayscale_image(self):
        example = from_pixels(np.array([[0, 255], [255, 0]], dtype=np.uint8))
        image = render_image(Grid.from_rows([[1, 1], [0, 1]]), example.palette)
        assert image.mode == "L"
        assert np.asarray(image).tolist() == [[255, 255], [0, 255]]

    def test_render_image_of_loaded_example_round_trips(self):
        pixels = np.zeros((4, 6, 4), dtype=np.uint8)
        pixels[:, :, 3] = 255
        pixels[0:2, 2:4, 0] = 200
        pixels[2:4, 4:6, 1] = 100
        example = from_pixels(pixels, tile_size=2)
        assert (np.asarray(render_image(example.grid, example.palette)) == pixels).all()
