"""Tests for image I/O helpers."""

import io

import numpy as np
import pytest
from PIL import Image

from quadseg.utils.imaging import (
    decode_image,
    encode_png,
    load_grayscale,
    power_of_two_side,
    resize_to_power_of_two,
    save_image,
    to_grayscale,
)
from tests.conftest import blocks_grid


@pytest.mark.parametrize(
    "height,width,expected",
    [(512, 512, 512), (300, 700, 256), (1, 9, 1), (255, 256, 128), (1023, 2000, 512)],
)
def test_power_of_two_side(height, width, expected):
    assert power_of_two_side(height, width) == expected


def test_power_of_two_side_rejects_empty():
    with pytest.raises(ValueError):
        power_of_two_side(0, 10)


def test_resize_to_power_of_two():
    out = resize_to_power_of_two(np.zeros((300, 500), dtype=np.uint8))
    assert out.shape == (256, 256)
    assert out.dtype == np.uint8


def test_resize_keeps_power_of_two_square():
    grid = blocks_grid()
    assert np.array_equal(resize_to_power_of_two(grid), grid)


def test_to_grayscale_rgb_and_rgba():
    rgb = np.zeros((4, 4, 3), dtype=np.uint8)
    rgb[..., 0] = 255
    gray = to_grayscale(rgb)
    assert gray.shape == (4, 4)
    # ITU-R 601: R weight 0.299
    assert int(gray[0, 0]) == 76

    rgba = np.dstack([rgb, np.zeros((4, 4), dtype=np.uint8)])
    assert np.array_equal(to_grayscale(rgba), gray)


def test_to_grayscale_clips_floats():
    out = to_grayscale(np.array([[-5.0, 12.4, 300.0]]))
    assert out.tolist() == [[0, 12, 255]]


def test_to_grayscale_rejects_other_shapes():
    with pytest.raises(ValueError):
        to_grayscale(np.zeros((2, 2, 2)))


def test_png_round_trip():
    grid = blocks_grid()
    assert np.array_equal(decode_image(encode_png(grid)), grid)


def test_decode_color_png_to_gray():
    buf = io.BytesIO()
    Image.new("RGB", (3, 2), (0, 0, 255)).save(buf, format="PNG")
    gray = decode_image(buf.getvalue())
    assert gray.shape == (2, 3)


def test_decode_garbage_raises_value_error():
    with pytest.raises(ValueError, match="decode"):
        decode_image(b"definitely not an image")


def test_save_and_load(tmp_path):
    grid = blocks_grid()
    path = save_image(grid, tmp_path / "nested" / "split.png")
    assert path.exists()
    assert np.array_equal(load_grayscale(path), grid)


def test_load_non_image_raises_value_error(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    with pytest.raises(ValueError):
        load_grayscale(path)
