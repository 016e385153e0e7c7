"""Tests for rendering utilities."""

import numpy as np
import pytest
from PIL import Image

from chip8jax import create_state, execute
from chip8jax.rendering import chip8_display_to_rgb, create_color_scheme, display_to_pixels, save_screenshot


def test_display_to_pixels_row_major(fresh_state):
    display = fresh_state.display.at[2 * 64 + 5].set(True)
    pixels = display_to_pixels(display)
    assert pixels.shape == (32, 64)
    assert pixels[2, 5]
    assert pixels.sum() == 1


def test_display_to_pixels_rejects_bad_shape():
    with pytest.raises(ValueError):
        display_to_pixels(np.zeros(100, dtype=bool))


def test_rgb_colors_and_scale(fresh_state):
    display = fresh_state.display.at[0].set(True)
    rgb = chip8_display_to_rgb(display, scale=3, on_color=(1, 2, 3), off_color=(9, 9, 9))

    assert rgb.shape == (96, 192, 3)
    assert rgb.dtype == np.uint8
    assert (rgb[:3, :3] == (1, 2, 3)).all()
    assert (rgb[3:, :] == (9, 9, 9)).all()


def test_rgb_rejects_zero_scale(fresh_state):
    with pytest.raises(ValueError):
        chip8_display_to_rgb(fresh_state.display, scale=0)


def test_color_schemes():
    assert create_color_scheme("classic") == ((0, 255, 0), (0, 0, 0))
    with pytest.raises(ValueError):
        create_color_scheme("neon")


def test_save_screenshot(tmp_path):
    state = execute(create_state(), 0xD015)  # '0' glyph at (0, 0)
    path = tmp_path / "frame.png"

    save_screenshot(state.display, str(path), scale=2, color_scheme="white")

    image = np.asarray(Image.open(path))
    assert image.shape == (64, 128, 3)
    assert (image[0, 0] == (255, 255, 255)).all()
    assert (image[2, 2] == (0, 0, 0)).all()  # inside the glyph's hollow row
