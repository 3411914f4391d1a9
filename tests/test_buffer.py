"""Tests for pixel buffers and region paint operations."""

import numpy as np
import pytest
from PIL import Image

from texforge.textures import (
    AllocationError,
    InvalidDimensionError,
    PixelBuffer,
    add_noise_to_region,
    composite,
    fbm,
    fill_ellipse,
    fill_linear_gradient,
    fill_region,
    rgb,
)
from texforge.textures import buffer as buffer_module


@pytest.mark.parametrize("width,height", [(0, 8), (8, 0), (-1, 8), (2.5, 8)])
def test_invalid_dimensions(width, height):
    with pytest.raises(InvalidDimensionError):
        PixelBuffer(width, height)


def test_invalid_channel_count():
    with pytest.raises(InvalidDimensionError):
        PixelBuffer(8, 8, channels=3)


def test_allocation_failure(monkeypatch):
    def fail(*args, **kwargs):
        raise MemoryError

    monkeypatch.setattr(buffer_module.np, "zeros", fail)
    with pytest.raises(AllocationError):
        PixelBuffer(16, 16)


def test_new_buffer_is_zeroed():
    buf = PixelBuffer(6, 4)
    assert buf.data.shape == (4, 6, 4)
    assert buf.width == 6 and buf.height == 4
    assert not buf.data.any()


def test_fill_region_sets_color_and_opaque_alpha():
    buf = PixelBuffer(64, 64)
    fill_region(buf, 0, 0, 64, 64, (200, 150, 100))
    assert (buf.data == np.array([200, 150, 100, 255], dtype=np.uint8)).all()


def test_fill_region_idempotent():
    buf = PixelBuffer(32, 32)
    fill_region(buf, 0, 0, 32, 32, (10, 20, 30))
    fill_region(buf, 4, 5, 12, 9, (90, 80, 70))
    first = buf.data.copy()
    fill_region(buf, 4, 5, 12, 9, (90, 80, 70))
    np.testing.assert_array_equal(buf.data, first)


def test_fill_region_only_touches_rectangle():
    buf = PixelBuffer(16, 16, channels=1)
    fill_region(buf, 2, 3, 4, 5, 200)
    assert (buf.data[3:8, 2:6] == 200).all()
    assert buf.data.sum() == 200 * 4 * 5


def test_fill_region_clips_to_bounds():
    buf = PixelBuffer(16, 16, channels=1)
    fill_region(buf, -5, -5, 10, 10, 255)
    assert (buf.data[0:5, 0:5] == 255).all()
    assert buf.data[5:, :].sum() == 0
    fill_region(buf, 40, 40, 10, 10, 255)
    fill_region(buf, -40, 2, 10, 10, 255)
    assert buf.data.sum() == 255 * 25


@pytest.mark.parametrize("w,h", [(0, 5), (5, 0), (-3, 5), (5, -1)])
def test_degenerate_regions_are_noops(noise, w, h):
    buf = PixelBuffer(8, 8)
    fill_region(buf, 0, 0, 8, 8, (50, 60, 70))
    before = buf.data.copy()
    fill_region(buf, 1, 1, w, h, (255, 255, 255))
    add_noise_to_region(buf, noise, 1, 1, w, h, 50, 3)
    fill_linear_gradient(buf, 1, 1, w, h, (0, 0), (8, 0), [(0.0, 0, 1.0), (1.0, 255, 1.0)])
    np.testing.assert_array_equal(buf.data, before)


def test_alpha_blend_over_opaque():
    buf = PixelBuffer(4, 4)
    fill_region(buf, 0, 0, 4, 4, (100, 100, 100))
    fill_region(buf, 0, 0, 4, 4, (200, 0, 100), alpha=0.5)
    assert tuple(buf.data[0, 0]) == (150, 50, 100, 255)


def test_alpha_fill_on_transparent_keeps_straight_color():
    buf = PixelBuffer(4, 4)
    fill_region(buf, 0, 0, 4, 4, (15, 15, 20), alpha=0.6)
    assert tuple(buf.data[1, 1, :3]) == (15, 15, 20)
    assert buf.data[1, 1, 3] == 153


def test_single_channel_blend():
    buf = PixelBuffer(4, 4, channels=1)
    fill_region(buf, 0, 0, 4, 4, 100)
    fill_region(buf, 0, 0, 4, 4, 200, alpha=0.25)
    assert (buf.data == 125).all()


def test_zero_intensity_noise_is_noop(noise):
    buf = PixelBuffer(64, 64)
    fill_region(buf, 0, 0, 64, 64, (200, 150, 100))
    add_noise_to_region(buf, noise, 0, 0, 64, 64, 0, 17)
    assert (buf.data == np.array([200, 150, 100, 255], dtype=np.uint8)).all()


def test_noise_clamps_high_values(noise):
    buf = PixelBuffer(48, 48)
    fill_region(buf, 0, 0, 48, 48, (250, 250, 250))
    add_noise_to_region(buf, noise, 0, 0, 48, 48, 100, 1)
    # Offsets lie in [-100, 75]; wrap-around would produce small values
    assert buf.data[:, :, :3].min() >= 149


def test_noise_clamps_low_values(noise):
    buf = PixelBuffer(48, 48)
    fill_region(buf, 0, 0, 48, 48, (5, 5, 5))
    add_noise_to_region(buf, noise, 0, 0, 48, 48, 100, 1)
    assert buf.data[:, :, :3].max() <= 81


@pytest.mark.parametrize("base,intensity", [(250, 100), (5, 100), (128, 10_000)])
def test_noise_matches_clamped_fbm_offset(noise, base, intensity):
    buf = PixelBuffer(24, 16, channels=1)
    fill_region(buf, 0, 0, 24, 16, base)
    add_noise_to_region(buf, noise, 0, 0, 24, 16, intensity, 3)

    px = np.arange(24, dtype=np.float64)[np.newaxis, :]
    py = np.arange(16, dtype=np.float64)[:, np.newaxis]
    n = fbm(noise, (px + 300) * 0.05, (py + 150) * 0.05, 3)
    expected = np.clip(np.rint(base + (n - 0.5) * intensity * 2), 0, 255)
    np.testing.assert_array_equal(buf.data[:, :, 0], expected)


def test_noise_keeps_channel_balance(noise):
    buf = PixelBuffer(32, 32)
    fill_region(buf, 0, 0, 32, 32, (120, 100, 80))
    add_noise_to_region(buf, noise, 0, 0, 32, 32, 10, 4)
    data = buf.data.astype(int)
    np.testing.assert_array_equal(data[:, :, 0] - data[:, :, 1], 20)
    np.testing.assert_array_equal(data[:, :, 1] - data[:, :, 2], 20)


def test_noise_leaves_alpha_untouched(noise):
    buf = PixelBuffer(16, 16)
    fill_region(buf, 0, 0, 16, 16, (100, 100, 100), alpha=0.5)
    alpha = buf.data[:, :, 3].copy()
    add_noise_to_region(buf, noise, 0, 0, 16, 16, 40, 2)
    np.testing.assert_array_equal(buf.data[:, :, 3], alpha)


def test_noise_uses_region_local_coordinates(noise):
    a = PixelBuffer(32, 32, channels=1)
    b = PixelBuffer(32, 32, channels=1)
    fill_region(a, 0, 0, 32, 32, 128)
    fill_region(b, 0, 0, 32, 32, 128)
    add_noise_to_region(a, noise, 0, 0, 10, 10, 30, 5)
    add_noise_to_region(b, noise, 12, 7, 10, 10, 30, 5)
    np.testing.assert_array_equal(a.data[0:10, 0:10], b.data[7:17, 12:22])


def test_noise_region_partially_off_canvas(noise):
    buf = PixelBuffer(16, 16, channels=1)
    fill_region(buf, 0, 0, 16, 16, 128)
    add_noise_to_region(buf, noise, -8, -8, 40, 40, 30, 9)
    assert buf.data.shape == (16, 16, 1)


def test_gradient_interpolates_along_axis():
    buf = PixelBuffer(10, 2, channels=1)
    fill_linear_gradient(buf, 0, 0, 10, 2, (0, 0), (10, 0), [(0.0, 0, 1.0), (1.0, 250, 1.0)])
    row = buf.data[0, :, 0].astype(int)
    assert (np.diff(row) > 0).all()
    assert row[0] == 12 or row[0] == 13
    assert (buf.data[0] == buf.data[1]).all()


def test_gradient_alpha_stops():
    buf = PixelBuffer(20, 4)
    fill_region(buf, 0, 0, 20, 4, (200, 200, 200))
    fill_linear_gradient(
        buf, 0, 0, 20, 4, (0, 0), (20, 0),
        [(0.0, 0, 0.0), (0.5, 0, 0.5), (1.0, 0, 0.0)],
    )
    row = buf.data[0, :, 0].astype(int)
    assert row[10] < row[0]
    assert row[10] < row[19]
    assert row.min() >= 100


def test_fill_ellipse():
    buf = PixelBuffer(32, 32, channels=1)
    fill_ellipse(buf, 16, 16, 8, 4, 200)
    assert buf.data[16, 16, 0] == 200
    assert buf.data[16, 22, 0] == 200
    assert buf.data[22, 16, 0] == 0
    assert buf.data[0, 0, 0] == 0
    fill_ellipse(buf, 16, 16, 0, 4, 50)
    fill_ellipse(buf, -50, -50, 4, 4, 50)
    assert buf.data[16, 16, 0] == 200


def test_composite_single_channel():
    rough = PixelBuffer(8, 8, channels=1)
    fill_region(rough, 0, 0, 8, 8, 77)
    height = PixelBuffer(8, 8, channels=1)
    fill_region(height, 0, 0, 8, 8, 128)
    composite(rough, height, 0.15)
    assert (rough.data == 85).all()


def test_rgb_clamps():
    assert rgb(300, -5, 127.6) == (255, 0, 128)


def test_freeze_blocks_writes():
    buf = PixelBuffer(4, 4).freeze()
    assert buf.frozen
    with pytest.raises(ValueError):
        fill_region(buf, 0, 0, 4, 4, (1, 2, 3))
    copy = buf.copy()
    assert not copy.frozen
    fill_region(copy, 0, 0, 4, 4, (1, 2, 3))


def test_read_and_write_region_clip():
    buf = PixelBuffer(8, 8, channels=1)
    buf.write_region(6, 6, np.full((4, 4, 1), 9))
    assert buf.data[6:, 6:].sum() == 9 * 4
    snapshot = buf.read_region(5, 5, 10, 10)
    assert snapshot.shape == (3, 3, 1)
    snapshot[...] = 0
    assert buf.data[7, 7, 0] == 9
    assert buf.read_region(20, 20, 4, 4).shape == (0, 0, 1)


def test_from_array_accepts_2d():
    buf = PixelBuffer.from_array(np.array([[0, 300], [-4, 12.4]]))
    assert buf.channels == 1
    assert buf.data[:, :, 0].tolist() == [[0, 255], [0, 12]]


def test_to_image_modes():
    color = PixelBuffer(5, 3)
    gray = PixelBuffer(5, 3, channels=1)
    assert color.to_image().mode == "RGBA"
    assert gray.to_image().mode == "L"
    assert isinstance(gray.to_image(), Image.Image)
    assert color.to_image().size == (5, 3)
