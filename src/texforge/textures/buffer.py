"""Pixel buffers and the paint operations recipes build on.

Every operation takes its colour, alpha and geometry explicitly and
mutates only the target buffer. Rectangles are clipped to the buffer and
zero-size regions are skipped, so recipes never need to guard their own
boundary arithmetic.
"""

import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from .errors import AllocationError, InvalidDimensionError
from .noise import NoiseField, fbm

Color = int | float | tuple[float, float, float]
GradientStop = tuple[float, Color, float]


def clamp_channel(value: float) -> int:
    """Round a channel value and clamp it to [0, 255]."""
    return int(min(255, max(0, math.floor(value + 0.5))))


def rgb(r: float, g: float, b: float) -> tuple[int, int, int]:
    """Build a colour from computed channel values, clamping each one."""
    return clamp_channel(r), clamp_channel(g), clamp_channel(b)


def _snap(value: float) -> int:
    return int(math.floor(value + 0.5))


class PixelBuffer:
    """A fixed-size raster of 8-bit pixels.

    Colour buffers carry four channels (RGBA). Height and roughness buffers
    carry a single logical channel.

    Attributes:
        width: Width in pixels
        height: Height in pixels
        channels: 4 for RGBA, 1 for single-channel data
    """

    def __init__(self, width: int, height: int, channels: int = 4) -> None:
        for name, value in (("width", width), ("height", height)):
            if not isinstance(value, (int, np.integer)) or value <= 0:
                raise InvalidDimensionError(f"Buffer {name} must be a positive integer, got {value!r}")
        if channels not in (1, 4):
            raise InvalidDimensionError(f"Buffer must have 1 or 4 channels, got {channels!r}")
        try:
            self._data = np.zeros((height, width, channels), dtype=np.uint8)
        except MemoryError as exc:
            raise AllocationError(f"Cannot allocate {width}x{height}x{channels} pixel buffer") from exc

    @classmethod
    def from_array(cls, array: NDArray) -> "PixelBuffer":
        """Wrap a copy of an HxW, HxWx1 or HxWx4 array (values clamped to 0-255)."""
        arr = np.asarray(array)
        if arr.ndim == 2:
            arr = arr[:, :, np.newaxis]
        if arr.ndim != 3 or arr.shape[2] not in (1, 4):
            raise InvalidDimensionError(f"Unsupported buffer array shape {arr.shape}")
        buffer = cls(arr.shape[1], arr.shape[0], arr.shape[2])
        buffer._data[...] = np.clip(np.rint(arr), 0, 255).astype(np.uint8)
        return buffer

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def channels(self) -> int:
        return self._data.shape[2]

    @property
    def color_channels(self) -> int:
        """Number of channels that hold colour (alpha excluded)."""
        return 3 if self.channels == 4 else 1

    @property
    def data(self) -> NDArray[np.uint8]:
        """The underlying HxWxC array."""
        return self._data

    @property
    def frozen(self) -> bool:
        return not self._data.flags.writeable

    def freeze(self) -> "PixelBuffer":
        """Make the buffer read-only. Returns self for chaining."""
        self._data.setflags(write=False)
        return self

    def copy(self) -> "PixelBuffer":
        """Return a writable copy."""
        return PixelBuffer.from_array(self._data)

    def clip_rect(self, x0: int, y0: int, x1: int, y1: int) -> tuple[int, int, int, int] | None:
        """Clip a half-open rectangle to the buffer, or None if nothing remains."""
        x0, x1 = max(0, x0), min(self.width, x1)
        y0, y1 = max(0, y0), min(self.height, y1)
        if x1 <= x0 or y1 <= y0:
            return None
        return x0, y0, x1, y1

    def read_region(self, x: int, y: int, w: int, h: int) -> NDArray[np.uint8]:
        """Return a snapshot copy of the clipped rectangle (possibly empty)."""
        rect = self.clip_rect(x, y, x + w, y + h)
        if rect is None:
            return np.zeros((0, 0, self.channels), dtype=np.uint8)
        x0, y0, x1, y1 = rect
        return self._data[y0:y1, x0:x1].copy()

    def write_region(self, x: int, y: int, pixels: NDArray) -> None:
        """Write an HxWxC array with its top-left corner at (x, y), clipped."""
        pixels = np.asarray(pixels)
        h, w = pixels.shape[:2]
        rect = self.clip_rect(x, y, x + w, y + h)
        if rect is None:
            return
        x0, y0, x1, y1 = rect
        src = pixels[y0 - y:y1 - y, x0 - x:x1 - x]
        self._data[y0:y1, x0:x1] = np.clip(np.rint(src), 0, 255).astype(np.uint8)

    def to_image(self) -> Image.Image:
        """Convert to a PIL Image (RGBA or L mode)."""
        if self.channels == 1:
            return Image.fromarray(np.ascontiguousarray(self._data[:, :, 0]))
        return Image.fromarray(np.ascontiguousarray(self._data))

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height}x{self.channels})"


def color_vector(color: Color, count: int) -> NDArray[np.float64]:
    if isinstance(color, (int, float, np.integer, np.floating)):
        return np.full(count, float(color))
    values = np.asarray(color, dtype=np.float64)
    if count == 1:
        return values[:1]
    return values[:count]


def blend_rect(
    buffer: PixelBuffer,
    rect: tuple[int, int, int, int],
    color: NDArray[np.float64],
    alpha: float | NDArray[np.float64],
) -> None:
    """Source-over composite of color/alpha into a clipped rectangle.

    ``color`` broadcasts against HxWxN and ``alpha`` against HxW.
    """
    x0, y0, x1, y1 = rect
    region = buffer.data[y0:y1, x0:x1]
    n = buffer.color_channels
    src_a = np.clip(np.broadcast_to(np.asarray(alpha, dtype=np.float64), region.shape[:2]), 0.0, 1.0)
    src_a = src_a[:, :, np.newaxis]
    dst = region[:, :, :n].astype(np.float64)

    if buffer.channels == 1:
        out = color * src_a + dst * (1.0 - src_a)
        region[...] = np.clip(np.rint(out), 0, 255).astype(np.uint8)
        return

    dst_a = region[:, :, 3:4].astype(np.float64) / 255.0
    out_a = src_a + dst_a * (1.0 - src_a)
    weighted = color * src_a + dst * dst_a * (1.0 - src_a)
    safe_a = np.where(out_a > 0.0, out_a, 1.0)
    out = np.where(out_a > 0.0, weighted / safe_a, 0.0)
    region[:, :, :3] = np.clip(np.rint(out), 0, 255).astype(np.uint8)
    region[:, :, 3:4] = np.clip(np.rint(out_a * 255.0), 0, 255).astype(np.uint8)


def _snapped_rect(buffer: PixelBuffer, x: float, y: float, w: float, h: float) -> tuple[int, int, int, int] | None:
    if w <= 0 or h <= 0:
        return None
    return buffer.clip_rect(_snap(x), _snap(y), _snap(x + w), _snap(y + h))


def fill_region(
    buffer: PixelBuffer,
    x: float, y: float,
    w: float, h: float,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Fill a rectangle with a colour, blending when alpha < 1.

    Args:
        buffer: Target buffer
        x, y: Top-left corner (fractional values snap to the nearest pixel)
        w, h: Size; non-positive sizes are a no-op
        color: (R, G, B) or a single grey level
        alpha: Opacity 0-1
    """
    rect = _snapped_rect(buffer, x, y, w, h)
    if rect is None:
        return
    blend_rect(buffer, rect, color_vector(color, buffer.color_channels), alpha)


def add_noise_to_region(
    buffer: PixelBuffer,
    noise: NoiseField,
    x: float, y: float,
    w: float, h: float,
    intensity: float,
    seed: float,
) -> None:
    """Perturb the colour channels of a rectangle with fBm noise.

    Each pixel gets the same signed offset on all colour channels, so hue
    balance is kept while brightness varies organically. The region is read
    in full before anything is written back. Alpha is left untouched.

    Args:
        buffer: Target buffer
        noise: Noise field to sample
        x, y: Top-left corner of the region
        w, h: Region size; non-positive sizes are a no-op
        intensity: Maximum offset in channel units
        seed: Decorrelates regions that share the same noise field
    """
    if w <= 0 or h <= 0:
        return
    ox, oy = _snap(x), _snap(y)
    rect = buffer.clip_rect(ox, oy, _snap(x + w), _snap(y + h))
    if rect is None:
        return
    x0, y0, x1, y1 = rect
    n = buffer.color_channels

    snapshot = buffer.data[y0:y1, x0:x1, :n].astype(np.float64)
    px = np.arange(x0, x1, dtype=np.float64) - ox
    py = np.arange(y0, y1, dtype=np.float64) - oy
    value = fbm(
        noise,
        ((px + seed * 100) * 0.05)[np.newaxis, :],
        ((py + seed * 50) * 0.05)[:, np.newaxis],
        octaves=3,
    )
    offset = (value - 0.5) * intensity * 2
    snapshot += offset[:, :, np.newaxis]
    buffer.data[y0:y1, x0:x1, :n] = np.clip(np.rint(snapshot), 0, 255).astype(np.uint8)


def fill_linear_gradient(
    buffer: PixelBuffer,
    x: float, y: float,
    w: float, h: float,
    start: tuple[float, float],
    end: tuple[float, float],
    stops: Sequence[GradientStop],
) -> None:
    """Composite a linear gradient over a rectangle.

    Colour and alpha are interpolated between stops along the start-end
    axis and held constant beyond either end.

    Args:
        buffer: Target buffer
        x, y, w, h: Rectangle to paint
        start: Gradient start point (offset 0)
        end: Gradient end point (offset 1)
        stops: (offset, color, alpha) tuples in increasing offset order
    """
    rect = _snapped_rect(buffer, x, y, w, h)
    if rect is None or not stops:
        return
    x0, y0, x1, y1 = rect
    n = buffer.color_channels

    axis_x = end[0] - start[0]
    axis_y = end[1] - start[1]
    length_sq = axis_x * axis_x + axis_y * axis_y
    px = np.arange(x0, x1, dtype=np.float64) + 0.5
    py = np.arange(y0, y1, dtype=np.float64) + 0.5
    if length_sq == 0:
        t = np.zeros((y1 - y0, x1 - x0))
    else:
        t = ((px[np.newaxis, :] - start[0]) * axis_x + (py[:, np.newaxis] - start[1]) * axis_y) / length_sq
    t = np.clip(t, 0.0, 1.0)

    offsets = np.array([s[0] for s in stops], dtype=np.float64)
    colors = np.stack([color_vector(s[1], n) for s in stops])
    alphas = np.array([s[2] for s in stops], dtype=np.float64)

    color = np.stack([np.interp(t, offsets, colors[:, c]) for c in range(n)], axis=-1)
    alpha = np.interp(t, offsets, alphas)
    blend_rect(buffer, rect, color, alpha)


def fill_ellipse(
    buffer: PixelBuffer,
    cx: float, cy: float,
    rx: float, ry: float,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Fill an axis-aligned ellipse with an anti-aliased edge."""
    if rx <= 0 or ry <= 0:
        return
    rect = buffer.clip_rect(
        int(math.floor(cx - rx - 1)), int(math.floor(cy - ry - 1)),
        int(math.ceil(cx + rx + 1)), int(math.ceil(cy + ry + 1)),
    )
    if rect is None:
        return
    x0, y0, x1, y1 = rect
    px = np.arange(x0, x1, dtype=np.float64) + 0.5
    py = np.arange(y0, y1, dtype=np.float64) + 0.5
    dist = np.sqrt(((px[np.newaxis, :] - cx) / rx) ** 2 + ((py[:, np.newaxis] - cy) / ry) ** 2)
    # Normalised distance scaled back to pixels along the minor radius
    coverage = np.clip(0.5 - (dist - 1.0) * min(rx, ry), 0.0, 1.0)
    blend_rect(buffer, rect, color_vector(color, buffer.color_channels), coverage * alpha)


def composite(dst: PixelBuffer, src: PixelBuffer, alpha: float = 1.0) -> None:
    """Draw ``src`` over ``dst`` at the origin with a global alpha.

    Single-channel sources are treated as opaque grey; four-channel sources
    contribute their own alpha as well. The overlap is clipped to both.
    """
    rect = dst.clip_rect(0, 0, src.width, src.height)
    if rect is None:
        return
    x0, y0, x1, y1 = rect
    pixels = src.data[y0:y1, x0:x1].astype(np.float64)
    n = dst.color_channels

    if src.channels == 1:
        color = np.repeat(pixels[:, :, :1], n, axis=2)
        src_alpha = np.full((y1 - y0, x1 - x0), alpha)
    else:
        color = pixels[:, :, :3] if n == 3 else pixels[:, :, :1]
        src_alpha = pixels[:, :, 3] / 255.0 * alpha
    blend_rect(dst, rect, color, src_alpha)
