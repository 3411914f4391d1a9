"""Anti-aliased poly-line stroking and the parametric vein generator."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .buffer import Color, PixelBuffer, blend_rect, color_vector
from .noise import hash_noise


def stroke_curve(
    buffer: PixelBuffer,
    points: ArrayLike,
    color: Color,
    width: float = 1.0,
    alpha: float = 1.0,
) -> None:
    """Stroke a connected sequence of points.

    Coverage of each pixel is the maximum over all segments of a linear
    falloff around the segment, so overlapping joints blend only once.

    Args:
        buffer: Target buffer
        points: Sequence of (x, y) points; a single point draws a dot
        color: (R, G, B) or a single grey level
        width: Line width in pixels
        alpha: Opacity 0-1
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(pts) == 0 or width <= 0 or alpha <= 0:
        return
    if len(pts) == 1:
        pts = np.vstack([pts, pts])

    half = width / 2.0
    pad = half + 1.0
    rect = buffer.clip_rect(
        int(math.floor(pts[:, 0].min() - pad)), int(math.floor(pts[:, 1].min() - pad)),
        int(math.ceil(pts[:, 0].max() + pad)), int(math.ceil(pts[:, 1].max() + pad)),
    )
    if rect is None:
        return
    x0, y0, x1, y1 = rect
    coverage = np.zeros((y1 - y0, x1 - x0), dtype=np.float64)
    thin = min(width, 1.0)

    for a, b in zip(pts[:-1], pts[1:]):
        sx0 = max(x0, int(math.floor(min(a[0], b[0]) - pad)))
        sy0 = max(y0, int(math.floor(min(a[1], b[1]) - pad)))
        sx1 = min(x1, int(math.ceil(max(a[0], b[0]) + pad)))
        sy1 = min(y1, int(math.ceil(max(a[1], b[1]) + pad)))
        if sx1 <= sx0 or sy1 <= sy0:
            continue

        px = np.arange(sx0, sx1, dtype=np.float64)[np.newaxis, :] + 0.5
        py = np.arange(sy0, sy1, dtype=np.float64)[:, np.newaxis] + 0.5
        seg_x, seg_y = b[0] - a[0], b[1] - a[1]
        length_sq = seg_x * seg_x + seg_y * seg_y
        if length_sq == 0:
            t = 0.0
        else:
            t = np.clip(((px - a[0]) * seg_x + (py - a[1]) * seg_y) / length_sq, 0.0, 1.0)
        dist = np.hypot(px - (a[0] + t * seg_x), py - (a[1] + t * seg_y))
        seg_cov = np.clip(half + 0.5 - dist, 0.0, 1.0) * thin

        window = coverage[sy0 - y0:sy1 - y0, sx0 - x0:sx1 - x0]
        np.maximum(window, seg_cov, out=window)

    blend_rect(buffer, rect, color_vector(color, buffer.color_channels), coverage * alpha)


class Axis(Enum):
    """Primary direction a vein runs along."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class VeinStyle:
    """Parameters for a set of layered veins.

    Attributes:
        colors: Colours alternated between even and odd veins
        alphas: Matching per-colour opacities
        count: Number of veins in the set
        segments: Interpolated points per vein after the anchor
        amplitude: Sine displacement as a fraction of the transverse size
        jitter: Hash displacement as a fraction of the transverse size
        opacity: Group opacity multiplied into every vein
        width_base: Minimum stroke width in pixels
        width_range: Extra width added from the per-vein hash
        axis: Direction the veins run along
    """

    colors: tuple[Color, Color] = ((90, 82, 74), (40, 35, 30))
    alphas: tuple[float, float] = (0.5, 0.3)
    count: int = 7
    segments: int = 10
    amplitude: float = 0.15
    jitter: float = 0.1
    opacity: float = 0.4
    width_base: float = 0.5
    width_range: float = 2.0
    axis: Axis = Axis.HORIZONTAL


def vein_points(
    x: float, y: float,
    w: float, h: float,
    seed: float,
    index: int,
    style: VeinStyle,
) -> NDArray[np.float64]:
    """Compute the points of one vein inside a region.

    Returns:
        (segments + 1) x 2 array of (x, y) points
    """
    horizontal = style.axis is Axis.HORIZONTAL
    along, across = (w, h) if horizontal else (h, w)
    start = hash_noise(seed * 13 + index * 37) * across

    s = np.arange(style.segments + 1, dtype=np.float64)
    t = s / style.segments
    offset = (
        np.sin(t * math.pi * 2 + seed + index) * across * style.amplitude
        + (hash_noise(seed * 29 + index * 11 + s * 43) - 0.5) * across * style.jitter
    )
    # The anchor sits exactly on the start line
    offset[0] = 0.0

    primary = t * along
    transverse = start + offset
    if horizontal:
        return np.column_stack([x + primary, y + transverse])
    return np.column_stack([x + transverse, y + primary])


def draw_veins(
    buffer: PixelBuffer,
    x: float, y: float,
    w: float, h: float,
    seed: float,
    style: VeinStyle,
) -> None:
    """Stroke a set of veins across a region, alternating colour and width."""
    if w <= 0 or h <= 0:
        return
    for index in range(style.count):
        color = style.colors[index % 2]
        alpha = style.alphas[index % 2] * style.opacity
        width = style.width_base + hash_noise(seed * 7 + index * 19) * style.width_range
        stroke_curve(buffer, vein_points(x, y, w, h, seed, index, style), color, width, alpha)


def stroke_lines(
    buffer: PixelBuffer,
    segments: Sequence[tuple[tuple[float, float], tuple[float, float]]],
    color: Color,
    width: float = 1.0,
    alpha: float = 1.0,
) -> None:
    """Stroke independent straight segments with the same paint."""
    for start, end in segments:
        stroke_curve(buffer, [start, end], color, width, alpha)
