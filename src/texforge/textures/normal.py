"""Height field to tangent-space normal map conversion."""

import numpy as np
from numpy.typing import NDArray

from .buffer import PixelBuffer


def height_to_normal(height: PixelBuffer, strength: float = 1.5) -> PixelBuffer:
    """Convert a height buffer to a tangent-space normal map.

    Uses central differences with wrap-around sampling, so a tileable
    height field gives a tileable normal map.

    Args:
        height: Buffer whose first channel holds height (0-255)
        strength: Gradient multiplier controlling apparent bump depth

    Returns:
        RGBA buffer of the same size with opaque alpha
    """
    h = height.data[:, :, 0].astype(np.float64) / 255.0

    # np.roll(h, 1, axis=1)[y, x] == h[y, x - 1]
    left = np.roll(h, 1, axis=1)
    right = np.roll(h, -1, axis=1)
    up = np.roll(h, 1, axis=0)
    down = np.roll(h, -1, axis=0)

    nx = (left - right) * strength
    ny = (up - down) * strength
    nz = np.ones_like(nx)
    length = np.sqrt(nx * nx + ny * ny + nz * nz)

    encoded = np.empty(h.shape + (4,), dtype=np.float64)
    encoded[:, :, 0] = np.floor(nx / length * 127.5 + 127.5)
    encoded[:, :, 1] = np.floor(ny / length * 127.5 + 127.5)
    encoded[:, :, 2] = np.floor(nz / length * 127.5 + 127.5)
    encoded[:, :, 3] = 255
    return PixelBuffer.from_array(encoded)


def decode_normals(normal: PixelBuffer) -> NDArray[np.float64]:
    """Decode an encoded normal map back to HxWx3 vectors in [-1, 1]."""
    return (normal.data[:, :, :3].astype(np.float64) - 127.5) / 127.5
