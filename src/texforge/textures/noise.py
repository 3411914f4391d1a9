"""Noise functions for procedural texture generation.

Implements a sine hash, a toroidal value-noise grid and fractal (fBm)
summation over it using numpy.
"""

import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .errors import InvalidDimensionError

logger = logging.getLogger(__name__)

DEFAULT_FIELD_SIZE = 128


def hash_noise(n: ArrayLike) -> float | NDArray[np.float64]:
    """Hash a number (or array of numbers) to a pseudo-random value in [0, 1).

    Args:
        n: Seed value(s); small differences give decorrelated results

    Returns:
        float for scalar input, array of the same shape otherwise
    """
    x = np.sin(np.asarray(n, dtype=np.float64) * 127.1 + 311.7) * 43758.5453
    result = x - np.floor(x)
    if result.ndim == 0:
        return float(result)
    return result


class NoiseField:
    """Square grid of random samples with bilinear, wrap-around lookup.

    The grid is filled once at construction and is read-only afterwards,
    so a single field can be shared by every recipe invocation.
    """

    def __init__(self, size: int = DEFAULT_FIELD_SIZE, seed: int | None = None) -> None:
        if not isinstance(size, (int, np.integer)) or size <= 0:
            raise InvalidDimensionError(f"Noise field size must be a positive integer, got {size!r}")
        rng = np.random.default_rng(seed)
        self._set_grid(rng.random((size, size)))
        logger.debug("Built %dx%d noise field (seed=%s)", size, size, seed)

    @classmethod
    def from_values(cls, values: ArrayLike) -> "NoiseField":
        """Create a field from an explicit square array of samples."""
        grid = np.array(values, dtype=np.float64)
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1] or grid.shape[0] == 0:
            raise InvalidDimensionError(f"Noise field values must be a non-empty square grid, got shape {grid.shape}")
        field = cls.__new__(cls)
        field._set_grid(grid)
        return field

    def _set_grid(self, grid: NDArray[np.float64]) -> None:
        grid.setflags(write=False)
        self._grid = grid

    @property
    def size(self) -> int:
        return self._grid.shape[0]

    @property
    def grid(self) -> NDArray[np.float64]:
        """Read-only view of the samples, indexed [y, x]."""
        return self._grid

    def sample(self, x: ArrayLike, y: ArrayLike) -> float | NDArray[np.float64]:
        """Bilinearly interpolate the field at fractional coordinates.

        Both axes wrap modulo the grid size, so the field tiles seamlessly
        with period ``size``.

        Args:
            x: X coordinate(s) in grid cells
            y: Y coordinate(s) in grid cells

        Returns:
            Interpolated value(s) in [0, 1)
        """
        size = self.size
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        x_floor = np.floor(x)
        y_floor = np.floor(y)
        xf = x - x_floor
        yf = y - y_floor
        xi = x_floor.astype(np.int64) % size
        yi = y_floor.astype(np.int64) % size
        xi1 = (xi + 1) % size
        yi1 = (yi + 1) % size

        grid = self._grid
        tl = grid[yi, xi]
        tr = grid[yi, xi1]
        bl = grid[yi1, xi]
        br = grid[yi1, xi1]

        top = tl + (tr - tl) * xf
        bottom = bl + (br - bl) * xf
        result = top + (bottom - top) * yf
        if result.ndim == 0:
            return float(result)
        return result


def fbm(
    noise: NoiseField,
    x: ArrayLike,
    y: ArrayLike,
    octaves: int = 4,
) -> float | NDArray[np.float64]:
    """Fractal Brownian motion over a noise field.

    Each octave doubles the frequency and halves the amplitude, starting
    from amplitude 0.5, so the result stays within [0, 1).

    Args:
        noise: Field to sample
        x: X coordinate(s)
        y: Y coordinate(s)
        octaves: Number of noise layers to combine

    Returns:
        Summed noise value(s)
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    value = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
    amplitude = 0.5
    frequency = 1.0

    for _ in range(octaves):
        value = value + amplitude * noise.sample(x * frequency, y * frequency)
        frequency *= 2.0
        amplitude *= 0.5

    if value.ndim == 0:
        return float(value)
    return value
