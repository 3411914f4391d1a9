"""Texture set output types and the base class for material recipes."""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar

import numpy as np

from .buffer import PixelBuffer, fill_region
from .errors import InvalidDimensionError
from .noise import NoiseField

logger = logging.getLogger(__name__)

MAP_KEYS = ("diffuse", "normal", "roughness")


def check_resolution(value: object) -> int:
    """Return ``value`` as a positive int canvas size.

    Python and numpy integers are accepted; bools, floats and strings are not.

    Raises:
        InvalidDimensionError: If the value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
        raise InvalidDimensionError(f"Resolution must be a positive integer, got {value!r}")
    return int(value)


class WrapMode(Enum):
    """How a map is addressed outside [0, 1] texture coordinates."""
    REPEAT = "repeat"
    CLAMP = "clamp"


@dataclass(frozen=True)
class MapTexture:
    """A single synthesized map plus the hints a renderer needs to bind it.

    The buffer is frozen on construction.

    Attributes:
        buffer: Pixel data (RGBA, or single-channel for roughness)
        wrap: Wrap mode on both axes
        transparent: Whether the alpha channel carries coverage
        premultiply_alpha: Whether the consumer may premultiply alpha
        generate_mipmaps: Whether the map is mipmap-eligible
    """

    buffer: PixelBuffer
    wrap: WrapMode = WrapMode.REPEAT
    transparent: bool = False
    premultiply_alpha: bool = True
    generate_mipmaps: bool = True

    def __post_init__(self) -> None:
        self.buffer.freeze()

    @classmethod
    def surface(cls, buffer: PixelBuffer) -> "MapTexture":
        """Opaque, tiling surface map."""
        return cls(buffer)

    @classmethod
    def overlay(cls, buffer: PixelBuffer) -> "MapTexture":
        """Transparent decal whose alpha must be kept straight."""
        return cls(buffer, wrap=WrapMode.CLAMP, transparent=True, premultiply_alpha=False)

    @property
    def size(self) -> tuple[int, int]:
        return self.buffer.width, self.buffer.height


@dataclass(frozen=True)
class TextureSet:
    """Output bundle of one recipe invocation.

    Attributes:
        diffuse: Albedo map
        normal: Tangent-space normal map, if the recipe derives one
        roughness: Roughness map, if the recipe produces one
    """

    diffuse: MapTexture
    normal: MapTexture | None = None
    roughness: MapTexture | None = None

    def maps(self) -> dict[str, MapTexture]:
        """Return the present maps keyed by diffuse / normal / roughness."""
        present = {}
        for key in MAP_KEYS:
            texture = getattr(self, key)
            if texture is not None:
                present[key] = texture
        return present

    def __getitem__(self, key: str) -> MapTexture:
        texture = self.maps().get(key)
        if texture is None:
            raise KeyError(key)
        return texture

    def __contains__(self, key: object) -> bool:
        return key in self.maps()

    def save(self, directory: str | Path, prefix: str) -> list[Path]:
        """Write every present map as ``<prefix>_<key>.png``.

        Args:
            directory: Output directory (created if missing)
            prefix: File name prefix, usually the recipe name

        Returns:
            Paths written, in diffuse / normal / roughness order
        """
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        written = []
        for key, texture in self.maps().items():
            path = directory / f"{prefix}_{key}.png"
            texture.buffer.to_image().save(path)
            written.append(path)
        return written


@dataclass
class MaterialRecipe(ABC):
    """Abstract base class for material synthesis recipes.

    Subclasses hold their tuning constants as dataclass fields and
    implement ``_synthesize`` as a short composition of buffer, stroke,
    noise and normal operations. The noise field is always passed in;
    recipes keep no state between calls.
    """

    # Canvas size used regardless of the requested resolution, if set
    fixed_resolution: ClassVar[int | None] = None

    def canvas_size(self, resolution: int) -> int:
        return self.fixed_resolution or resolution

    def synthesize(self, resolution: int, noise: NoiseField) -> TextureSet:
        """Run the recipe and return its texture set.

        Args:
            resolution: Requested square canvas size in pixels
            noise: Shared read-only noise field

        Returns:
            Fully populated TextureSet
        """
        resolution = check_resolution(resolution)
        size = self.canvas_size(resolution)
        started = time.perf_counter()
        result = self._synthesize(size, noise)
        logger.debug(
            "%s synthesized at %dx%d in %.3fs",
            type(self).__name__, size, size, time.perf_counter() - started,
        )
        return result

    @abstractmethod
    def _synthesize(self, size: int, noise: NoiseField) -> TextureSet:
        """Build the texture set on a ``size`` x ``size`` canvas."""
        pass

    @staticmethod
    def _color_canvas(size: int, color: tuple[int, int, int]) -> PixelBuffer:
        buffer = PixelBuffer(size, size, channels=4)
        fill_region(buffer, 0, 0, size, size, color)
        return buffer

    @staticmethod
    def _gray_canvas(size: int, level: int = 128) -> PixelBuffer:
        buffer = PixelBuffer(size, size, channels=1)
        fill_region(buffer, 0, 0, size, size, level)
        return buffer
