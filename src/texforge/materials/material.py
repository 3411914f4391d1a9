"""Material class binding a recipe to surface rendering properties."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..textures.generator import create_recipe

if TYPE_CHECKING:
    from ..textures.base import TextureSet
    from ..textures.generator import TextureGenerator

logger = logging.getLogger(__name__)


@dataclass
class Material:
    """Material definition pairing a texture recipe with tiling and PBR scalars.

    The texture set itself is tiling-agnostic; the repeat factor lives
    here, on the consumer side, and is applied per map by the renderer.

    Attributes:
        name: Material identifier
        recipe: Registered recipe name
        params: Overrides for the recipe's configuration fields
        repeat: Texture repeat factor (u, v)
        resolution: Canvas size for this material; None uses the generator's
        roughness: Scalar roughness used when the set has no roughness map
        metallic: Metalness (0=dielectric/non-metal, 1=metal)
        normal_scale: Normal map intensity multiplier applied at render time
    """

    name: str
    recipe: str
    params: dict[str, Any] = field(default_factory=dict)
    repeat: tuple[float, float] = (1.0, 1.0)
    resolution: int | None = None
    roughness: float = 0.8
    metallic: float = 0.0
    normal_scale: float = 1.0

    # Cached texture set and the (generator, resolution) it was made for
    _cached: TextureSet | None = field(default=None, repr=False)
    _cached_by: TextureGenerator | None = field(default=None, repr=False)
    _cached_resolution: int | None = field(default=None, repr=False)

    def get_texture_set(self, generator: TextureGenerator) -> TextureSet:
        """Generate or return the cached texture set.

        The cache is keyed on the generator instance and the material's
        resolution, so switching generators (and so noise seed) or changing
        ``resolution`` regenerates.

        Args:
            generator: Generator providing the noise field, and the
                resolution when the material does not set its own

        Returns:
            TextureSet for this material
        """
        if (
            self._cached is None
            or self._cached_by is not generator
            or self._cached_resolution != self.resolution
        ):
            recipe = create_recipe(self.recipe, **self.params)
            self._cached = generator.run(recipe, self.resolution)
            self._cached_by = generator
            self._cached_resolution = self.resolution
        else:
            logger.debug("Material %s served from cache", self.name)
        return self._cached

    def texture_bindings(self, generator: TextureGenerator) -> dict[str, dict[str, Any]]:
        """Describe how each map should be bound by a renderer.

        Returns:
            Mapping of map key to its buffer, wrap mode, repeat factor and
            transparency flags
        """
        bindings = {}
        for key, texture in self.get_texture_set(generator).maps().items():
            bindings[key] = {
                "buffer": texture.buffer,
                "wrap": texture.wrap.value,
                "repeat": self.repeat,
                "transparent": texture.transparent,
                "premultiply_alpha": texture.premultiply_alpha,
                "generate_mipmaps": texture.generate_mipmaps,
            }
        return bindings

    def invalidate_cache(self) -> None:
        """Clear the cached texture set, forcing regeneration on next access."""
        self._cached = None
        self._cached_resolution = None
        self._cached_by = None
