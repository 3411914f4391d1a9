"""Fabric texture recipe: a fine two-tone weave with soft folds."""

from dataclasses import dataclass
from typing import ClassVar

from .base import MapTexture, MaterialRecipe, TextureSet
from .buffer import fill_linear_gradient, fill_region
from .noise import NoiseField, hash_noise
from .normal import height_to_normal


@dataclass
class FabricRecipe(MaterialRecipe):
    """Generates dark robe fabric on a fixed 256 px canvas.

    Attributes:
        base_color: Cloth colour as (R, G, B) tuple, 0-255
        weave_size: Size of a single thread crossing in pixels
        warp_color: Colour of raised crossings
        weft_color: Colour of sunken crossings
        weave_alpha: Opacity of both crossing colours
        warp_height: Height level of raised crossings (flat by default)
        weft_height: Height level of sunken crossings
        fold_count: Number of vertical fold highlights
        fold_color: Fold highlight colour
        fold_alpha: Fold highlight opacity at its centre
        normal_strength: Bump strength for the normal map
    """

    fixed_resolution: ClassVar[int | None] = 256

    base_color: tuple[int, int, int] = (12, 12, 22)
    weave_size: int = 3
    warp_color: tuple[int, int, int] = (16, 16, 26)
    weft_color: tuple[int, int, int] = (10, 10, 18)
    weave_alpha: float = 0.6
    warp_height: int = 128
    weft_height: int = 128
    fold_count: int = 3
    fold_color: tuple[int, int, int] = (30, 30, 45)
    fold_alpha: float = 0.12
    normal_strength: float = 0.3

    def _synthesize(self, size: int, noise: NoiseField) -> TextureSet:
        diffuse = self._color_canvas(size, self.base_color)
        height = self._gray_canvas(size)

        cell = max(1, self.weave_size)
        for y in range(0, size, cell * 2):
            for x in range(0, size, cell * 2):
                fill_region(diffuse, x, y, cell, cell, self.warp_color, self.weave_alpha)
                fill_region(diffuse, x + cell, y + cell, cell, cell, self.weft_color, self.weave_alpha)
                fill_region(height, x, y, cell, cell, self.warp_height)
                fill_region(height, x + cell, y + cell, cell, cell, self.weft_height)

        for f in range(self.fold_count):
            fx = hash_noise(f * 73) * size
            fw = 30 + hash_noise(f * 41) * 40
            fill_linear_gradient(
                diffuse, fx - fw / 2, 0, fw, size,
                (fx - fw / 2, 0), (fx + fw / 2, 0),
                [(0.0, self.fold_color, 0.0), (0.5, self.fold_color, self.fold_alpha), (1.0, self.fold_color, 0.0)],
            )

        return TextureSet(
            diffuse=MapTexture.surface(diffuse),
            normal=MapTexture.surface(height_to_normal(height, self.normal_strength)),
        )
