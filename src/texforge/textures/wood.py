"""Wood texture recipe using layered sine grain and knots."""

from dataclasses import dataclass

import numpy as np

from .base import MapTexture, MaterialRecipe, TextureSet
from .buffer import PixelBuffer, add_noise_to_region, fill_ellipse
from .noise import NoiseField, hash_noise
from .normal import height_to_normal

# (frequency, phase, amplitude) of each sine wave summed into the grain
OAK_GRAIN: tuple[tuple[float, float, float], ...] = (
    (0.3, 0.0, 0.3),
    (0.7, 1.5, 0.2),
    (1.5, 3.0, 0.1),
)


@dataclass
class WoodGrainRecipe(MaterialRecipe):
    """Generates dark oak with horizontal grain bands and knots.

    Creates wood patterns using:
    - Overlaid sine waves for the annual ring bands
    - Hash-placed elliptical knots
    - fBm colour variation over the whole board

    Attributes:
        base_color: Darkest wood colour as (R, G, B) tuple, 0-255
        grain_tint: Colour added at the lightest part of a band
        grain_bias: Colour subtracted from every band
        grain_waves: (frequency, phase, amplitude) sine components
        grain_relief: Height swing of the grain in height levels
        knot_count: Number of knots
        knot_color: Knot colour
        knot_alpha: Knot opacity
        noise_intensity: fBm colour variation
        noise_seed: Seed for the colour variation
        normal_strength: Bump strength for the normal map
    """

    base_color: tuple[int, int, int] = (42, 28, 16)
    grain_tint: tuple[int, int, int] = (18, 14, 8)
    grain_bias: tuple[int, int, int] = (6, 4, 2)
    grain_waves: tuple[tuple[float, float, float], ...] = OAK_GRAIN
    grain_relief: float = 8.0
    knot_count: int = 3
    knot_color: tuple[int, int, int] = (20, 12, 6)
    knot_alpha: float = 0.4
    noise_intensity: float = 4.0
    noise_seed: int = 99
    normal_strength: float = 0.4

    def _synthesize(self, size: int, noise: NoiseField) -> TextureSet:
        diffuse = self._color_canvas(size, self.base_color)
        height = self._gray_canvas(size)

        y = np.arange(size, dtype=np.float64)
        grain = np.zeros(size, dtype=np.float64)
        for frequency, phase, amplitude in self.grain_waves:
            grain += np.sin(y * frequency + phase) * amplitude
        v = grain * 0.5 + 0.5

        base = np.array(self.base_color, dtype=np.float64)
        tint = np.array(self.grain_tint, dtype=np.float64)
        bias = np.array(self.grain_bias, dtype=np.float64)
        row_colors = np.clip(base + v[:, np.newaxis] * tint - bias, 0, 255)

        rows = np.empty((size, 1, 4), dtype=np.float64)
        rows[:, 0, :3] = row_colors
        rows[:, 0, 3] = 255
        diffuse.write_region(0, 0, np.broadcast_to(rows, (size, size, 4)))

        levels = (128 + grain * self.grain_relief)[:, np.newaxis, np.newaxis]
        height.write_region(0, 0, np.broadcast_to(levels, (size, size, 1)))

        for k in range(self.knot_count):
            kx = hash_noise(k * 67) * size
            ky = hash_noise(k * 89) * size
            radius = 8 + hash_noise(k * 23) * 15
            fill_ellipse(diffuse, kx, ky, radius * 1.5, radius, self.knot_color, self.knot_alpha)

        add_noise_to_region(diffuse, noise, 0, 0, size, size, self.noise_intensity, self.noise_seed)

        return TextureSet(
            diffuse=MapTexture.surface(diffuse),
            normal=MapTexture.surface(height_to_normal(height, self.normal_strength)),
        )
