"""Metal texture recipe using directional brush strokes."""

from dataclasses import dataclass

from .base import MapTexture, MaterialRecipe, TextureSet
from .buffer import composite, fill_ellipse
from .noise import NoiseField, hash_noise
from .normal import height_to_normal
from .stroke import stroke_curve


@dataclass
class BrushedMetalRecipe(MaterialRecipe):
    """Generates brushed silver metal for organ pipes and trusses.

    Creates metal surfaces with:
    - Hundreds of short vertical brush strokes, bright and dark
    - Matching raised and sunken strokes in the height field
    - Faint patina spots
    - Roughness derived from the brush relief

    Attributes:
        base_color: Base metal colour as (R, G, B) tuple, 0-255
        highlight_color: Colour of bright brush strokes
        shadow_color: Colour of dark brush strokes
        stroke_count: Number of brush strokes
        stroke_length: (minimum, extra) stroke length in pixels
        stroke_alpha: (minimum, extra) stroke opacity
        stroke_drift: Maximum horizontal drift of a stroke end
        highlight_height: Height level of bright strokes
        shadow_height: Height level of dark strokes
        patina_count: Number of patina spots
        patina_color: Patina colour
        patina_alpha: Patina opacity
        base_roughness: Roughness level before brush relief (0-255)
        relief_roughness: Opacity of the height field over the roughness
        normal_strength: Bump strength for the normal map
    """

    base_color: tuple[int, int, int] = (140, 140, 150)
    highlight_color: tuple[int, int, int] = (180, 180, 190)
    shadow_color: tuple[int, int, int] = (70, 70, 80)
    stroke_count: int = 400
    stroke_length: tuple[float, float] = (10.0, 50.0)
    stroke_alpha: tuple[float, float] = (0.03, 0.06)
    stroke_drift: float = 4.0
    highlight_height: int = 135
    shadow_height: int = 120
    patina_count: int = 5
    patina_color: tuple[int, int, int] = (100, 110, 90)
    patina_alpha: float = 0.08
    base_roughness: int = 77
    relief_roughness: float = 0.15
    normal_strength: float = 0.6

    def _synthesize(self, size: int, noise: NoiseField) -> TextureSet:
        diffuse = self._color_canvas(size, self.base_color)
        height = self._gray_canvas(size)

        min_length, extra_length = self.stroke_length
        min_alpha, extra_alpha = self.stroke_alpha
        for i in range(self.stroke_count):
            x = hash_noise(i * 13) * size
            y = hash_noise(i * 29) * size
            length = min_length + hash_noise(i * 47) * extra_length
            alpha = min_alpha + hash_noise(i * 7) * extra_alpha
            bright = hash_noise(i * 61) > 0.5
            points = [(x, y), (x + (hash_noise(i * 17) - 0.5) * self.stroke_drift, y + length)]

            color = self.highlight_color if bright else self.shadow_color
            stroke_curve(diffuse, points, color, width=1.0, alpha=alpha)
            level = self.highlight_height if bright else self.shadow_height
            stroke_curve(height, points, level, width=1.0)

        for p in range(self.patina_count):
            px = hash_noise(p * 101) * size
            py = hash_noise(p * 83) * size
            radius = 5 + hash_noise(p * 59) * 10
            fill_ellipse(diffuse, px, py, radius, radius, self.patina_color, self.patina_alpha)

        roughness = self._gray_canvas(size, self.base_roughness)
        composite(roughness, height, self.relief_roughness)

        return TextureSet(
            diffuse=MapTexture.surface(diffuse),
            normal=MapTexture.surface(height_to_normal(height, self.normal_strength)),
            roughness=MapTexture.surface(roughness),
        )
