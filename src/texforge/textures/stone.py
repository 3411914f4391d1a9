"""Stone texture recipes: marble floor, ashlar wall, fluted column, vault."""

import math
from dataclasses import dataclass

import numpy as np

from .base import MapTexture, MaterialRecipe, TextureSet
from .buffer import PixelBuffer, add_noise_to_region, fill_linear_gradient, fill_region, rgb
from .noise import NoiseField, hash_noise
from .normal import height_to_normal
from .stroke import VeinStyle, draw_veins

# (seed offset, style) for each vein layer, drawn in order
MARBLE_VEINS: tuple[tuple[int, VeinStyle], ...] = (
    (0, VeinStyle(colors=((80, 70, 60), (55, 48, 40)), alphas=(0.6, 0.5), count=7)),
    (10, VeinStyle(colors=((140, 130, 120), (110, 100, 90)), alphas=(0.3, 0.2), count=10)),
    (20, VeinStyle(colors=((210, 200, 185), (170, 160, 148)), alphas=(0.15, 0.1), count=5)),
)


@dataclass
class StoneFloorRecipe(MaterialRecipe):
    """Polished marble floor tiles with layered veining and grout.

    Attributes:
        base_color: Colour showing between tiles before grout is drawn
        tile_color: Mean tile colour, shifted per tile by a hash
        tile_variation: Peak-to-peak per-tile brightness shift
        tiles_per_side: Tiles along each edge of the canvas
        tile_inset: Gap in pixels between tile edge and tile fill
        vein_layers: (seed offset, style) pairs drawn on every tile
        noise_intensity: fBm colour depth inside each tile
        grout_color: Grout line colour
        grout_alpha: Grout line opacity
        grout_width: Grout line width in pixels
        grout_height: Height level of the grout recess
        polish_roughness: Roughness level of the tile surface (0-255)
        grout_roughness: Roughness level of the grout (0-255)
        normal_strength: Bump strength for the normal map
    """

    base_color: tuple[int, int, int] = (200, 191, 180)
    tile_color: tuple[int, int, int] = (190, 179, 167)
    tile_variation: float = 14.0
    tiles_per_side: int = 2
    tile_inset: int = 2
    vein_layers: tuple[tuple[int, VeinStyle], ...] = MARBLE_VEINS
    noise_intensity: float = 8.0
    grout_color: tuple[int, int, int] = (40, 35, 30)
    grout_alpha: float = 0.9
    grout_width: int = 3
    grout_height: int = 48
    polish_roughness: int = 42
    grout_roughness: int = 204
    normal_strength: float = 0.6

    def _synthesize(self, size: int, noise: NoiseField) -> TextureSet:
        diffuse = self._color_canvas(size, self.base_color)
        height = self._gray_canvas(size)
        roughness = self._gray_canvas(size, self.polish_roughness)

        tiles = max(1, self.tiles_per_side)
        tile_size = size / tiles
        inset = self.tile_inset
        for ty in range(tiles):
            for tx in range(tiles):
                ox = tx * tile_size
                oy = ty * tile_size

                v = hash_noise(tx * 31 + ty * 47) * self.tile_variation - self.tile_variation / 2
                r, g, b = self.tile_color
                fill_region(
                    diffuse, ox + inset, oy + inset,
                    tile_size - 2 * inset, tile_size - 2 * inset,
                    rgb(r + v, g + v, b + v),
                )

                for seed_offset, style in self.vein_layers:
                    draw_veins(diffuse, ox, oy, tile_size, tile_size, tx + ty * 2 + seed_offset, style)

                add_noise_to_region(
                    diffuse, noise, ox + inset, oy + inset,
                    tile_size - 2 * inset, tile_size - 2 * inset,
                    self.noise_intensity, tx + ty * 4,
                )

        half = self.grout_width // 2
        for i in range(tiles + 1):
            pos = i * tile_size
            for buffer, color, alpha in (
                (diffuse, self.grout_color, self.grout_alpha),
                (height, self.grout_height, 1.0),
                (roughness, self.grout_roughness, 1.0),
            ):
                fill_region(buffer, pos - half, 0, self.grout_width, size, color, alpha)
                fill_region(buffer, 0, pos - half, size, self.grout_width, color, alpha)

        return TextureSet(
            diffuse=MapTexture.surface(diffuse),
            normal=MapTexture.surface(height_to_normal(height, self.normal_strength)),
            roughness=MapTexture.surface(roughness),
        )


@dataclass
class MasonryRecipe(MaterialRecipe):
    """Running-bond block masonry shared by wall and vault stone.

    Each block gets a hashed colour shift and its own noise seed; mortar
    is drawn over the blocks in both the diffuse and height buffers.

    Attributes:
        base_color: Mean block colour (also the background)
        blocks_across: Blocks per row across the canvas
        rows_down: Block rows down the canvas
        color_variation: Peak-to-peak per-block brightness shift
        warmth_variation: Peak-to-peak red/blue balance shift per block
        color_hash: (column, row) multipliers for the brightness hash
        noise_intensity: fBm colour variation inside each block
        noise_seed: (column, row) multipliers for the per-block noise seed
        block_relief: Peak-to-peak height variation of raised blocks, or
            None for a flat block surface
        mortar_color: Mortar colour
        mortar_alpha: Mortar opacity
        mortar_width: Mortar line width in pixels
        mortar_height: Height level of the mortar recess
        mortar_offset: Vertical shift of horizontal mortar lines
        normal_strength: Bump strength for the normal map
    """

    base_color: tuple[int, int, int] = (138, 128, 112)
    blocks_across: int = 6
    rows_down: int = 12
    color_variation: float = 30.0
    warmth_variation: float = 0.0
    color_hash: tuple[int, int] = (13, 37)
    noise_intensity: float = 8.0
    noise_seed: tuple[int, int] = (1, 100)
    block_relief: float | None = None
    mortar_color: tuple[int, int, int] = (60, 54, 48)
    mortar_alpha: float = 0.7
    mortar_width: int = 2
    mortar_height: int = 64
    mortar_offset: int = 0
    normal_strength: float = 1.0

    def _synthesize(self, size: int, noise: NoiseField) -> TextureSet:
        diffuse = self._color_canvas(size, self.base_color)
        height = self._gray_canvas(size)

        block_w = max(1, size // self.blocks_across)
        block_h = max(1, size // self.rows_down)
        rows = math.ceil(size / block_h) + 1
        cols = math.ceil(size / block_w) + 1

        for row in range(rows):
            offset = (row % 2) * (block_w / 2)
            for col in range(-1, cols):
                bx = col * block_w + offset
                by = row * block_h
                self._draw_block(diffuse, height, noise, col, row, bx, by, block_w, block_h)

        for row in range(rows):
            y = row * block_h
            fill_region(diffuse, 0, y + self.mortar_offset, size, self.mortar_width,
                        self.mortar_color, self.mortar_alpha)
            fill_region(height, 0, y + self.mortar_offset, size, self.mortar_width, self.mortar_height)

            offset = (row % 2) * (block_w / 2)
            for col in range(cols + 1):
                mx = col * block_w + offset - self.mortar_width / 2
                fill_region(diffuse, mx, y, self.mortar_width, block_h, self.mortar_color, self.mortar_alpha)
                fill_region(height, mx, y, self.mortar_width, block_h, self.mortar_height)

        self._weather(diffuse, size)

        return TextureSet(
            diffuse=MapTexture.surface(diffuse),
            normal=MapTexture.surface(height_to_normal(height, self.normal_strength)),
            roughness=self._roughness(height),
        )

    def _draw_block(
        self,
        diffuse: PixelBuffer,
        height: PixelBuffer,
        noise: NoiseField,
        col: int, row: int,
        bx: float, by: float,
        block_w: int, block_h: int,
    ) -> None:
        """Fill one block with its colour, relief and surface noise."""
        hash_col, hash_row = self.color_hash
        v = hash_noise(col * hash_col + row * hash_row) * self.color_variation - self.color_variation / 2
        ws = 0.0
        if self.warmth_variation:
            ws = hash_noise(col * 7 + row * 23) * self.warmth_variation - self.warmth_variation / 2
        r, g, b = self.base_color
        fill_region(diffuse, bx + 1, by + 1, block_w - 2, block_h - 2, rgb(r + v + ws, g + v, b + v - ws))

        if self.block_relief is not None:
            level = 128 + hash_noise(col * 19 + row * 43) * self.block_relief - self.block_relief / 2
            fill_region(height, bx + 2, by + 2, block_w - 4, block_h - 4, level)

        seed_col, seed_row = self.noise_seed
        add_noise_to_region(
            diffuse, noise, bx + 1, by + 1, block_w - 2, block_h - 2,
            self.noise_intensity, col * seed_col + row * seed_row,
        )

    def _weather(self, diffuse: PixelBuffer, size: int) -> None:
        """Hook for surface aging passes drawn after the mortar."""

    def _roughness(self, height: PixelBuffer) -> MapTexture | None:
        return None


@dataclass
class StoneWallRecipe(MasonryRecipe):
    """Ashlar sandstone wall in running bond with raised blocks and aging streaks.

    Attributes:
        streak_count: Number of vertical aging streaks
        streak_color: Streak colour
        streak_alpha: Streak opacity
        stone_roughness: Roughness level of block faces
        mortar_roughness: Roughness level of mortar joints
        relief_threshold: Normalized height above which a pixel is a block face
    """

    warmth_variation: float = 10.0
    block_relief: float | None = 10.0
    normal_strength: float = 1.5
    streak_count: int = 20
    streak_color: tuple[int, int, int] = (50, 45, 40)
    streak_alpha: float = 0.06
    stone_roughness: int = 180
    mortar_roughness: int = 220
    relief_threshold: float = 0.45

    def _weather(self, diffuse: PixelBuffer, size: int) -> None:
        for i in range(self.streak_count):
            sx = hash_noise(i * 97) * size
            sy = hash_noise(i * 53) * size * 0.3
            length = 20 + hash_noise(i * 71) * 80
            fill_region(diffuse, sx, sy, 2, length, self.streak_color, self.streak_alpha)

    def _roughness(self, height: PixelBuffer) -> MapTexture:
        level = height.data[:, :, 0].astype(np.float64) / 255.0
        values = np.where(level > self.relief_threshold, self.stone_roughness, self.mortar_roughness)
        return MapTexture.surface(PixelBuffer.from_array(values))


@dataclass
class VaultStoneRecipe(MasonryRecipe):
    """Larger, cooler ceiling blocks for vaulted ceilings."""

    base_color: tuple[int, int, int] = (125, 119, 110)
    blocks_across: int = 4
    rows_down: int = 8
    color_variation: float = 20.0
    color_hash: tuple[int, int] = (17, 41)
    noise_intensity: float = 5.0
    noise_seed: tuple[int, int] = (3, 7)
    mortar_color: tuple[int, int, int] = (55, 50, 45)
    mortar_alpha: float = 0.6
    mortar_height: int = 80
    mortar_offset: int = -1
    normal_strength: float = 1.0


@dataclass
class ColumnStoneRecipe(MaterialRecipe):
    """Fluted column shaft with horizontal drum joints and base weathering.

    Attributes:
        base_color: Stone colour
        flute_count: Vertical flutes across the canvas
        flute_shadow: Peak shadow opacity at the centre of a flute
        flute_depth: Height level at the bottom of a flute
        drum_count: Column drums stacked down the canvas
        joint_color: Drum joint colour
        joint_alpha: Drum joint opacity
        joint_height: Height level of a drum joint
        weathering_color: Grime colour near the bottom edge
        weathering_alpha: Grime opacity at the bottom edge
        weathering_start: Fraction of the height where grime begins
        noise_intensity: fBm colour variation over the whole canvas
        noise_seed: Seed for the colour variation
        normal_strength: Bump strength for the normal map
    """

    base_color: tuple[int, int, int] = (146, 138, 126)
    flute_count: int = 8
    flute_shadow: float = 0.1
    flute_depth: int = 110
    drum_count: int = 4
    joint_color: tuple[int, int, int] = (60, 54, 48)
    joint_alpha: float = 0.5
    joint_height: int = 80
    weathering_color: tuple[int, int, int] = (30, 25, 20)
    weathering_alpha: float = 0.15
    weathering_start: float = 0.8
    noise_intensity: float = 6.0
    noise_seed: int = 42
    normal_strength: float = 1.2

    def _synthesize(self, size: int, noise: NoiseField) -> TextureSet:
        diffuse = self._color_canvas(size, self.base_color)
        height = self._gray_canvas(size)

        flute_width = size / max(1, self.flute_count)
        shadow = self.flute_shadow
        for f in range(max(1, self.flute_count)):
            fx = f * flute_width
            fill_linear_gradient(
                diffuse, fx, 0, flute_width, size,
                (fx, 0), (fx + flute_width, 0),
                [(0.0, 0, 0.0), (0.3, 0, shadow * 0.6), (0.5, 0, shadow), (0.7, 0, shadow * 0.6), (1.0, 0, 0.0)],
            )
            fill_linear_gradient(
                height, fx, 0, flute_width, size,
                (fx, 0), (fx + flute_width, 0),
                [(0.0, 128, 1.0), (0.5, self.flute_depth, 1.0), (1.0, 128, 1.0)],
            )

        spacing = size / max(1, self.drum_count)
        for j in range(1, self.drum_count):
            jy = j * spacing
            fill_region(diffuse, 0, jy - 1, size, 2, self.joint_color, self.joint_alpha)
            fill_region(height, 0, jy - 1, size, 3, self.joint_height)

        grime = self.weathering_color
        fill_linear_gradient(
            diffuse, 0, 0, size, size, (0, 0), (0, size),
            [(0.0, grime, 0.0), (self.weathering_start, grime, 0.0), (1.0, grime, self.weathering_alpha)],
        )

        add_noise_to_region(diffuse, noise, 0, 0, size, size, self.noise_intensity, self.noise_seed)

        return TextureSet(
            diffuse=MapTexture.surface(diffuse),
            normal=MapTexture.surface(height_to_normal(height, self.normal_strength)),
        )
