"""Stained-glass lead came overlay."""

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from .base import MapTexture, MaterialRecipe, TextureSet
from .buffer import PixelBuffer, fill_ellipse
from .noise import NoiseField
from .stroke import stroke_lines


@dataclass
class StainedGlassRecipe(MaterialRecipe):
    """Diamond lattice of lead cames on a transparent 256 px canvas.

    The output is a single clamp-wrapped, straight-alpha diffuse map meant
    to be layered over a window surface.

    Attributes:
        lead_color: Came colour as (R, G, B) tuple, 0-255
        lead_alpha: Came opacity
        lead_width: Came width in pixels
        divisions: Lattice cells along each edge
        joint_radius: Radius of the solder joints at grid points
        joint_alpha: Solder joint opacity
    """

    fixed_resolution: ClassVar[int | None] = 256

    lead_color: tuple[int, int, int] = (15, 15, 20)
    lead_alpha: float = 0.7
    lead_width: float = 2.0
    divisions: int = 6
    joint_radius: float = 3.0
    joint_alpha: float = 0.6

    def _synthesize(self, size: int, noise: NoiseField) -> TextureSet:
        diffuse = PixelBuffer(size, size, channels=4)
        spacing = size / max(1, self.divisions)

        diagonals = []
        for i in np.arange(-size, size * 2, spacing):
            diagonals.append(((i, 0), (i + size, size)))
            diagonals.append(((i + size, 0), (i, size)))
        stroke_lines(diffuse, diagonals, self.lead_color, self.lead_width, self.lead_alpha)

        rails = [((0, y), (size, y)) for y in np.arange(spacing, size, spacing)]
        stroke_lines(diffuse, rails, self.lead_color, self.lead_width, self.lead_alpha)

        for y in np.arange(0, size + spacing / 2, spacing):
            for x in np.arange(0, size + spacing / 2, spacing):
                fill_ellipse(diffuse, x, y, self.joint_radius, self.joint_radius, self.lead_color, self.joint_alpha)

        return TextureSet(diffuse=MapTexture.overlay(diffuse))
