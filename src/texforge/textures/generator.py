"""Texture generator: owns the shared noise field and dispatches recipes."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .base import MaterialRecipe, TextureSet, check_resolution
from .fabric import FabricRecipe
from .glass import StainedGlassRecipe
from .metal import BrushedMetalRecipe
from .noise import DEFAULT_FIELD_SIZE, NoiseField
from .stone import ColumnStoneRecipe, StoneFloorRecipe, StoneWallRecipe, VaultStoneRecipe
from .wood import WoodGrainRecipe

logger = logging.getLogger(__name__)

# Registry of recipe types
RECIPES: dict[str, type[MaterialRecipe]] = {
    "stone_floor": StoneFloorRecipe,
    "stone_wall": StoneWallRecipe,
    "column_stone": ColumnStoneRecipe,
    "vault_stone": VaultStoneRecipe,
    "wood_grain": WoodGrainRecipe,
    "brushed_metal": BrushedMetalRecipe,
    "stained_glass": StainedGlassRecipe,
    "fabric": FabricRecipe,
}


class QualityTier(Enum):
    """Device quality presets, each mapped to a texture resolution."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


QUALITY_RESOLUTIONS: dict[QualityTier, int] = {
    QualityTier.LOW: 256,
    QualityTier.MEDIUM: 512,
    QualityTier.HIGH: 512,
}


def create_recipe(name: str, **params: Any) -> MaterialRecipe:
    """Instantiate a registered recipe with optional parameter overrides.

    Raises:
        ValueError: If the recipe name is unknown
    """
    recipe_class = RECIPES.get(name)
    if recipe_class is None:
        raise ValueError(f"Unknown recipe: {name}")
    return recipe_class(**params)


@dataclass
class TextureGenerator:
    """Synthesizes texture sets at a fixed resolution.

    One noise field is built at construction and handed, read-only, to
    every recipe call made through this generator.

    Attributes:
        resolution: Square canvas size in pixels
        seed: Seed for the noise field; None draws fresh entropy
        field_size: Side length of the noise field grid
    """

    resolution: int = 512
    seed: int | None = None
    field_size: int = DEFAULT_FIELD_SIZE
    noise: NoiseField = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the resolution and build the noise field."""
        self.resolution = check_resolution(self.resolution)
        self.noise = NoiseField(self.field_size, self.seed)

    @classmethod
    def from_quality(cls, tier: QualityTier | str, seed: int | None = None) -> "TextureGenerator":
        """Create a generator at the resolution of a quality preset."""
        return cls(resolution=QUALITY_RESOLUTIONS[QualityTier(tier)], seed=seed)

    def generate(self, name: str, **params: Any) -> TextureSet:
        """Run one recipe by name.

        Args:
            name: Registered recipe name (see RECIPES)
            **params: Overrides for the recipe's configuration fields

        Returns:
            TextureSet produced by the recipe
        """
        recipe = create_recipe(name, **params)
        logger.debug("Generating %s at %d px", name, self.resolution)
        return self.run(recipe)

    def run(self, recipe: MaterialRecipe, resolution: int | None = None) -> TextureSet:
        """Run an already configured recipe.

        Args:
            recipe: Recipe instance to synthesize
            resolution: Canvas size for this call; defaults to the generator's
        """
        size = self.resolution if resolution is None else resolution
        return recipe.synthesize(size, self.noise)

    def generate_all(self) -> dict[str, TextureSet]:
        """Run every registered recipe with its default configuration."""
        return {name: self.generate(name) for name in RECIPES}
