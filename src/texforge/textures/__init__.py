"""Procedural texture generation module."""

from .base import MapTexture, MaterialRecipe, TextureSet, WrapMode
from .buffer import (
    PixelBuffer,
    add_noise_to_region,
    composite,
    fill_ellipse,
    fill_linear_gradient,
    fill_region,
    rgb,
)
from .errors import AllocationError, InvalidDimensionError, TextureError
from .fabric import FabricRecipe
from .generator import RECIPES, QualityTier, TextureGenerator, create_recipe
from .glass import StainedGlassRecipe
from .metal import BrushedMetalRecipe
from .noise import NoiseField, fbm, hash_noise
from .normal import decode_normals, height_to_normal
from .stone import ColumnStoneRecipe, StoneFloorRecipe, StoneWallRecipe, VaultStoneRecipe
from .stroke import Axis, VeinStyle, draw_veins, stroke_curve
from .wood import WoodGrainRecipe

__all__ = [
    "AllocationError",
    "Axis",
    "BrushedMetalRecipe",
    "ColumnStoneRecipe",
    "FabricRecipe",
    "InvalidDimensionError",
    "MapTexture",
    "MaterialRecipe",
    "NoiseField",
    "PixelBuffer",
    "QualityTier",
    "RECIPES",
    "StainedGlassRecipe",
    "StoneFloorRecipe",
    "StoneWallRecipe",
    "TextureError",
    "TextureGenerator",
    "TextureSet",
    "VaultStoneRecipe",
    "VeinStyle",
    "WoodGrainRecipe",
    "WrapMode",
    "add_noise_to_region",
    "composite",
    "create_recipe",
    "decode_normals",
    "draw_veins",
    "fbm",
    "fill_ellipse",
    "fill_linear_gradient",
    "fill_region",
    "hash_noise",
    "height_to_normal",
    "rgb",
    "stroke_curve",
]
