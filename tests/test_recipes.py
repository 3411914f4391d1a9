"""Tests for every material recipe and the generator that runs them."""

import numpy as np
import pytest

from texforge.textures import (
    RECIPES,
    InvalidDimensionError,
    QualityTier,
    StoneFloorRecipe,
    TextureGenerator,
    TextureSet,
    WrapMode,
    decode_normals,
)

# Maps each recipe is expected to produce
EXPECTED_MAPS = {
    "stone_floor": {"diffuse", "normal", "roughness"},
    "stone_wall": {"diffuse", "normal", "roughness"},
    "column_stone": {"diffuse", "normal"},
    "vault_stone": {"diffuse", "normal"},
    "wood_grain": {"diffuse", "normal"},
    "brushed_metal": {"diffuse", "normal", "roughness"},
    "stained_glass": {"diffuse"},
    "fabric": {"diffuse", "normal"},
}

FIXED_SIZE = {"stained_glass": 256, "fabric": 256}


def test_registry_covers_expected_recipes():
    assert set(RECIPES) == set(EXPECTED_MAPS)


@pytest.mark.parametrize("name", list(RECIPES))
def test_recipe_produces_expected_maps(generator, name):
    texture_set = generator.generate(name)
    assert isinstance(texture_set, TextureSet)
    assert set(texture_set.maps()) == EXPECTED_MAPS[name]

    size = FIXED_SIZE.get(name, generator.resolution)
    for key, texture in texture_set.maps().items():
        assert texture.size == (size, size), f"{name}.{key} has size {texture.size}"
        assert texture.buffer.frozen
        expected_channels = 1 if key == "roughness" else 4
        assert texture.buffer.channels == expected_channels


@pytest.mark.parametrize("name", list(RECIPES))
def test_recipe_is_deterministic(name):
    first = TextureGenerator(resolution=48, seed=11).generate(name)
    second = TextureGenerator(resolution=48, seed=11).generate(name)
    for key, texture in first.maps().items():
        np.testing.assert_array_equal(texture.buffer.data, second[key].buffer.data)


@pytest.mark.parametrize("name", [n for n in RECIPES if "normal" in EXPECTED_MAPS[n]])
def test_recipe_normals_are_unit_and_opaque(generator, name):
    normal = generator.generate(name).normal
    assert (normal.buffer.data[:, :, 3] == 255).all()
    lengths = np.linalg.norm(decode_normals(normal.buffer), axis=2)
    np.testing.assert_allclose(lengths, 1.0, atol=0.02)


@pytest.mark.parametrize("name", [n for n in RECIPES if n != "stained_glass"])
def test_surface_maps_are_opaque_and_repeat(generator, name):
    texture_set = generator.generate(name)
    for texture in texture_set.maps().values():
        assert texture.wrap is WrapMode.REPEAT
        assert not texture.transparent
        assert texture.generate_mipmaps
    assert (texture_set.diffuse.buffer.data[:, :, 3] == 255).all()


def test_stained_glass_is_transparent_overlay(generator):
    overlay = generator.generate("stained_glass").diffuse
    assert overlay.wrap is WrapMode.CLAMP
    assert overlay.transparent
    assert not overlay.premultiply_alpha
    alpha = overlay.buffer.data[:, :, 3]
    assert (alpha == 0).any()
    assert alpha.max() >= 170


@pytest.mark.parametrize("name", ["stone_wall", "vault_stone", "stone_floor", "column_stone", "wood_grain"])
def test_noise_seed_changes_output(name):
    a = TextureGenerator(resolution=48, seed=1).generate(name)
    b = TextureGenerator(resolution=48, seed=2).generate(name)
    assert not np.array_equal(a.diffuse.buffer.data, b.diffuse.buffer.data)


def test_stone_floor_roughness_levels(generator):
    roughness = generator.generate("stone_floor").roughness.buffer.data[:, :, 0]
    assert roughness[16, 16] == 42
    assert roughness[0, 16] == 204
    assert roughness[32, 10] == 204


def test_stone_wall_roughness_is_two_level(generator):
    roughness = generator.generate("stone_wall").roughness.buffer.data
    assert set(np.unique(roughness)) <= {180, 220}
    assert len(np.unique(roughness)) == 2


def test_brushed_metal_roughness_near_base(generator):
    roughness = generator.generate("brushed_metal").roughness.buffer.data.astype(int)
    # 77 blended with heights between 120 and 135 at 15 %
    assert roughness.min() >= 77
    assert roughness.max() <= 86


def test_wood_grain_is_dark():
    diffuse = TextureGenerator(resolution=64, seed=3).generate("wood_grain").diffuse.buffer.data
    assert diffuse[:, :, :3].mean() < 70
    assert (diffuse[:, :, 0] >= diffuse[:, :, 2]).mean() > 0.9


def test_parameter_overrides(generator):
    default = generator.generate("stone_floor")
    four = generator.generate("stone_floor", tiles_per_side=4)
    roughness = four.roughness.buffer.data[:, :, 0]
    assert roughness[16, 40] == 204
    assert not np.array_equal(default.roughness.buffer.data, four.roughness.buffer.data)


def test_run_with_configured_recipe(generator):
    recipe = StoneFloorRecipe(vein_layers=(), noise_intensity=0.0, tile_variation=0.0)
    diffuse = generator.run(recipe).diffuse.buffer.data
    # Without veins, noise or variation each tile is a flat fill
    assert tuple(diffuse[16, 16, :3]) == (190, 179, 167)
    assert tuple(diffuse[48, 48, :3]) == (190, 179, 167)


@pytest.mark.parametrize("name", list(RECIPES))
def test_tiny_resolution_is_total(name):
    texture_set = TextureGenerator(resolution=4, seed=0).generate(name)
    assert texture_set.diffuse.buffer.width == FIXED_SIZE.get(name, 4)


@pytest.mark.parametrize("resolution", [0, -512, 2.5, "512", True, None])
def test_invalid_resolution(resolution):
    with pytest.raises(InvalidDimensionError):
        TextureGenerator(resolution=resolution)


def test_recipe_rejects_invalid_resolution(noise):
    with pytest.raises(InvalidDimensionError):
        StoneFloorRecipe().synthesize(0, noise)


def test_unknown_recipe(generator):
    with pytest.raises(ValueError, match="Unknown recipe"):
        generator.generate("lava")


def test_unknown_parameter(generator):
    with pytest.raises(TypeError):
        generator.generate("wood_grain", not_a_field=1)


@pytest.mark.parametrize("tier,resolution", [("low", 256), ("medium", 512), (QualityTier.HIGH, 512)])
def test_quality_presets(tier, resolution):
    assert TextureGenerator.from_quality(tier, seed=0).resolution == resolution


def test_texture_set_access(generator):
    texture_set = generator.generate("column_stone")
    assert "normal" in texture_set
    assert "roughness" not in texture_set
    assert texture_set["diffuse"] is texture_set.diffuse
    with pytest.raises(KeyError):
        texture_set["roughness"]


def test_texture_set_save(generator, tmp_path):
    paths = generator.generate("stone_wall").save(tmp_path, "wall")
    assert [p.name for p in paths] == ["wall_diffuse.png", "wall_normal.png", "wall_roughness.png"]
    assert all(p.stat().st_size > 0 for p in paths)


def test_numpy_integer_resolution(noise):
    generator = TextureGenerator(resolution=np.int64(16), seed=0)
    assert generator.resolution == 16
    assert type(generator.resolution) is int
    texture_set = StoneFloorRecipe().synthesize(np.int32(8), noise)
    assert texture_set.diffuse.size == (8, 8)


def test_run_at_explicit_resolution(generator):
    texture_set = generator.run(StoneFloorRecipe(), resolution=16)
    assert texture_set.roughness.size == (16, 16)
    with pytest.raises(InvalidDimensionError):
        generator.run(StoneFloorRecipe(), resolution=0)


def test_fabric_height_is_flat_by_default(generator):
    normal = generator.generate("fabric").normal.buffer.data
    assert (normal == np.array([127, 127, 255, 255], dtype=np.uint8)).all()


def test_fabric_weave_relief_is_opt_in(generator):
    normal = generator.generate("fabric", warp_height=136, weft_height=120).normal.buffer.data
    assert (normal[:, :, 2] < 255).any()
