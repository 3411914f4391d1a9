"""Shared fixtures for texture synthesis tests."""

import pytest

from texforge.textures import NoiseField, TextureGenerator


@pytest.fixture
def noise() -> NoiseField:
    """A small seeded noise field."""
    return NoiseField(32, seed=1234)


@pytest.fixture(scope="module")
def generator() -> TextureGenerator:
    """A seeded generator at a resolution small enough for fast tests."""
    return TextureGenerator(resolution=64, seed=7)
