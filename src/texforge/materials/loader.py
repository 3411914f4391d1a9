"""Material definitions read from YAML files on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .material import Material
from ..textures.base import check_resolution
from ..textures.generator import RECIPES
from ..textures.stroke import Axis, VeinStyle

# assets/materials at the repository root
DEFAULT_MATERIALS_DIR = Path(__file__).resolve().parents[3] / "assets" / "materials"


class MaterialLoader:
    """Resolves material names to YAML files and parses them into Materials.

    A material file names a registered recipe, optional overrides for its
    fields, and the surface properties the renderer needs:

    ```yaml
    name: cathedral_floor
    recipe:
      type: stone_floor
      params:
        tiles_per_side: 2
        noise_intensity: 8
    repeat: [4, 7.5]
    size: 512
    roughness: 0.3
    ```

    Colours given as lists become tuples. ``vein_layers`` entries become
    ``(seed_offset, VeinStyle)`` pairs.
    """

    def __init__(self, search_paths: list[Path] | None = None) -> None:
        """
        Args:
            search_paths: Directories searched in order for ``<name>.yaml``.
                Defaults to the bundled assets/materials directory.
        """
        paths = [DEFAULT_MATERIALS_DIR] if search_paths is None else search_paths
        self.search_paths = [Path(p) for p in paths]
        self._cache: dict[str, Material] = {}

    def load(self, name: str) -> Material:
        """Return the material called ``name``, parsing its file on first use.

        Raises:
            FileNotFoundError: No search path holds ``<name>.yaml``
            ValueError: The file is not a valid material definition
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        path = self._find_yaml(name)
        if path is None:
            searched = ", ".join(str(p) for p in self.search_paths)
            raise FileNotFoundError(f"Material '{name}' not found in {searched}")

        material = self._cache[name] = self._load_yaml(path)
        return material

    def available(self) -> list[str]:
        """List material names found in the search paths."""
        names = set()
        for search_path in self.search_paths:
            if search_path.is_dir():
                names.update(p.stem for p in search_path.glob("*.yaml"))
        return sorted(names)

    def _find_yaml(self, name: str) -> Path | None:
        candidates = (directory / f"{name}.yaml" for directory in self.search_paths)
        return next((path for path in candidates if path.is_file()), None)

    def _load_yaml(self, path: Path) -> Material:
        data = yaml.safe_load(path.read_text())

        if not isinstance(data, dict):
            raise ValueError(f"Material file {path} must contain a mapping")
        return self._parse_material(data, default_name=path.stem)

    def _parse_material(self, data: dict[str, Any], default_name: str = "unnamed") -> Material:
        name = data.get("name", default_name)

        recipe_data = data.get("recipe") or {}
        if not isinstance(recipe_data, dict):
            raise ValueError(f"Material '{name}' recipe must be a mapping with a 'type' key")
        recipe_type = recipe_data.get("type")
        if recipe_type not in RECIPES:
            raise ValueError(f"Unknown recipe type: {recipe_type}")
        params = self._convert_params(recipe_data.get("params") or {})

        repeat = data.get("repeat", [1, 1])
        if isinstance(repeat, (int, float)):
            repeat = [repeat, repeat]
        if len(repeat) != 2:
            raise ValueError(f"Material '{name}' repeat must have two components, got {repeat}")

        resolution = self._parse_size(name, data.get("size"))

        return Material(
            name=name,
            recipe=recipe_type,
            params=params,
            repeat=(float(repeat[0]), float(repeat[1])),
            resolution=resolution,
            roughness=float(data.get("roughness", 0.8)),
            metallic=float(data.get("metallic", 0.0)),
            normal_scale=float(data.get("normal_scale", 1.0)),
        )

    def _parse_size(self, name: str, size: Any) -> int | None:
        """Parse an optional square ``size`` given as N or [N, N]."""
        if size is None:
            return None
        if isinstance(size, list):
            if len(size) != 2 or size[0] != size[1]:
                raise ValueError(f"Material '{name}' size must be square, got {size}")
            size = size[0]
        return check_resolution(size)

    def _convert_params(self, params: dict[str, Any]) -> dict[str, Any]:
        """Convert YAML params to recipe constructor args."""
        converted = {}
        for key, value in params.items():
            if key == "vein_layers":
                converted[key] = tuple(self._parse_vein_layer(layer) for layer in value)
            elif isinstance(value, list):
                # Colours and (min, extra) pairs are tuples on the recipes
                converted[key] = tuple(tuple(v) if isinstance(v, list) else v for v in value)
            else:
                converted[key] = value
        return converted

    def _parse_vein_layer(self, layer: dict[str, Any]) -> tuple[int, VeinStyle]:
        """Parse one ``{seed_offset, ...style fields}`` vein layer."""
        style = dict(layer)
        seed_offset = int(style.pop("seed_offset", 0))
        if "colors" in style:
            style["colors"] = tuple(tuple(c) for c in style["colors"])
        if "alphas" in style:
            style["alphas"] = tuple(style["alphas"])
        if "axis" in style:
            style["axis"] = Axis(style["axis"])
        return seed_offset, VeinStyle(**style)

    def clear_cache(self) -> None:
        """Clear the material cache."""
        self._cache.clear()
