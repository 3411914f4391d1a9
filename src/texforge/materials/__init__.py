"""Material system binding texture sets to surfaces."""

from .material import Material
from .loader import MaterialLoader

__all__ = ["Material", "MaterialLoader"]
