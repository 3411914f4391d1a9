"""Exceptions raised by the texture synthesis engine."""


class TextureError(Exception):
    """Base class for texture synthesis errors."""


class InvalidDimensionError(TextureError, ValueError):
    """A resolution or buffer dimension is not a positive integer."""


class AllocationError(TextureError, MemoryError):
    """A pixel buffer could not be allocated."""
