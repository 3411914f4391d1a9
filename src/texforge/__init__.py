"""texforge - procedural PBR texture synthesis."""

__version__ = "0.1.0"
