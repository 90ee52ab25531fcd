"""Immediate-mode UI building blocks (layout, input, draw commands, meshes, styles) and a Tiled map loader."""

__version__ = "0.3.25"