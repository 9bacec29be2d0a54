"""Procedural 3D trees: parameters, tree generation, transforms and a matplotlib viewer."""

__version__ = "0.1.0"
__all__ = ["__version__"]