"""Isometric tile game engine with an entity-component-system core."""

__version__ = "0.1.0"