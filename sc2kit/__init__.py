"""Geometry, image grids, unit records and unit grouping for real-time strategy game bots."""

__version__ = "0.1.0"

__all__ = ["geometry", "image", "model", "player", "unit", "units", "unit_context"]