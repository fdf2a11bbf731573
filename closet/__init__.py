"""Closet: wardrobe, outfit, calendar and feed backend."""

__version__ = "1.0.0"
