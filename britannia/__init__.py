"""Game-data loading, world building and engine toolkit for an isometric role-playing game."""

__version__ = "0.1.0"