from __future__ import annotations

from .grid import Grid, HexGrid, SQUARE_DIRECTIONS, SquareGrid, grid_for
from .nav import Nav, rect_bounds
from .quadtree import Point, QuadTree, Rectangle

__all__ = [
    "Grid",
    "HexGrid",
    "Nav",
    "Point",
    "QuadTree",
    "Rectangle",
    "SQUARE_DIRECTIONS",
    "SquareGrid",
    "grid_for",
    "rect_bounds",
]
