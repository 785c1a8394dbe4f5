from __future__ import annotations

"""Point quadtree for rectangular range queries."""

from dataclasses import dataclass
from typing import Any, List, NamedTuple, Optional

from . import settings


class Point(NamedTuple):
    x: float
    y: float
    data: Any = None


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle with ``(x, y)`` at the top-left corner."""

    x: float
    y: float
    width: float
    height: float

    def contains(self, point) -> bool:
        # edges count as inside
        return (
            self.x <= point.x <= self.x + self.width
            and self.y <= point.y <= self.y + self.height
        )

    def intersects(self, other: "Rectangle") -> bool:
        # touching edges overlap, matching contains()
        return (
            self.x <= other.x + other.width
            and self.x + self.width >= other.x
            and self.y <= other.y + other.height
            and self.y + self.height >= other.y
        )

    def contains_rect(self, other: "Rectangle") -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.x + other.width <= self.x + self.width
            and other.y + other.height <= self.y + self.height
        )


class QuadTree:
    """
    Each node holds up to ``capacity`` points. Once full it splits into four
    equal quadrants and further points are routed to the first quadrant
    (NW, NE, SW, SE) whose boundary contains them, so a point on a shared
    edge always lands in the earlier quadrant.
    """

    def __init__(self, boundary: Rectangle, capacity: int = settings.QUADTREE_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("QuadTree capacity must be at least 1")
        self.boundary = boundary
        self.capacity = capacity
        self.points: List[Any] = []
        self.divided = False
        self.north_west: Optional[QuadTree] = None
        self.north_east: Optional[QuadTree] = None
        self.south_west: Optional[QuadTree] = None
        self.south_east: Optional[QuadTree] = None

    def __repr__(self) -> str:
        return f"QuadTree({self.boundary}, points={len(self)})"

    def __len__(self) -> int:
        total = len(self.points)
        for child in self.children():
            total += len(child)
        return total

    def children(self) -> List["QuadTree"]:
        if not self.divided:
            return []
        return [self.north_west, self.north_east, self.south_west, self.south_east]

    def insert(self, point) -> bool:
        """Store ``point``; returns ``False`` if it lies outside the boundary."""
        if not self.boundary.contains(point):
            return False
        if len(self.points) < self.capacity:
            self.points.append(point)
            return True
        if not self.divided:
            self.subdivide()
        for child in self.children():
            if child.insert(point):
                return True
        return False

    def subdivide(self) -> None:
        b = self.boundary
        hw = b.width / 2
        hh = b.height / 2
        self.north_west = QuadTree(Rectangle(b.x, b.y, hw, hh), self.capacity)
        self.north_east = QuadTree(Rectangle(b.x + hw, b.y, hw, hh), self.capacity)
        self.south_west = QuadTree(Rectangle(b.x, b.y + hh, hw, hh), self.capacity)
        self.south_east = QuadTree(Rectangle(b.x + hw, b.y + hh, hw, hh), self.capacity)
        self.divided = True

    def _collect(self, found: List[Any]) -> None:
        found.extend(self.points)
        for child in self.children():
            child._collect(found)

    def query(self, area: Rectangle, found: Optional[List[Any]] = None) -> List[Any]:
        """
        Append every stored point inside ``area`` to ``found`` and return it.
        Each point is reported at most once.
        """
        if found is None:
            found = []
        if not self.boundary.intersects(area):
            return found
        if area.contains_rect(self.boundary):
            self._collect(found)
            return found
        for p in self.points:
            if area.contains(p):
                found.append(p)
        for child in self.children():
            child.query(area, found)
        return found


__all__ = ["Point", "QuadTree", "Rectangle"]
