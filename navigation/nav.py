from __future__ import annotations

"""Breadth-first pathfinding over any grid that exposes ``neighbors``."""

import logging
from collections import deque
from typing import Callable, Dict, Iterable, List, Optional, Set

from worldgen.coords import Coordinate, as_coordinate

from . import settings
from .grid import Grid

logger = logging.getLogger("hexworld.nav")
logger.addHandler(logging.NullHandler())


class Nav:
    """
    Unweighted BFS navigator bound to a single grid for its lifetime.

    Blockers are held in a set of coordinate tuples. ``in_bounds`` optionally
    restricts the search to a finite region; ``max_expansions`` caps how many
    cells one search may dequeue, since the grids themselves are unbounded.
    """

    def __init__(
        self,
        grid: Grid,
        *,
        in_bounds: Optional[Callable[[Coordinate], bool]] = None,
        max_expansions: int = settings.MAX_PATH_EXPANSIONS,
    ) -> None:
        self.grid = grid
        self.in_bounds = in_bounds
        self.max_expansions = max_expansions
        self.blockers: Set[Coordinate] = set()

    def _key(self, coord) -> Coordinate:
        a, b = as_coordinate(coord)
        return a, b

    def set_blocker(self, coord: Coordinate, blocked: bool = True) -> None:
        key = self._key(coord)
        if blocked:
            self.blockers.add(key)
        else:
            self.blockers.discard(key)

    def set_blockers(self, coords: Iterable[Coordinate], blocked: bool = True) -> None:
        for c in coords:
            self.set_blocker(c, blocked)

    def clear_blockers(self) -> None:
        self.blockers.clear()

    def is_blocked(self, coord: Coordinate) -> bool:
        return self._key(coord) in self.blockers

    def cost(self, a: Optional[Coordinate] = None, b: Optional[Coordinate] = None) -> int:
        """Every step costs 1."""
        return 1

    def pathfind(self, start: Coordinate, goal: Coordinate) -> List[Coordinate]:
        """
        Shortest path from ``start`` to ``goal`` inclusive of both ends.

        Returns ``[start]`` when ``start == goal`` and ``[]`` when the goal is
        blocked, out of bounds, or not reached within ``max_expansions``.
        """
        start = self._key(start)
        goal = self._key(goal)
        if start == goal:
            return [start]
        if goal in self.blockers:
            return []
        if self.in_bounds is not None and not self.in_bounds(goal):
            return []

        frontier = deque([start])
        came: Dict[Coordinate, Optional[Coordinate]] = {start: None}
        expanded = 0
        reached = False

        while frontier:
            current = frontier.popleft()
            if current == goal:
                reached = True
                break
            expanded += 1
            if expanded > self.max_expansions:
                logger.warning(
                    "Path search %s -> %s gave up after %d expansions",
                    start, goal, self.max_expansions,
                )
                return []
            for nxt in self.grid.neighbors(current):
                if nxt in came or nxt in self.blockers:
                    continue
                if self.in_bounds is not None and not self.in_bounds(nxt):
                    continue
                came[nxt] = current
                frontier.append(nxt)

        if not reached:
            return []

        path: List[Coordinate] = []
        cur: Optional[Coordinate] = goal
        while cur is not None:
            path.append(cur)
            cur = came[cur]
        path.reverse()
        return path


def rect_bounds(x0: int, y0: int, x1: int, y1: int) -> Callable[[Coordinate], bool]:
    """Predicate accepting cells with ``x0 <= x <= x1`` and ``y0 <= y <= y1``."""

    def _inside(c: Coordinate) -> bool:
        return x0 <= c[0] <= x1 and y0 <= c[1] <= y1

    return _inside


__all__ = ["Nav", "rect_bounds"]
