from __future__ import annotations

"""
Square and hex grid geometry behind a shared operation set:
``to_world``, ``to_coord``, ``neighbors``, ``distance``, ``ring``, ``spiral``,
``raycast_tile_line``.

Cells are ``(int, int)`` tuples: ``(x, y)`` on a square grid, axial ``(q, r)``
on a hex grid. World positions are ``WorldPos(x, 0, z)``.
"""

from typing import List, Tuple, Union

from worldgen.coords import (
    HEX_DIRECTIONS,
    SQRT3,
    Coordinate,
    WorldPos,
    as_coordinate,
    axial_to_xz,
    round_axial,
    round_half_up,
    world_to_axial,
)

from . import settings

# E, W, S, N
SQUARE_DIRECTIONS: List[Coordinate] = [
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
]


class SquareGrid:
    """Cartesian grid with 4-neighbour (von Neumann) adjacency."""

    __slots__ = ("size",)

    def __init__(self, size: float = settings.DEFAULT_CELL_SIZE) -> None:
        self.size = size

    def __repr__(self) -> str:
        return f"SquareGrid(size={self.size})"

    def to_world(self, cell: Coordinate) -> WorldPos:
        x, y = as_coordinate(cell)
        return WorldPos(x * self.size, 0.0, y * self.size)

    def to_coord(self, pos: Tuple[float, ...]) -> Coordinate:
        """Nearest cell to a world position ``(x, y, z)``; ``y`` is ignored."""
        x, _, z = pos
        return round_half_up(x / self.size), round_half_up(z / self.size)

    def neighbors(self, cell: Coordinate) -> List[Coordinate]:
        x, y = cell
        return [(x + dx, y + dy) for dx, dy in SQUARE_DIRECTIONS]

    def distance(self, a: Coordinate, b: Coordinate) -> int:
        return abs(a[0] - b[0]) + abs(a[1] - b[1])

    def ring(self, center: Coordinate, radius: int) -> List[Coordinate]:
        """
        Square perimeter at ``radius``, clockwise from the top-left corner.
        """
        if radius <= 0:
            return [center]
        cx, cy = center
        res: List[Coordinate] = []
        for x in range(-radius, radius + 1):
            res.append((cx + x, cy - radius))
        for y in range(-radius + 1, radius):
            res.append((cx + radius, cy + y))
        for x in range(radius, -radius - 1, -1):
            res.append((cx + x, cy + radius))
        for y in range(radius - 1, -radius, -1):
            res.append((cx - radius, cy + y))
        return res

    def spiral(self, center: Coordinate, radius: int) -> List[Coordinate]:
        res: List[Coordinate] = [center]
        for k in range(1, radius + 1):
            res.extend(self.ring(center, k))
        return res

    def raycast_tile_line(self, a: Coordinate, b: Coordinate) -> List[Coordinate]:
        """
        Cells crossed by the segment a→b using an integer error accumulator.
        Always ``1 + dx + dy`` 4-connected cells ending at ``b``; when the line
        passes exactly through a corner the y step is taken first.
        """
        x, y = a
        dx = abs(b[0] - a[0])
        dy = abs(b[1] - a[1])
        n = 1 + dx + dy
        x_inc = 1 if b[0] > a[0] else -1
        y_inc = 1 if b[1] > a[1] else -1
        error = dx - dy
        dx2 = dx * 2
        dy2 = dy * 2

        res: List[Coordinate] = []
        for _ in range(n):
            res.append((x, y))
            if error > 0:
                x += x_inc
                error -= dy2
            else:
                y += y_inc
                error += dx2
        return res


class HexGrid:
    """
    Axial hex grid with 6-neighbour adjacency.

    ``flat=False`` (the default) uses the navigation projection
    ``x = size*(√3·q + √3/2·r)``, ``z = size*1.5·r``. ``flat=True`` uses the
    flat-top world-tile projection from ``worldgen.coords.axial_to_xz``.
    """

    __slots__ = ("size", "flat")

    def __init__(self, size: float = settings.DEFAULT_CELL_SIZE, *, flat: bool = False) -> None:
        self.size = size
        self.flat = flat

    def __repr__(self) -> str:
        return f"HexGrid(size={self.size}, flat={self.flat})"

    def to_world(self, cell: Coordinate) -> WorldPos:
        q, r = as_coordinate(cell)
        if self.flat:
            x, z = axial_to_xz(q, r, self.size)
        else:
            x = self.size * (SQRT3 * q + SQRT3 / 2.0 * r)
            z = self.size * 1.5 * r
        return WorldPos(x, 0.0, z)

    def to_coord(self, pos: Tuple[float, ...]) -> Coordinate:
        x, _, z = pos
        if self.flat:
            qf, rf = world_to_axial(x, z, self.size)
        else:
            qf = (SQRT3 / 3.0 * x - 1.0 / 3.0 * z) / self.size
            rf = (2.0 / 3.0 * z) / self.size
        q, r = round_axial(qf, rf)
        return int(q), int(r)

    def neighbors(self, cell: Coordinate) -> List[Coordinate]:
        q, r = cell
        return [(q + dq, r + dr) for dq, dr in HEX_DIRECTIONS]

    def distance(self, a: Coordinate, b: Coordinate) -> int:
        dq = a[0] - b[0]
        dr = a[1] - b[1]
        return (abs(dq) + abs(dr) + abs(dq + dr)) // 2

    def ring(self, center: Coordinate, radius: int) -> List[Coordinate]:
        """
        Hex ring at ``radius``: start ``radius`` steps toward direction 4
        (south-west) and walk ``radius`` steps along each direction in turn.
        """
        if radius <= 0:
            return [center]
        sq, sr = HEX_DIRECTIONS[4]
        q = center[0] + sq * radius
        r = center[1] + sr * radius
        results: List[Coordinate] = []
        for dq, dr in HEX_DIRECTIONS:
            for _ in range(radius):
                results.append((q, r))
                q += dq
                r += dr
        return results

    def spiral(self, center: Coordinate, radius: int) -> List[Coordinate]:
        results: List[Coordinate] = [center]
        for k in range(1, radius + 1):
            results.extend(self.ring(center, k))
        return results

    def raycast_tile_line(self, a: Coordinate, b: Coordinate) -> List[Coordinate]:
        """
        Hexes on the line a→b: ``N = distance(a, b)`` steps of axial lerp,
        each sample cube-rounded, giving ``N + 1`` adjacent hexes.
        """
        n = self.distance(a, b)
        if n == 0:
            return [a]
        results: List[Coordinate] = []
        for i in range(n + 1):
            t = i / n
            q, r = round_axial(a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)
            results.append((int(q), int(r)))
        return results


Grid = Union[SquareGrid, HexGrid]


def grid_for(kind: str, size: float = settings.DEFAULT_CELL_SIZE) -> Grid:
    """Build a grid by name: ``"square"``, ``"hex"`` or ``"hex-flat"``."""
    kind = kind.strip().lower()
    if kind == "square":
        return SquareGrid(size)
    if kind == "hex":
        return HexGrid(size)
    if kind == "hex-flat":
        return HexGrid(size, flat=True)
    raise ValueError(f"Unknown grid kind '{kind}'. Valid values: square, hex, hex-flat")


__all__ = ["Grid", "HexGrid", "SQUARE_DIRECTIONS", "SquareGrid", "grid_for"]
