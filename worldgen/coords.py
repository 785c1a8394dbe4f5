from __future__ import annotations

"""
Axial/cube hex coordinate math for a flat-top hex layout.

Every world-space projection of a hex tile goes through ``axial_to_xz`` and its
inverse ``world_to_axial`` so that generation, debug overlays, and picking all
agree on where a tile sits.
"""

import math
from typing import Any, List, NamedTuple, Tuple

Coordinate = Tuple[int, int]

SQRT3 = math.sqrt(3.0)

# World units per hex when layout_radius=1 and spacing_factor=1.
BASE_HEX_SIZE = 2.0

# Axial unit steps, clockwise starting East.
HEX_DIRECTIONS: List[Coordinate] = [
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
]


class InvalidCoordinateError(ValueError):
    """Raised when a provided coordinate is not a pair of numbers."""


class Axial(NamedTuple):
    q: float
    r: float


class Cube(NamedTuple):
    x: float
    y: float
    z: float


class WorldPos(NamedTuple):
    x: float
    y: float
    z: float


def as_coordinate(value: Any) -> Tuple[float, float]:
    """
    Normalize a 2-sequence into a ``(a, b)`` tuple.

    Raises:
        InvalidCoordinateError: if ``value`` is not a pair of real numbers.
    """
    try:
        a, b = value
    except (TypeError, ValueError):
        raise InvalidCoordinateError(f"Coordinate must be a pair, got {value!r}") from None
    for c in (a, b):
        if isinstance(c, bool) or not isinstance(c, (int, float)):
            raise InvalidCoordinateError(f"Coordinate components must be numbers, got {value!r}")
    return a, b


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going toward +infinity."""
    return int(math.floor(value + 0.5))


def axial_to_cube(q: float, r: float) -> Cube:
    x = q
    z = r
    y = -x - z
    return Cube(x, y, z)


def cube_to_axial(cube: Cube) -> Axial:
    return Axial(cube.x, cube.z)


def round_axial(qf: float, rf: float) -> Axial:
    """
    Snap fractional axial coordinates to the nearest hex.

    Each cube component is rounded on its own, then the component with the
    largest rounding error is rebuilt from the other two so that
    ``x + y + z == 0`` still holds.
    """
    x = qf
    z = rf
    y = -x - z
    rx = round_half_up(x)
    ry = round_half_up(y)
    rz = round_half_up(z)

    x_diff = abs(rx - x)
    y_diff = abs(ry - y)
    z_diff = abs(rz - z)

    if x_diff > y_diff and x_diff > z_diff:
        rx = -ry - rz
    elif y_diff > z_diff:
        ry = -rx - rz
    else:
        rz = -rx - ry
    return Axial(rx, rz)


def distance_axial(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Hex distance between two axial coordinates (Chebyshev over cube coords)."""
    ca = axial_to_cube(a[0], a[1])
    cb = axial_to_cube(b[0], b[1])
    return max(abs(ca.x - cb.x), abs(ca.y - cb.y), abs(ca.z - cb.z))


def hex_size(layout_radius: float = 1.0, spacing_factor: float = 1.0) -> float:
    return BASE_HEX_SIZE * (layout_radius or 1.0) * (spacing_factor or 1.0)


def hex_spacing(size: float) -> Tuple[float, float]:
    """Column and row pitch ``(width, height)`` of a flat-top layout."""
    return size * 1.5, size * SQRT3


def axial_to_xz(q: float, r: float, size: float = 1.0) -> Tuple[float, float]:
    x = 1.5 * size * q
    z = SQRT3 * size * (r + q / 2.0)
    return x, z


def world_to_axial(x: float, z: float, size: float = 1.0) -> Axial:
    """Fractional inverse of ``axial_to_xz``; callers decide whether to round."""
    q = (2.0 / 3.0) * (x / size)
    r = z / (size * SQRT3) - q / 2.0
    return Axial(q, r)


def offset_to_axial(col: int, row: int) -> Axial:
    """Convert odd-q column offset coordinates to axial."""
    return Axial(col, row - math.floor(col / 2))


def axial_to_offset(q: int, r: int) -> Tuple[int, int]:
    return q, r + math.floor(q / 2)


def is_inside_axial_square(q: int, r: int, center_q: int, center_r: int, size: int) -> bool:
    """Axis-aligned square in (q, r) space."""
    return abs(q - center_q) <= size and abs(r - center_r) <= size


def is_inside_world_square(
    q: int,
    r: int,
    center_q: int,
    center_r: int,
    size: float,
    *,
    hex_size: float = 1.0,
) -> bool:
    """World-axis-aligned square centred on a hex; ``size`` counts hex widths."""
    cx, cz = axial_to_xz(center_q, center_r, hex_size)
    px, pz = axial_to_xz(q, r, hex_size)
    half = size * 1.5 * hex_size / 2.0
    return abs(px - cx) <= half and abs(pz - cz) <= half


__all__ = [
    "Axial",
    "BASE_HEX_SIZE",
    "Coordinate",
    "Cube",
    "HEX_DIRECTIONS",
    "InvalidCoordinateError",
    "WorldPos",
    "as_coordinate",
    "axial_to_cube",
    "axial_to_offset",
    "axial_to_xz",
    "cube_to_axial",
    "distance_axial",
    "hex_size",
    "hex_spacing",
    "is_inside_axial_square",
    "is_inside_world_square",
    "offset_to_axial",
    "round_axial",
    "round_half_up",
    "world_to_axial",
]
