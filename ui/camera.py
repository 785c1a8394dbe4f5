import math
from typing import List, Tuple

from worldgen.biomes import palette_for
from worldgen.coords import WorldPos

MIN_ZOOM = 0.2
MAX_ZOOM = 4.0

Screen = Tuple[float, float]
RGBA = Tuple[int, int, int, int]

angles = [math.radians(60 * i) for i in range(6)]


def hex_corners(x: float, y: float, size: float) -> List[Screen]:
    """Corners of a flat-top hex centred on ``(x, y)``."""
    return [(x + size * math.cos(a), y + size * math.sin(a)) for a in angles]


def rgba_for(color: int, alpha: int = 255) -> RGBA:
    """Split a packed ``0xRRGGBB`` value into an RGBA tuple."""
    return ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF, alpha)


def biome_rgba(label: str) -> RGBA:
    return rgba_for(palette_for(label).top)


def grayscale_color(value: float) -> RGBA:
    level = int(max(0.0, min(1.0, value)) * 255)
    return (level, level, level, 255)


class Camera:
    """
    Maps the world's x/z ground plane onto screen pixels.

    World x runs right and world z runs down the screen. ``pixels_per_unit``
    fixes the base scale; ``zoom`` multiplies it, and the offset places the
    world origin on screen (initially the viewport centre).
    """

    def __init__(self, width: int, height: int, pixels_per_unit: float = 1.0) -> None:
        if pixels_per_unit <= 0:
            raise ValueError("pixels_per_unit must be positive")
        self.offset_x: float = width // 2
        self.offset_y: float = height // 2
        self.pixels_per_unit = pixels_per_unit
        self.zoom = 1.0

    @property
    def scale(self) -> float:
        """Screen pixels per world unit at the current zoom."""
        return self.pixels_per_unit * self.zoom

    def apply(self, pos: Screen) -> Screen:
        x, y = pos
        return (
            x * self.zoom + self.offset_x,
            y * self.zoom + self.offset_y,
        )

    def reverse(self, pos: Screen) -> Screen:
        x, y = pos
        return (
            (x - self.offset_x) / self.zoom,
            (y - self.offset_y) / self.zoom,
        )

    def project(self, pos: WorldPos) -> Screen:
        """Screen position of a world point; height is ignored."""
        return self.apply((pos.x * self.pixels_per_unit, pos.z * self.pixels_per_unit))

    def unproject(self, pos: Screen) -> WorldPos:
        """World point on the ground plane under a screen position."""
        x, y = self.reverse(pos)
        return WorldPos(x / self.pixels_per_unit, 0.0, y / self.pixels_per_unit)

    def pan(self, dx: float, dy: float) -> None:
        self.offset_x += dx
        self.offset_y += dy

    def change_zoom(self, delta: float, pivot: Screen) -> None:
        """Zoom by ``delta`` keeping the world point under ``pivot`` in place."""
        old = self.zoom
        self.zoom = max(MIN_ZOOM, min(MAX_ZOOM, self.zoom + delta))
        ratio = self.zoom / old
        px, py = pivot
        self.offset_x = px - ratio * (px - self.offset_x)
        self.offset_y = py - ratio * (py - self.offset_y)


__all__ = [
    "Camera",
    "MAX_ZOOM",
    "MIN_ZOOM",
    "biome_rgba",
    "grayscale_color",
    "hex_corners",
    "rgba_for",
]
