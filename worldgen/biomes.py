from __future__ import annotations

"""Biome classification from elevation, slope, and latitude."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

DEFAULT_SEA_LEVEL = 0.32

MOUNTAIN_THRESHOLD = 0.9
HILL_THRESHOLD = 0.75
FOREST_THRESHOLD = 0.60
PLAINS_THRESHOLD = 0.45
MOUNTAIN_SLOPE = 0.35
HILL_SLOPE = 0.18
SNOW_ELEVATION = 0.88
SNOW_LATITUDE = 0.7


@dataclass(frozen=True)
class BiomePalette:
    top: int
    side: int
    y_scale: float


class Biome(Enum):
    DEEP_WATER = ("deepWater", BiomePalette(0x1B3A4B, 0x13323B, 0.2))
    SHALLOW_WATER = ("shallowWater", BiomePalette(0x2E6F8F, 0x234F66, 0.25))
    BEACH = ("beach", BiomePalette(0xEED5A5, 0xCFB78A, 0.2))
    PLAINS = ("plains", BiomePalette(0x93C77B, 0x7AB26B, 0.9))
    FOREST = ("forest", BiomePalette(0x579A57, 0x3F7A3F, 1.0))
    HILL = ("hill", BiomePalette(0xC2A06B, 0x96794F, 1.1))
    MOUNTAIN = ("mountain", BiomePalette(0x9B9B9B, 0x777777, 1.25))
    SNOW = ("snow", BiomePalette(0xF3F7FB, 0xDFE7EE, 1.25))
    TUNDRA = ("tundra", BiomePalette(0xCBD3D6, 0xAEB6B8, 0.9))

    def __init__(self, label: str, palette: BiomePalette) -> None:
        self.label = label
        self.palette = palette

    @property
    def is_water(self) -> bool:
        return self in (Biome.DEEP_WATER, Biome.SHALLOW_WATER)

    @classmethod
    def from_label(cls, label: str) -> Optional["Biome"]:
        for b in cls:
            if b.label == label:
                return b
        return None


@dataclass(frozen=True)
class BiomeResult:
    biome: Biome
    top: int
    side: int
    y_scale: float

    @classmethod
    def of(cls, biome: Biome) -> "BiomeResult":
        p = biome.palette
        return cls(biome=biome, top=p.top, side=p.side, y_scale=p.y_scale)


def biome_thresholds(sea_level: float = DEFAULT_SEA_LEVEL) -> Dict[str, float]:
    """Elevation bands; anything at or below ``sea_level`` is water."""
    return {
        "deepWater": max(0.01, sea_level * 0.25),
        "shallowWater": sea_level,
        "beach": min(0.95, sea_level + 0.06),
        "plains": PLAINS_THRESHOLD,
        "forest": FOREST_THRESHOLD,
        "hill": HILL_THRESHOLD,
        "mountain": MOUNTAIN_THRESHOLD,
    }


def _num(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        return 0.0
    return float(value)


def map_biome(
    h: Any = 0.0,
    slope: Any = 0.0,
    lat: Any = 0.0,
    *,
    sea_level: float = DEFAULT_SEA_LEVEL,
) -> BiomeResult:
    """
    Map normalized elevation, slope, and signed latitude to a biome.
    First matching rule wins:
      1. deep water, 2. shallow water (<= sea level), 3. beach band,
      4. mountain or snow (high or steep), 5. hill, 6. forest, 7. plains.
    Bad inputs are treated as 0, so every call returns a biome.
    """
    height = max(0.0, min(1.0, _num(h)))
    steep = max(0.0, _num(slope))
    latitude = _num(lat)
    t = biome_thresholds(sea_level)

    if height <= t["deepWater"]:
        return BiomeResult.of(Biome.DEEP_WATER)
    if height <= t["shallowWater"]:
        return BiomeResult.of(Biome.SHALLOW_WATER)
    if height <= t["beach"]:
        return BiomeResult.of(Biome.BEACH)

    if height >= t["mountain"] or steep > MOUNTAIN_SLOPE:
        if height > SNOW_ELEVATION or abs(latitude) > SNOW_LATITUDE:
            return BiomeResult.of(Biome.SNOW)
        return BiomeResult.of(Biome.MOUNTAIN)

    if height >= t["hill"] or steep > HILL_SLOPE:
        return BiomeResult.of(Biome.HILL)

    if height >= t["forest"]:
        return BiomeResult.of(Biome.FOREST)

    return BiomeResult.of(Biome.PLAINS)


def biome_from_fields(
    cell_fields: Optional[Mapping[str, Any]],
    lat: float = 0.0,
    *,
    sea_level: float = DEFAULT_SEA_LEVEL,
) -> BiomeResult:
    """Classify a ``{"h": ..., "slope": ...}`` mapping; missing data gives plains."""
    if not cell_fields:
        return BiomeResult.of(Biome.PLAINS)
    return map_biome(cell_fields.get("h"), cell_fields.get("slope"), lat, sea_level=sea_level)


def palette_for(label: str) -> BiomePalette:
    """Palette for a biome label; unknown labels fall back to plains."""
    biome = Biome.from_label(label)
    return (biome or Biome.PLAINS).palette


__all__ = [
    "Biome",
    "BiomePalette",
    "BiomeResult",
    "DEFAULT_SEA_LEVEL",
    "biome_from_fields",
    "biome_thresholds",
    "map_biome",
    "palette_for",
]
