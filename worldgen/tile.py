from __future__ import annotations

"""
Data model for a single generated hex tile: the derived scalars, the biome
classification, and the render hand-off (palette, height scale, world position).
"""

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional, Union

from .biomes import Biome
from .coords import Coordinate, WorldPos


class Special(NamedTuple):
    """A rare feature overlay: its key and how unusual it is (1 = least rare)."""

    key: str
    rarity: int


@dataclass(frozen=True)
class Tile:
    """
    Represents a single generated hex tile.

    Core Attributes:
      coord: Axial grid coordinate of this tile (q, r).
      seed: World seed the tile was generated from.
      biome: Classified Biome.
      elevation: Normalized elevation 0.0–1.0 after regional offset.
      slope: Macro slope 0.0–1.0.
      relief_index, temperature, moisture, ocean_proximity, latitude: Derived scalars in [0, 1].
      region: Archetype id of the region the tile belongs to.
      position: World-space centre of the tile (flat-top layout, y = 0).
      top, side, y_scale: Render palette hints for the biome.
      variant: Small integer picking a mesh variant.
      clutter: Number of clutter props to scatter on the tile.
      special: Rare feature overlay, or None.
    """

    coord: Coordinate
    seed: Union[int, str]
    biome: Biome
    elevation: float
    slope: float
    relief_index: float
    temperature: float
    moisture: float
    ocean_proximity: float
    latitude: float
    region: str
    position: WorldPos
    top: int
    side: int
    y_scale: float
    variant: int = 0
    clutter: int = 0
    special: Optional[Special] = None

    @property
    def q(self) -> int:
        return self.coord[0]

    @property
    def r(self) -> int:
        return self.coord[1]

    @property
    def is_water(self) -> bool:
        return self.biome.is_water

    def __repr__(self) -> str:
        return (
            f"Tile(coord={self.coord}, biome={self.biome.label}, "
            f"elevation={self.elevation:.3f}, region={self.region})"
        )

    def to_json(self) -> Dict[str, Any]:
        """
        Serializes the render hand-off and climate attributes to a JSON‐friendly dict.
        """
        return {
            "coord": {"q": self.coord[0], "r": self.coord[1]},
            "seed": self.seed,
            "biome": self.biome.label,
            "top": f"#{self.top:06x}",
            "side": f"#{self.side:06x}",
            "yScale": self.y_scale,
            "position": {"x": self.position.x, "y": self.position.y, "z": self.position.z},
            "elevation": self.elevation,
            "slope": self.slope,
            "reliefIndex": self.relief_index,
            "temperature": self.temperature,
            "moisture": self.moisture,
            "oceanProximity": self.ocean_proximity,
            "latitude": self.latitude,
            "region": self.region,
            "variant": self.variant,
            "clutter": self.clutter,
            "special": self.special._asdict() if self.special else None,
        }


__all__ = ["Special", "Tile"]
