from __future__ import annotations

"""
world.py

Lazily generated, chunk-cached view over an unbounded hex world.

- Tiles are produced on demand by ``generate_tile`` and grouped into square
  axial chunks of ``settings.chunk_size``.
- At most ``settings.max_active_chunks`` chunks stay in memory; the least
  recently used chunk is dropped first and simply regenerated if needed again,
  since generation is deterministic.
"""

import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Tuple

from .coords import Coordinate, HEX_DIRECTIONS
from .generation import generate_tile
from .settings import WorldGenSettings
from .tile import Tile

logger = logging.getLogger("hexworld.world")
logger.addHandler(logging.NullHandler())

ChunkKey = Tuple[int, int]
Chunk = Dict[Coordinate, Tile]


class World:
    __slots__ = ("settings", "chunks", "generated_count")

    def __init__(self, settings: Optional[WorldGenSettings] = None) -> None:
        """
        Args:
            settings (WorldGenSettings, optional): Generation parameters. Defaults are used if None.
        """
        self.settings: WorldGenSettings = settings if settings is not None else WorldGenSettings()
        self.chunks: "OrderedDict[ChunkKey, Chunk]" = OrderedDict()
        self.generated_count = 0

    @property
    def seed(self):
        return self.settings.seed

    def __contains__(self, coord: Coordinate) -> bool:
        """True if the tile at ``coord`` is currently held in a loaded chunk."""
        chunk = self.chunks.get(self._chunk_key(*coord))
        return chunk is not None and coord in chunk

    def _chunk_key(self, q: int, r: int) -> ChunkKey:
        size = max(1, self.settings.chunk_size)
        return q // size, r // size

    def _load_chunk(self, key: ChunkKey) -> Chunk:
        chunk = self.chunks.get(key)
        if chunk is None:
            chunk = {}
            self.chunks[key] = chunk
            if len(self.chunks) > max(1, self.settings.max_active_chunks):
                evicted, _ = self.chunks.popitem(last=False)
                logger.debug("Evicted chunk %s", evicted)
        else:
            self.chunks.move_to_end(key)
        return chunk

    def get(self, q: int, r: int) -> Tile:
        """
        Retrieve the Tile at (q, r), generating it (and its chunk entry) on demand.
        """
        chunk = self._load_chunk(self._chunk_key(q, r))
        tile = chunk.get((q, r))
        if tile is None:
            tile = generate_tile(self.settings.seed, q, r, self.settings)
            chunk[(q, r)] = tile
            self.generated_count += 1
        return tile

    def neighbors(self, q: int, r: int) -> List[Tile]:
        return [self.get(q + dq, r + dr) for dq, dr in HEX_DIRECTIONS]

    def tiles_at(self, coords: Iterable[Coordinate]) -> List[Tile]:
        return [self.get(q, r) for q, r in coords]

    def all_tiles(self) -> Iterable[Tile]:
        """Yield every tile in the currently loaded chunks."""
        for chunk in self.chunks.values():
            yield from chunk.values()

    def water_coords(self, coords: Iterable[Coordinate]) -> List[Coordinate]:
        """Subset of ``coords`` whose tiles are water, e.g. to seed navigation blockers."""
        return [t.coord for t in self.tiles_at(coords) if t.is_water]

    def mark_dirty(self) -> None:
        """Drop all cached tiles; they are regenerated from settings on next access."""
        self.chunks.clear()


__all__ = ["World"]
