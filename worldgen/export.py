from __future__ import annotations

"""Utilities for exporting generated tiles in various formats."""

from pathlib import Path
import json
import xml.etree.ElementTree as ET
from typing import Iterable

from .tile import Tile


class ExportError(Exception):
    """Raised when tile data cannot be written."""


def _tile_to_dict(tile: Tile) -> dict:
    data = tile.to_json()
    return {
        "coord": data["coord"],
        "biome": data["biome"],
        "top": data["top"],
        "side": data["side"],
        "yScale": data["yScale"],
        "position": data["position"],
    }


def export_tiles_json(tiles: Iterable[Tile], path: str | Path) -> None:
    """Export the render hand-off for each tile to a JSON file."""
    data = [_tile_to_dict(t) for t in tiles]
    try:
        with open(Path(path), "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        raise ExportError(f"Could not write tiles to '{path}': {e}") from e


def export_tiles_xml(tiles: Iterable[Tile], path: str | Path) -> None:
    """Export the render hand-off for each tile to an XML file."""
    root = ET.Element("tiles")
    for tile in tiles:
        pos = tile.position
        ET.SubElement(
            root,
            "tile",
            q=str(tile.q),
            r=str(tile.r),
            biome=tile.biome.label,
            top=f"#{tile.top:06x}",
            side=f"#{tile.side:06x}",
            yScale=repr(tile.y_scale),
            x=repr(pos.x),
            y=repr(pos.y),
            z=repr(pos.z),
        )
    tree = ET.ElementTree(root)
    try:
        tree.write(Path(path), encoding="utf-8", xml_declaration=True)
    except OSError as e:
        raise ExportError(f"Could not write tiles to '{path}': {e}") from e


__all__ = ["ExportError", "export_tiles_json", "export_tiles_xml"]
