import json
import xml.etree.ElementTree as ET

import pytest

from navigation.grid import HexGrid
from worldgen.export import ExportError, export_tiles_json, export_tiles_xml
from worldgen.world import World


def _tiles():
    world = World()
    return world.tiles_at(HexGrid().spiral((0, 0), 1))


def test_export_json(tmp_path):
    tiles = _tiles()
    file = tmp_path / "tiles.json"
    export_tiles_json(tiles, file)
    data = json.loads(file.read_text())
    assert isinstance(data, list)
    assert len(data) == 7
    first = data[0]
    assert set(first) == {"coord", "biome", "top", "side", "yScale", "position"}
    assert first["coord"] == {"q": 0, "r": 0}
    assert first["biome"] == tiles[0].biome.label
    assert first["top"].startswith("#") and len(first["top"]) == 7


def test_export_xml(tmp_path):
    tiles = _tiles()
    file = tmp_path / "tiles.xml"
    export_tiles_xml(tiles, file)
    root = ET.parse(file).getroot()
    assert root.tag == "tiles"
    elems = root.findall("tile")
    assert len(elems) == 7
    assert elems[0].get("q") == "0"
    assert elems[0].get("biome") == tiles[0].biome.label
    assert float(elems[0].get("yScale")) == tiles[0].y_scale


def test_export_to_missing_directory_raises(tmp_path):
    tiles = _tiles()
    with pytest.raises(ExportError):
        export_tiles_json(tiles, tmp_path / "missing" / "tiles.json")
    with pytest.raises(ExportError):
        export_tiles_xml(tiles, tmp_path / "missing" / "tiles.xml")
