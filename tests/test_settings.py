import json
import logging

import pytest

from worldgen.settings import (
    LayerToggles,
    RegionArchetype,
    SettingsLoadError,
    SpecialsSettings,
    WorldGenSettings,
    load_settings,
    settings_from_dict,
)


def test_defaults():
    s = WorldGenSettings()
    assert s.sea_level == 0.32
    assert s.tile_size == 2.0
    assert s.relief.plate_weight == 0.42
    assert s.climate.coast_width == 0.18
    assert [a.id for a in s.archetypes] == ["Lowlands", "Generic", "Highlands", "Badlands"]


def test_settings_from_dict_merges_nested():
    s = settings_from_dict(
        {
            "seed": "custom",
            "sea_level": 0.4,
            "chunk_size": 8,
            "relief": {"exponent": 2},
            "climate": {"lapse_rate": 0.7},
        }
    )
    assert s.seed == "custom"
    assert s.sea_level == 0.4
    assert s.chunk_size == 8
    assert s.relief.exponent == 2.0
    assert s.relief.plate_weight == 0.42
    assert s.climate.lapse_rate == 0.7
    assert s.climate.coast_width == 0.18


def test_settings_from_dict_keeps_base():
    base = WorldGenSettings(seed=5, sea_level=0.25)
    s = settings_from_dict({"lat_scale": 100}, base=base)
    assert s.seed == 5
    assert s.sea_level == 0.25
    assert s.lat_scale == 100.0
    assert settings_from_dict(None, base=base) is base


def test_invalid_values_are_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        s = settings_from_dict(
            {"sea_level": "deep", "chunk_size": 2.5, "seed": [1], "bogus": 1, "relief": 3}
        )
    assert s == WorldGenSettings()
    text = caplog.text
    assert "sea_level" in text
    assert "chunk_size" in text
    assert "seed" in text
    assert "bogus" in text
    assert "relief" in text


def test_archetypes_replace_defaults():
    s = settings_from_dict(
        {"archetypes": [{"id": "Swamp", "moisture_bias": 0.3}, "junk"]}
    )
    assert s.archetypes == (RegionArchetype(id="Swamp", moisture_bias=0.3),)


def test_load_settings(tmp_path):
    file = tmp_path / "world.json"
    file.write_text(json.dumps({"seed": 99, "climate": {"coast_width": 0.1}}))
    s = load_settings(file)
    assert s.seed == 99
    assert s.climate.coast_width == 0.1


def test_load_settings_errors(tmp_path):
    with pytest.raises(SettingsLoadError):
        load_settings(tmp_path / "nope.json")
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(SettingsLoadError):
        load_settings(bad)


def test_settings_are_hashable_and_archetypes_immutable():
    s = WorldGenSettings(archetypes=[RegionArchetype("Only")])
    assert isinstance(s.archetypes, tuple)
    assert hash(s) == hash(WorldGenSettings(archetypes=(RegionArchetype("Only"),)))
    assert isinstance(hash(WorldGenSettings()), int)


def test_layer_toggles_from_dict():
    s = settings_from_dict(
        {
            "layers": {
                "regions": False,
                "clutter": {"enabled": False},
                "specials": {"enabled": True, "rarity_multiplier": 3, "mask_octaves": 5},
            }
        }
    )
    assert s.layers == LayerToggles(regions=False, clutter=False, specials=True)
    assert s.specials.rarity_multiplier == 3.0
    assert s.specials.mask_octaves == 5
    assert s.specials.mask_freq == SpecialsSettings().mask_freq


def test_specials_settings_from_dict():
    s = settings_from_dict({"specials": {"mask_freq": 0.01, "mask_gain": 0.4}})
    assert s.specials.mask_freq == 0.01
    assert s.specials.mask_gain == 0.4
    assert s.layers == LayerToggles()


def test_invalid_layer_settings_are_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        s = settings_from_dict(
            {"layers": {"rivers": False, "regions": "off", "clutter": {"enabled": 1}}}
        )
    assert s.layers == LayerToggles()
    assert "rivers" in caplog.text
    assert "regions" in caplog.text
    assert "clutter" in caplog.text
    with caplog.at_level(logging.WARNING):
        assert settings_from_dict({"layers": ["regions"]}).layers == LayerToggles()
