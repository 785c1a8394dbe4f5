from __future__ import annotations

"""Configuration dataclasses for world generation, plus tolerant loaders."""

import json
import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, Union

from .coords import hex_size
from .rng import Seed

logger = logging.getLogger("hexworld.settings")
logger.addHandler(logging.NullHandler())


class SettingsLoadError(Exception):
    """Raised when a settings file cannot be read or parsed."""


@dataclass(frozen=True)
class ReliefSettings:
    plate_weight: float = 0.42
    detail_weight: float = 0.28
    slope_weight: float = 0.2
    ridge_weight: float = 0.1
    exponent: float = 1.15
    bias: float = 0.0


@dataclass(frozen=True)
class ClimateSettings:
    coast_width: float = 0.18
    lapse_rate: float = 0.55
    ocean_temperature_mix: float = 0.35
    rain_shadow_strength: float = 0.35
    altitude_dryness: float = 0.22


@dataclass(frozen=True)
class SpecialsSettings:
    """Rare-feature mask: fractal noise sampled at ``mask_freq`` per axial unit."""

    mask_freq: float = 0.0015
    mask_octaves: int = 3
    mask_gain: float = 0.55
    rarity_multiplier: float = 1.0


@dataclass(frozen=True)
class LayerToggles:
    """Optional generation passes; a disabled pass leaves its tile output neutral."""

    regions: bool = True
    clutter: bool = True
    specials: bool = True


@dataclass(frozen=True)
class RegionArchetype:
    """Regional nudges applied on top of the raw tile fields."""

    id: str = "Generic"
    elevation_offset: float = 0.0
    relief_weight: float = 1.0
    relief_bias: float = 0.0
    temperature_bias: float = 0.0
    moisture_bias: float = 0.0


def _default_archetypes() -> Tuple[RegionArchetype, ...]:
    return (
        RegionArchetype("Lowlands", elevation_offset=-0.04, relief_weight=0.8, moisture_bias=0.05),
        RegionArchetype("Generic"),
        RegionArchetype("Highlands", elevation_offset=0.05, relief_weight=1.2, relief_bias=0.05, temperature_bias=-0.03),
        RegionArchetype("Badlands", relief_weight=1.1, temperature_bias=0.04, moisture_bias=-0.1),
    )


@dataclass(frozen=True)
class WorldGenSettings:
    """
    Immutable parameter bag for one generation run.

    Attributes:
      seed: World seed (int or str).
      sea_level: Normalized elevation at or below which a tile is water.
      layout_radius, spacing_factor: Hex layout scale; see ``tile_size``.
      elevation_scale, detail_scale, ridge_scale, region_scale: Noise frequencies.
      plate_size: Width of a tectonic plate cell in axial units.
      lat_scale: World distance from the equator at which latitude saturates.
      clutter_density: Upper bound on clutter props per land tile.
      chunk_size, max_active_chunks: World map cache geometry.
      specials: Rare-feature mask parameters.
      layers: Which optional passes run.
      archetypes: Region archetypes, picked by low-frequency noise.
    """

    seed: Seed = 0
    sea_level: float = 0.32
    layout_radius: float = 1.0
    spacing_factor: float = 1.0
    elevation_scale: float = 0.04
    detail_scale: float = 0.18
    ridge_scale: float = 0.07
    region_scale: float = 0.014
    plate_size: float = 24.0
    lat_scale: float = 512.0
    clutter_density: int = 8
    chunk_size: int = 16
    max_active_chunks: int = 64
    relief: ReliefSettings = field(default_factory=ReliefSettings)
    climate: ClimateSettings = field(default_factory=ClimateSettings)
    specials: SpecialsSettings = field(default_factory=SpecialsSettings)
    layers: LayerToggles = field(default_factory=LayerToggles)
    archetypes: Tuple[RegionArchetype, ...] = field(default_factory=_default_archetypes)

    def __post_init__(self) -> None:
        if not isinstance(self.archetypes, tuple):
            object.__setattr__(self, "archetypes", tuple(self.archetypes))

    @property
    def tile_size(self) -> float:
        """World units per hex after layout scaling."""
        return hex_size(self.layout_radius, self.spacing_factor)


_NESTED = {"relief": ReliefSettings, "climate": ClimateSettings, "specials": SpecialsSettings}
_WORLD_SKIP = tuple(_NESTED) + ("layers", "archetypes")


def _coerce_fields(
    cls: type,
    data: Mapping[str, Any],
    where: str,
    skip: Tuple[str, ...] = (),
) -> Dict[str, Any]:
    """
    Keep only keys that name a scalar field of ``cls`` and whose value type fits.
    Anything else is skipped with a warning. Keys in ``skip`` are left to the caller.
    """
    out: Dict[str, Any] = {}
    defaults = cls()
    for f in fields(cls):
        if f.name not in data or f.name in skip:
            continue
        value = data[f.name]
        current = getattr(defaults, f.name)
        if f.name == "seed":
            if isinstance(value, (int, str)) and not isinstance(value, bool):
                out[f.name] = value
            else:
                logger.warning("Skipping invalid seed in %s: %r", where, value)
        elif isinstance(current, str):
            out[f.name] = str(value)
        elif isinstance(current, bool):
            if isinstance(value, bool):
                out[f.name] = value
            else:
                logger.warning("Skipping invalid flag %s.%s: %r", where, f.name, value)
        elif isinstance(current, int) and not isinstance(current, bool):
            if isinstance(value, int) and not isinstance(value, bool):
                out[f.name] = value
            else:
                logger.warning("Skipping invalid integer setting %s.%s: %r", where, f.name, value)
        elif isinstance(current, float):
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                out[f.name] = float(value)
            else:
                logger.warning("Skipping invalid numeric setting %s.%s: %r", where, f.name, value)
    unknown = set(data) - {f.name for f in fields(cls)}
    for key in sorted(unknown):
        logger.warning("Ignoring unknown setting %s.%s", where, key)
    return out


def _merge_layers(raw: Mapping[str, Any], settings: WorldGenSettings, updates: Dict[str, Any]) -> None:
    toggles: Dict[str, bool] = {}
    known = {f.name for f in fields(LayerToggles)}
    for name, value in raw.items():
        if name not in known:
            logger.warning("Ignoring unknown layer '%s'", name)
            continue
        if isinstance(value, bool):
            toggles[name] = value
            continue
        if not isinstance(value, Mapping):
            logger.warning("Skipping invalid layer setting %s: %r", name, value)
            continue
        enabled = value.get("enabled")
        if isinstance(enabled, bool):
            toggles[name] = enabled
        elif enabled is not None:
            logger.warning("Skipping invalid flag layers.%s.enabled: %r", name, enabled)
        params = {k: v for k, v in value.items() if k != "enabled"}
        if name == "specials" and params:
            current = updates.get("specials", settings.specials)
            updates["specials"] = replace(current, **_coerce_fields(SpecialsSettings, params, "specials"))
        elif params:
            logger.warning("Layer '%s' takes no parameters; ignoring %s", name, sorted(params))
    if toggles:
        updates["layers"] = replace(settings.layers, **toggles)


def settings_from_dict(
    data: Mapping[str, Any] | None,
    base: WorldGenSettings | None = None,
) -> WorldGenSettings:
    """
    Merge a partial settings mapping over ``base`` (or the defaults).

    Nested ``relief``, ``climate`` and ``specials`` mappings merge field by
    field. ``layers`` maps a pass name (``regions``, ``clutter``, ``specials``)
    to a bool, or to a mapping with an ``enabled`` flag; a ``specials`` mapping
    there may also carry mask parameters. ``archetypes`` replaces the
    archetype list when it is a list of mappings.
    Malformed values are logged and skipped rather than raised.
    """
    settings = base if base is not None else WorldGenSettings()
    if not data:
        return settings
    if not isinstance(data, Mapping):
        logger.warning("Settings must be a mapping, got %s; using defaults", type(data).__name__)
        return settings

    updates = _coerce_fields(WorldGenSettings, data, "world", _WORLD_SKIP)

    for key, cls in _NESTED.items():
        nested = data.get(key)
        if nested is None:
            continue
        if not isinstance(nested, Mapping):
            logger.warning("'%s' settings must be a mapping; skipping", key)
            continue
        updates[key] = replace(getattr(settings, key), **_coerce_fields(cls, nested, key))

    raw_layers = data.get("layers")
    if raw_layers is not None:
        if isinstance(raw_layers, Mapping):
            _merge_layers(raw_layers, settings, updates)
        else:
            logger.warning("'layers' settings must be a mapping; skipping")

    raw_archetypes = data.get("archetypes")
    if raw_archetypes is not None:
        if isinstance(raw_archetypes, (list, tuple)):
            archetypes: List[RegionArchetype] = []
            for entry in raw_archetypes:
                if not isinstance(entry, Mapping):
                    logger.warning("Skipping invalid archetype entry: %r", entry)
                    continue
                archetypes.append(RegionArchetype(**_coerce_fields(RegionArchetype, entry, "archetype")))
            updates["archetypes"] = tuple(archetypes)
        else:
            logger.warning("'archetypes' is not a list; skipping")

    return replace(settings, **updates)


def load_settings(path: Union[str, Path]) -> WorldGenSettings:
    """
    Load settings from a JSON file.

    Raises:
        SettingsLoadError: if the file cannot be read or is not valid JSON.
    """
    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SettingsLoadError(f"Could not read settings file '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise SettingsLoadError(f"Settings file '{path}' is not valid JSON: {e}") from e
    return settings_from_dict(data)


__all__ = [
    "ClimateSettings",
    "LayerToggles",
    "RegionArchetype",
    "ReliefSettings",
    "SettingsLoadError",
    "SpecialsSettings",
    "WorldGenSettings",
    "load_settings",
    "settings_from_dict",
]
