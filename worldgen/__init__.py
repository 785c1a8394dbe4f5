from __future__ import annotations

from .biomes import (
    Biome,
    BiomePalette,
    BiomeResult,
    biome_from_fields,
    biome_thresholds,
    map_biome,
    palette_for,
)
from .coords import (
    Axial,
    Coordinate,
    Cube,
    HEX_DIRECTIONS,
    InvalidCoordinateError,
    WorldPos,
    axial_to_cube,
    axial_to_xz,
    cube_to_axial,
    distance_axial,
    round_axial,
    world_to_axial,
)
from .derived import (
    ClimateResult,
    DerivedContext,
    RegionBias,
    TileFields,
    compute_climate,
    compute_derived_fields,
    compute_relief_index,
)
from .export import ExportError, export_tiles_json, export_tiles_xml
from .generation import BlockSample, generate_tile, pick_special, sample_block, sample_fields
from .rng import Mulberry32, seed_to_int, tile_rng
from .settings import (
    ClimateSettings,
    LayerToggles,
    RegionArchetype,
    ReliefSettings,
    SettingsLoadError,
    SpecialsSettings,
    WorldGenSettings,
    load_settings,
    settings_from_dict,
)
from .tile import Special, Tile
from .world import World

__all__ = [
    "Axial",
    "Biome",
    "BiomePalette",
    "BiomeResult",
    "BlockSample",
    "ClimateResult",
    "ClimateSettings",
    "Coordinate",
    "Cube",
    "DerivedContext",
    "ExportError",
    "HEX_DIRECTIONS",
    "InvalidCoordinateError",
    "LayerToggles",
    "Mulberry32",
    "RegionArchetype",
    "RegionBias",
    "ReliefSettings",
    "SettingsLoadError",
    "Special",
    "SpecialsSettings",
    "Tile",
    "TileFields",
    "World",
    "WorldGenSettings",
    "WorldPos",
    "axial_to_cube",
    "axial_to_xz",
    "biome_from_fields",
    "biome_thresholds",
    "compute_climate",
    "compute_derived_fields",
    "compute_relief_index",
    "cube_to_axial",
    "distance_axial",
    "export_tiles_json",
    "export_tiles_xml",
    "generate_tile",
    "load_settings",
    "map_biome",
    "palette_for",
    "pick_special",
    "round_axial",
    "sample_block",
    "sample_fields",
    "seed_to_int",
    "settings_from_dict",
    "tile_rng",
    "world_to_axial",
]
