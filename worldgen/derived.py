from __future__ import annotations

"""
Derived per-tile fields: relief index and climate scalars.

Both computations read the raw ``TileFields`` and the tile's ``RegionBias``
held on a ``DerivedContext`` and cache their result there, so asking for
climate after relief (or twice) never recomputes anything for the same tile.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from .settings import WorldGenSettings


def clamp01(value: Any) -> float:
    """Clamp to [0, 1]; NaN, None, and non-numeric values become 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if math.isnan(value) or value < 0:
        return 0.0
    if value > 1:
        return 1.0
    return float(value)


def _number(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        return default
    return float(value)


@dataclass
class TileFields:
    """Raw scalar inputs from the elevation/noise stage, nominally in [0, 1]."""

    macro_elevation: Optional[float] = None
    macro_slope: Optional[float] = None
    plate_edge_distance: Optional[float] = None
    medium_detail_abs: Optional[float] = None
    ridge_strength: Optional[float] = None
    latitude_normalized: Optional[float] = None


@dataclass(frozen=True)
class RegionBias:
    id: int = 0
    archetype: str = "Generic"
    relief_weight: float = 1.0
    relief_bias: float = 0.0
    elevation_offset: float = 0.0
    temperature_bias: float = 0.0
    moisture_bias: float = 0.0


@dataclass(frozen=True)
class ClimateResult:
    temperature: float
    moisture: float
    ocean_proximity: float
    latitude: float


@dataclass
class DerivedContext:
    """Per-tile accumulator; create a fresh one for every tile."""

    fields: TileFields = field(default_factory=TileFields)
    region: RegionBias = field(default_factory=RegionBias)
    settings: WorldGenSettings = field(default_factory=WorldGenSettings)
    relief_index: float = 0.0
    relief_computed: bool = False
    climate: Optional[ClimateResult] = None
    climate_computed: bool = False


def compute_relief_index(ctx: DerivedContext) -> float:
    if ctx.relief_computed:
        return ctx.relief_index

    f = ctx.fields
    cfg = ctx.settings.relief
    region = ctx.region

    plate_edge = clamp01(f.plate_edge_distance if f.plate_edge_distance is not None else 0.5)
    detail = clamp01(f.medium_detail_abs)
    slope = clamp01(f.macro_slope)
    ridge = clamp01(f.ridge_strength)

    exponent = max(0.25, _number(cfg.exponent, 1.15))

    relief = (1.0 - plate_edge) * _number(cfg.plate_weight, 0.42)
    relief += detail * _number(cfg.detail_weight, 0.28)
    relief += slope * _number(cfg.slope_weight, 0.2)
    relief += ridge * _number(cfg.ridge_weight, 0.1)
    relief = (
        relief * _number(region.relief_weight, 1.0)
        + _number(region.relief_bias, 0.0)
        + _number(cfg.bias, 0.0)
    )
    relief = clamp01(relief) ** exponent

    ctx.relief_index = clamp01(relief)
    ctx.relief_computed = True
    return ctx.relief_index


def compute_climate(ctx: DerivedContext) -> ClimateResult:
    """
    Temperature falls off from the equator and with height above sea level and
    is pulled toward the coast value near the shoreline. Moisture starts at
    ocean proximity and is lost to inland relief (rain shadow) and altitude.
    """
    if ctx.climate_computed and ctx.climate is not None:
        return ctx.climate

    f = ctx.fields
    cfg = ctx.settings.climate
    region = ctx.region

    sea_level = _number(ctx.settings.sea_level, 0.32)
    elevation = clamp01(f.macro_elevation if f.macro_elevation is not None else 0.5)
    latitude = clamp01(f.latitude_normalized if f.latitude_normalized is not None else 0.5)
    relief = compute_relief_index(ctx)

    coast_width = max(1e-5, _number(cfg.coast_width, 0.18))
    lapse_rate = _number(cfg.lapse_rate, 0.55)
    ocean_mix = _number(cfg.ocean_temperature_mix, 0.35)
    rain_shadow = _number(cfg.rain_shadow_strength, 0.35)
    dryness = _number(cfg.altitude_dryness, 0.22)

    temperature = clamp01(1.0 - abs(latitude - 0.5) * 2.0)

    above_sea = max(0.0, elevation - sea_level)
    temperature -= above_sea * lapse_rate

    ocean_proximity = clamp01(1.0 - abs(elevation - sea_level) / coast_width)
    temperature = temperature * (1.0 - ocean_mix) + ocean_proximity * ocean_mix
    temperature += _number(region.temperature_bias, 0.0)
    temperature = clamp01(temperature)

    moisture = ocean_proximity
    moisture -= relief * rain_shadow * (1.0 - ocean_proximity)
    moisture -= above_sea * dryness
    moisture += _number(region.moisture_bias, 0.0)
    moisture = clamp01(moisture)

    ctx.climate = ClimateResult(
        temperature=temperature,
        moisture=moisture,
        ocean_proximity=ocean_proximity,
        latitude=latitude,
    )
    ctx.climate_computed = True
    return ctx.climate


def compute_derived_fields(ctx: DerivedContext) -> DerivedContext:
    compute_relief_index(ctx)
    compute_climate(ctx)
    return ctx


__all__ = [
    "ClimateResult",
    "DerivedContext",
    "RegionBias",
    "TileFields",
    "clamp01",
    "compute_climate",
    "compute_derived_fields",
    "compute_relief_index",
]
