from __future__ import annotations

"""
Deterministic tile generation: Perlin-based raw fields, regional archetypes,
derived relief/climate, biome classification and rare specials for a single
(q, r).

Nothing here keeps state between calls; ``generate_tile(seed, q, r)`` is a
pure function of its arguments, so tiles can be produced in any order or in
parallel.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .biomes import map_biome
from .coords import HEX_DIRECTIONS, WorldPos, axial_to_xz
from .derived import DerivedContext, RegionBias, TileFields, clamp01, compute_derived_fields
from .rng import Mulberry32, Seed, seed_to_int, stable_hash, tile_rng
from .settings import WorldGenSettings
from .tile import Special, Tile

logger = logging.getLogger("hexworld.worldgen")
logger.addHandler(logging.NullHandler())

# Purpose tags keep independent RNG/noise streams from overlapping.
_TAG_ELEVATION = 0x0E1E
_TAG_DETAIL = 0xDE7A
_TAG_RIDGE = 0x41D6
_TAG_REGION = 0x4E61
_TAG_PLATE = 0x9A7E
_TAG_TILE = 0x2000
_TAG_SPECIAL_MASK = 0x5BEC
_TAG_SPECIAL_KEY = 0x5BED

# Gain applied to the steepest neighbour drop before clamping to [0, 1].
SLOPE_GAIN = 4.0
# Contrast stretch for macro elevation around 0.5.
ELEVATION_CONTRAST = 1.8
REGION_ELEVATION_WEIGHT = 0.35

SPECIALS = (
    "frozen_jungle",
    "volcanic_seafloor",
    "glass_desert",
    "obsidian_flats",
    "mushroom_glade",
    "crystal_basin",
)
# Stretch applied to the special mask so its tail can reach 1.
SPECIAL_MASK_CONTRAST = 2.5
# Fraction of the stretched mask range above the threshold per unit rarity_multiplier.
SPECIAL_BASE_CHANCE = 0.02
MAX_RARITY = 1000


# ─────────────────────────────────────────────────────────────────────────────
# == PERLIN NOISE ==

def _fade(t: float) -> float:
    """Fade function for Perlin noise interpolation."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b by t."""
    return a + t * (b - a)


def _grad(ix: int, iy: int, seed: int) -> Tuple[float, float]:
    """
    Generate a pseudorandom gradient vector for integer grid point (ix, iy) using a stable hash.
    """
    angle = Mulberry32(stable_hash(ix, iy, seed) & 0xFFFFFFFF).next() * 2.0 * math.pi
    return math.cos(angle), math.sin(angle)


def _dot_grid_gradient(ix: int, iy: int, x: float, y: float, seed: int) -> float:
    gx, gy = _grad(ix, iy, seed)
    return gx * (x - ix) + gy * (y - iy)


def _perlin(x: float, y: float, seed: int) -> float:
    """
    Single-octave Perlin noise at coordinates (x, y) with given seed.
    Returns a value shifted from [-1, 1] to [0, 1].
    """
    x0 = math.floor(x)
    y0 = math.floor(y)
    x1 = x0 + 1
    y1 = y0 + 1

    sx = _fade(x - x0)
    sy = _fade(y - y0)

    n00 = _dot_grid_gradient(x0, y0, x, y, seed)
    n10 = _dot_grid_gradient(x1, y0, x, y, seed)
    n01 = _dot_grid_gradient(x0, y1, x, y, seed)
    n11 = _dot_grid_gradient(x1, y1, x, y, seed)

    value = _lerp(_lerp(n00, n10, sx), _lerp(n01, n11, sx), sy)
    return (value + 1.0) / 2.0


def perlin_noise(
    x: float,
    y: float,
    seed: int,
    octaves: int = 4,
    persistence: float = 0.5,
    lacunarity: float = 2.0,
    scale: float = 0.05,
) -> float:
    """
    Generate fractal Perlin noise at (x, y) using multiple octaves.
    Returns a normalized value in [0, 1].
    """
    value = 0.0
    amplitude = 1.0
    frequency = scale
    max_amp = 0.0

    for i in range(octaves):
        value += _perlin(x * frequency, y * frequency, seed + i) * amplitude
        max_amp += amplitude
        amplitude *= persistence
        frequency *= lacunarity

    return value / max_amp if max_amp > 0 else 0.0


# ─────────────────────────────────────────────────────────────────────────────
# == RAW FIELDS ==

def _macro_elevation(seed_int: int, q: int, r: int, settings: WorldGenSettings) -> float:
    x, z = axial_to_xz(q, r)
    n = perlin_noise(x, z, seed_int ^ _TAG_ELEVATION, octaves=4, scale=settings.elevation_scale)
    return clamp01((n - 0.5) * ELEVATION_CONTRAST + 0.5)


def _plate_site(seed: Seed, ix: int, iy: int, plate_size: float) -> Tuple[float, float]:
    rng = tile_rng(seed, ix, iy, _TAG_PLATE)
    jitter = plate_size * 0.5
    return (
        ix * plate_size + rng.next_in(-0.5, 0.5) * jitter,
        iy * plate_size + rng.next_in(-0.5, 0.5) * jitter,
    )


def _plate_edge_distance(seed: Seed, x: float, z: float, plate_size: float) -> float:
    """
    0 on the boundary between the two nearest plate sites, approaching 1 at a
    plate's centre.
    """
    size = max(1.0, plate_size)
    px = round(x / size)
    pz = round(z / size)
    d1 = d2 = math.inf
    for oz in (-1, 0, 1):
        for ox in (-1, 0, 1):
            sx, sz = _plate_site(seed, px + ox, pz + oz, size)
            d = math.hypot(x - sx, z - sz)
            if d < d1:
                d1, d2 = d, d1
            elif d < d2:
                d2 = d
    total = d1 + d2
    return clamp01((d2 - d1) / total) if total > 0 else 1.0


def normalized_latitude(z: float, lat_scale: float) -> float:
    """Eased latitude in [0, 1] with the equator at 0.5 and z = 0."""
    if not lat_scale or not math.isfinite(lat_scale):
        return 0.5
    signed = max(-1.0, min(1.0, z / lat_scale))
    return clamp01(0.5 + math.tanh(signed * 1.2) * 0.5)


def sample_fields(seed: Seed, q: int, r: int, settings: WorldGenSettings) -> TileFields:
    """Raw noise/elevation fields for a tile, before regional adjustment."""
    seed_int = seed_to_int(seed)
    elevation = _macro_elevation(seed_int, q, r, settings)

    steepest = 0.0
    for dq, dr in HEX_DIRECTIONS:
        drop = abs(_macro_elevation(seed_int, q + dq, r + dr, settings) - elevation)
        steepest = max(steepest, drop)

    x, z = axial_to_xz(q, r)
    detail = perlin_noise(x, z, seed_int ^ _TAG_DETAIL, octaves=2, scale=settings.detail_scale)
    ridge = perlin_noise(x, z, seed_int ^ _TAG_RIDGE, octaves=3, scale=settings.ridge_scale)

    _, world_z = axial_to_xz(q, r, settings.tile_size)

    return TileFields(
        macro_elevation=elevation,
        macro_slope=clamp01(steepest * SLOPE_GAIN),
        plate_edge_distance=_plate_edge_distance(seed, x, z, settings.plate_size),
        medium_detail_abs=clamp01(abs(detail - 0.5) * 2.0),
        ridge_strength=clamp01((1.0 - abs(2.0 * ridge - 1.0)) ** 2),
        latitude_normalized=normalized_latitude(world_z, settings.lat_scale),
    )


def pick_region(seed: Seed, q: int, r: int, settings: WorldGenSettings) -> RegionBias:
    """Choose a regional archetype from slow, large-scale noise."""
    archetypes = settings.archetypes
    if not archetypes or not settings.layers.regions:
        return RegionBias()
    seed_int = seed_to_int(seed)
    x, z = axial_to_xz(q, r)
    n = perlin_noise(x, z, seed_int ^ _TAG_REGION, octaves=2, scale=settings.region_scale)
    v = clamp01((n - 0.5) * 2.0 + 0.5)
    idx = math.floor(v * len(archetypes)) % len(archetypes)
    a = archetypes[idx]
    return RegionBias(
        id=stable_hash(seed_int, math.floor(v * 4096)) & 0xFFFFFFFF,
        archetype=a.id,
        relief_weight=a.relief_weight,
        relief_bias=a.relief_bias,
        elevation_offset=a.elevation_offset,
        temperature_bias=a.temperature_bias,
        moisture_bias=a.moisture_bias,
    )


def pick_special(seed: Seed, q: int, r: int, settings: WorldGenSettings) -> Optional[Special]:
    """
    Rare overlay from a low-frequency fractal mask. Tiles whose stretched mask
    value reaches ``1 - SPECIAL_BASE_CHANCE * rarity_multiplier`` get a special;
    a second noise channel picks which one, so neighbouring tiles agree.
    """
    if not settings.layers.specials:
        return None
    cfg = settings.specials
    seed_int = seed_to_int(seed)
    x, z = axial_to_xz(q, r)
    n = perlin_noise(
        x, z, seed_int ^ _TAG_SPECIAL_MASK,
        octaves=max(1, int(cfg.mask_octaves)),
        persistence=cfg.mask_gain,
        lacunarity=2.1,
        scale=cfg.mask_freq,
    )
    mask = clamp01((n - 0.5) * SPECIAL_MASK_CONTRAST + 0.5)
    threshold = clamp01(1.0 - SPECIAL_BASE_CHANCE * max(0.0, cfg.rarity_multiplier))
    if mask < threshold:
        return None
    k = perlin_noise(x, z, seed_int ^ _TAG_SPECIAL_KEY, octaves=1, scale=cfg.mask_freq * 4.0)
    key = SPECIALS[math.floor(clamp01(k) * len(SPECIALS)) % len(SPECIALS)]
    rarity = max(1, min(MAX_RARITY, round(1.0 / max(1e-6, 1.0 - mask))))
    return Special(key, rarity)


# ─────────────────────────────────────────────────────────────────────────────
# == TILE ASSEMBLY ==

def generate_tile(
    seed: Optional[Seed],
    q: int,
    r: int,
    settings: Optional[WorldGenSettings] = None,
) -> Tile:
    """
    Generate the tile at axial (q, r) for ``seed``.

    ``seed`` takes precedence over ``settings.seed``; pass ``None`` to use the
    settings seed. Identical arguments always produce equal tiles.
    """
    settings = settings if settings is not None else WorldGenSettings()
    if seed is None:
        seed = settings.seed

    region = pick_region(seed, q, r, settings)
    fields = sample_fields(seed, q, r, settings)
    fields.macro_elevation = clamp01(
        fields.macro_elevation + region.elevation_offset * REGION_ELEVATION_WEIGHT
    )

    ctx = compute_derived_fields(DerivedContext(fields=fields, region=region, settings=settings))
    climate = ctx.climate

    signed_lat = (fields.latitude_normalized - 0.5) * 2.0
    result = map_biome(fields.macro_elevation, fields.macro_slope, signed_lat, sea_level=settings.sea_level)

    rng = tile_rng(seed, q, r, _TAG_TILE)
    variant = rng.next_int(0, 3)
    clutter = 0
    if (
        settings.layers.clutter
        and settings.clutter_density > 0
        and not result.biome.is_water
        and rng.chance(0.25 + 0.5 * climate.moisture)
    ):
        clutter = rng.next_int(1, settings.clutter_density)

    x, z = axial_to_xz(q, r, settings.tile_size)
    return Tile(
        coord=(q, r),
        seed=seed,
        biome=result.biome,
        elevation=fields.macro_elevation,
        slope=fields.macro_slope,
        relief_index=ctx.relief_index,
        temperature=climate.temperature,
        moisture=climate.moisture,
        ocean_proximity=climate.ocean_proximity,
        latitude=climate.latitude,
        region=region.archetype,
        position=WorldPos(x, 0.0, z),
        top=result.top,
        side=result.side,
        y_scale=result.y_scale,
        variant=variant,
        clutter=clutter,
        special=pick_special(seed, q, r, settings),
    )


@dataclass
class BlockSample:
    """Flat row-major buffers for a (2S+1)² axial window."""

    size: int
    is_water: List[bool] = field(default_factory=list)
    y_scale: List[float] = field(default_factory=list)


def sample_block(
    seed: Seed,
    q_origin: int,
    r_origin: int,
    radius: int,
    settings: Optional[WorldGenSettings] = None,
) -> BlockSample:
    """
    Sample water flags and normalized heights around (q_origin, r_origin),
    rows by r then columns by q, each from -radius to +radius.
    """
    radius = max(0, int(radius))
    block = BlockSample(size=2 * radius + 1)
    for r in range(-radius, radius + 1):
        for q in range(-radius, radius + 1):
            tile = generate_tile(seed, q + q_origin, r + r_origin, settings)
            block.is_water.append(tile.is_water)
            block.y_scale.append(clamp01(tile.elevation))
    logger.debug(
        "sample_block seed=%r origin=(%d, %d) N=%d water=%d",
        seed, q_origin, r_origin, block.size, sum(block.is_water),
    )
    return block


__all__ = [
    "BlockSample",
    "generate_tile",
    "normalized_latitude",
    "perlin_noise",
    "pick_region",
    "pick_special",
    "sample_block",
    "sample_fields",
]
