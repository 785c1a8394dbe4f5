from navigation.grid import HexGrid
from worldgen.generation import generate_tile
from worldgen.settings import WorldGenSettings
from worldgen.world import World


def test_get_generates_and_caches():
    world = World(WorldGenSettings(seed=3))
    tile = world.get(4, -2)
    assert tile.coord == (4, -2)
    assert tile == generate_tile(3, 4, -2)
    assert world.get(4, -2) is tile
    assert world.generated_count == 1
    assert (4, -2) in world
    assert (9, 9) not in world


def test_get_far_from_origin():
    world = World()
    tile = world.get(1000, -1000)
    assert tile.coord == (1000, -1000)


def test_least_recently_used_chunk_is_evicted():
    settings = WorldGenSettings(seed=1, chunk_size=2, max_active_chunks=2)
    world = World(settings)
    first = world.get(0, 0)
    world.get(2, 0)
    world.get(0, 0)  # refresh chunk (0, 0)
    world.get(4, 0)
    assert len(world.chunks) == 2
    assert (0, 0) in world
    assert (2, 0) not in world
    assert world.get(0, 0) is first

    world.get(2, 0)
    assert world.generated_count == 4
    assert world.get(2, 0) == generate_tile(1, 2, 0, settings)


def test_neighbors_and_tiles_at():
    world = World()
    coords = [t.coord for t in world.neighbors(0, 0)]
    assert sorted(coords) == sorted(HexGrid().neighbors((0, 0)))
    area = HexGrid().spiral((0, 0), 2)
    tiles = world.tiles_at(area)
    assert [t.coord for t in tiles] == area
    assert len(list(world.all_tiles())) == len(area)


def test_water_coords():
    world = World(WorldGenSettings(seed="coast"))
    area = HexGrid().spiral((0, 0), 4)
    water = world.water_coords(area)
    assert set(water) <= set(area)
    for q, r in area:
        assert ((q, r) in water) == world.get(q, r).is_water


def test_mark_dirty_drops_cache():
    world = World()
    world.get(0, 0)
    world.mark_dirty()
    assert world.chunks == {}
    assert (0, 0) not in world
    assert world.seed == 0
