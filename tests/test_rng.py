from worldgen.rng import Mulberry32, seed_to_int, stable_hash, tile_rng


def test_same_seed_same_sequence():
    a = Mulberry32(1234)
    b = Mulberry32(1234)
    assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]


def test_different_seeds_diverge():
    a = Mulberry32(1)
    b = Mulberry32(2)
    assert [a.next() for _ in range(5)] != [b.next() for _ in range(5)]


def test_values_in_unit_interval():
    rng = Mulberry32(99)
    for _ in range(2000):
        v = rng.next()
        assert 0.0 <= v < 1.0


def test_next_in_and_next_int_ranges():
    rng = Mulberry32(7)
    ints = [rng.next_int(0, 3) for _ in range(2000)]
    assert set(ints) == {0, 1, 2, 3}
    for _ in range(500):
        assert -2.0 <= rng.next_in(-2.0, 5.0) < 5.0


def test_chance_extremes():
    rng = Mulberry32(5)
    assert not any(rng.chance(0.0) for _ in range(200))
    assert all(rng.chance(1.0) for _ in range(200))


def test_seed_to_int():
    assert seed_to_int(0) == 1
    assert seed_to_int("") == 1
    assert seed_to_int(2**32 + 5) == 5
    assert seed_to_int("seed-test") == seed_to_int("seed-test")
    assert seed_to_int("a") != seed_to_int("b")
    assert 0 < seed_to_int(-1) <= 0xFFFFFFFF


def test_stable_hash_is_repeatable():
    assert stable_hash(1, 2, 3) == stable_hash(1, 2, 3)
    assert stable_hash(1, 2, 3) != stable_hash(3, 2, 1)
    assert stable_hash(-5, 7) == stable_hash(-5, 7)


def test_tile_rng_depends_on_all_inputs():
    base = tile_rng("world", 3, -4, 1).next()
    assert tile_rng("world", 3, -4, 1).next() == base
    assert tile_rng("world", 3, -4, 2).next() != base
    assert tile_rng("world", 4, -4, 1).next() != base
    assert tile_rng("other", 3, -4, 1).next() != base


def test_known_sequence_value():
    rng = Mulberry32(1234)
    for _ in range(4999):
        rng.next()
    assert rng.next() == 0.19206625828519464
