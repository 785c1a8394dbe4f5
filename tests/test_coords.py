import math

import pytest

from worldgen.coords import (
    InvalidCoordinateError,
    as_coordinate,
    axial_to_cube,
    axial_to_offset,
    axial_to_xz,
    cube_to_axial,
    distance_axial,
    hex_size,
    is_inside_axial_square,
    is_inside_world_square,
    offset_to_axial,
    round_axial,
    round_half_up,
    world_to_axial,
)

SAMPLE = [(q, r) for q in range(-6, 7) for r in range(-6, 7)]


def test_cube_sum_is_zero():
    for q, r in SAMPLE:
        c = axial_to_cube(q, r)
        assert c.x + c.y + c.z == 0


def test_cube_round_trip():
    for q, r in SAMPLE:
        assert cube_to_axial(axial_to_cube(q, r)) == (q, r)


def test_round_axial_keeps_integer_coords():
    for q, r in SAMPLE:
        assert round_axial(q, r) == (q, r)


def test_round_axial_picks_nearest():
    assert round_axial(1.1, -0.2) == (1, 0)
    assert round_axial(-0.1, 0.95) == (0, 1)


def test_round_axial_near_boundary_stays_adjacent():
    # every sample within half a hex of a centre rounds to that hex or a neighbour
    offsets = [(-0.49, 0.0), (0.49, 0.0), (0.0, 0.49), (0.25, 0.25), (-0.3, 0.3), (0.33, -0.33)]
    for q, r in [(0, 0), (3, -2), (-4, 5)]:
        for dq, dr in offsets:
            snapped = round_axial(q + dq, r + dr)
            assert distance_axial(snapped, (q, r)) <= 1


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(-0.5) == 0
    assert round_half_up(1.49) == 1


def test_distance_axial():
    assert distance_axial((0, 0), (3, -1)) == 3
    assert distance_axial((2, 2), (2, 2)) == 0
    assert distance_axial((0, 0), (-2, 4)) == 4


def test_axial_to_xz_flat_top():
    x, z = axial_to_xz(1, 0, 1.0)
    assert x == pytest.approx(1.5)
    assert z == pytest.approx(math.sqrt(3) / 2)
    x, z = axial_to_xz(0, 1, 2.0)
    assert x == pytest.approx(0.0)
    assert z == pytest.approx(2 * math.sqrt(3))


def test_world_to_axial_inverts_projection():
    size = hex_size()
    for q, r in SAMPLE:
        x, z = axial_to_xz(q, r, size)
        qf, rf = world_to_axial(x, z, size)
        assert round_axial(qf, rf) == (q, r)


def test_hex_size_scales_base():
    assert hex_size() == 2.0
    assert hex_size(2.0, 1.5) == 6.0


def test_offset_round_trip():
    for q, r in SAMPLE:
        col, row = axial_to_offset(q, r)
        assert offset_to_axial(col, row) == (q, r)


def test_inside_squares():
    assert is_inside_axial_square(2, -2, 0, 0, 2)
    assert not is_inside_axial_square(3, 0, 0, 0, 2)
    assert is_inside_world_square(0, 0, 0, 0, 1)
    assert not is_inside_world_square(5, 0, 0, 0, 2)


def test_as_coordinate_validates():
    assert as_coordinate([1, 2]) == (1, 2)
    with pytest.raises(InvalidCoordinateError):
        as_coordinate((1,))
    with pytest.raises(InvalidCoordinateError):
        as_coordinate("ab")
    with pytest.raises(InvalidCoordinateError):
        as_coordinate((True, 1))
    with pytest.raises(InvalidCoordinateError):
        as_coordinate(None)
