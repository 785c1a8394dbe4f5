import logging

import pytest

from navigation.grid import HexGrid, SquareGrid
from navigation.nav import Nav, rect_bounds
from worldgen.coords import InvalidCoordinateError


def test_square_straight_path():
    nav = Nav(SquareGrid())
    assert nav.pathfind((0, 0), (3, 0)) == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_start_equals_goal():
    nav = Nav(HexGrid())
    assert nav.pathfind((2, -1), (2, -1)) == [(2, -1)]


def test_wall_blocks_path():
    nav = Nav(SquareGrid(), in_bounds=rect_bounds(-5, -5, 5, 5))
    nav.set_blockers((1, y) for y in range(-5, 6))
    assert nav.pathfind((0, 0), (3, 0)) == []


def test_path_goes_around_gap_in_wall():
    nav = Nav(SquareGrid(), in_bounds=rect_bounds(-5, -5, 5, 5))
    nav.set_blockers((1, y) for y in range(-5, 5))
    path = nav.pathfind((0, 0), (3, 0))
    assert path[0] == (0, 0) and path[-1] == (3, 0)
    assert (1, 5) in path
    assert not any(nav.is_blocked(c) for c in path)
    assert len(path) == 14


def test_blocked_goal_is_unreachable():
    nav = Nav(HexGrid())
    nav.set_blocker((2, 0))
    assert nav.pathfind((0, 0), (2, 0)) == []
    nav.set_blocker((2, 0), False)
    assert len(nav.pathfind((0, 0), (2, 0))) == 3


def test_hex_path_is_shortest_and_adjacent():
    grid = HexGrid()
    nav = Nav(grid)
    path = nav.pathfind((0, 0), (3, -1))
    assert len(path) == grid.distance((0, 0), (3, -1)) + 1
    for a, b in zip(path, path[1:]):
        assert grid.distance(a, b) == 1


def test_hex_detour_around_blocker():
    nav = Nav(HexGrid())
    nav.set_blocker((1, 0))
    path = nav.pathfind((0, 0), (2, 0))
    assert (1, 0) not in path
    assert len(path) == 4


def test_enclosed_goal_gives_up(caplog):
    nav = Nav(SquareGrid(), max_expansions=200)
    nav.set_blockers([(6, 5), (4, 5), (5, 6), (5, 4)])
    with caplog.at_level(logging.WARNING):
        assert nav.pathfind((0, 0), (5, 5)) == []
    assert "gave up" in caplog.text


def test_accepts_lists_and_validates():
    nav = Nav(SquareGrid())
    assert nav.pathfind([0, 0], [0, 2]) == [(0, 0), (0, 1), (0, 2)]
    assert nav.cost() == 1
    with pytest.raises(InvalidCoordinateError):
        nav.set_blocker("x")
    nav.set_blocker((1, 1))
    nav.clear_blockers()
    assert not nav.is_blocked((1, 1))
