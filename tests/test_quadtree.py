import pytest

from navigation.quadtree import Point, QuadTree, Rectangle


def _grid_points():
    return [Point(x, y, (x, y)) for x in range(5, 100, 10) for y in range(5, 100, 10)]


def test_rectangle_contains_is_inclusive():
    rect = Rectangle(0, 0, 10, 10)
    assert rect.contains(Point(0, 0))
    assert rect.contains(Point(10, 10))
    assert not rect.contains(Point(10.01, 5))


def test_rectangle_intersects_includes_edges():
    rect = Rectangle(0, 0, 10, 10)
    assert rect.intersects(Rectangle(5, 5, 10, 10))
    assert rect.intersects(Rectangle(10, 0, 5, 5))
    assert not rect.intersects(Rectangle(10.5, 0, 5, 5))
    assert rect.contains_rect(Rectangle(2, 2, 3, 3))
    assert not rect.contains_rect(Rectangle(8, 8, 3, 3))


def test_insert_rejects_outside_points():
    tree = QuadTree(Rectangle(0, 0, 10, 10), 2)
    assert tree.insert(Point(5, 5))
    assert not tree.insert(Point(11, 5))
    assert len(tree) == 1


def test_full_query_returns_each_point_once():
    tree = QuadTree(Rectangle(0, 0, 100, 100), 4)
    points = _grid_points()
    for p in points:
        assert tree.insert(p)
    assert tree.divided
    assert len(tree) == len(points)

    found = tree.query(Rectangle(0, 0, 100, 100))
    assert len(found) == len(points)
    assert sorted(found) == sorted(points)

    # an area that only partly covers the root still reports each point once
    found = tree.query(Rectangle(-1, -1, 101, 60))
    assert len(found) == len(set(found))
    assert sorted(found) == sorted(p for p in points if p.y <= 59)


def test_partial_query_matches_brute_force():
    tree = QuadTree(Rectangle(0, 0, 100, 100), 3)
    points = _grid_points()
    for p in points:
        tree.insert(p)
    area = Rectangle(10, 10, 30, 30)
    expected = [p for p in points if area.contains(p)]
    found = tree.query(area)
    assert len(found) == 9
    assert sorted(found) == sorted(expected)


def test_stacked_points_are_not_duplicated():
    tree = QuadTree(Rectangle(0, 0, 100, 100), 1)
    for i in range(5):
        assert tree.insert(Point(50, 50, i))
    found = tree.query(Rectangle(40, 40, 20, 20))
    assert sorted(p.data for p in found) == [0, 1, 2, 3, 4]


def test_shared_edge_goes_to_north_west():
    tree = QuadTree(Rectangle(0, 0, 100, 100), 1)
    tree.insert(Point(0, 0))
    edge = Point(50, 50)
    tree.insert(edge)
    assert tree.north_west.points == [edge]


def test_query_appends_to_given_list():
    tree = QuadTree(Rectangle(0, 0, 10, 10))
    tree.insert(Point(1, 1))
    found = ["existing"]
    assert tree.query(Rectangle(0, 0, 5, 5), found) is found
    assert found == ["existing", Point(1, 1)]


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        QuadTree(Rectangle(0, 0, 1, 1), 0)


def test_point_on_subdivision_edge_is_found():
    tree = QuadTree(Rectangle(0, 0, 10, 10), 1)
    tree.insert(Point(1, 1))
    midpoint = Point(5, 5)
    tree.insert(midpoint)
    # (5, 5) lives in the north-west quadrant, which only touches this area at a corner
    assert tree.query(Rectangle(5, 5, 5, 5)) == [midpoint]
    assert tree.query(Rectangle(5, 0, 5, 10)) == [midpoint]
