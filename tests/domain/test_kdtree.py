# tests/domain/test_kdtree.py
import numpy as np
import pytest

from street_route.domain.entities.geography import Point
from street_route.domain.structures.kdtree import EmptyTreeError, KDTree
from street_route.domain.synthetic import random_points


def d2(a: Point, b: Point) -> float:
    dx, dy = a.x - b.x, a.y - b.y
    return dx * dx + dy * dy


def brute_nearest_d2(points, q: Point) -> float:
    return min(d2(q, p) for p in points)


def test_empty_tree_raises():
    with pytest.raises(EmptyTreeError):
        KDTree([]).nearest(0.0, 0.0)
    assert len(KDTree()) == 0


def test_single_point():
    t = KDTree([Point(2.0, 3.0)])
    assert t.nearest(-50.0, 80.0) == Point(2.0, 3.0)


def test_small_known_example():
    pts = [Point(2, 3), Point(4, 2), Point(4, 5), Point(3, 3), Point(1, 5), Point(4, 4)]
    t = KDTree(pts)
    assert t.nearest(0, 7) == Point(1, 5)
    assert t.nearest(4.1, 2.1) == Point(4, 2)
    assert t.nearest(3.2, 3.1) == Point(3, 3)


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_nearest_matches_brute_force(seed):
    rng = np.random.default_rng(seed)
    pts = [Point(x, y) for x, y in random_points(800, rng=rng, bounds=(-10, -10, 10, 10))]
    t = KDTree(pts)
    for qx, qy in random_points(300, rng=rng, bounds=(-12, -12, 12, 12)):
        q = Point(qx, qy)
        got = t.nearest(qx, qy)
        assert got in pts
        assert d2(q, got) == brute_nearest_d2(pts, q)


def test_nearest_on_integer_grid_with_ties_on_split_planes():
    pts = [Point(float(x), float(y)) for x in range(10) for y in range(10)]
    t = KDTree(pts)
    rng = np.random.default_rng(5)
    for qx, qy in random_points(200, rng=rng, bounds=(-1, -1, 10, 10)):
        q = Point(qx, qy)
        assert d2(q, t.nearest(qx, qy)) == brute_nearest_d2(pts, q)


def test_ties_keep_first_found():
    t = KDTree([Point(1.0, 0.0), Point(-1.0, 0.0)])
    assert t.nearest(0.0, 0.0) == Point(1.0, 0.0)
    t2 = KDTree([Point(-1.0, 0.0), Point(1.0, 0.0)])
    assert t2.nearest(0.0, 0.0) == Point(-1.0, 0.0)


def test_duplicate_insertion_is_idempotent():
    rng = np.random.default_rng(11)
    pts = [Point(x, y) for x, y in random_points(200, rng=rng)]
    once = KDTree(pts)
    twice = KDTree(pts + pts[::-1])
    assert len(once) == len(twice) == 200
    assert sorted(once, key=lambda p: (p.x, p.y)) == sorted(twice, key=lambda p: (p.x, p.y))
    for qx, qy in random_points(100, rng=rng):
        assert once.nearest(qx, qy) == twice.nearest(qx, qy)


def test_equal_coordinate_on_axis_is_not_a_duplicate():
    t = KDTree([Point(1.0, 1.0), Point(1.0, 2.0), Point(1.0, 0.0)])
    assert len(t) == 3
    assert Point(1.0, 2.0) in t and Point(1.0, 0.0) in t
    assert t.nearest(1.0, 1.9) == Point(1.0, 2.0)
    assert t.nearest(0.9, 0.1) == Point(1.0, 0.0)


def test_sorted_input_does_not_hit_recursion_limit():
    pts = [Point(float(i), float(i)) for i in range(3_000)]
    t = KDTree(pts)
    assert len(t) == 3_000
    assert t.nearest(1_234.4, 1_234.2) == Point(1_234.0, 1_234.0)
    assert Point(2_999.0, 2_999.0) in t


def test_nearest_prunes_most_of_the_tree(monkeypatch):
    from street_route.domain.structures import kdtree

    rng = np.random.default_rng(11)
    pts = [Point(x, y) for x, y in random_points(2_500, rng=rng)]
    tree = KDTree(pts)
    doubled = KDTree(pts + pts)
    queries = random_points(200, rng=rng)

    visits = {"n": 0}
    real_dist2 = kdtree._dist2

    def counting_dist2(a, b):
        visits["n"] += 1
        return real_dist2(a, b)

    monkeypatch.setattr(kdtree, "_dist2", counting_dist2)

    def visited(t, x, y):
        visits["n"] = 0
        t.nearest(x, y)
        return visits["n"]

    counts = [visited(tree, x, y) for x, y in queries]
    assert max(counts) < len(tree) // 10
    assert sum(counts) / len(counts) < 100
    # re-inserting every point changes neither the tree nor the work per query
    assert [visited(doubled, x, y) for x, y in queries] == counts
