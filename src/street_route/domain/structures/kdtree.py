"""
2-d tree over points for nearest-neighbor lookups.

The root splits on x and the split axis alternates with depth. A point whose
coordinate on the node's axis is strictly smaller goes left, anything else goes
right. The tree is built once from the input sequence and never shrinks.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from street_route.domain.entities.geography import Point

X_AXIS = 0
Y_AXIS = 1


class EmptyTreeError(LookupError):
    pass


@dataclass
class _KDNode:
    point: Point
    axis: int
    left: "_KDNode | None" = None
    right: "_KDNode | None" = None


def _coord(p: Point, axis: int) -> float:
    return p.x if axis == X_AXIS else p.y


def _dist2(a: Point, b: Point) -> float:
    dx, dy = a.x - b.x, a.y - b.y
    return dx * dx + dy * dy


class KDTree:
    def __init__(self, points: Iterable[Point] = ()):
        self._root: _KDNode | None = None
        self._size = 0
        for p in points:
            self._insert(p)

    def _insert(self, p: Point) -> None:
        if self._root is None:
            self._root = _KDNode(p, X_AXIS)
            self._size = 1
            return

        node = self._root
        while True:
            if node.point == p:
                return
            child_axis = 1 - node.axis
            if _coord(p, node.axis) < _coord(node.point, node.axis):
                if node.left is None:
                    node.left = _KDNode(p, child_axis)
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = _KDNode(p, child_axis)
                    break
                node = node.right
        self._size += 1

    def nearest(self, x: float, y: float) -> Point:
        if self._root is None:
            raise EmptyTreeError("nearest() on an empty KDTree")

        goal = Point(float(x), float(y))
        best = self._root.point
        best_d2 = _dist2(goal, best)

        # (node, squared distance from goal to the splitting plane that led here)
        stack: list[tuple[_KDNode, float]] = [(self._root, 0.0)]
        while stack:
            node, plane_d2 = stack.pop()
            if plane_d2 >= best_d2:
                continue

            d2 = _dist2(goal, node.point)
            if d2 < best_d2:
                best, best_d2 = node.point, d2

            diff = _coord(goal, node.axis) - _coord(node.point, node.axis)
            if diff < 0:
                good, bad = node.left, node.right
            else:
                good, bad = node.right, node.left

            # bad side is pushed first so the whole good subtree is searched before it
            if bad is not None:
                stack.append((bad, diff * diff))
            if good is not None:
                stack.append((good, 0.0))

        return best

    def __len__(self) -> int:
        return self._size

    def __contains__(self, p: object) -> bool:
        if not isinstance(p, Point):
            return False
        node = self._root
        while node is not None:
            if node.point == p:
                return True
            node = node.left if _coord(p, node.axis) < _coord(node.point, node.axis) else node.right
        return False

    def __iter__(self) -> Iterator[Point]:
        stack = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            yield node.point
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
