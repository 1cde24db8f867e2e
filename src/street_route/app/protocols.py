from collections.abc import Hashable, Sequence
from typing import Protocol, runtime_checkable

from street_route.domain.entities.geography import Point, WeightedEdge


# ------------- Search --------------------
@runtime_checkable
class AStarGraph(Protocol):
    """
    Responsibilities:
      • List outgoing weighted edges of a vertex.
      • Estimate the remaining cost from a vertex to the goal.
    The estimate should never exceed the true remaining cost; the solver does
    not check this, and an overestimating heuristic only costs optimality.
    """

    def neighbors(self, v: Hashable) -> Sequence[WeightedEdge]: ...
    def estimated_distance_to_goal(self, v: Hashable, goal: Hashable) -> float: ...


# ------------- Geocoding --------------------
@runtime_checkable
class NodeLocator(Protocol):
    """Resolve a free coordinate to the id of a graph vertex."""

    def closest(self, lon: float, lat: float) -> int: ...


@runtime_checkable
class RoutePlanner(Protocol):
    """
    Responsibilities:
      • Snap two free points onto the street network.
      • Compute the shortest path between the snapped vertices.
    """

    def route(self, a: Point, b: Point): ...
    def shortest_path(
        self, start_lon: float, start_lat: float, dest_lon: float, dest_lat: float
    ) -> list[int]: ...
