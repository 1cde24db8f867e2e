"""Goal-distance estimates for A* over street graphs."""

import math
from collections.abc import Callable, Hashable, Sequence

from street_route.app.protocols import AStarGraph
from street_route.domain.entities.geography import WeightedEdge

EARTH_RADIUS_M = 6_371_008.8  # mean Earth radius

HeuristicFn = Callable[[Hashable, Hashable], float]


def great_circle_m(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Haversine distance in meters between two lon/lat pairs given in degrees."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = phi2 - phi1
    dlmb = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(a)))


def zero_heuristic(v: Hashable, goal: Hashable) -> float:
    return 0.0


class WithHeuristic(AStarGraph):
    """Present `graph` to the solver with a different goal-distance estimate."""

    def __init__(self, graph: AStarGraph, fn: HeuristicFn):
        self.graph, self.fn = graph, fn

    def neighbors(self, v: Hashable) -> Sequence[WeightedEdge]:
        return self.graph.neighbors(v)

    def estimated_distance_to_goal(self, v: Hashable, goal: Hashable) -> float:
        return self.fn(v, goal)
