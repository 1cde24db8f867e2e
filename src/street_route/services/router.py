import time
from dataclasses import dataclass, field

from street_route.app.protocols import AStarGraph, NodeLocator, RoutePlanner
from street_route.domain.entities.geography import Point
from street_route.domain.street_graph import StreetMapGraph
from street_route.domain.structures.kdtree import EmptyTreeError
from street_route.io.route_events import RouteCompletedBiz, RouteRequestedBiz
from street_route.search.astar import Clock, SolverOutcome, solve
from street_route.search.hooks import NoopHooks, SearchHooks


@dataclass(frozen=True)
class Route:
    outcome: SolverOutcome
    node_ids: list[int] = field(default_factory=list)
    points: list[Point] = field(default_factory=list)
    length_m: float = 0.0
    streets: list[str] = field(default_factory=list)
    states_explored: int = 0
    elapsed_s: float = 0.0

    @property
    def found(self) -> bool:
        return self.outcome is SolverOutcome.SOLVED


class NetworkRoutePlanner(RoutePlanner):
    def __init__(
        self,
        graph: StreetMapGraph,
        locator: NodeLocator,
        *,
        search_graph: AStarGraph | None = None,
        timeout_s: float = 10.0,
        hooks: SearchHooks | None = None,
        run_id: str = "local",
        clock: Clock = time.perf_counter,
    ):
        self.G, self.locator = graph, locator
        self.search_graph = search_graph or graph
        self.timeout_s = timeout_s
        self.hooks = hooks or NoopHooks()
        self.run_id = run_id
        self._clock = clock
        self._seq = 0

    def route(self, a: Point, b: Point) -> Route:
        try:
            na = self.locator.closest(a.x, a.y)
            nb = self.locator.closest(b.x, b.y)
        except EmptyTreeError:
            self.hooks.error(reason="snap_failed", origin=(a.x, a.y), destination=(b.x, b.y))
            raise
        self._seq += 1
        self.hooks.biz(
            RouteRequestedBiz(
                run_id=self.run_id,
                seq=self._seq,
                name="route_requested",
                origin=(a.x, a.y),
                destination=(b.x, b.y),
                start_node=na,
                goal_node=nb,
            )
        )

        res = solve(
            self.search_graph, na, nb, self.timeout_s, clock=self._clock, hooks=self.hooks
        )
        nodes = list(res.solution)
        route = Route(
            outcome=res.outcome,
            node_ids=nodes,
            points=[self.G.point(v) for v in nodes],
            length_m=res.solution_weight,
            streets=self.G.street_names(nodes),
            states_explored=res.num_states_explored,
            elapsed_s=res.exploration_time_s,
        )

        self.hooks.biz(
            RouteCompletedBiz(
                run_id=self.run_id,
                seq=self._seq,
                name="route_completed",
                outcome=res.outcome.value,
                node_count=len(nodes),
                length_m=route.length_m,
                states_explored=route.states_explored,
                elapsed_s=route.elapsed_s,
            )
        )
        return route

    def shortest_path(
        self, start_lon: float, start_lat: float, dest_lon: float, dest_lat: float
    ) -> list[int]:
        return self.route(Point(start_lon, start_lat), Point(dest_lon, dest_lat)).node_ids
