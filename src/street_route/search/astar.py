# search/astar.py
"""
A* shortest-path search bounded by a wall-clock budget.

The frontier is an IndexedMinPQ keyed by distTo[v] + h(v, goal). A vertex whose
best-known distance improves while it is still queued gets its priority
lowered in place instead of being pushed a second time.

The budget is checked once per dequeued vertex; a single adjacency expansion
always runs to completion. Running out of time is reported as
SolverOutcome.TIMEOUT, never raised; a zero or negative budget times out
before the first pop. A query whose start is its goal is always SOLVED.
"""

import math
import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from enum import Enum

from street_route.app.protocols import AStarGraph
from street_route.domain.structures.heap import IndexedMinPQ
from street_route.search.hooks import NoopHooks, SearchHooks

Clock = Callable[[], float]


class SolverOutcome(Enum):
    SOLVED = "solved"
    TIMEOUT = "timeout"
    UNSOLVABLE = "unsolvable"


@dataclass(frozen=True)
class SearchResult:
    outcome: SolverOutcome
    solution: tuple = ()
    solution_weight: float = 0.0
    num_states_explored: int = 0
    exploration_time_s: float = 0.0


class AStarSolver:
    """Single-use solver: construct for one query, call solve()."""

    def __init__(
        self,
        graph: AStarGraph,
        start: Hashable,
        goal: Hashable,
        timeout_s: float,
        *,
        clock: Clock = time.perf_counter,
        hooks: SearchHooks | None = None,
    ):
        if math.isnan(timeout_s):
            raise ValueError("timeout_s must be a number, got NaN")
        self.graph, self.start, self.goal = graph, start, goal
        self.timeout_s = float(timeout_s)
        self._clock = clock
        self._hooks = hooks or NoopHooks()
        self._result: SearchResult | None = None

        self._dist_to: dict[Hashable, float] = {}
        self._edge_to: dict[Hashable, Hashable] = {}
        self._pq: IndexedMinPQ = IndexedMinPQ()

    def solve(self) -> SearchResult:
        if self._result is None:
            self._hooks.search_start(start=self.start, goal=self.goal, timeout_s=self.timeout_s)
            self._result = self._run()
            self._hooks.search_end(start=self.start, goal=self.goal, result=self._result)
        return self._result

    def _run(self) -> SearchResult:
        graph, goal, pq = self.graph, self.goal, self._pq
        t0 = self._clock()
        elapsed = 0.0
        explored = 0

        self._dist_to[self.start] = 0.0
        if self.start == goal:
            # nothing to explore, so no budget can run out
            return SearchResult(
                outcome=SolverOutcome.SOLVED,
                solution=(goal,),
                num_states_explored=0,
                exploration_time_s=self._clock() - t0,
            )
        pq.add(self.start, graph.estimated_distance_to_goal(self.start, goal))

        while len(pq) > 0 and pq.peek_min() != goal and elapsed < self.timeout_s:
            current = pq.pop_min()
            for edge in graph.neighbors(current):
                self._relax(current, edge.target, edge.weight)
            explored += 1
            elapsed = self._clock() - t0

        if elapsed >= self.timeout_s:
            outcome, path, weight = SolverOutcome.TIMEOUT, (), 0.0
        elif len(pq) == 0:
            outcome, path, weight = SolverOutcome.UNSOLVABLE, (), 0.0
        else:
            outcome, path, weight = SolverOutcome.SOLVED, self._path_to(goal), self._dist_to[goal]

        return SearchResult(
            outcome=outcome,
            solution=path,
            solution_weight=weight,
            num_states_explored=explored,
            exploration_time_s=self._clock() - t0,
        )

    def _relax(self, u: Hashable, v: Hashable, w: float) -> None:
        d = self._dist_to[u] + w
        known = self._dist_to.get(v)
        if known is not None and d >= known:
            return

        self._dist_to[v] = d
        self._edge_to[v] = u
        priority = d + self.graph.estimated_distance_to_goal(v, self.goal)
        if known is None:
            self._pq.add(v, priority)
        else:
            # v may already have been dequeued; an inconsistent heuristic can reopen it
            if v in self._pq:
                self._pq.change_priority(v, priority)
            else:
                self._pq.add(v, priority)

    def _path_to(self, v: Hashable) -> tuple:
        path = [v]
        while v != self.start:
            v = self._edge_to[v]
            path.append(v)
        path.reverse()
        return tuple(path)


def solve(
    graph: AStarGraph,
    start: Hashable,
    goal: Hashable,
    timeout_s: float,
    *,
    clock: Clock = time.perf_counter,
    hooks: SearchHooks | None = None,
) -> SearchResult:
    return AStarSolver(graph, start, goal, timeout_s, clock=clock, hooks=hooks).solve()
