# street_route/io/route_events.py

from dataclasses import dataclass


# Base type for analytics events
@dataclass
class BizEvent:
    run_id: str
    seq: int  # per-router request counter (for total ordering)
    name: str  # stable event name


@dataclass
class RouteRequestedBiz(BizEvent):
    origin: tuple[float, float]
    destination: tuple[float, float]
    start_node: int
    goal_node: int


@dataclass
class RouteCompletedBiz(BizEvent):
    outcome: str
    node_count: int
    length_m: float
    states_explored: int
    elapsed_s: float
