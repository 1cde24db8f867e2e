# runtime/registries.py
import os
from collections.abc import Callable
from typing import Any

from street_route.app.protocols import AStarGraph
from street_route.config.models import GraphByPath, GraphRef, GraphSynthetic
from street_route.domain.street_graph import StreetMapGraph
from street_route.domain.synthetic import jittered_grid
from street_route.runtime.resources import load_graph_from_path
from street_route.runtime.rng import RNGRegistry
from street_route.search.heuristics import WithHeuristic, zero_heuristic

HeuristicFactory = Callable[[StreetMapGraph], AStarGraph]
GraphFactory = Callable[[Any, dict], StreetMapGraph]

_heuristic_registry: dict[str, HeuristicFactory] = {}
_graph_registry: dict[str, GraphFactory] = {}


# ------------------- Heuristics ---------------------------


def register_heuristic(kind: str):
    def deco(fn: HeuristicFactory):
        _heuristic_registry[kind] = fn
        return fn

    return deco


def make_search_graph(kind: str, graph: StreetMapGraph) -> AStarGraph:
    try:
        factory = _heuristic_registry[kind]
    except KeyError:
        raise ValueError(f"Unknown heuristic kind {kind!r}") from None
    return factory(graph)


@register_heuristic("great_circle")
def _great_circle(graph: StreetMapGraph) -> AStarGraph:
    # the street graph's own estimate is already the great-circle distance
    return graph


@register_heuristic("zero")
def _zero(graph: StreetMapGraph) -> AStarGraph:
    return WithHeuristic(graph, zero_heuristic)


# ------------------- Graph sources ---------------------------


def register_graph_source(by: str):
    def deco(fn: GraphFactory):
        _graph_registry[by] = fn
        return fn

    return deco


def resolve_graph(ref: GraphRef, *, deps: dict | None = None) -> StreetMapGraph:
    try:
        factory = _graph_registry[ref.by]
    except KeyError:
        raise ValueError(f"Unknown graph source {ref.by!r}") from None
    return factory(ref, deps or {})


@register_graph_source("path")
def _graph_by_path(ref: GraphByPath, deps):
    if not os.path.exists(ref.file):
        if ref.must_exist:
            raise FileNotFoundError(ref.file)
        return StreetMapGraph()
    return load_graph_from_path(ref.file, ref.fmt)


@register_graph_source("synthetic")
def _graph_synthetic(ref: GraphSynthetic, deps):
    rng_registry = deps.get("rng") or RNGRegistry(ref.seed)
    return jittered_grid(
        ref.rows,
        ref.cols,
        rng=rng_registry.stream("graph"),
        spacing_deg=ref.spacing_deg,
        origin_lon=ref.origin_lon,
        origin_lat=ref.origin_lat,
        jitter=ref.jitter,
        drop_fraction=ref.drop_fraction,
    )
