# street_route/runtime/resources.py
import json
import pickle
from functools import lru_cache

from street_route.domain.street_graph import StreetMapGraph


@lru_cache(maxsize=8)
def load_graph_from_path(file: str, fmt: str) -> StreetMapGraph:
    if fmt == "json":
        with open(file, encoding="utf-8") as f:
            return StreetMapGraph.from_dict(json.load(f))
    if fmt == "pickle":
        with open(file, "rb") as f:
            g = pickle.load(f)
        if not isinstance(g, StreetMapGraph):
            raise TypeError(f"{file} does not hold a StreetMapGraph (got {type(g).__name__})")
        return g
    raise ValueError(f"Unsupported graph fmt {fmt!r}")


def save_graph_json(graph: StreetMapGraph, file: str) -> None:
    with open(file, "w", encoding="utf-8") as f:
        json.dump(graph.to_dict(), f)
