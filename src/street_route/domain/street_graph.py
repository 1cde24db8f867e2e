from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from street_route.app.protocols import AStarGraph
from street_route.domain.entities.geography import Node, Point, WeightedEdge
from street_route.search.heuristics import great_circle_m


class StreetMapGraph(AStarGraph):
    """
    Street network held in memory: vertices are integer node ids with a lon/lat
    position and an optional place name; edges are directed and weighted in
    meters. Ways (named or not) are added as two-way chains.
    """

    def __init__(self):
        self._nodes: dict[int, Node] = {}
        self._adj: dict[int, list[WeightedEdge]] = {}

    # ---------------- construction -----------------

    def add_node(self, node_id: int, lon: float, lat: float, name: str | None = None) -> Node:
        if node_id in self._nodes:
            raise ValueError(f"node {node_id} already exists")
        node = Node(node_id, float(lon), float(lat), name)
        self._nodes[node_id] = node
        self._adj[node_id] = []
        return node

    def add_edge(
        self,
        source: int,
        target: int,
        weight: float | None = None,
        *,
        way: str | None = None,
    ) -> WeightedEdge:
        if source not in self._nodes:
            raise KeyError(f"unknown source node {source}")
        if target not in self._nodes:
            raise KeyError(f"unknown target node {target}")
        if weight is None:
            weight = self.distance(source, target)
        elif weight < 0:
            raise ValueError(f"edge weight must be >= 0, got {weight}")
        edge = WeightedEdge(source, target, float(weight), way)
        self._adj[source].append(edge)
        return edge

    def add_way(self, node_ids: Sequence[int], name: str | None = None) -> None:
        for u, v in zip(node_ids, node_ids[1:]):
            self.add_edge(u, v, way=name)
            self.add_edge(v, u, way=name)

    # ---------------- AStarGraph -----------------

    def neighbors(self, v: int) -> list[WeightedEdge]:
        return self._adj.get(v, [])

    def estimated_distance_to_goal(self, v: int, goal: int) -> float:
        return self.distance(v, goal)

    # ---------------- lookups -----------------

    def distance(self, u: int, v: int) -> float:
        a, b = self._nodes[u], self._nodes[v]
        return great_circle_m(a.lon, a.lat, b.lon, b.lat)

    def node(self, v: int) -> Node:
        return self._nodes[v]

    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    def lon(self, v: int) -> float:
        return self._nodes[v].lon

    def lat(self, v: int) -> float:
        return self._nodes[v].lat

    def name(self, v: int) -> str | None:
        return self._nodes[v].name

    def point(self, v: int) -> Point:
        return self._nodes[v].point

    def edge_between(self, u: int, v: int) -> WeightedEdge:
        """Cheapest edge u -> v, the first one added on ties (the one A* relaxes)."""
        edges = [e for e in self._adj[u] if e.target == v]
        if not edges:
            raise KeyError(f"no edge {u} -> {v}")
        return min(edges, key=lambda e: e.weight)

    def way_name(self, u: int, v: int) -> str | None:
        return self.edge_between(u, v).way

    def path_length_m(self, node_ids: Iterable[int]) -> float:
        ids = list(node_ids)
        total = 0.0
        for u, v in zip(ids, ids[1:]):
            total += self.edge_between(u, v).weight
        return total

    def street_names(self, node_ids: Iterable[int]) -> list[str]:
        """Named ways along a path, consecutive repeats collapsed."""
        ids = list(node_ids)
        out: list[str] = []
        for u, v in zip(ids, ids[1:]):
            name = self.edge_between(u, v).way
            if name is not None and (not out or out[-1] != name):
                out.append(name)
        return out

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, v: object) -> bool:
        return v in self._nodes

    # ---------------- (de)serialization -----------------

    def to_dict(self) -> dict[str, Any]:
        nodes = []
        for n in self._nodes.values():
            row: dict[str, Any] = {"id": n.id, "lon": n.lon, "lat": n.lat}
            if n.name is not None:
                row["name"] = n.name
            nodes.append(row)
        edges = []
        for out in self._adj.values():
            for e in out:
                row = {"from": e.source, "to": e.target, "weight": e.weight}
                if e.way is not None:
                    row["way"] = e.way
                edges.append(row)
        return {"nodes": nodes, "edges": edges}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StreetMapGraph":
        g = cls()
        for row in data.get("nodes", ()):
            g.add_node(int(row["id"]), row["lon"], row["lat"], row.get("name"))
        for way in data.get("ways", ()):
            g.add_way([int(i) for i in way["nodes"]], way.get("name"))
        for e in data.get("edges", ()):
            g.add_edge(int(e["from"]), int(e["to"]), e.get("weight"), way=e.get("way"))
        return g
