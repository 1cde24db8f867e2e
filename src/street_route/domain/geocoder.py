import re

from street_route.app.protocols import NodeLocator
from street_route.domain.entities.geography import Location, Point
from street_route.domain.street_graph import StreetMapGraph
from street_route.domain.structures.kdtree import KDTree
from street_route.domain.structures.trie import TrieSet

_NON_ALPHA = re.compile(r"[^a-zA-Z ]")


def clean_string(s: str) -> str:
    """Drop everything but ASCII letters and spaces, then lower-case."""
    return _NON_ALPHA.sub("", s).lower()


class Geocoder(NodeLocator):
    """
    Name and coordinate lookups over a StreetMapGraph.

    Only nodes with at least one outgoing edge are snapped to, since an isolated
    node can never start or end a route. Every named node, connected or not, is
    searchable by name.
    """

    def __init__(self, graph: StreetMapGraph):
        self.G = graph
        self._point_to_node: dict[Point, int] = {}
        self._names = TrieSet()
        self._full_name: dict[str, str] = {}
        self._locations: dict[str, list[Location]] = {}

        points: list[Point] = []
        for n in graph.nodes():
            if graph.neighbors(n.id):
                p = n.point
                points.append(p)
                self._point_to_node[p] = n.id

            if n.name is not None:
                clean = clean_string(n.name)
                self._names.add(clean)
                self._full_name[clean] = n.name
                self._locations.setdefault(clean, []).append(
                    Location(id=n.id, lon=n.lon, lat=n.lat, name=n.name)
                )

        self._kd = KDTree(points)

    def closest(self, lon: float, lat: float) -> int:
        return self._point_to_node[self._kd.nearest(lon, lat)]

    def locations_by_prefix(self, prefix: str) -> list[str]:
        return [self._full_name[c] for c in self._names.keys_with_prefix(clean_string(prefix))]

    def locations(self, location_name: str) -> list[Location]:
        return list(self._locations.get(clean_string(location_name), ()))
