import numpy as np
import pytest

from street_route.domain.entities.geography import Point, WeightedEdge
from street_route.domain.street_graph import StreetMapGraph
from street_route.domain.synthetic import jittered_grid
from street_route.search.heuristics import great_circle_m


@pytest.fixture
def tiny_graph() -> StreetMapGraph:
    g = StreetMapGraph()
    g.add_node(1, -122.26, 37.87, name="Sather Gate")
    g.add_node(2, -122.26, 37.871)
    g.add_node(3, -122.259, 37.871, name="Doe Library")
    g.add_node(4, -122.30, 37.90)  # isolated
    g.add_way([1, 2, 3], name="Bancroft Way")
    return g


def test_nodes_and_lookups(tiny_graph):
    g = tiny_graph
    assert len(g) == 4 and 3 in g and 99 not in g
    assert g.lon(1) == -122.26 and g.lat(1) == 37.87
    assert g.name(1) == "Sather Gate" and g.name(2) is None
    assert g.point(3) == Point(-122.259, 37.871)


def test_ways_are_two_way_with_great_circle_weights(tiny_graph):
    g = tiny_graph
    w12 = great_circle_m(-122.26, 37.87, -122.26, 37.871)
    assert g.neighbors(1) == [WeightedEdge(1, 2, w12, "Bancroft Way")]
    assert {e.target for e in g.neighbors(2)} == {1, 3}
    assert g.neighbors(4) == []
    assert g.way_name(2, 3) == "Bancroft Way" and g.way_name(3, 2) == "Bancroft Way"


def test_heuristic_is_great_circle(tiny_graph):
    g = tiny_graph
    assert g.estimated_distance_to_goal(1, 3) == pytest.approx(
        great_circle_m(-122.26, 37.87, -122.259, 37.871)
    )
    assert g.estimated_distance_to_goal(1, 1) == 0.0


def test_add_errors(tiny_graph):
    with pytest.raises(ValueError):
        tiny_graph.add_node(1, 0.0, 0.0)
    with pytest.raises(KeyError):
        tiny_graph.add_edge(1, 42)
    with pytest.raises(ValueError):
        tiny_graph.add_edge(1, 4, -1.0)


def test_path_length_and_street_names(tiny_graph):
    g = tiny_graph
    g.add_edge(3, 4, 10.0, way="Telegraph Ave")
    assert g.path_length_m([1, 2, 3]) == pytest.approx(
        g.neighbors(1)[0].weight + g.distance(2, 3)
    )
    assert g.street_names([1, 2, 3, 4]) == ["Bancroft Way", "Telegraph Ave"]
    assert g.path_length_m([1]) == 0.0


def test_parallel_edges_keep_their_own_street(tiny_graph):
    g = tiny_graph
    # a slower frontage road added after the main street
    g.add_edge(1, 2, 500.0, way="Frontage Rd")
    assert g.way_name(1, 2) == "Bancroft Way"
    assert g.street_names([1, 2, 3]) == ["Bancroft Way"]

    g.add_edge(2, 3, 1.0, way="Shortcut Alley")
    assert g.street_names([1, 2, 3]) == ["Bancroft Way", "Shortcut Alley"]
    assert g.path_length_m([1, 2, 3]) == pytest.approx(g.neighbors(1)[0].weight + 1.0)
    with pytest.raises(KeyError):
        g.way_name(1, 3)


def test_dict_round_trip_preserves_edges_and_names(tiny_graph):
    data = tiny_graph.to_dict()
    g2 = StreetMapGraph.from_dict(data)
    assert len(g2) == 4
    assert g2.name(3) == "Doe Library"
    assert g2.neighbors(2) == tiny_graph.neighbors(2)
    assert g2.way_name(1, 2) == "Bancroft Way"


def test_from_dict_accepts_ways():
    g = StreetMapGraph.from_dict(
        {
            "nodes": [
                {"id": 10, "lon": 0.0, "lat": 0.0},
                {"id": 11, "lon": 0.0, "lat": 0.001},
                {"id": 12, "lon": 0.001, "lat": 0.001},
            ],
            "ways": [{"nodes": [10, 11, 12], "name": "Main St"}],
            "edges": [{"from": 12, "to": 10, "weight": 5.0}],
        }
    )
    assert {e.target for e in g.neighbors(12)} == {11, 10}
    assert g.street_names([10, 11, 12]) == ["Main St"]


def test_jittered_grid_shape_and_determinism():
    g1 = jittered_grid(4, 5, rng=np.random.default_rng(1))
    g2 = jittered_grid(4, 5, rng=np.random.default_rng(1))
    assert len(g1) == 20
    assert g1.to_dict() == g2.to_dict()
    # full grid: 2 * (rows*(cols-1) + (rows-1)*cols) directed edges
    assert sum(len(g1.neighbors(n.id)) for n in g1.nodes()) == 2 * (4 * 4 + 3 * 5)
    assert g1.way_name(0, 1) == "Row 0 St"
    assert g1.way_name(0, 5) == "Col 0 Ave"


def test_jittered_grid_drops_streets():
    g = jittered_grid(10, 10, rng=np.random.default_rng(2), drop_fraction=0.5)
    edges = sum(len(g.neighbors(n.id)) for n in g.nodes())
    assert 0 < edges < 2 * (10 * 9 * 2)


def test_jittered_grid_rejects_bad_args():
    rng = np.random.default_rng(0)
    with pytest.raises(ValueError):
        jittered_grid(0, 3, rng=rng)
    with pytest.raises(ValueError):
        jittered_grid(3, 3, rng=rng, drop_fraction=1.0)
