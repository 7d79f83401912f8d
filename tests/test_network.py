import itertools

import pytest

from pickup_delivery.exceptions import DisconnectedNetworkError, UnknownStationError
from pickup_delivery.models import Edge, Network, Station

from conftest import A, B, C


def test_distance_follows_shortest_path(simple_network):
    assert simple_network.distance(A, B) == 30
    assert simple_network.distance(B, C) == 10
    assert simple_network.distance(A, C) == 40
    assert simple_network.distance(C, A) == 40


def test_distance_to_self_is_zero(simple_network):
    for station in (A, B, C):
        assert simple_network.distance(station, station) == 0


def test_path_includes_both_ends(simple_network):
    assert simple_network.path(A, C) == [A, B, C]
    assert simple_network.path(C, A) == [C, B, A]
    assert simple_network.path(B, A) == [B, A]
    assert simple_network.path(A, A) == [A]


def test_distances_are_symmetric(multiload_network):
    stations = multiload_network.stations
    for a, b in itertools.product(stations, repeat=2):
        assert multiload_network.distance(a, b) == multiload_network.distance(b, a)


def test_triangle_inequality(multiload_network):
    stations = multiload_network.stations
    for a, b, c in itertools.product(stations, repeat=3):
        assert multiload_network.distance(a, c) <= (
            multiload_network.distance(a, b) + multiload_network.distance(b, c)
        )


def test_multiload_shortcuts(multiload_network):
    n0, n2, n3 = Station("N0"), Station("N2"), Station("N3")
    assert multiload_network.distance(n0, n3) == 3
    assert multiload_network.path(n0, n3) == [n0, Station("N4"), n3]
    assert multiload_network.distance(n0, n2) == 5


def test_path_length_matches_distance(multiload_network):
    for a, b in itertools.product(multiload_network.stations, repeat=2):
        path = multiload_network.path(a, b)
        assert path[0] == a and path[-1] == b
        hops = sum(multiload_network.distance(u, v) for u, v in zip(path, path[1:]))
        assert hops == multiload_network.distance(a, b)


def test_parallel_edges_keep_shortest():
    network = Network.build([A, B], [Edge("E1", A, B, 30), Edge("E2", B, A, 10), Edge("E3", A, B, 20)])
    assert network.distance(A, B) == 10
    assert network.graph.edges[A, B]["name"] == "E2"


def test_self_loop_is_ignored():
    network = Network.build([A, B], [Edge("E1", A, A, 5), Edge("E2", A, B, 7)])
    assert network.distance(A, A) == 0
    assert network.graph.number_of_edges() == 1


def test_disconnected_network_is_rejected():
    with pytest.raises(DisconnectedNetworkError):
        Network.build([A, B, C], [Edge("E1", A, B, 1)])


def test_edge_to_unknown_station_is_rejected():
    with pytest.raises(UnknownStationError):
        Network.build([A, B], [Edge("E1", A, C, 1)])


def test_unknown_station_lookup_fails_loudly(simple_network):
    with pytest.raises(UnknownStationError):
        simple_network.distance(A, Station("Z"))
    with pytest.raises(KeyError):
        simple_network.distance(Station("Z"), Station("Z"))
    with pytest.raises(UnknownStationError):
        simple_network.path(Station("Z"), A)


def test_negative_edge_is_rejected():
    with pytest.raises(ValueError):
        Edge("E1", A, B, -1)


def test_edge_connects_either_direction():
    edge = Edge("E1", B, A, 3)
    assert edge.stations == (A, B)
    assert edge.connects(A, B)
    assert edge.connects(B, A)
    assert not edge.connects(A, C)
