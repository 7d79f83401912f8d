import itertools
import random

import pytest

from pickup_delivery.exceptions import RouteTooLongError
from pickup_delivery.models import Station
from pickup_delivery.optimization import (
    best_collection_route,
    best_distribution_route,
    calculate_route_distance,
)

from conftest import A, B, C


def _zero(a, b):
    return 0


def test_empty_route():
    assert best_distribution_route(_zero, A, []) == ([], 0)


def test_route_distance_sums_legs(simple_network):
    assert calculate_route_distance(simple_network.distance, B, [A, C]) == 30 + 40
    assert calculate_route_distance(simple_network.distance, B, []) == 0


def test_shortest_distribution_route(simple_network):
    route, cost = best_distribution_route(simple_network.distance, B, [A, C])
    assert route == [C, A]
    assert cost == 50


def test_duplicate_stops_are_visited_together(simple_network):
    route, cost = best_distribution_route(simple_network.distance, B, [C, A, C])
    assert route == [C, C, A]
    assert cost == 50


def test_matches_brute_force(multiload_network):
    rng = random.Random(7)
    stations = multiload_network.stations
    distance = multiload_network.distance

    for _ in range(20):
        start = rng.choice(stations)
        stops = rng.sample(stations, rng.randint(1, len(stations)))
        _, cost = best_distribution_route(distance, start, stops)
        expected = min(
            calculate_route_distance(distance, start, perm)
            for perm in itertools.permutations(stops)
        )
        assert cost == expected


def test_result_does_not_depend_on_input_order(multiload_network):
    stops = [Station("N1"), Station("N3"), Station("N4")]
    start = Station("N2")
    costs = {
        best_distribution_route(multiload_network.distance, start, perm)[1]
        for perm in itertools.permutations(stops)
    }
    assert len(costs) == 1


def test_route_cost_is_consistent(multiload_network):
    stops = [Station("N1"), Station("N3"), Station("N4"), Station("N0")]
    start = Station("N2")
    route, cost = best_distribution_route(multiload_network.distance, start, stops)
    assert sorted(route) == sorted(stops)
    assert calculate_route_distance(multiload_network.distance, start, route) == cost


def test_ties_keep_first_permutation():
    stops = [Station("S1"), Station("S2"), Station("S3")]
    route, cost = best_distribution_route(_zero, A, stops)
    assert route == stops
    assert cost == 0


def test_too_many_distinct_stops():
    stops = [Station(f"S{i}") for i in range(9)]
    with pytest.raises(RouteTooLongError) as excinfo:
        best_distribution_route(_zero, A, stops)
    assert excinfo.value.stops == 9
    assert excinfo.value.limit == 8


def test_duplicates_do_not_count_against_limit():
    stops = [Station(f"S{i % 3}") for i in range(12)]
    route, _ = best_distribution_route(_zero, A, stops, max_stops=3)
    assert len(route) == 12


def test_custom_stop_limit():
    with pytest.raises(RouteTooLongError):
        best_distribution_route(_zero, A, [B, C], max_stops=1)


def test_collection_route_ends_at_destination(simple_network):
    route, cost = best_collection_route(simple_network.distance, [A, B], C)
    assert route == [A, B]
    assert cost == 40
    assert calculate_route_distance(simple_network.distance, route[0], route[1:] + [C]) == cost


def test_single_collection_stop(simple_network):
    assert best_collection_route(simple_network.distance, [A], C) == ([A], 40)
