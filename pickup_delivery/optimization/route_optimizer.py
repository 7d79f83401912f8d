"""Route optimization algorithms."""

import itertools
from typing import Callable, Dict, List, Sequence, Tuple

from pickup_delivery.exceptions import RouteTooLongError
from pickup_delivery.models import Station

DistanceFn = Callable[[Station, Station], int]

# 8! = 40320 permutations per batch; 10! would already be 3.6 million
MAX_ROUTE_STOPS = 8


def calculate_route_distance(
    distance: DistanceFn,
    start: Station,
    route: Sequence[Station]
) -> int:
    """
    Calculate total distance for a route.

    Args:
        distance: Distance lookup between two stations
        start: Starting station
        route: Stations to visit in order

    Returns:
        Total distance
    """
    total = 0
    current = start

    for station in route:
        total += distance(current, station)
        current = station

    return total


def _unique_stops(stops: Sequence[Station]) -> Tuple[List[Station], Dict[Station, int]]:
    """Distinct stops in first-seen order, with their multiplicities."""
    counts: Dict[Station, int] = {}
    for stop in stops:
        counts[stop] = counts.get(stop, 0) + 1
    return list(counts), counts


def best_distribution_route(
    distance: DistanceFn,
    start: Station,
    stops: Sequence[Station],
    max_stops: int = MAX_ROUTE_STOPS
) -> Tuple[List[Station], int]:
    """
    Find the visiting order of ``stops`` with minimal travel from ``start``.

    Exhaustive search over every permutation of the distinct stops.
    Repeated stops are visited together, since a second visit to the
    same station costs nothing. Among equally short routes the first
    permutation in enumeration order wins.

    Args:
        distance: Distance lookup between two stations
        start: Station the train leaves from
        stops: Unordered stops, duplicates allowed
        max_stops: Upper bound on distinct stops

    Returns:
        Tuple of (ordered stops, total distance)

    Raises:
        RouteTooLongError: If there are more than ``max_stops`` distinct stops
    """
    if not stops:
        return [], 0

    unique, counts = _unique_stops(stops)
    if len(unique) > max_stops:
        raise RouteTooLongError(len(unique), max_stops)

    best_route = unique
    best_cost = None

    for perm in itertools.permutations(unique):
        cost = calculate_route_distance(distance, start, perm)
        if best_cost is None or cost < best_cost:
            best_cost = cost
            best_route = list(perm)

    route = [stop for stop in best_route for _ in range(counts[stop])]
    return route, best_cost


def best_collection_route(
    distance: DistanceFn,
    stops: Sequence[Station],
    destination: Station,
    max_stops: int = MAX_ROUTE_STOPS
) -> Tuple[List[Station], int]:
    """
    Find the pickup order of ``stops`` with minimal travel ending at ``destination``.

    The network is undirected, so this is the distribution route from
    ``destination`` walked backwards.

    Returns:
        Tuple of (ordered stops, total distance including the final
        leg to ``destination``)
    """
    route, total = best_distribution_route(distance, destination, stops, max_stops)
    route.reverse()
    return route, total
