"""Random problem instance generation."""

import logging
import random
from typing import Dict, List, Optional

import networkx as nx

from pickup_delivery.models import Edge, Order, ProblemInstance, Station, Train

logger = logging.getLogger("pdp.utils")

MAX_GRAPH_ATTEMPTS = 1000


def _random_connected_graph(
    stations: int,
    edges: int,
    rng: random.Random
) -> nx.Graph:
    """Draw G(n, m) graphs until one is connected."""
    for attempt in range(1, MAX_GRAPH_ATTEMPTS + 1):
        graph = nx.gnm_random_graph(stations, edges, seed=rng.getrandbits(32))
        if nx.is_connected(graph):
            logger.debug(f"Connected graph found after {attempt} attempts")
            return graph
    raise ValueError(
        f"Could not generate a connected graph with {stations} stations and {edges} edges "
        f"in {MAX_GRAPH_ATTEMPTS} attempts"
    )


def _pick_station(
    stations: List[Station],
    load: Dict[Station, int],
    limit: Optional[int],
    rng: random.Random
) -> Station:
    """Random station that still has room under ``limit``."""
    candidates = [s for s in stations if limit is None or load.get(s, 0) < limit]
    if not candidates:
        raise ValueError(f"Every station already holds {limit} items")
    station = rng.choice(candidates)
    load[station] = load.get(station, 0) + 1
    return station


def generate_instance(
    stations: int,
    edges: int,
    orders: Optional[int] = None,
    trains: Optional[int] = None,
    max_edge_weight: int = 100,
    max_order_weight: int = 10,
    max_train_capacity: int = 10,
    station_capacity: Optional[int] = None,
    depot_capacity: Optional[int] = None,
    rng: Optional[random.Random] = None
) -> ProblemInstance:
    """
    Generate a random instance on a connected network.

    Args:
        stations: Number of stations
        edges: Number of edges (at least ``stations - 1``)
        orders: Number of orders, random when omitted
        trains: Number of trains, random when omitted
        max_edge_weight: Largest edge distance
        max_order_weight: Largest order weight
        max_train_capacity: Largest train capacity
        station_capacity: Most orders waiting at one station
        depot_capacity: Most trains starting at one station
        rng: Random generator, for reproducible instances

    Returns:
        Generated ProblemInstance
    """
    if stations < 2:
        raise ValueError(f"Need at least 2 stations, got {stations}")
    if edges < stations - 1:
        raise ValueError(f"{edges} edges cannot connect {stations} stations")
    if max_order_weight > max_train_capacity:
        raise ValueError(
            f"max_order_weight {max_order_weight} exceeds max_train_capacity {max_train_capacity}"
        )

    rng = rng or random.Random()
    graph = _random_connected_graph(stations, edges, rng)

    station_list = [Station(f"N{n}") for n in sorted(graph.nodes())]
    edge_list = [
        Edge(f"E{i}", Station(f"N{u}"), Station(f"N{v}"), rng.randint(1, max_edge_weight))
        for i, (u, v) in enumerate(sorted(graph.edges()))
    ]

    trains = trains if trains is not None else rng.randint(1, stations)
    depot_load: Dict[Station, int] = {}
    train_list = [
        Train(
            f"Q{i}",
            rng.randint(1, max_train_capacity),
            _pick_station(station_list, depot_load, depot_capacity, rng)
        )
        for i in range(trains)
    ]
    # Make sure the heaviest possible order has a train
    if train_list and max(t.capacity for t in train_list) < max_order_weight:
        first = train_list[0]
        train_list[0] = Train(first.name, max_order_weight, first.location)

    orders = orders if orders is not None else rng.randint(1, stations)
    station_load: Dict[Station, int] = {}
    order_list = []
    for i in range(orders):
        origin = _pick_station(station_list, station_load, station_capacity, rng)
        destination = rng.choice(station_list)
        order_list.append(Order(f"K{i}", rng.randint(1, max_order_weight), origin, destination))

    logger.debug(
        f"Generated {len(station_list)} stations, {len(edge_list)} edges, "
        f"{len(order_list)} orders, {len(train_list)} trains"
    )
    return ProblemInstance(
        stations=station_list,
        edges=edge_list,
        orders=order_list,
        trains=train_list
    )
