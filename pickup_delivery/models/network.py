"""Network model for station graph operations."""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

import networkx as nx

from pickup_delivery.exceptions import DisconnectedNetworkError, UnknownStationError
from pickup_delivery.models.edge import Edge
from pickup_delivery.models.station import Station

logger = logging.getLogger("pdp.network")


@dataclass
class DistanceMatrix:
    """
    Pre-computed all-pairs distances and shortest-path predecessors.

    Station counts are small (tens to low hundreds), so the O(V^3)
    Floyd-Warshall pass is run once and every later query is a lookup.
    """
    distances: Dict[Tuple[Station, Station], int] = field(default_factory=dict)
    predecessors: Dict[Station, Dict[Station, Station]] = field(default_factory=dict)

    def get(self, source: Station, target: Station) -> int:
        """Get the shortest distance between two stations."""
        if source == target:
            if (source, source) not in self.distances:
                raise UnknownStationError(source)
            return 0
        try:
            return self.distances[(source, target)]
        except KeyError:
            missing = source if (source, source) not in self.distances else target
            raise UnknownStationError(missing) from None

    def path(self, source: Station, target: Station) -> List[Station]:
        """Stations along a shortest path, both ends included."""
        self.get(source, target)
        if source == target:
            return [source]
        return nx.reconstruct_path(source, target, self.predecessors)

    @classmethod
    def from_graph(cls, graph: nx.Graph, weight: str = "distance") -> "DistanceMatrix":
        """
        Build the matrix from a NetworkX graph.

        Raises:
            DisconnectedNetworkError: If some pair of stations is unreachable
        """
        matrix = cls()
        predecessors, all_pairs = nx.floyd_warshall_predecessor_and_distance(
            graph, weight=weight
        )

        for source in graph.nodes():
            targets = all_pairs[source]
            for target in graph.nodes():
                distance = targets[target]
                if math.isinf(distance):
                    raise DisconnectedNetworkError(source, target)
                matrix.distances[(source, target)] = int(distance)

        matrix.predecessors = {
            source: dict(targets) for source, targets in predecessors.items()
        }
        return matrix


@dataclass
class Network:
    """
    Station graph wrapper.

    Provides the distance index consumed by the route optimizer, the
    train matcher and the delivery algorithms. Read-only once built,
    so a single instance can be shared by concurrent planning runs.
    """
    graph: nx.Graph = field(default_factory=nx.Graph)
    _matrix: DistanceMatrix = field(default_factory=DistanceMatrix, repr=False)

    @property
    def stations(self) -> List[Station]:
        return sorted(self.graph.nodes())

    def add_station(self, station: Station) -> None:
        """Add a station to the network."""
        self.graph.add_node(station)

    def add_edge(self, edge: Edge) -> None:
        """
        Add an edge to the network.

        Parallel edges collapse to the shortest one; self loops never
        shorten a path and are skipped.
        """
        station1, station2 = edge.stations
        for station in (station1, station2):
            if station not in self.graph:
                raise UnknownStationError(station)

        if station1 == station2:
            logger.debug(f"Skipping self loop {edge.name} at {station1}")
            return

        existing = self.graph.get_edge_data(station1, station2)
        if existing is not None and existing["distance"] <= edge.distance:
            return

        self.graph.add_edge(
            station1,
            station2,
            name=edge.name,
            distance=edge.distance
        )

    def precompute_distances(self) -> None:
        """Pre-compute all pairwise shortest distances."""
        self._matrix = DistanceMatrix.from_graph(self.graph)
        logger.debug(f"Pre-computed {len(self._matrix.distances)} distance pairs")

    def distance(self, source: Station, target: Station) -> int:
        """
        Shortest travel time between two stations.

        Raises:
            UnknownStationError: If either station is not in the network
        """
        return self._matrix.get(source, target)

    def path(self, source: Station, target: Station) -> List[Station]:
        """Shortest path from ``source`` to ``target`` as a list of stations."""
        return self._matrix.path(source, target)

    def __contains__(self, station: Station) -> bool:
        return station in self.graph

    @classmethod
    def build(
        cls,
        stations: Iterable[Station],
        edges: Iterable[Edge]
    ) -> "Network":
        """
        Build a network from stations and edges.

        Args:
            stations: All stations of the instance
            edges: Undirected weighted edges between them

        Returns:
            Network with the distance index computed

        Raises:
            UnknownStationError: If an edge names a missing station
            DisconnectedNetworkError: If the graph is not connected
        """
        network = cls()

        for station in stations:
            network.add_station(station)

        for edge in edges:
            network.add_edge(edge)

        network.precompute_distances()

        logger.debug(
            f"Built network with {network.graph.number_of_nodes()} stations "
            f"and {network.graph.number_of_edges()} edges"
        )
        return network
