"""Edge model representing connections between stations in the network."""

from dataclasses import dataclass
from typing import Tuple

from pickup_delivery.models.station import Station


@dataclass(frozen=True)
class Edge:
    """
    Represents a track between two stations.

    Edges are undirected - they represent bidirectional travel between
    stations at the same cost.
    """
    name: str
    from_station: Station
    to_station: Station
    distance: int

    def __post_init__(self):
        if self.distance < 0:
            raise ValueError(f"Edge {self.name} has negative distance {self.distance}")

    @property
    def stations(self) -> Tuple[Station, Station]:
        """Return sorted tuple of stations for consistent comparison."""
        return tuple(sorted((self.from_station, self.to_station)))

    def connects(self, station1: Station, station2: Station) -> bool:
        """Check if this edge connects the given stations (in either direction)."""
        return {station1, station2} == set(self.stations)

    @classmethod
    def from_tuple(cls, data: Tuple[str, str, str, int]) -> "Edge":
        """Create an Edge from a ``(name, from, to, distance)`` tuple."""
        name, from_name, to_name, distance = data
        return cls(
            name=name,
            from_station=Station(from_name),
            to_station=Station(to_name),
            distance=distance
        )
