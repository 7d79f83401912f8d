"""Order model representing goods to be transported."""

from dataclasses import dataclass
from typing import Tuple

from pickup_delivery.models.station import Station


@dataclass(frozen=True)
class Order:
    """
    Represents a shipment waiting at its origin station.

    Orders are never mutated: delivering one removes it from the
    pending set of the algorithm that served it.
    """
    name: str
    weight: int
    origin: Station
    destination: Station

    def __post_init__(self):
        if self.weight <= 0:
            raise ValueError(f"Order {self.name} must have a positive weight, got {self.weight}")

    @property
    def is_delivered(self) -> bool:
        return self.origin == self.destination

    @classmethod
    def from_tuple(cls, data: Tuple[str, int, str, str]) -> "Order":
        """Create an Order from a ``(name, weight, origin, destination)`` tuple."""
        name, weight, origin, destination = data
        return cls(
            name=name,
            weight=weight,
            origin=Station(origin),
            destination=Station(destination)
        )
