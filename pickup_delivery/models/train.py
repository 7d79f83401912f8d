"""Train model representing vehicles of the fleet."""

from dataclasses import dataclass, replace
from typing import Tuple

from pickup_delivery.models.station import Station


@dataclass(frozen=True)
class Train:
    """
    Represents a train in the fleet.

    A train is an immutable value: moving it returns a new train with
    the updated location and traveled time, and the caller must drop
    the old one.
    """
    name: str
    capacity: int
    location: Station
    traveled_time: int = 0

    def __post_init__(self):
        if self.capacity <= 0:
            raise ValueError(f"Train {self.name} must have a positive capacity, got {self.capacity}")

    def can_carry(self, weight: int) -> bool:
        """Check if a load of ``weight`` fits."""
        return weight <= self.capacity

    def move_to(self, destination: Station, distance: int) -> "Train":
        """
        Travel to ``destination``.

        Args:
            destination: Station the train arrives at
            distance: Travel time of the segment

        Returns:
            The train after the move
        """
        return replace(
            self,
            location=destination,
            traveled_time=self.traveled_time + distance
        )

    @classmethod
    def from_tuple(cls, data: Tuple[str, int, str]) -> "Train":
        """Create a Train from a ``(name, capacity, location)`` tuple."""
        name, capacity, location = data
        return cls(name=name, capacity=capacity, location=Station(location))
