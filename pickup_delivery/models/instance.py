"""Problem instance container."""

from dataclasses import dataclass, field
from typing import List

from pickup_delivery.models.edge import Edge
from pickup_delivery.models.order import Order
from pickup_delivery.models.station import Station
from pickup_delivery.models.train import Train


@dataclass
class ProblemInstance:
    """Everything a planning run consumes."""
    stations: List[Station] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    orders: List[Order] = field(default_factory=list)
    trains: List[Train] = field(default_factory=list)

    @property
    def total_weight(self) -> int:
        return sum(o.weight for o in self.orders)

    @property
    def max_capacity(self) -> int:
        return max((t.capacity for t in self.trains), default=0)
