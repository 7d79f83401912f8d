"""Movement records and the plan produced by a delivery algorithm."""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from pickup_delivery.models.station import Station


@dataclass(frozen=True)
class Move:
    """
    A single hop of one train between two adjacent stations.

    ``time`` is the train's traveled time at departure. ``load`` names
    the orders put on board at ``origin``, ``unload`` the orders taken
    off at ``destination``.
    """
    time: int
    train: str
    origin: Station
    load: Tuple[str, ...]
    destination: Station
    unload: Tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        """True for repositioning hops that neither load nor unload."""
        return not self.load and not self.unload


@dataclass
class Plan:
    """Ordered movement records and the resulting makespan."""
    moves: List[Move] = field(default_factory=list)
    makespan: int = 0

    def sorted_by_time(self) -> "Plan":
        """Return a copy with moves sorted by departure time (stable)."""
        return Plan(sorted(self.moves, key=lambda m: m.time), self.makespan)

    def sorted_by_train(self) -> "Plan":
        """Return a copy with moves grouped by train name (stable)."""
        return Plan(sorted(self.moves, key=lambda m: m.train), self.makespan)

    def moves_for(self, train_name: str) -> List[Move]:
        """Moves of one train in the order they were made."""
        return [m for m in self.moves if m.train == train_name]

    def moves_by_train(self) -> Dict[str, List[Move]]:
        by_train: Dict[str, List[Move]] = {}
        for move in self.moves:
            by_train.setdefault(move.train, []).append(move)
        return by_train

    def delivered_orders(self) -> List[str]:
        """Names of all unloaded orders, in move order."""
        return [name for m in self.moves for name in m.unload]

    def __len__(self) -> int:
        return len(self.moves)
