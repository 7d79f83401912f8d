"""Plan validation utilities."""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from pickup_delivery.models import Move, Network, Order, Plan, Train


@dataclass
class ValidationResult:
    """Results of plan validation."""
    is_valid: bool = True
    violations: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_violation(self, message: str) -> None:
        """Add a validation violation."""
        self.violations.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a validation warning (non-fatal)."""
        self.warnings.append(message)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_valid": self.is_valid,
            "violations": self.violations,
            "warnings": self.warnings,
        }


class PlanValidator:
    """
    Replays a plan and checks it against the instance.

    Checks that every hop follows a track, that each train's moves are
    contiguous in space and time, that loads never exceed capacity,
    that every order is picked up at its origin and unloaded exactly
    once at its destination, and that the makespan is consistent.
    """

    def __init__(
        self,
        orders: Sequence[Order],
        trains: Sequence[Train],
        network: Network
    ):
        self.orders = {o.name: o for o in orders}
        self.trains = {t.name: t for t in trains}
        self.network = network

    def validate(self, plan: Plan) -> ValidationResult:
        """
        Validate a complete plan.

        Args:
            plan: Plan produced by a delivery algorithm

        Returns:
            ValidationResult with detailed validation information
        """
        result = ValidationResult()
        unloaded: Dict[str, int] = {}
        finish_times = [t.traveled_time for t in self.trains.values()]

        for train_name, moves in plan.moves_by_train().items():
            train = self.trains.get(train_name)
            if train is None:
                result.add_violation(f"Unknown train {train_name}")
                continue
            finish_times.append(self._replay(train, moves, unloaded, result))

        for order in self.orders.values():
            count = unloaded.get(order.name, 0)
            if order.is_delivered:
                if count:
                    result.add_warning(f"Order {order.name} was already at its destination")
                continue
            if count == 0:
                result.add_violation(f"Order {order.name} was never delivered")
            elif count > 1:
                result.add_violation(f"Order {order.name} was unloaded {count} times")

        makespan = max(finish_times, default=0)
        if plan.makespan != makespan:
            result.add_violation(f"Plan makespan {plan.makespan} differs from replayed {makespan}")

        return result

    def _replay(
        self,
        train: Train,
        moves: List[Move],
        unloaded: Dict[str, int],
        result: ValidationResult
    ) -> int:
        """Replay the moves of one train; returns its finish time."""
        location = train.location
        clock = train.traveled_time
        aboard: Dict[str, Order] = {}

        for move in moves:
            if move.origin != location:
                result.add_violation(
                    f"Train {train.name} departs {move.origin} at {move.time} but is at {location}"
                )
            if move.time < clock:
                result.add_violation(
                    f"Train {train.name} departs at {move.time} before arriving at {clock}"
                )
            if not self.network.graph.has_edge(move.origin, move.destination):
                result.add_violation(
                    f"Train {train.name} moves {move.origin}->{move.destination} without a track"
                )

            for name in move.load:
                order = self.orders.get(name)
                if order is None:
                    result.add_violation(f"Train {train.name} loads unknown order {name}")
                elif order.origin != move.origin:
                    result.add_violation(
                        f"Order {name} loaded at {move.origin}, expected {order.origin}"
                    )
                elif name in aboard or unloaded.get(name):
                    result.add_violation(f"Order {name} loaded twice")
                else:
                    aboard[name] = order

            weight = sum(o.weight for o in aboard.values())
            if weight > train.capacity:
                result.add_violation(
                    f"Train {train.name} departs {move.origin} at {move.time} "
                    f"with {weight}/{train.capacity}"
                )

            clock = max(clock, move.time) + self.network.distance(move.origin, move.destination)
            location = move.destination

            for name in move.unload:
                order = aboard.pop(name, None)
                if order is None:
                    result.add_violation(f"Train {train.name} unloads {name} which is not aboard")
                    continue
                if order.destination != location:
                    result.add_violation(
                        f"Order {name} unloaded at {location}, expected {order.destination}"
                    )
                unloaded[name] = unloaded.get(name, 0) + 1

        if aboard:
            result.add_violation(f"Train {train.name} ends with {sorted(aboard)} aboard")

        return clock
