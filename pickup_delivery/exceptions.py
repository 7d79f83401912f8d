"""Error types raised by the planner."""

from typing import Iterable, Optional


class PlanningError(RuntimeError):
    """Base class for failures of a single planning run."""


class NoCapacityError(PlanningError):
    """An order is heavier than every train in the fleet."""

    def __init__(self, order_name: str, weight: int, max_capacity: Optional[int] = None):
        self.order_name = order_name
        self.weight = weight
        self.max_capacity = max_capacity
        message = (
            f"There is no train that can deliver an order because it is too big, "
            f"order={order_name}, weight={weight}"
        )
        if max_capacity is not None:
            message += f", max_capacity={max_capacity}"
        super().__init__(message)


class NoProgressError(PlanningError):
    """A whole delivery pass delivered nothing while orders remain."""

    def __init__(self, pending: Iterable):
        self.pending = list(pending)
        details = ", ".join(
            f"{o.name}[{o.weight}] {o.origin}=>{o.destination}" for o in self.pending
        )
        super().__init__(f"Failed to deliver orders: {details}")


class NoFeasiblePlanError(PlanningError):
    """Every algorithm and sorter combination failed."""


class NetworkError(ValueError):
    """Base class for invalid station networks."""


class DisconnectedNetworkError(NetworkError):
    """Some pair of stations is not mutually reachable."""

    def __init__(self, source, target):
        self.source = source
        self.target = target
        super().__init__(f"Network is not connected: no path from {source} to {target}")


class UnknownStationError(KeyError):
    """A station is referenced but was never added to the network."""

    def __init__(self, station):
        self.station = station
        super().__init__(f"Unknown station: {station}")

    def __str__(self) -> str:
        return self.args[0]


class RouteTooLongError(ValueError):
    """Too many distinct stops for the exhaustive route search."""

    def __init__(self, stops: int, limit: int):
        self.stops = stops
        self.limit = limit
        super().__init__(
            f"Route has {stops} distinct stops, exhaustive search is limited to {limit}"
        )


class InputFormatError(ValueError):
    """Malformed problem instance text."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
