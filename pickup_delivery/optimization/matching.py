"""Train matching and order grouping helpers shared by the algorithms."""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from pickup_delivery.models import Order, Station, Train

DistanceFn = Callable[[Station, Station], int]


def find_nearest_train(
    distance: DistanceFn,
    trains: Sequence[Train],
    location: Station,
    min_capacity: int
) -> Optional[Tuple[int, int]]:
    """
    Find the idle train that can reach ``location`` first.

    Only trains with at least ``min_capacity`` are considered. Arrival
    time is the train's traveled time plus the distance to ``location``;
    ties go to the train earliest in the pool.

    Args:
        distance: Distance lookup between two stations
        trains: The idle pool
        location: Where the train is needed
        min_capacity: Weight the train has to carry

    Returns:
        Tuple of (pool index, arrival time), or None if no train has
        enough capacity
    """
    best = None

    for index, train in enumerate(trains):
        if not train.can_carry(min_capacity):
            continue
        arrival = train.traveled_time + distance(train.location, location)
        if best is None or arrival < best[1]:
            best = (index, arrival)

    return best


@dataclass
class OrderGroup:
    """Pending orders sharing a pickup or a drop station."""
    station: Station
    weight: int
    orders: List[Order]


def _group_orders(orders: Sequence[Order], key: Callable[[Order], Station]) -> List[OrderGroup]:
    groups: Dict[Station, List[Order]] = {}
    for order in orders:
        groups.setdefault(key(order), []).append(order)

    result = [
        OrderGroup(station, sum(o.weight for o in group), group)
        for station, group in sorted(groups.items(), key=lambda item: item[0])
    ]
    # Heaviest first, stations in name order on ties
    result.sort(key=lambda g: g.weight, reverse=True)
    return result


def group_orders_by_origin(orders: Sequence[Order]) -> List[OrderGroup]:
    """
    Group orders by their pickup station.

    Args:
        orders: Pending orders

    Returns:
        Groups sorted by combined weight, heaviest first
    """
    return _group_orders(orders, lambda o: o.origin)


def group_orders_by_destination(orders: Sequence[Order]) -> List[OrderGroup]:
    """
    Group orders by their delivery station.

    Args:
        orders: Pending orders

    Returns:
        Groups sorted by combined weight, heaviest first
    """
    return _group_orders(orders, lambda o: o.destination)
