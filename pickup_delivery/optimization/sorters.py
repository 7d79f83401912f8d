"""Order presentation strategies explored by the solver."""

import random
from typing import Callable, List, Optional, Sequence, Tuple

from pickup_delivery.models import Order, Station

DistanceFn = Callable[[Station, Station], int]


class OrderSorter:
    """
    Reorders pending orders before an algorithm runs.

    ``stable`` sorters always return the same order for the same input.
    Unstable ones depend on the random generator they are given and
    are sampled many times by the solver.
    """
    name: str = ""
    stable: bool = True

    def sort(self, orders: Sequence[Order], rng: Optional[random.Random] = None) -> List[Order]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class KeySorter(OrderSorter):
    """Sort by a key, optionally reversing the ascending result."""

    def __init__(self, name: str, key: Callable[[Order], object], descending: bool = False):
        self.name = name
        self.key = key
        self.descending = descending

    def sort(self, orders: Sequence[Order], rng: Optional[random.Random] = None) -> List[Order]:
        result = sorted(orders, key=self.key)
        if self.descending:
            result.reverse()
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class UnsortedOrders(OrderSorter):
    """Keep the input order."""
    name = "unsorted"

    def sort(self, orders: Sequence[Order], rng: Optional[random.Random] = None) -> List[Order]:
        return list(orders)


class RandomOrders(OrderSorter):
    """Shuffle orders with the supplied generator."""
    name = "random"
    stable = False

    def sort(self, orders: Sequence[Order], rng: Optional[random.Random] = None) -> List[Order]:
        result = list(orders)
        (rng or random.Random()).shuffle(result)
        return result


def build_sorters(distance: DistanceFn) -> Tuple[OrderSorter, ...]:
    """
    The closed set of order sorters, in search order.

    Args:
        distance: Distance lookup used by the distance-based sorters

    Returns:
        Tuple of sorter instances
    """
    def by_weight(order: Order) -> int:
        return order.weight

    def by_name(order: Order) -> str:
        return order.name

    def by_distance(order: Order) -> int:
        return distance(order.origin, order.destination)

    return (
        UnsortedOrders(),
        KeySorter("weight-asc", by_weight),
        KeySorter("weight-desc", by_weight, descending=True),
        KeySorter("name-asc", by_name),
        KeySorter("name-desc", by_name, descending=True),
        KeySorter("distance-asc", by_distance),
        KeySorter("distance-desc", by_distance, descending=True),
        RandomOrders(),
    )
