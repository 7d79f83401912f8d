"""Greedy delivery algorithms matching trains to orders."""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from pickup_delivery.exceptions import NoCapacityError, NoProgressError
from pickup_delivery.models import Move, Network, Order, Plan, Station, Train
from pickup_delivery.optimization.matching import (
    OrderGroup,
    find_nearest_train,
    group_orders_by_destination,
    group_orders_by_origin,
)
from pickup_delivery.optimization.route_optimizer import (
    MAX_ROUTE_STOPS,
    best_collection_route,
    best_distribution_route,
)

logger = logging.getLogger("pdp.algorithms")

# (pool index, arrival time, route)
Match = Tuple[int, int, List[Station]]


def _names(orders: Iterable[Order]) -> Tuple[str, ...]:
    return tuple(o.name for o in orders)


class Dispatcher:
    """
    Idle train pool and move log of a single planning run.

    A train taken from the pool belongs to the caller until it is
    released again, so no train can serve two batches at once.
    """

    def __init__(self, network: Network, trains: Sequence[Train]):
        self.network = network
        self.pool: List[Train] = list(trains)
        self.moves: List[Move] = []

    @property
    def max_capacity(self) -> Optional[int]:
        return max((t.capacity for t in self.pool), default=None)

    def take(self, index: int) -> Train:
        """Remove a train from the idle pool."""
        return self.pool.pop(index)

    def release(self, train: Train) -> None:
        """Return a train to the idle pool with its updated state."""
        self.pool.append(train)

    def travel(
        self,
        train: Train,
        destination: Station,
        load: Sequence[str] = (),
        unload: Sequence[str] = ()
    ) -> Train:
        """
        Drive ``train`` to ``destination`` along a shortest path.

        One move is recorded per hop. Orders in ``load`` go on board on
        the first hop, orders in ``unload`` come off on the last one.

        Returns:
            The train after arrival
        """
        path = self.network.path(train.location, destination)
        hops = list(zip(path, path[1:]))
        if not hops and (load or unload):
            raise ValueError(
                f"Train {train.name} is already at {destination}, cannot carry {list(load)}"
            )

        for i, (origin, station) in enumerate(hops):
            move = Move(
                time=train.traveled_time,
                train=train.name,
                origin=origin,
                load=tuple(load) if i == 0 else (),
                destination=station,
                unload=tuple(unload) if i == len(hops) - 1 else ()
            )
            self.moves.append(move)
            logger.debug(f"{move}")
            train = train.move_to(station, self.network.distance(origin, station))

        return train

    def reposition(self, train: Train, station: Station) -> Train:
        """Move an empty train to ``station`` unless it is already there."""
        if train.location == station:
            return train
        return self.travel(train, station)

    def to_plan(self) -> Plan:
        makespan = max((t.traveled_time for t in self.pool), default=0)
        return Plan(moves=list(self.moves), makespan=makespan)


class DeliveryAlgorithm:
    """
    Base class for delivery algorithms.

    Subclasses implement ``_deliver``, which consumes the pending
    orders through a Dispatcher.
    """
    name: str = ""

    def solve(
        self,
        orders: Sequence[Order],
        trains: Sequence[Train],
        network: Network
    ) -> Plan:
        """
        Plan the delivery of ``orders`` with ``trains``.

        Args:
            orders: Orders in presentation order
            trains: Fleet in its initial state
            network: Distance index of the instance

        Returns:
            Plan with all moves and the makespan

        Raises:
            NoCapacityError: If an order cannot be carried by any train
            NoProgressError: If a batched pass delivers nothing
        """
        pending = [o for o in orders if not o.is_delivered]
        if len(pending) < len(orders):
            logger.debug(f"{len(orders) - len(pending)} orders already at their destination")

        dispatcher = Dispatcher(network, trains)
        self._deliver(pending, dispatcher)
        return dispatcher.to_plan()

    def _deliver(self, pending: List[Order], dispatcher: Dispatcher) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NearestTrainSingleOrder(DeliveryAlgorithm):
    """
    Serve orders one by one with the train that reaches them first.

    Each order gets an empty repositioning trip (if needed) and a
    loaded trip to its destination. Orders are never batched.
    """
    name = "single-order"

    def _deliver(self, pending: List[Order], dispatcher: Dispatcher) -> None:
        network = dispatcher.network

        for order in pending:
            logger.debug(
                f"ORDER {order.name}({order.weight}) from {order.origin} to {order.destination}, "
                f"distance={network.distance(order.origin, order.destination)}"
            )

            match = find_nearest_train(network.distance, dispatcher.pool, order.origin, order.weight)
            if match is None:
                raise NoCapacityError(order.name, order.weight, dispatcher.max_capacity)

            index, available_at = match
            train = dispatcher.take(index)
            logger.debug(
                f"TRAIN {train.name} from {train.location} to {order.origin}, "
                f"departure={train.traveled_time}, arrival={available_at}"
            )

            train = dispatcher.reposition(train, order.origin)
            train = dispatcher.travel(
                train, order.destination, load=(order.name,), unload=(order.name,)
            )
            dispatcher.release(train)


class BatchedDelivery(DeliveryAlgorithm):
    """
    Shared loop of the batched algorithms.

    Every pass groups the pending orders and tries to serve each group
    with one train. When no train can take a whole group, the heaviest
    order is left for a later pass and the rest is tried again. A pass
    that delivers nothing fails the run.
    """

    def __init__(self, max_stops: int = MAX_ROUTE_STOPS):
        self.max_stops = max_stops

    def _group(self, pending: Sequence[Order]) -> List[OrderGroup]:
        raise NotImplementedError

    def _match(self, batch: List[Order], station: Station, dispatcher: Dispatcher) -> Optional[Match]:
        raise NotImplementedError

    def _serve(self, batch: List[Order], station: Station, match: Match, dispatcher: Dispatcher) -> None:
        raise NotImplementedError

    def _deliver(self, pending: List[Order], dispatcher: Dispatcher) -> None:
        passes = 0

        while pending:
            passes += 1
            logger.debug(f"Pass {passes}: need to deliver {[o.name for o in pending]}")

            delivered = set()
            for group in self._group(pending):
                for order in self._serve_group(group, dispatcher):
                    delivered.add(id(order))

            if not delivered:
                raise NoProgressError(pending)

            pending = [o for o in pending if id(o) not in delivered]

        logger.debug(f"{self.name}: all orders delivered in {passes} passes")

    def _serve_group(self, group: OrderGroup, dispatcher: Dispatcher) -> List[Order]:
        batch = sorted(group.orders, key=lambda o: o.weight, reverse=True)
        match = None

        while batch:
            match = self._match(batch, group.station, dispatcher)
            if match is not None:
                break
            dropped = batch.pop(0)
            logger.debug(f"Leaving {dropped.name}({dropped.weight}) at {dropped.origin} for a later pass")

        if match is None:
            logger.debug(f"No train available for {group.station} with capacity {group.weight}")
            return []

        self._serve(batch, group.station, match, dispatcher)
        logger.debug(f"Orders {list(_names(batch))} delivered")
        return batch

    def _fits_route(self, stops: Iterable[Station]) -> bool:
        return len(set(stops)) <= self.max_stops

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_stops={self.max_stops})"


class OriginBatchedDistribution(BatchedDelivery):
    """
    Pick up every order waiting at one station and distribute them.

    The train visits the batch's destinations in the order that
    minimizes the distance from the shared origin, dropping orders as
    it goes.
    """
    name = "distribution"

    def _group(self, pending: Sequence[Order]) -> List[OrderGroup]:
        return group_orders_by_origin(pending)

    def _match(self, batch: List[Order], station: Station, dispatcher: Dispatcher) -> Optional[Match]:
        destinations = [o.destination for o in batch]
        if not self._fits_route(destinations):
            return None

        weight = sum(o.weight for o in batch)
        found = find_nearest_train(dispatcher.network.distance, dispatcher.pool, station, weight)
        if found is None:
            return None

        route, _ = best_distribution_route(
            dispatcher.network.distance, station, destinations, self.max_stops
        )
        return found[0], found[1], route

    def _serve(self, batch: List[Order], station: Station, match: Match, dispatcher: Dispatcher) -> None:
        index, available_at, route = match
        train = dispatcher.take(index)
        logger.debug(
            f"TRAIN {train.name} from {train.location} to {station}, "
            f"departure={train.traveled_time}, arrival={available_at}"
        )

        train = dispatcher.reposition(train, station)

        aboard = list(batch)
        load = _names(batch)
        for stop in dict.fromkeys(route):
            drop = [o for o in aboard if o.destination == stop]
            aboard = [o for o in aboard if o.destination != stop]
            train = dispatcher.travel(train, stop, load=load, unload=_names(drop))
            load = ()

        if aboard:
            raise RuntimeError(f"Undelivered orders: {list(_names(aboard))}")

        dispatcher.release(train)


class DestinationBatchedCollection(BatchedDelivery):
    """
    Collect orders bound for one station and bring them in together.

    The train starts at the first pickup of the shortest collection
    route, loads orders at each pickup and unloads everything at the
    shared destination.
    """
    name = "collection"

    def _group(self, pending: Sequence[Order]) -> List[OrderGroup]:
        return group_orders_by_destination(pending)

    def _match(self, batch: List[Order], station: Station, dispatcher: Dispatcher) -> Optional[Match]:
        pickups = [o.origin for o in batch]
        if not self._fits_route(pickups):
            return None

        route, _ = best_collection_route(
            dispatcher.network.distance, pickups, station, self.max_stops
        )
        weight = sum(o.weight for o in batch)
        found = find_nearest_train(dispatcher.network.distance, dispatcher.pool, route[0], weight)
        if found is None:
            return None
        return found[0], found[1], route

    def _serve(self, batch: List[Order], station: Station, match: Match, dispatcher: Dispatcher) -> None:
        index, available_at, route = match
        train = dispatcher.take(index)
        logger.debug(
            f"TRAIN {train.name} from {train.location} to {route[0]}, "
            f"departure={train.traveled_time}, arrival={available_at}"
        )

        train = dispatcher.reposition(train, route[0])

        stops = list(dict.fromkeys(route))
        for i, stop in enumerate(stops):
            pick = [o for o in batch if o.origin == stop]
            last = i == len(stops) - 1
            next_stop = station if last else stops[i + 1]
            train = dispatcher.travel(
                train,
                next_stop,
                load=_names(pick),
                unload=_names(batch) if last else ()
            )

        dispatcher.release(train)


def build_algorithms(max_stops: int = MAX_ROUTE_STOPS) -> Tuple[DeliveryAlgorithm, ...]:
    """The closed set of delivery algorithms, in search order."""
    return (
        NearestTrainSingleOrder(),
        OriginBatchedDistribution(max_stops),
        DestinationBatchedCollection(max_stops),
    )


ALGORITHMS = build_algorithms()


def get_algorithm(name: str, max_stops: int = MAX_ROUTE_STOPS) -> DeliveryAlgorithm:
    """Look up an algorithm by name."""
    for algorithm in build_algorithms(max_stops):
        if algorithm.name == name:
            return algorithm
    raise ValueError(
        f"Unknown algorithm: {name} (expected one of {[a.name for a in ALGORITHMS]})"
    )
