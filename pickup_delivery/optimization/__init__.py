"""Routing and assignment algorithms."""

from .route_optimizer import (
    MAX_ROUTE_STOPS,
    best_collection_route,
    best_distribution_route,
    calculate_route_distance,
)
from .matching import (
    OrderGroup,
    find_nearest_train,
    group_orders_by_destination,
    group_orders_by_origin,
)
from .algorithms import (
    ALGORITHMS,
    DeliveryAlgorithm,
    DestinationBatchedCollection,
    Dispatcher,
    NearestTrainSingleOrder,
    OriginBatchedDistribution,
    build_algorithms,
    get_algorithm,
)
from .sorters import (
    KeySorter,
    OrderSorter,
    RandomOrders,
    UnsortedOrders,
    build_sorters,
)
from .solver import Solver, SolverResult, pick_best, solve_instance

__all__ = [
    "MAX_ROUTE_STOPS",
    "best_collection_route",
    "best_distribution_route",
    "calculate_route_distance",
    "OrderGroup",
    "find_nearest_train",
    "group_orders_by_destination",
    "group_orders_by_origin",
    "ALGORITHMS",
    "DeliveryAlgorithm",
    "DestinationBatchedCollection",
    "Dispatcher",
    "NearestTrainSingleOrder",
    "OriginBatchedDistribution",
    "build_algorithms",
    "get_algorithm",
    "KeySorter",
    "OrderSorter",
    "RandomOrders",
    "UnsortedOrders",
    "build_sorters",
    "Solver",
    "SolverResult",
    "pick_best",
    "solve_instance",
]
