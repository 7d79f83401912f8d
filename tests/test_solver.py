import math
import random

import pytest

from pickup_delivery.config import SolverParams
from pickup_delivery.exceptions import NoCapacityError, NoFeasiblePlanError
from pickup_delivery.models import Order, Train
from pickup_delivery.optimization import (
    DeliveryAlgorithm,
    NearestTrainSingleOrder,
    RandomOrders,
    Solver,
    UnsortedOrders,
    build_algorithms,
    build_sorters,
    pick_best,
    solve_instance,
)

from conftest import A, C


class BrokenAlgorithm(DeliveryAlgorithm):
    name = "broken"

    def _deliver(self, pending, dispatcher):
        raise NoCapacityError("K1", 5)


def _params(**kwargs):
    kwargs.setdefault("show_progress", False)
    return SolverParams(**kwargs)


def _summary(results):
    return [(r.algorithm.name, r.sorter.name, r.sample, r.seed, r.makespan) for r in results]


def test_simple_instance_best(simple_instance):
    best, results = solve_instance(simple_instance, _params(random_samples=3, seed=1))

    assert best.makespan == 70
    assert best.plan.makespan == 70
    assert len(results) == 3 * (7 + 3)
    assert all(r.succeeded for r in results)


def test_equal_makespans_keep_submission_order(simple_instance):
    best, results = solve_instance(simple_instance, _params(random_samples=2, seed=1))
    assert (best.algorithm.name, best.sorter.name) == ("single-order", "unsorted")
    assert [r.algorithm.name for r in results[:8]] == ["single-order"] * 8


def test_results_ranked_by_makespan(multiload_instance):
    _, results = solve_instance(multiload_instance, _params(random_samples=5, seed=3))
    makespans = [r.makespan for r in results]
    assert makespans == sorted(makespans)


def test_random_samples_count(simple_instance, simple_network):
    solver = Solver(
        [NearestTrainSingleOrder()],
        [UnsortedOrders(), RandomOrders()],
        _params(random_samples=4, seed=9)
    )
    results = solver.solve(simple_instance.orders, simple_instance.trains, simple_network)

    random_runs = [r for r in results if r.sorter.name == "random"]
    assert sorted(r.sample for r in random_runs) == [0, 1, 2, 3]
    assert all(r.seed is not None for r in random_runs)
    assert [r.seed for r in results if r.sorter.name == "unsorted"] == [None]


def test_failures_are_recorded(simple_instance, simple_network):
    solver = Solver(
        [BrokenAlgorithm(), NearestTrainSingleOrder()],
        [UnsortedOrders()],
        _params()
    )
    results = solver.solve(simple_instance.orders, simple_instance.trains, simple_network)

    assert [r.algorithm.name for r in results] == ["single-order", "broken"]
    assert results[0].makespan == 70
    assert results[1].makespan == math.inf
    assert not results[1].succeeded
    assert isinstance(results[1].error, NoCapacityError)
    assert results[1].to_dict()["makespan"] is None
    assert pick_best(results) is results[0]


def test_no_feasible_plan(simple_network):
    orders = [Order("K1", 20, A, C)]
    trains = [Train("Q1", 6, A)]
    solver = Solver(
        build_algorithms(),
        build_sorters(simple_network.distance),
        _params(random_samples=2)
    )

    results = solver.solve(orders, trains, simple_network)
    assert len(results) == 3 * (7 + 2)
    assert all(r.error is not None for r in results)

    with pytest.raises(NoFeasiblePlanError):
        solver.best(orders, trains, simple_network)


def test_seeded_search_is_reproducible(multiload_instance):
    _, first = solve_instance(multiload_instance, _params(random_samples=5, seed=11))
    _, second = solve_instance(multiload_instance, _params(random_samples=5, seed=11))
    assert _summary(first) == _summary(second)


def test_threads_match_sequential(multiload_instance):
    _, sequential = solve_instance(multiload_instance, _params(random_samples=5, seed=5))
    _, threaded = solve_instance(multiload_instance, _params(random_samples=5, seed=5, max_workers=4))
    assert _summary(sequential) == _summary(threaded)


def test_random_run_can_be_replayed(multiload_instance, multiload_network):
    _, results = solve_instance(multiload_instance, _params(random_samples=3, seed=21), multiload_network)

    for result in results:
        if result.sorter.name != "random":
            continue
        orders = RandomOrders().sort(multiload_instance.orders, random.Random(result.seed))
        plan = result.algorithm.solve(orders, multiload_instance.trains, multiload_network)
        assert plan == result.plan


def test_result_to_dict(simple_instance):
    best, _ = solve_instance(simple_instance, _params(random_samples=1))
    data = best.to_dict()
    assert data["algorithm"] == "single-order"
    assert data["sorter"] == "unsorted"
    assert data["makespan"] == 70
    assert data["moves"] == 3
    assert data["error"] is None


def test_invalid_params():
    with pytest.raises(ValueError):
        SolverParams(random_samples=0)
    with pytest.raises(ValueError):
        SolverParams(max_route_stops=0)
