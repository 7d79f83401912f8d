"""Search over every algorithm and order sorter combination."""

import concurrent.futures
import logging
import math
import random
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from tqdm import tqdm

from pickup_delivery.config import SolverParams
from pickup_delivery.exceptions import NoFeasiblePlanError, PlanningError
from pickup_delivery.models import Network, Order, Plan, ProblemInstance, Train
from pickup_delivery.optimization.algorithms import DeliveryAlgorithm, build_algorithms
from pickup_delivery.optimization.sorters import OrderSorter, build_sorters

logger = logging.getLogger("pdp.solver")


@dataclass
class SolverResult:
    """Outcome of one algorithm run on one order presentation."""
    algorithm: DeliveryAlgorithm
    sorter: OrderSorter
    sample: int = 0
    seed: Optional[int] = None
    elapsed: float = 0.0  # seconds
    plan: Optional[Plan] = None
    error: Optional[PlanningError] = None

    @property
    def succeeded(self) -> bool:
        return self.plan is not None

    @property
    def makespan(self) -> float:
        """Plan makespan, infinite for failed runs so they never win."""
        return self.plan.makespan if self.plan is not None else math.inf

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "algorithm": self.algorithm.name,
            "sorter": self.sorter.name,
            "sample": self.sample,
            "seed": self.seed,
            "elapsed": self.elapsed,
            "makespan": self.plan.makespan if self.plan is not None else None,
            "moves": len(self.plan) if self.plan is not None else 0,
            "error": str(self.error) if self.error is not None else None,
        }


@dataclass(frozen=True)
class _Run:
    algorithm: DeliveryAlgorithm
    sorter: OrderSorter
    sample: int
    seed: Optional[int]


class Solver:
    """
    Runs each algorithm against each order sorter and ranks the plans.

    Stable sorters are run once per algorithm. Unstable sorters are
    sampled ``params.random_samples`` times, each sample with its own
    seeded generator so any run can be reproduced from its result.
    Runs share nothing mutable: orders and trains are immutable values
    and the network is read-only.
    """

    def __init__(
        self,
        algorithms: Sequence[DeliveryAlgorithm],
        sorters: Sequence[OrderSorter],
        params: Optional[SolverParams] = None
    ):
        self.algorithms = list(algorithms)
        self.sorters = list(sorters)
        self.params = params or SolverParams()

    def _plan_runs(self) -> List[_Run]:
        """Enumerate runs in submission order."""
        master = random.Random(self.params.seed)
        runs = []

        for algorithm in self.algorithms:
            for sorter in self.sorters:
                if sorter.stable:
                    runs.append(_Run(algorithm, sorter, 0, None))
                    continue
                for sample in range(self.params.random_samples):
                    runs.append(_Run(algorithm, sorter, sample, master.getrandbits(32)))

        return runs

    def _execute(
        self,
        run: _Run,
        orders: Sequence[Order],
        trains: Sequence[Train],
        network: Network
    ) -> SolverResult:
        result = SolverResult(run.algorithm, run.sorter, run.sample, run.seed)
        rng = random.Random(run.seed) if run.seed is not None else None

        start = time.perf_counter()
        try:
            result.plan = run.algorithm.solve(run.sorter.sort(orders, rng), trains, network)
        except PlanningError as e:
            result.error = e
            logger.warning(
                f"{run.algorithm.name}/{run.sorter.name}#{run.sample} failed: {e}"
            )
        result.elapsed = time.perf_counter() - start

        return result

    def solve(
        self,
        orders: Sequence[Order],
        trains: Sequence[Train],
        network: Network
    ) -> List[SolverResult]:
        """
        Run the whole search.

        Args:
            orders: Orders of the instance
            trains: Fleet in its initial state
            network: Distance index of the instance

        Returns:
            All results sorted by makespan; equal makespans keep
            submission order
        """
        orders = tuple(orders)
        trains = tuple(trains)
        runs = self._plan_runs()

        logger.info(
            f"Running {len(runs)} plans ({len(self.algorithms)} algorithms, "
            f"{len(self.sorters)} sorters, {self.params.random_samples} random samples)"
        )

        with tqdm(total=len(runs), disable=not self.params.show_progress, desc="Planning") as progress:
            if self.params.max_workers <= 1:
                results = []
                for run in runs:
                    results.append(self._execute(run, orders, trains, network))
                    progress.update(1)
            else:
                with concurrent.futures.ThreadPoolExecutor(max_workers=self.params.max_workers) as executor:
                    futures = [
                        executor.submit(self._execute, run, orders, trains, network)
                        for run in runs
                    ]
                    for _ in concurrent.futures.as_completed(futures):
                        progress.update(1)
                    results = [future.result() for future in futures]

        results.sort(key=lambda r: r.makespan)

        succeeded = sum(1 for r in results if r.succeeded)
        if succeeded:
            best = results[0]
            logger.info(
                f"{succeeded}/{len(results)} runs succeeded, best makespan {best.makespan} "
                f"({best.algorithm.name}/{best.sorter.name})"
            )
        else:
            logger.info(f"All {len(results)} runs failed")

        return results

    def best(
        self,
        orders: Sequence[Order],
        trains: Sequence[Train],
        network: Network
    ) -> SolverResult:
        """
        Run the search and return the winning result.

        Raises:
            NoFeasiblePlanError: If every run failed
        """
        return pick_best(self.solve(orders, trains, network))


def pick_best(results: Sequence[SolverResult]) -> SolverResult:
    """First successful result of a ranked result list."""
    for result in results:
        if result.succeeded:
            return result
    raise NoFeasiblePlanError(f"None of {len(results)} runs produced a plan")


def solve_instance(
    instance: ProblemInstance,
    params: Optional[SolverParams] = None,
    network: Optional[Network] = None
) -> Tuple[SolverResult, List[SolverResult]]:
    """
    Search the best plan for a parsed problem instance.

    Args:
        instance: Stations, edges, orders and trains
        params: Search parameters
        network: Prebuilt network of the instance, built when omitted

    Returns:
        Tuple of (best result, all results ranked by makespan)

    Raises:
        NoFeasiblePlanError: If every run failed
    """
    params = params or SolverParams()
    if network is None:
        network = Network.build(instance.stations, instance.edges)

    solver = Solver(
        build_algorithms(params.max_route_stops),
        build_sorters(network.distance),
        params
    )
    results = solver.solve(instance.orders, instance.trains, network)
    return pick_best(results), results
