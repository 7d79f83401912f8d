#!/usr/bin/env python3
"""
Train pickup-and-delivery planner

Plans how a fleet of capacity-limited trains delivers weighted orders
across a station network, minimizing the time the last train becomes
idle. Every delivery algorithm is run against every order sorter and
the plan with the lowest makespan wins.

Usage:
    python main.py [--verbose] solve INPUT [options]
    python main.py generate --stations N --edges M [options]

Solve options:
    --output FILE       Also write the plan to FILE
    --samples N         Runs per random order sorter (default: 100)
    --workers N         Worker threads (default: 1)
    --seed N            Seed for the random order sorter
    --top N             Ranked runs to print (default: 10)
    --max-stops N       Distinct stops per batch route (default: 8)
    --no-progress       Hide the progress bar
"""

import argparse
import logging
import random
import sys
from typing import List, Optional

from pickup_delivery import Config, SolverParams, setup_logging
from pickup_delivery.exceptions import PlanningError
from pickup_delivery.models import Network
from pickup_delivery.optimization import solve_instance
from pickup_delivery.reporters import format_plan, print_results, summarize_failures
from pickup_delivery.utils import (
    PlanValidator,
    format_input,
    generate_instance,
    load_input,
    save_text,
)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Train pickup-and-delivery planner"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    solve = commands.add_parser("solve", help="Plan deliveries for an instance file")
    solve.add_argument("input", type=str, help="Instance file (bare names are looked up in data/)")
    solve.add_argument("--output", type=str, default=None, help="Filename to save the plan")
    solve.add_argument("--samples", type=int, default=100, help="Runs per random order sorter")
    solve.add_argument("--workers", type=int, default=1, help="Worker threads")
    solve.add_argument("--seed", type=int, default=None, help="Seed for random order sorting")
    solve.add_argument("--max-stops", type=int, default=8, help="Distinct stops per batch route")
    solve.add_argument("--top", type=int, default=10, help="Ranked runs to print")
    solve.add_argument("--no-progress", action="store_true", help="Hide the progress bar")

    generate = commands.add_parser("generate", help="Generate a random instance")
    generate.add_argument("--stations", type=int, required=True, help="Number of stations")
    generate.add_argument("--edges", type=int, required=True, help="Number of edges")
    generate.add_argument("--orders", type=int, default=None, help="Number of orders")
    generate.add_argument("--trains", type=int, default=None, help="Number of trains")
    generate.add_argument("--max-edge-weight", type=int, default=100, help="Maximum edge distance")
    generate.add_argument("--max-order-weight", type=int, default=10, help="Maximum order weight")
    generate.add_argument("--max-train-capacity", type=int, default=10, help="Maximum train capacity")
    generate.add_argument("--station-capacity", type=int, default=None, help="Max orders per station")
    generate.add_argument("--depot-capacity", type=int, default=None, help="Max trains per station")
    generate.add_argument("--seed", type=int, default=None, help="Random seed")
    generate.add_argument("--output", type=str, default=None, help="Filename to save the instance")

    return parser.parse_args(argv)


def run_solve(args: argparse.Namespace, logger: logging.Logger) -> int:
    config = Config(
        input_file=args.input,
        output_file=args.output,
        solver_params=SolverParams(
            random_samples=args.samples,
            max_workers=args.workers,
            seed=args.seed,
            max_route_stops=args.max_stops,
            show_progress=not args.no_progress
        )
    )

    logger.info(f"Loading {config.input_file}...")
    instance = load_input(config.input_file)
    logger.info(
        f"Loaded {len(instance.stations)} stations, {len(instance.edges)} edges, "
        f"{len(instance.orders)} orders, {len(instance.trains)} trains"
    )

    network = Network.build(instance.stations, instance.edges)

    try:
        best, results = solve_instance(instance, config.solver_params, network)
    except PlanningError as e:
        logger.error(f"No feasible plan: {e}")
        return 1

    validation = PlanValidator(instance.orders, instance.trains, network).validate(best.plan)

    print_results(best, results, validation, top=args.top)
    for message in summarize_failures(results):
        logger.debug(message)

    if config.output_file:
        text = format_plan(best.plan) + f"Total time: {best.plan.makespan}\n"
        save_text(text, config.output_file)
        logger.info(f"Plan saved to {config.output_file}")

    return 0 if validation.is_valid else 1


def run_generate(args: argparse.Namespace, logger: logging.Logger) -> int:
    instance = generate_instance(
        stations=args.stations,
        edges=args.edges,
        orders=args.orders,
        trains=args.trains,
        max_edge_weight=args.max_edge_weight,
        max_order_weight=args.max_order_weight,
        max_train_capacity=args.max_train_capacity,
        station_capacity=args.station_capacity,
        depot_capacity=args.depot_capacity,
        rng=random.Random(args.seed)
    )
    text = format_input(instance)

    if args.output:
        save_text(text, args.output)
        logger.info(f"Instance saved to {args.output}")
    else:
        print(text)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logger = setup_logging(level=log_level)

    try:
        if args.command == "generate":
            return run_generate(args, logger)
        return run_solve(args, logger)

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Data error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
