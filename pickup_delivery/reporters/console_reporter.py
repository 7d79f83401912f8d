"""Result reporting utilities."""

from typing import List, Optional, Sequence

from pickup_delivery.models import Move, Plan
from pickup_delivery.optimization import SolverResult
from pickup_delivery.utils import ValidationResult


def format_move(move: Move) -> str:
    """One plan line: ``W=<time>, T=<train>, N1=<from>, P1=[..], N2=<to>, P2=[..]``."""
    return (
        f"W={move.time}, T={move.train}, N1={move.origin}, P1=[{','.join(move.load)}], "
        f"N2={move.destination}, P2=[{','.join(move.unload)}]"
    )


def format_plan(plan: Plan) -> str:
    """
    Format a plan as text, moves sorted by departure time.

    Args:
        plan: The plan to format

    Returns:
        One line per move, newline terminated
    """
    return "".join(f"{format_move(m)}\n" for m in plan.sorted_by_time().moves)


def format_results_table(results: Sequence[SolverResult], limit: Optional[int] = 10) -> str:
    """
    Format ranked solver results as a fixed-width table.

    Args:
        results: Results ranked by makespan
        limit: Number of rows to show, all when None

    Returns:
        Formatted table
    """
    shown = list(results) if limit is None else list(results)[:limit]
    lines = [f"{'#':>4}  {'algorithm':<14}{'sorter':<15}{'sample':>7}{'makespan':>10}{'time (ms)':>11}"]

    for rank, result in enumerate(shown, start=1):
        makespan = str(result.plan.makespan) if result.succeeded else "failed"
        lines.append(
            f"{rank:>4}  {result.algorithm.name:<14}{result.sorter.name:<15}"
            f"{result.sample:>7}{makespan:>10}{result.elapsed * 1000:>11.2f}"
        )

    if len(shown) < len(results):
        lines.append(f"      ... {len(results) - len(shown)} more")

    return "\n".join(lines)


def print_results(
    best: SolverResult,
    results: Sequence[SolverResult],
    validation: Optional[ValidationResult] = None,
    top: Optional[int] = 10
) -> None:
    """
    Print search results to console.

    Args:
        best: The winning result
        results: All results ranked by makespan
        validation: Optional validation of the winning plan
        top: Number of ranked runs to list
    """
    failed = [r for r in results if not r.succeeded]

    print("\n" + "=" * 60)
    print("PLANNING RESULTS")
    print("=" * 60)

    print(f"\nBest Makespan: {best.plan.makespan}")
    print(f"Algorithm: {best.algorithm.name}")
    print(f"Order Sorter: {best.sorter.name}")
    if best.seed is not None:
        print(f"Seed: {best.seed}")
    print(f"Moves: {len(best.plan)}")

    print("\n--- Search Statistics ---")
    print(f"Runs: {len(results)}")
    print(f"Failed: {len(failed)}")
    print(f"Total Time: {sum(r.elapsed for r in results):.3f} s")

    if top:
        print("\n--- Ranking ---")
        print(format_results_table(results, top))

    if validation is not None:
        print(f"\nPlan Valid: {validation.is_valid}")
        if validation.violations:
            print("\n--- Violations ---")
            for violation in validation.violations:
                print(f"  ! {violation}")
        for warning in validation.warnings:
            print(f"  ? {warning}")

    print("\n--- Plan ---")
    print(format_plan(best.plan), end="")
    print(f"Total time: {best.plan.makespan}")

    print("\n" + "=" * 60)


def summarize_failures(results: Sequence[SolverResult]) -> List[str]:
    """Distinct error messages of failed runs, first occurrence order."""
    messages = []
    for result in results:
        if result.error is not None:
            message = f"{result.algorithm.name}: {result.error}"
            if message not in messages:
                messages.append(message)
    return messages
