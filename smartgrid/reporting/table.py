"""Text report for dispatch results.

Renders the hourly dispatch as a tab-separated table, one row per hour.
Rounding happens here, for display only; the solution keeps full precision.
"""

from __future__ import annotations

from typing import TextIO

from smartgrid.domain.models import DispatchSolution

TABLE_COLUMNS: tuple[str, ...] = (
    "Hour",
    "Demand",
    "Solar",
    "Wind",
    "Gas",
    "Charge",
    "Discharge",
    "SOC",
)


def status_message(solution: DispatchSolution) -> str:
    """One-line description of the solve outcome."""
    if solution.message:
        return solution.message
    return f"Solver finished with status: {solution.status.value}"


def format_dispatch_table(solution: DispatchSolution, digits: int = 2) -> str:
    """Format the hourly dispatch as a tab-separated table.

    Args:
        solution: Solution carrying per-hour values.
        digits: Decimal places shown for each value.

    Returns:
        Header line followed by one line per hour.

    Raises:
        ValueError: If the solution has no per-hour values.
    """
    if not solution.has_values:
        raise ValueError(
            f"No dispatch to tabulate (status: {solution.status.value})"
        )

    lines = ["\t".join(TABLE_COLUMNS)]
    rows = zip(
        solution.hours,
        solution.demand,
        solution.solar,
        solution.wind,
        solution.gas,
        solution.charge,
        solution.discharge,
        solution.soc,
        strict=True,
    )
    for hour, *values in rows:
        # Adding 0.0 turns a rounded -0.0 into 0.0
        cells = [f"{round(v, digits) + 0.0:.{digits}f}" for v in values]
        lines.append("\t".join([str(hour), *cells]))
    return "\n".join(lines)


def print_dispatch_report(
    solution: DispatchSolution, digits: int = 2, file: TextIO | None = None
) -> None:
    """Print the outcome, the hourly table and the total cost."""
    print(status_message(solution), file=file)
    if not solution.has_values:
        return

    print("", file=file)
    print(format_dispatch_table(solution, digits=digits), file=file)
    if solution.total_cost is not None:
        print(f"\nTotal cost: ${solution.total_cost:,.2f}", file=file)
