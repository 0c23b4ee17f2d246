"""Demo for the smart grid dispatch engine.

Solves a synthetic 24-hour day (or a JSON scenario file), prints the hourly
dispatch table and writes a chart of the schedule.

Usage:
    python -m smartgrid.demo
    python -m smartgrid.demo --scenario day.json --gas-cost 80 --output out.png

Or in Python:
    from smartgrid.demo import reference_parameters
    from smartgrid.optimization import optimize
    solution = optimize(reference_parameters())
"""

from __future__ import annotations

import logging
import sys

import matplotlib.pyplot as plt

from smartgrid.domain import (
    BatteryParams,
    ConfigurationError,
    DispatchParameters,
    GeneratorParams,
    SolverError,
)
from smartgrid.metrics import DispatchSummary
from smartgrid.optimization import (
    SolverConfig,
    load_parameters,
    optimize,
    parse_parameters,
)
from smartgrid.reporting import print_dispatch_report
from smartgrid.visualization import DEFAULT_CHART_PATH, create_dispatch_chart

logger = logging.getLogger(__name__)

# fmt: off
# Synthetic demand (MW): overnight trough, midday peak
REFERENCE_DEMAND = [
    50, 45, 40, 38, 35, 30, 28, 32, 40, 55, 65, 75,
    80, 78, 70, 65, 60, 55, 50, 48, 45, 50, 55, 60,
]
# Solar is only available during daylight hours
REFERENCE_SOLAR = [
    0, 0, 0, 0, 0, 5, 10, 20, 30, 40, 45, 50,
    55, 50, 45, 30, 20, 10, 5, 0, 0, 0, 0, 0,
]
REFERENCE_WIND = [
    10, 12, 15, 13, 12, 10, 8, 7, 10, 12, 15, 17,
    16, 15, 14, 13, 12, 11, 10, 9, 10, 11, 12, 13,
]
# fmt: on


def reference_parameters() -> DispatchParameters:
    """The synthetic reference day.

    100 MW of gas at $50/MWh and a 50 MWh battery starting half full,
    with 20 MW charge/discharge limits and 95% efficiency per leg.
    """
    return DispatchParameters(
        demand=REFERENCE_DEMAND,
        solar_availability=REFERENCE_SOLAR,
        wind_availability=REFERENCE_WIND,
        generator=GeneratorParams(capacity=100.0, unit_cost=50.0),
        battery=BatteryParams(
            capacity=50.0,
            initial_soc=25.0,
            charge_rate_max=20.0,
            discharge_rate_max=20.0,
            efficiency=0.95,
        ),
    )


def with_gas_cost(params: DispatchParameters, unit_cost: float) -> DispatchParameters:
    """Copy of the parameters with a different gas unit cost.

    Raises:
        ConfigurationError: If the new cost is invalid.
    """
    data = params.model_dump()
    data["generator"]["unit_cost"] = unit_cost
    return parse_parameters(data)


def print_summary(summary: DispatchSummary) -> None:
    print("\nSummary:")
    print(f"   • Demand served: {summary.total_demand_mwh:,.1f} MWh")
    print(
        f"   • Renewables: {summary.renewable_mwh:,.1f} MWh "
        f"({summary.renewable_share:.1%} of demand, "
        f"{summary.renewable_utilization:.1%} of availability)"
    )
    print(f"   • Gas: {summary.gas_mwh:,.1f} MWh ({summary.gas_share:.1%} of demand)")
    print(f"   • Battery losses: {summary.battery_losses_mwh:,.2f} MWh")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for running the dispatch from the command line.

    Returns:
        0 when a dispatch was found, 1 when the problem has no dispatch,
        2 on invalid input or solver failure.
    """
    import argparse

    parser = argparse.ArgumentParser(description="Smart grid 24-hour dispatch")
    parser.add_argument(
        "--scenario",
        type=str,
        default=None,
        help="JSON scenario file (default: built-in reference day)",
    )
    parser.add_argument(
        "--gas-cost",
        type=float,
        default=None,
        help="Override the gas unit cost in $/MWh",
    )
    parser.add_argument(
        "--solver",
        type=str,
        default="glpk",
        help="Preferred LP solver (default: glpk)",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=60.0,
        help="Solver time limit in seconds (default: 60)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_CHART_PATH,
        help=f"Chart output path (default: {DEFAULT_CHART_PATH})",
    )
    parser.add_argument(
        "--no-plot",
        action="store_true",
        help="Skip writing the chart",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.scenario:
            params = load_parameters(args.scenario)
        else:
            params = reference_parameters()
        if args.gas_cost is not None:
            params = with_gas_cost(params, args.gas_cost)

        config = SolverConfig(
            solver_name=args.solver, time_limit_seconds=args.time_limit
        )
        solution = optimize(params, config)
    except (ConfigurationError, SolverError, OSError) as exc:
        logger.error("Dispatch failed: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    print_dispatch_report(solution)
    if not solution.has_values:
        return 1

    print_summary(DispatchSummary.from_solution(params, solution))

    if not args.no_plot:
        fig = create_dispatch_chart(solution, save_path=args.output)
        plt.close(fig)
        print(f"\nChart saved to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
