"""Test fixtures for reproducible dispatch scenarios.

Provides standard scenarios:
- Reference day (daytime solar, varying wind, 50 MWh battery)
- Flat demand served by gas only
- Demand spike beyond total capacity (infeasible)
- Lossless battery cycling
"""

from collections.abc import Callable
from typing import Any

import matplotlib
import pytest
from pyomo.opt import SolverFactory

from smartgrid.demo import reference_parameters
from smartgrid.domain.models import (
    HORIZON_HOURS,
    DispatchParameters,
    DispatchSolution,
    DispatchStatus,
)
from smartgrid.optimization.solver import SolverConfig

# Use non-interactive backend for testing
matplotlib.use("Agg")

ParamsFactory = Callable[..., DispatchParameters]


# =============================================================================
# Solver Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def solver_config() -> SolverConfig:
    """Default solver configuration; skips the test if no LP solver exists."""
    config = SolverConfig()
    for name in (config.solver_name, *config.fallback_solvers):
        solver = SolverFactory(name)
        if solver is not None and solver.available(exception_flag=False):
            return config
    pytest.skip("No LP solver installed (glpk, appsi_highs or cbc)")


# =============================================================================
# Parameter Fixtures
# =============================================================================


@pytest.fixture
def raw_parameters() -> dict[str, Any]:
    """Plain-dict version of a flat-demand, gas-only day."""
    return {
        "demand": [40.0] * HORIZON_HOURS,
        "solar_availability": [0.0] * HORIZON_HOURS,
        "wind_availability": [0.0] * HORIZON_HOURS,
        "generator": {"capacity": 100.0, "unit_cost": 50.0},
        "battery": {
            "capacity": 0.0,
            "initial_soc": 0.0,
            "charge_rate_max": 0.0,
            "discharge_rate_max": 0.0,
            "efficiency": 0.95,
        },
    }


@pytest.fixture
def params_factory(raw_parameters: dict[str, Any]) -> ParamsFactory:
    """Build DispatchParameters from the flat day with overrides.

    Top-level keys replace series; ``generator`` and ``battery`` dicts are
    merged into the defaults.
    """

    def factory(**overrides: Any) -> DispatchParameters:
        data = {
            **raw_parameters,
            "generator": dict(raw_parameters["generator"]),
            "battery": dict(raw_parameters["battery"]),
        }
        for key, value in overrides.items():
            if key in ("generator", "battery"):
                data[key].update(value)
            else:
                data[key] = value
        return DispatchParameters.model_validate(data)

    return factory


@pytest.fixture
def flat_gas_params(params_factory: ParamsFactory) -> DispatchParameters:
    """Demand 40 MW every hour, no renewables, battery unused."""
    return params_factory()


@pytest.fixture
def reference_params() -> DispatchParameters:
    """The synthetic reference day used by the demo."""
    return reference_parameters()


@pytest.fixture
def infeasible_params(params_factory: ParamsFactory) -> DispatchParameters:
    """A midday demand spike no combination of sources can meet."""
    demand = [40.0] * HORIZON_HOURS
    demand[12] = 500.0
    return params_factory(
        demand=demand,
        solar_availability=[50.0] * HORIZON_HOURS,
        wind_availability=[10.0] * HORIZON_HOURS,
        battery={
            "capacity": 50.0,
            "initial_soc": 25.0,
            "charge_rate_max": 20.0,
            "discharge_rate_max": 20.0,
        },
    )


@pytest.fixture
def lossless_cycle_params(params_factory: ParamsFactory) -> DispatchParameters:
    """Solar surplus in the first half of the day, none in the second.

    With unit efficiency the battery can shift up to its 100 MWh capacity
    from the sunny half into the dark half at no loss.
    """
    return params_factory(
        solar_availability=[60.0] * 12 + [0.0] * 12,
        battery={
            "capacity": 100.0,
            "initial_soc": 0.0,
            "charge_rate_max": 20.0,
            "discharge_rate_max": 20.0,
            "efficiency": 1.0,
        },
    )


# =============================================================================
# Hand-built Solutions
# =============================================================================


@pytest.fixture
def cycling_params(params_factory: ParamsFactory) -> DispatchParameters:
    """Small battery used by the hand-built cycling solution."""
    return params_factory(
        battery={
            "capacity": 10.0,
            "initial_soc": 5.0,
            "charge_rate_max": 5.0,
            "discharge_rate_max": 5.0,
            "efficiency": 0.8,
        },
    )


@pytest.fixture
def cycling_solution() -> DispatchSolution:
    """Gas covers a flat 40 MW day while the battery does one small cycle.

    Hour 1 charges 5 MW (SOC +4 MWh at 80%), hour 2 discharges 3.2 MW
    (SOC -4 MWh), leaving the battery back at its initial 5 MWh.
    """
    gas = [40.0] * HORIZON_HOURS
    charge = [0.0] * HORIZON_HOURS
    discharge = [0.0] * HORIZON_HOURS
    soc = [5.0] * HORIZON_HOURS

    gas[0] = 45.0
    charge[0] = 5.0
    soc[0] = 9.0

    gas[1] = 36.8
    discharge[1] = 3.2

    return DispatchSolution(
        status=DispatchStatus.OPTIMAL,
        objective_value=sum(gas) * 50.0,
        message="Optimal solution found.",
        solver_name="handmade",
        termination_condition="optimal",
        demand=tuple([40.0] * HORIZON_HOURS),
        solar=tuple([0.0] * HORIZON_HOURS),
        wind=tuple([0.0] * HORIZON_HOURS),
        gas=tuple(gas),
        charge=tuple(charge),
        discharge=tuple(discharge),
        soc=tuple(soc),
    )


@pytest.fixture
def infeasible_solution() -> DispatchSolution:
    """Solution record for an infeasible solve."""
    return DispatchSolution(
        status=DispatchStatus.INFEASIBLE,
        message=(
            "No feasible dispatch exists for the given demand, availability "
            "and battery limits."
        ),
        solver_name="handmade",
        termination_condition="infeasible",
        demand=tuple([40.0] * HORIZON_HOURS),
    )
