"""LP formulation for least-cost hourly dispatch.

Indices:
- t ∈ T: hourly periods 1..24

Parameters:
- D[t]: demand (MW)
- S_max[t], W_max[t]: solar and wind availability (MW)
- G_max: gas capacity (MW), c: gas unit cost ($/MWh)
- E_max: battery capacity (MWh), E_0: initial SOC (MWh)
- C_max, D_max: charge/discharge rate limits (MW)
- η: battery efficiency, applied to both legs

Decision Variables (all continuous, non-negative):
- solar[t], wind[t], gas[t]: generation (MW)
- charge[t], discharge[t]: battery power (MW)
- soc[t]: battery state of charge (MWh)

Constraints:
1. Energy Balance: solar[t] + wind[t] + gas[t] + discharge[t] - charge[t] = D[t]
2. SOC Dynamics: soc[t] = soc[t-1] + η * charge[t] - discharge[t] / η, soc[0] = E_0
3. Cyclic SOC: soc[T] = E_0

Objective:
Minimize total gas cost: Σ_t c * gas[t]
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pyomo.environ as pyo
from pydantic import ValidationError

from smartgrid.domain.exceptions import ConfigurationError
from smartgrid.domain.models import HORIZON_HOURS, DispatchParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Problem:
    """A fully built dispatch instance.

    The Pyomo model is never solved in place; the solver works on a clone,
    so one Problem can be solved any number of times.
    """

    parameters: DispatchParameters
    model: pyo.ConcreteModel
    horizon: int = HORIZON_HOURS


def parse_parameters(data: DispatchParameters | Mapping[str, Any]) -> DispatchParameters:
    """Validate raw input into DispatchParameters.

    Args:
        data: Already-validated parameters, or a mapping with the same shape.

    Returns:
        Validated, immutable parameters.

    Raises:
        ConfigurationError: If any parameter is malformed or out of range.
    """
    if isinstance(data, DispatchParameters):
        return data
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            [f"parameters: expected a mapping, got {type(data).__name__}"]
        )
    try:
        return DispatchParameters.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError.from_validation_error(exc) from exc


def load_parameters(path: str | Path) -> DispatchParameters:
    """Load dispatch parameters from a JSON scenario file.

    Raises:
        ConfigurationError: If the file is not UTF-8 JSON or fails validation.
        OSError: If the file cannot be read.
    """
    data = Path(path).read_bytes()
    try:
        return DispatchParameters.model_validate_json(data)
    except ValidationError as exc:
        raise ConfigurationError.from_validation_error(exc) from exc


def build(params: DispatchParameters | Mapping[str, Any]) -> Problem:
    """Build the Pyomo dispatch model.

    Args:
        params: Dispatch parameters, validated here if given as a mapping.

    Returns:
        Problem ready for the solver.

    Raises:
        ConfigurationError: If the parameters are malformed.
    """
    params = parse_parameters(params)
    battery = params.battery
    generator = params.generator

    model = pyo.ConcreteModel(name="SmartGridDispatch")

    # =================================================================
    # Sets
    # =================================================================
    model.T = pyo.Set(
        initialize=range(1, params.horizon + 1), ordered=True, doc="Hourly periods"
    )

    # =================================================================
    # Parameters
    # =================================================================

    def demand_init(_m: Any, t: int) -> float:
        return params.demand[t - 1]

    model.demand = pyo.Param(model.T, initialize=demand_init, doc="Demand (MW)")

    def solar_init(_m: Any, t: int) -> float:
        return params.solar_availability[t - 1]

    model.solar_availability = pyo.Param(
        model.T, initialize=solar_init, doc="Solar availability (MW)"
    )

    def wind_init(_m: Any, t: int) -> float:
        return params.wind_availability[t - 1]

    model.wind_availability = pyo.Param(
        model.T, initialize=wind_init, doc="Wind availability (MW)"
    )

    model.gas_capacity = pyo.Param(
        initialize=generator.capacity, doc="Gas capacity (MW)"
    )
    model.gas_cost = pyo.Param(initialize=generator.unit_cost, doc="Gas cost ($/MWh)")
    model.battery_capacity = pyo.Param(
        initialize=battery.capacity, doc="Battery capacity (MWh)"
    )
    model.initial_soc = pyo.Param(
        initialize=battery.initial_soc, doc="Initial SOC (MWh)"
    )
    model.charge_rate_max = pyo.Param(
        initialize=battery.charge_rate_max, doc="Max charge rate (MW)"
    )
    model.discharge_rate_max = pyo.Param(
        initialize=battery.discharge_rate_max, doc="Max discharge rate (MW)"
    )
    model.efficiency = pyo.Param(
        initialize=battery.efficiency, doc="Battery efficiency (both legs)"
    )

    # =================================================================
    # Decision Variables
    # =================================================================

    def solar_bounds(m: Any, t: int) -> tuple[float, float]:
        return (0.0, m.solar_availability[t])

    model.solar = pyo.Var(
        model.T,
        domain=pyo.NonNegativeReals,
        bounds=solar_bounds,
        doc="Solar generation (MW)",
    )

    def wind_bounds(m: Any, t: int) -> tuple[float, float]:
        return (0.0, m.wind_availability[t])

    model.wind = pyo.Var(
        model.T,
        domain=pyo.NonNegativeReals,
        bounds=wind_bounds,
        doc="Wind generation (MW)",
    )

    model.gas = pyo.Var(
        model.T,
        domain=pyo.NonNegativeReals,
        bounds=(0.0, generator.capacity),
        doc="Gas generation (MW)",
    )
    model.charge = pyo.Var(
        model.T,
        domain=pyo.NonNegativeReals,
        bounds=(0.0, battery.charge_rate_max),
        doc="Battery charging power (MW)",
    )
    model.discharge = pyo.Var(
        model.T,
        domain=pyo.NonNegativeReals,
        bounds=(0.0, battery.discharge_rate_max),
        doc="Battery discharging power (MW)",
    )
    model.soc = pyo.Var(
        model.T,
        domain=pyo.NonNegativeReals,
        bounds=(0.0, battery.capacity),
        doc="Battery state of charge (MWh)",
    )

    # =================================================================
    # Constraints
    # =================================================================

    # 1. Energy Balance: solar + wind + gas + discharge - charge = D[t]
    def energy_balance_rule(m: Any, t: int) -> Any:
        return (
            m.solar[t] + m.wind[t] + m.gas[t] + m.discharge[t] - m.charge[t]
            == m.demand[t]
        )

    model.energy_balance = pyo.Constraint(
        model.T, rule=energy_balance_rule, doc="Energy balance constraint"
    )

    # 2. SOC Dynamics: soc[t] = soc[t-1] + η * charge[t] - discharge[t] / η
    def soc_dynamics_rule(m: Any, t: int) -> Any:
        prev_soc = m.initial_soc if t == m.T.first() else m.soc[m.T.prev(t)]
        return m.soc[t] == (
            prev_soc
            + m.efficiency * m.charge[t]
            - m.discharge[t] / m.efficiency
        )

    model.soc_dynamics = pyo.Constraint(
        model.T, rule=soc_dynamics_rule, doc="SOC dynamics"
    )

    # 3. Cyclic SOC: the battery ends the day where it started
    model.soc_cycle = pyo.Constraint(
        expr=model.soc[model.T.last()] == model.initial_soc, doc="Cyclic SOC"
    )

    # =================================================================
    # Objective Function
    # =================================================================
    def objective_rule(m: Any) -> Any:
        return sum(m.gas_cost * m.gas[t] for t in m.T)

    model.objective = pyo.Objective(rule=objective_rule, sense=pyo.minimize)

    logger.debug(
        "Built dispatch model: %d periods, %d variables, %d constraints",
        params.horizon,
        model.nvariables(),
        model.nconstraints(),
    )
    return Problem(parameters=params, model=model, horizon=params.horizon)
