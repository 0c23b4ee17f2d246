"""Core domain models for the smart grid dispatch engine.

All input models use Pydantic with strict validation. Units:
- Power: MW (megawatts)
- Energy: MWh (megawatt-hours)
- Costs: $/MWh
- Time: hourly periods, numbered 1..24
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

HORIZON_HOURS = 24

# =============================================================================
# Type Aliases with Validation
# =============================================================================

PowerMW = Annotated[
    float, Field(ge=0, allow_inf_nan=False, description="Power in megawatts (MW)")
]
EnergyMWh = Annotated[
    float,
    Field(ge=0, allow_inf_nan=False, description="Energy in megawatt-hours (MWh)"),
]
CostDollarPerMWh = Annotated[
    float, Field(ge=0, allow_inf_nan=False, description="Cost in $/MWh")
]
Efficiency = Annotated[
    float, Field(gt=0, le=1, allow_inf_nan=False, description="Efficiency ratio (0-1]")
]

# One value per hour of the horizon, immutable once validated
HourlySeries = tuple[PowerMW, ...]


# =============================================================================
# Enums
# =============================================================================


class DispatchStatus(str, Enum):
    """Outcome of a dispatch solve."""

    OPTIMAL = "optimal"
    FEASIBLE_SUBOPTIMAL = "feasible_suboptimal"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    SOLVER_ERROR = "solver_error"

    @property
    def has_values(self) -> bool:
        """Whether this status carries a feasible dispatch."""
        return self in (DispatchStatus.OPTIMAL, DispatchStatus.FEASIBLE_SUBOPTIMAL)


# =============================================================================
# Input Parameters
# =============================================================================


class GeneratorParams(BaseModel):
    """Dispatchable (gas) generator parameters."""

    model_config = ConfigDict(frozen=True)

    capacity: PowerMW
    unit_cost: CostDollarPerMWh


class BatteryParams(BaseModel):
    """Battery storage parameters.

    Efficiency is applied to both legs: charging energy is derated by it
    before reaching the state of charge, discharging energy is inflated by
    its inverse before leaving it.
    """

    model_config = ConfigDict(frozen=True)

    capacity: EnergyMWh
    initial_soc: EnergyMWh
    charge_rate_max: PowerMW
    discharge_rate_max: PowerMW
    efficiency: Efficiency = 1.0

    @model_validator(mode="after")
    def _initial_soc_within_capacity(self) -> BatteryParams:
        if self.initial_soc > self.capacity:
            raise ValueError(
                f"initial_soc ({self.initial_soc} MWh) exceeds "
                f"capacity ({self.capacity} MWh)"
            )
        return self


class DispatchParameters(BaseModel):
    """Complete input for one 24-hour dispatch problem."""

    model_config = ConfigDict(frozen=True)

    demand: HourlySeries
    solar_availability: HourlySeries
    wind_availability: HourlySeries
    generator: GeneratorParams
    battery: BatteryParams

    @field_validator("demand", "solar_availability", "wind_availability")
    @classmethod
    def _one_value_per_hour(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        if len(value) != HORIZON_HOURS:
            raise ValueError(
                f"expected {HORIZON_HOURS} hourly values, got {len(value)}"
            )
        return value

    @property
    def horizon(self) -> int:
        """Number of hourly periods."""
        return HORIZON_HOURS

    def max_supply(self, hour: int) -> float:
        """Upper bound on deliverable power at a 1-based hour (MW)."""
        i = hour - 1
        return (
            self.solar_availability[i]
            + self.wind_availability[i]
            + self.generator.capacity
            + self.battery.discharge_rate_max
        )


# =============================================================================
# Solution
# =============================================================================


class DispatchSolution(BaseModel):
    """Result of solving a dispatch problem.

    The six decision series are empty unless ``status.has_values``; callers
    must branch on ``status`` before reading them.
    """

    model_config = ConfigDict(frozen=True)

    status: DispatchStatus
    objective_value: float | None = None
    message: str = ""
    solver_name: str = ""
    termination_condition: str = ""
    solve_time_seconds: float = 0.0

    demand: tuple[float, ...] = ()
    solar: tuple[float, ...] = ()
    wind: tuple[float, ...] = ()
    gas: tuple[float, ...] = ()
    charge: tuple[float, ...] = ()
    discharge: tuple[float, ...] = ()
    soc: tuple[float, ...] = ()

    @property
    def has_values(self) -> bool:
        """Whether per-hour values are available."""
        return self.status.has_values and len(self.gas) > 0

    @property
    def is_optimal(self) -> bool:
        return self.status == DispatchStatus.OPTIMAL

    @property
    def hours(self) -> list[int]:
        """1-based hour labels for the demand series."""
        return list(range(1, len(self.demand) + 1))

    @property
    def total_cost(self) -> float | None:
        """Total generation cost ($), when a dispatch is available."""
        return self.objective_value if self.has_values else None

    def series(self) -> dict[str, tuple[float, ...]]:
        """The seven hourly series in display order."""
        return {
            "demand": self.demand,
            "solar": self.solar,
            "wind": self.wind,
            "gas": self.gas,
            "charge": self.charge,
            "discharge": self.discharge,
            "soc": self.soc,
        }
