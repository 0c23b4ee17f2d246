"""Domain models for the smart grid dispatch engine."""

from smartgrid.domain.exceptions import (
    ConfigurationError,
    DispatchError,
    SolverError,
)
from smartgrid.domain.models import (
    HORIZON_HOURS,
    BatteryParams,
    DispatchParameters,
    DispatchSolution,
    DispatchStatus,
    GeneratorParams,
)

__all__ = [
    "HORIZON_HOURS",
    "GeneratorParams",
    "BatteryParams",
    "DispatchParameters",
    "DispatchStatus",
    "DispatchSolution",
    "DispatchError",
    "ConfigurationError",
    "SolverError",
]
