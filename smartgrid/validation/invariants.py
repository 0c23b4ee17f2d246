"""Post-solve invariant checks for dispatch solutions.

Re-verifies, outside the solver, the laws every accepted dispatch must obey:

- Energy balance: solar + wind + gas + discharge - charge == demand
- Bounds: every decision value inside its declared [lower, upper] box
- SOC recursion: soc[t] == soc[t-1] + η * charge[t] - discharge[t] / η
- Cyclic SOC: soc[T] == initial_soc

Checks are vectorized with numpy and use a relative tolerance,
``tolerance * max(1, |reference|)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from smartgrid.domain.models import DispatchParameters, DispatchSolution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConstraintViolation:
    """A single invariant violated at a given hour.

    Attributes:
        constraint: Name of the violated law (e.g. "energy_balance").
        hour: 1-based hour, or None for horizon-wide constraints.
        expected: Value the law requires.
        actual: Value found in the solution.
    """

    constraint: str
    hour: int | None
    expected: float
    actual: float

    @property
    def magnitude(self) -> float:
        return abs(self.actual - self.expected)


@dataclass
class ValidationReport:
    """Outcome of validating one solution."""

    tolerance: float
    violations: list[ConstraintViolation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def max_violation(self) -> float:
        if not self.violations:
            return 0.0
        return max(v.magnitude for v in self.violations)

    def by_constraint(self) -> dict[str, int]:
        """Number of violations per constraint name."""
        counts: dict[str, int] = {}
        for violation in self.violations:
            counts[violation.constraint] = counts.get(violation.constraint, 0) + 1
        return counts


class SolutionValidator:
    """Checks a solved dispatch against its parameters.

    Usage:
        report = SolutionValidator(params, solution).validate()
        if not report.is_valid:
            ...
    """

    def __init__(
        self,
        params: DispatchParameters,
        solution: DispatchSolution,
        tolerance: float = 1e-6,
    ) -> None:
        """Initialize the validator.

        Args:
            params: Parameters the solution was computed from.
            solution: Solution carrying per-hour values.
            tolerance: Relative numerical tolerance.

        Raises:
            ValueError: If the solution has no per-hour values.
        """
        if not solution.has_values:
            raise ValueError(
                f"Cannot validate a solution without values (status: {solution.status.value})"
            )
        self.params = params
        self.solution = solution
        self.tolerance = tolerance

        self._demand = np.asarray(params.demand, dtype=float)
        self._solar = np.asarray(solution.solar, dtype=float)
        self._wind = np.asarray(solution.wind, dtype=float)
        self._gas = np.asarray(solution.gas, dtype=float)
        self._charge = np.asarray(solution.charge, dtype=float)
        self._discharge = np.asarray(solution.discharge, dtype=float)
        self._soc = np.asarray(solution.soc, dtype=float)

    def check_energy_balance(self) -> list[ConstraintViolation]:
        supplied = (
            self._solar + self._wind + self._gas + self._discharge - self._charge
        )
        return self._compare("energy_balance", self._demand, supplied)

    def check_bounds(self) -> list[ConstraintViolation]:
        battery = self.params.battery
        horizon = self.params.horizon
        upper_bounds = {
            "solar": np.asarray(self.params.solar_availability, dtype=float),
            "wind": np.asarray(self.params.wind_availability, dtype=float),
            "gas": np.full(horizon, self.params.generator.capacity),
            "charge": np.full(horizon, battery.charge_rate_max),
            "discharge": np.full(horizon, battery.discharge_rate_max),
            "soc": np.full(horizon, battery.capacity),
        }
        values = {
            "solar": self._solar,
            "wind": self._wind,
            "gas": self._gas,
            "charge": self._charge,
            "discharge": self._discharge,
            "soc": self._soc,
        }

        violations: list[ConstraintViolation] = []
        for name, value in values.items():
            upper = upper_bounds[name]
            below = value < -self._allowance(np.zeros_like(value))
            above = value > upper + self._allowance(upper)
            for i in np.flatnonzero(below):
                violations.append(
                    ConstraintViolation(f"{name}_lower", int(i) + 1, 0.0, float(value[i]))
                )
            for i in np.flatnonzero(above):
                violations.append(
                    ConstraintViolation(
                        f"{name}_upper", int(i) + 1, float(upper[i]), float(value[i])
                    )
                )
        return violations

    def check_soc_recursion(self) -> list[ConstraintViolation]:
        efficiency = self.params.battery.efficiency
        previous = np.concatenate(([self.params.battery.initial_soc], self._soc[:-1]))
        expected = (
            previous + efficiency * self._charge - self._discharge / efficiency
        )
        return self._compare("soc_dynamics", expected, self._soc)

    def check_cyclic_soc(self) -> list[ConstraintViolation]:
        initial = self.params.battery.initial_soc
        final = float(self._soc[-1])
        if abs(final - initial) > self.tolerance * max(1.0, abs(initial)):
            return [ConstraintViolation("soc_cycle", None, initial, final)]
        return []

    def validate(self) -> ValidationReport:
        """Run every check and collect the violations."""
        report = ValidationReport(tolerance=self.tolerance)
        report.violations.extend(self.check_energy_balance())
        report.violations.extend(self.check_bounds())
        report.violations.extend(self.check_soc_recursion())
        report.violations.extend(self.check_cyclic_soc())

        if report.violations:
            logger.warning(
                "Dispatch solution violates %d invariant(s): %s",
                len(report.violations),
                report.by_constraint(),
            )
        return report

    def _allowance(self, reference: np.ndarray) -> np.ndarray:
        return self.tolerance * np.maximum(1.0, np.abs(reference))

    def _compare(
        self, name: str, expected: np.ndarray, actual: np.ndarray
    ) -> list[ConstraintViolation]:
        off = np.abs(actual - expected) > self._allowance(expected)
        return [
            ConstraintViolation(name, int(i) + 1, float(expected[i]), float(actual[i]))
            for i in np.flatnonzero(off)
        ]


def validate_solution(
    params: DispatchParameters,
    solution: DispatchSolution,
    tolerance: float = 1e-6,
) -> ValidationReport:
    """Convenience wrapper around SolutionValidator."""
    return SolutionValidator(params, solution, tolerance).validate()
