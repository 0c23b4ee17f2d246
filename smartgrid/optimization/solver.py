"""Solver adapter: runs an LP solver on a built dispatch Problem.

The adapter picks the first available solver, solves a clone of the
problem's model, classifies the termination condition into a
DispatchStatus and extracts the hourly values. It never rounds and never
fabricates values for a solve that produced no feasible point.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import pyomo.environ as pyo
from pyomo.opt import SolverFactory, SolverResults, TerminationCondition

from smartgrid.domain.exceptions import SolverError
from smartgrid.domain.models import (
    DispatchParameters,
    DispatchSolution,
    DispatchStatus,
)
from smartgrid.optimization.builder import Problem, build

logger = logging.getLogger(__name__)

# Solver-specific option names for the time limit
_TIME_LIMIT_OPTIONS: dict[str, str] = {
    "glpk": "tmlim",
    "cbc": "seconds",
    "appsi_highs": "time_limit",
    "gurobi": "TimeLimit",
    "cplex": "timelimit",
}

_OPTIMAL = {
    TerminationCondition.optimal,
    TerminationCondition.globallyOptimal,
    TerminationCondition.locallyOptimal,
}
_STOPPED_EARLY = {
    TerminationCondition.feasible,
    TerminationCondition.maxTimeLimit,
    TerminationCondition.maxIterations,
    TerminationCondition.maxEvaluations,
    TerminationCondition.minFunctionValue,
    TerminationCondition.minStepLength,
    TerminationCondition.userInterrupt,
    TerminationCondition.resourceInterrupt,
}
# Every variable is boxed, so "infeasible or unbounded" can only be infeasible
_INFEASIBLE = {
    TerminationCondition.infeasible,
    TerminationCondition.infeasibleOrUnbounded,
}

_MESSAGES: dict[DispatchStatus, str] = {
    DispatchStatus.OPTIMAL: "Optimal solution found.",
    DispatchStatus.FEASIBLE_SUBOPTIMAL: (
        "Feasible dispatch found, but optimality was not proven."
    ),
    DispatchStatus.INFEASIBLE: (
        "No feasible dispatch exists for the given demand, availability "
        "and battery limits."
    ),
    DispatchStatus.UNBOUNDED: (
        "The dispatch problem is unbounded; check the generator cost data."
    ),
}


@dataclass
class SolverConfig:
    """Configuration for the LP solver."""

    solver_name: str = "glpk"
    # Tried in order when the preferred solver is not installed
    fallback_solvers: tuple[str, ...] = ("appsi_highs", "cbc")
    time_limit_seconds: float | None = 60.0
    tee: bool = False


def solve(problem: Problem, config: SolverConfig | None = None) -> DispatchSolution:
    """Solve a dispatch problem.

    Args:
        problem: Problem produced by ``build``. Left untouched.
        config: Solver configuration. Uses defaults if None.

    Returns:
        DispatchSolution. Infeasible and unbounded outcomes are reported
        through its status, not raised.

    Raises:
        SolverError: If no solver is available or the solver fails to run.
    """
    config = config or SolverConfig()
    solver, solver_name = _select_solver(config)
    _apply_options(solver, solver_name, config)

    instance = problem.model.clone()

    start_time = time.perf_counter()
    try:
        results = solver.solve(instance, tee=config.tee, load_solutions=False)
    except Exception as exc:
        logger.error("Solver '%s' failed: %s", solver_name, exc)
        raise SolverError(
            f"Solver '{solver_name}' failed: {exc}", solver_name=solver_name
        ) from exc
    solve_time = time.perf_counter() - start_time

    termination = results.solver.termination_condition
    status = classify_termination(termination, has_solution=len(results.solution) > 0)
    logger.info(
        "Solver '%s' finished in %.3fs: %s (%s)",
        solver_name,
        solve_time,
        termination,
        status.value,
    )

    demand = tuple(problem.parameters.demand)
    if not status.has_values:
        return DispatchSolution(
            status=status,
            message=_MESSAGES.get(status) or _diagnostic(results, solver_name),
            solver_name=solver_name,
            termination_condition=str(termination),
            solve_time_seconds=solve_time,
            demand=demand,
        )

    instance.solutions.load_from(results)
    return DispatchSolution(
        status=status,
        objective_value=pyo.value(instance.objective),
        message=_MESSAGES[status],
        solver_name=solver_name,
        termination_condition=str(termination),
        solve_time_seconds=solve_time,
        demand=demand,
        solar=_extract(instance.solar),
        wind=_extract(instance.wind),
        gas=_extract(instance.gas),
        charge=_extract(instance.charge),
        discharge=_extract(instance.discharge),
        soc=_extract(instance.soc),
    )


def optimize(
    params: DispatchParameters | Mapping[str, Any],
    config: SolverConfig | None = None,
) -> DispatchSolution:
    """Build and solve a dispatch problem in one step."""
    return solve(build(params), config)


def classify_termination(
    termination: TerminationCondition, has_solution: bool
) -> DispatchStatus:
    """Map a solver termination condition onto a DispatchStatus.

    Args:
        termination: Termination condition reported by the solver.
        has_solution: Whether the solver returned a candidate point.
    """
    if termination in _OPTIMAL:
        return DispatchStatus.OPTIMAL
    if termination in _INFEASIBLE:
        return DispatchStatus.INFEASIBLE
    if termination == TerminationCondition.unbounded:
        return DispatchStatus.UNBOUNDED
    if termination in _STOPPED_EARLY and has_solution:
        return DispatchStatus.FEASIBLE_SUBOPTIMAL
    return DispatchStatus.SOLVER_ERROR


def _select_solver(config: SolverConfig) -> tuple[Any, str]:
    """Return the first available solver and its name."""
    for name in (config.solver_name, *config.fallback_solvers):
        solver = SolverFactory(name)
        if solver is not None and solver.available(exception_flag=False):
            if name != config.solver_name:
                logger.warning(
                    "Solver '%s' not available, falling back to '%s'",
                    config.solver_name,
                    name,
                )
            return solver, name
        logger.debug("Solver '%s' not available", name)

    tried = ", ".join((config.solver_name, *config.fallback_solvers))
    raise SolverError(f"No LP solver available (tried: {tried})")


def _apply_options(solver: Any, solver_name: str, config: SolverConfig) -> None:
    if config.time_limit_seconds is None:
        return
    option = _TIME_LIMIT_OPTIONS.get(solver_name)
    if option is None:
        return
    if solver_name == "glpk":
        # GLPK requires an integer
        solver.options[option] = max(1, int(config.time_limit_seconds))
    else:
        solver.options[option] = config.time_limit_seconds


def _extract(var: pyo.Var) -> tuple[float, ...]:
    return tuple(float(pyo.value(var[t])) for t in var.index_set())


def _diagnostic(results: SolverResults, solver_name: str) -> str:
    """The solver's own explanation of a failed run, verbatim."""
    for key in ("termination_message", "message"):
        text = getattr(results.solver, key, None)
        if isinstance(text, str) and text:
            return text
    return (
        f"Solver '{solver_name}' stopped with termination condition "
        f"'{results.solver.termination_condition}' and no solution."
    )
