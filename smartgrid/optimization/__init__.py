"""Optimization module: LP model builder and solver adapter."""

from smartgrid.optimization.builder import (
    Problem,
    build,
    load_parameters,
    parse_parameters,
)
from smartgrid.optimization.solver import (
    SolverConfig,
    classify_termination,
    optimize,
    solve,
)

__all__ = [
    "Problem",
    "build",
    "parse_parameters",
    "load_parameters",
    "SolverConfig",
    "solve",
    "optimize",
    "classify_termination",
]
