"""Exceptions raised by the dispatch engine.

Hierarchy:
    DispatchError (base)
    ├── ConfigurationError  (invalid input, raised before any solver runs)
    └── SolverError         (no solver available, or the solver crashed)

Infeasible and unbounded outcomes are not exceptions; they are reported
through ``DispatchSolution.status``.
"""

from __future__ import annotations

from pydantic import ValidationError


class DispatchError(Exception):
    """Base exception for all dispatch engine errors."""


class ConfigurationError(DispatchError, ValueError):
    """Raised when dispatch parameters are malformed or out of range.

    Attributes:
        errors: One message per violated parameter, naming the parameter
            and, for hourly series, the 1-based hour.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("Invalid dispatch parameters: " + "; ".join(self.errors))

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> ConfigurationError:
        """Translate a pydantic ValidationError into readable messages."""
        messages = []
        for error in exc.errors():
            messages.append(f"{_format_location(error['loc'])}: {error['msg']}")
        return cls(messages)


class SolverError(DispatchError, RuntimeError):
    """Raised when the LP solver is unavailable or fails to run.

    The message carries the solver's own diagnostic text.
    """

    def __init__(self, message: str, solver_name: str | None = None) -> None:
        self.solver_name = solver_name
        super().__init__(message)


def _format_location(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location, e.g. ``demand[hour 7]``."""
    if not loc:
        return "parameters"

    parts: list[str] = []
    for item in loc:
        if isinstance(item, int):
            # Series positions are reported as 1-based hours
            parts.append(f"[hour {item + 1}]")
        elif parts:
            parts.append(f".{item}")
        else:
            parts.append(str(item))
    return "".join(parts)
