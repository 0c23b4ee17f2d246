"""Post-solve validation of dispatch solutions."""

from smartgrid.validation.invariants import (
    ConstraintViolation,
    SolutionValidator,
    ValidationReport,
    validate_solution,
)

__all__ = [
    "ConstraintViolation",
    "SolutionValidator",
    "ValidationReport",
    "validate_solution",
]
