"""Tests for the text report."""

import io

import pytest

from smartgrid.domain.models import DispatchSolution, DispatchStatus
from smartgrid.reporting import (
    TABLE_COLUMNS,
    format_dispatch_table,
    print_dispatch_report,
    status_message,
)


class TestFormatDispatchTable:
    """Tests for format_dispatch_table."""

    def test_header_and_rows(self, cycling_solution: DispatchSolution) -> None:
        lines = format_dispatch_table(cycling_solution).splitlines()

        assert lines[0].split("\t") == list(TABLE_COLUMNS)
        assert len(lines) == 1 + 24

    def test_first_hour_values(self, cycling_solution: DispatchSolution) -> None:
        row = format_dispatch_table(cycling_solution).splitlines()[1].split("\t")

        assert row == ["1", "40.00", "0.00", "0.00", "45.00", "5.00", "0.00", "9.00"]

    def test_rounding_is_display_only(self, cycling_solution: DispatchSolution) -> None:
        noisy = cycling_solution.model_copy(
            update={"solar": (-1e-12,) + cycling_solution.solar[1:]}
        )

        row = format_dispatch_table(noisy, digits=1).splitlines()[1].split("\t")

        assert row[2] == "0.0"
        assert noisy.solar[0] == -1e-12

    def test_rejects_solution_without_values(
        self, infeasible_solution: DispatchSolution
    ) -> None:
        with pytest.raises(ValueError, match="infeasible"):
            format_dispatch_table(infeasible_solution)


class TestPrintDispatchReport:
    """Tests for print_dispatch_report."""

    def test_optimal_report(self, cycling_solution: DispatchSolution) -> None:
        buffer = io.StringIO()
        print_dispatch_report(cycling_solution, file=buffer)
        output = buffer.getvalue()

        assert output.startswith("Optimal solution found.")
        assert "Hour\tDemand\tSolar" in output
        assert "Total cost: $" in output

    def test_infeasible_report(self, infeasible_solution: DispatchSolution) -> None:
        buffer = io.StringIO()
        print_dispatch_report(infeasible_solution, file=buffer)
        output = buffer.getvalue()

        assert "No feasible dispatch exists" in output
        assert "Hour" not in output
        assert "Total cost" not in output

    def test_status_message_fallback(self) -> None:
        solution = DispatchSolution(status=DispatchStatus.UNBOUNDED)
        assert status_message(solution) == "Solver finished with status: unbounded"
