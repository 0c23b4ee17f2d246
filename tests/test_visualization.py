"""Tests for the dispatch chart."""

from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import pytest

from smartgrid.domain.models import DispatchSolution
from smartgrid.visualization import (
    DispatchPlotConfig,
    DispatchVisualizer,
    create_dispatch_chart,
)

# Use non-interactive backend for testing
matplotlib.use("Agg")


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


class TestDispatchVisualizer:
    """Tests for DispatchVisualizer."""

    def test_plots_seven_series(self, cycling_solution: DispatchSolution) -> None:
        fig = DispatchVisualizer().plot_dispatch(cycling_solution)
        ax = fig.axes[0]

        labels = [line.get_label() for line in ax.get_lines()]
        assert labels == [
            "Demand",
            "Solar Generation",
            "Wind Generation",
            "Gas Generation",
            "Battery Charge",
            "Battery Discharge",
            "Battery SOC",
        ]
        assert ax.get_xlabel() == "Time (Hour)"
        assert ax.get_ylabel() == "Power / Energy (MW / MWh)"
        assert ax.get_title() == "Smart Grid Energy Optimization"

    def test_plots_hourly_points(self, cycling_solution: DispatchSolution) -> None:
        fig = DispatchVisualizer().plot_dispatch(cycling_solution)
        gas_line = fig.axes[0].get_lines()[3]

        assert list(gas_line.get_xdata()) == list(range(1, 25))
        assert list(gas_line.get_ydata()) == list(cycling_solution.gas)

    def test_uses_given_axes(self, cycling_solution: DispatchSolution) -> None:
        fig, ax = plt.subplots()

        result = DispatchVisualizer().plot_dispatch(cycling_solution, ax=ax, show_legend=False)

        assert result is fig
        assert ax.get_legend() is None

    def test_custom_title(self, cycling_solution: DispatchSolution) -> None:
        config = DispatchPlotConfig(title="Tuesday")
        fig = DispatchVisualizer(config).plot_dispatch(cycling_solution)
        assert fig.axes[0].get_title() == "Tuesday"

    def test_rejects_solution_without_values(
        self, infeasible_solution: DispatchSolution
    ) -> None:
        with pytest.raises(ValueError, match="No dispatch to plot"):
            DispatchVisualizer().plot_dispatch(infeasible_solution)


class TestCreateDispatchChart:
    """Tests for create_dispatch_chart."""

    def test_writes_image(self, cycling_solution: DispatchSolution, tmp_path: Path) -> None:
        path = tmp_path / "charts" / "dispatch.png"

        create_dispatch_chart(cycling_solution, save_path=path)

        assert path.exists()
        assert path.stat().st_size > 0

    def test_skip_saving(self, cycling_solution: DispatchSolution, tmp_path: Path) -> None:
        fig = create_dispatch_chart(cycling_solution, save_path=None)

        assert fig is not None
        assert list(tmp_path.iterdir()) == []
