"""Dispatch timeline chart.

Plots the seven hourly series of a solved dispatch (demand, solar, wind,
gas, battery charge, battery discharge, battery SOC) against hour of day
and writes the figure to an image file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from smartgrid.domain.models import DispatchSolution

DEFAULT_CHART_PATH = "smart_grid_optimization.png"

SERIES_LABELS: dict[str, str] = {
    "demand": "Demand",
    "solar": "Solar Generation",
    "wind": "Wind Generation",
    "gas": "Gas Generation",
    "charge": "Battery Charge",
    "discharge": "Battery Discharge",
    "soc": "Battery SOC",
}


@dataclass
class DispatchPlotConfig:
    """Configuration for dispatch charts.

    Attributes:
        figsize: Figure size (width, height) in inches.
        dpi: Dots per inch for saved figures.
        colors: Color per series.
        linewidth: Line width for every series.
        marker: Marker drawn at each hour.
        title: Chart title.
        title_fontsize: Font size for the title.
        label_fontsize: Font size for axis labels.
        legend_fontsize: Font size for the legend.
        grid_alpha: Alpha value for grid lines.
    """

    figsize: tuple[float, float] = (12, 6)
    dpi: int = 100
    colors: dict[str, str] = field(
        default_factory=lambda: {
            "demand": "#2c3e50",
            "solar": "#f1c40f",
            "wind": "#3498db",
            "gas": "#e74c3c",
            "charge": "#9b59b6",
            "discharge": "#f39c12",
            "soc": "#1abc9c",
        }
    )
    linewidth: float = 2.0
    marker: str = "o"
    title: str = "Smart Grid Energy Optimization"
    title_fontsize: int = 14
    label_fontsize: int = 12
    legend_fontsize: int = 9
    grid_alpha: float = 0.3


class DispatchVisualizer:
    """Plots a solved dispatch schedule.

    Example:
        ```python
        visualizer = DispatchVisualizer()
        fig = visualizer.plot_dispatch(solution)
        visualizer.save(fig, "dispatch.png")
        ```
    """

    def __init__(self, config: DispatchPlotConfig | None = None) -> None:
        self.config = config or DispatchPlotConfig()

    def plot_dispatch(
        self,
        solution: DispatchSolution,
        ax: plt.Axes | None = None,
        show_legend: bool = True,
    ) -> Figure:
        """Plot all seven hourly series on one axes.

        Args:
            solution: Solution carrying per-hour values.
            ax: Matplotlib axes to plot on (creates new if None).
            show_legend: Whether to show the legend.

        Returns:
            Figure containing the plot.

        Raises:
            ValueError: If the solution has no per-hour values.
        """
        if not solution.has_values:
            raise ValueError(
                f"No dispatch to plot (status: {solution.status.value})"
            )

        if ax is None:
            fig, ax = plt.subplots(figsize=self.config.figsize)
        else:
            fig = ax.figure

        hours = solution.hours
        for name, values in solution.series().items():
            ax.plot(
                hours,
                values,
                label=SERIES_LABELS[name],
                color=self.config.colors.get(name),
                linewidth=self.config.linewidth,
                marker=self.config.marker,
                markersize=4,
            )

        ax.set_xlabel("Time (Hour)", fontsize=self.config.label_fontsize)
        ax.set_ylabel("Power / Energy (MW / MWh)", fontsize=self.config.label_fontsize)
        ax.set_title(self.config.title, fontsize=self.config.title_fontsize)
        ax.set_xlim(hours[0], hours[-1])
        ax.set_xticks(hours)
        ax.grid(True, alpha=self.config.grid_alpha)

        if show_legend:
            ax.legend(loc="upper left", fontsize=self.config.legend_fontsize)

        fig.tight_layout()
        return fig

    def save(self, fig: Figure, path: str | Path) -> Path:
        """Write a figure to disk, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, dpi=self.config.dpi, bbox_inches="tight")
        return path


def create_dispatch_chart(
    solution: DispatchSolution,
    save_path: str | Path | None = DEFAULT_CHART_PATH,
    config: DispatchPlotConfig | None = None,
) -> Figure:
    """Convenience function to plot a dispatch and optionally save it.

    Args:
        solution: Solution carrying per-hour values.
        save_path: Where to write the image; None skips saving.
        config: Plot configuration options.

    Returns:
        Matplotlib Figure object.
    """
    visualizer = DispatchVisualizer(config)
    fig = visualizer.plot_dispatch(solution)
    if save_path is not None:
        visualizer.save(fig, save_path)
    return fig
