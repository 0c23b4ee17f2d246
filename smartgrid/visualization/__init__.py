"""Matplotlib charts for dispatch results."""

from smartgrid.visualization.timeline import (
    DEFAULT_CHART_PATH,
    DispatchPlotConfig,
    DispatchVisualizer,
    create_dispatch_chart,
)

__all__ = [
    "DEFAULT_CHART_PATH",
    "DispatchPlotConfig",
    "DispatchVisualizer",
    "create_dispatch_chart",
]
