"""Metrics module for dispatch KPI computation."""

from smartgrid.metrics.kpi import DispatchSummary

__all__ = ["DispatchSummary"]
