"""Reporting module for printing dispatch results."""

from smartgrid.reporting.table import (
    TABLE_COLUMNS,
    format_dispatch_table,
    print_dispatch_report,
    status_message,
)

__all__ = [
    "TABLE_COLUMNS",
    "format_dispatch_table",
    "print_dispatch_report",
    "status_message",
]
