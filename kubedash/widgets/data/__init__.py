"""Data display widgets for the TUI application."""

from kubedash.widgets.data.tables import CustomDataTable

__all__ = [
    "CustomDataTable",
]
