"""Data table widgets for the TUI application."""

from kubedash.widgets.data.tables.custom_data_table import CustomDataTable

__all__ = [
    "CustomDataTable",
]
