"""Widgets module for the KubeDash TUI.

This module provides the reusable widgets organized into submodules:
- data: Data display widgets (CustomDataTable)
- display: Display widgets (CustomStatic, UsageGauge)
"""

from kubedash.widgets.data import CustomDataTable
from kubedash.widgets.display import CustomStatic, UsageGauge, gauge_text

__all__ = [
    "CustomDataTable",
    "CustomStatic",
    "UsageGauge",
    "gauge_text",
]
