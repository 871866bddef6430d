"""Display widgets for KubeDash TUI.

This module provides display widgets that show content:
- CustomStatic: Static text display widget
- UsageGauge: Percentage bar for node utilization
"""

from kubedash.widgets.display.custom_static import CustomStatic
from kubedash.widgets.display.usage_gauge import UsageGauge, gauge_text

__all__ = [
    "CustomStatic",
    "UsageGauge",
    "gauge_text",
]
