"""KubeDash TUI Screens.

Domain Structure:
    - dashboard/ - The live dashboard: presenter (pure render), config, screen
"""

from __future__ import annotations

from kubedash.screens.dashboard import DashboardScreen

__all__ = [
    "DashboardScreen",
]
