"""Dashboard screen package."""

from kubedash.screens.dashboard.dashboard_screen import DashboardScreen
from kubedash.screens.dashboard.presenter import Frame, render

__all__ = ["DashboardScreen", "Frame", "render"]
