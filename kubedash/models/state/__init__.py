"""Application settings and navigation state."""

from kubedash.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
    RefreshConfig,
)
from kubedash.models.state.config_manager import ConfigManager
from kubedash.models.state.navigation_state import (
    NO_OVERLAY,
    NavigationState,
    Overlay,
    ViewFrame,
)

__all__ = [
    "NO_OVERLAY",
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
    "NavigationState",
    "Overlay",
    "RefreshConfig",
    "ViewFrame",
]
