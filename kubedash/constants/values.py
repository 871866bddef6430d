"""Scalar constants for the TUI.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "KubeDash"
APP_VERSION: Final = "0.1.0"

# ============================================================================
# Status markup (rich text display)
# ============================================================================

STATUS_LOADING: Final = "[yellow]loading...[/yellow]"
STATUS_REFRESHING: Final = "[yellow]refreshing[/yellow]"
STATUS_PAUSED: Final = "[magenta]PAUSED[/magenta]"
STATUS_LIVE: Final = "[green]live[/green]"
SPINNER_FRAMES: Final = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

# ============================================================================
# Pane messages
# ============================================================================

EMPTY_PANE_MESSAGE: Final = "No resources found"
LOADING_PANE_MESSAGE: Final = "Loading..."
ACCESS_DENIED_MESSAGE: Final = "Access denied"
DISABLED_SUFFIX: Final = "(disabled until context switch)"
LAST_SUCCESS_PREFIX: Final = "last success"
MISSING_DETAIL_MESSAGE: Final = "Resource no longer exists"
NO_CONTEXT_MESSAGE: Final = "Context information not found"

# ============================================================================
# Paths
# ============================================================================

CONFIG_DIR_NAME: Final = ".kubedash"
SETTINGS_FILE_NAME: Final = "settings.yaml"
LOG_FILE_NAME: Final = "kubedash.log"

__all__ = [
    "ACCESS_DENIED_MESSAGE",
    "APP_TITLE",
    "APP_VERSION",
    "CONFIG_DIR_NAME",
    "DISABLED_SUFFIX",
    "EMPTY_PANE_MESSAGE",
    "LAST_SUCCESS_PREFIX",
    "LOADING_PANE_MESSAGE",
    "LOG_FILE_NAME",
    "MISSING_DETAIL_MESSAGE",
    "NO_CONTEXT_MESSAGE",
    "SETTINGS_FILE_NAME",
    "SPINNER_FRAMES",
    "STATUS_LIVE",
    "STATUS_LOADING",
    "STATUS_PAUSED",
    "STATUS_REFRESHING",
]
