"""Keyboard bindings module.

This module provides all keyboard bindings for the KubeDash TUI:

- app: App-level bindings (APP_BINDINGS) and the key to NavKey mapping
"""

from kubedash.keyboard.app import APP_BINDINGS, DIALOG_CANCEL_KEYS, resolve_nav_key

__all__ = [
    "APP_BINDINGS",
    "DIALOG_CANCEL_KEYS",
    "resolve_nav_key",
]
