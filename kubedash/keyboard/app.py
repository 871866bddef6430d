"""App-level keyboard bindings.

Every binding forwards to ``action_nav`` (or ``action_tab``) on the app, which
turns the key into a KeyPress event for the navigation state machine.
"""

from textual.binding import Binding

from kubedash.constants.enums import NavKey

# ============================================================================
# Textual Binding objects for app-level bindings
# ============================================================================

APP_BINDINGS: list[Binding] = [
    Binding("up,k", "nav('up')", "Up", show=False),
    Binding("down,j", "nav('down')", "Down", show=False),
    Binding("enter", "nav('select')", "Open"),
    Binding("escape", "nav('back')", "Back", priority=True),
    Binding("tab", "nav('switch-tab')", "Next view", priority=True),
    Binding("n", "nav('switch-namespace')", "Namespace"),
    Binding("c", "nav('switch-context')", "Context"),
    Binding("d,delete", "nav('delete')", "Delete"),
    Binding("y", "nav('confirm')", "Confirm", show=False),
    Binding("p", "nav('pause-toggle')", "Pause"),
    Binding("r", "nav('refresh')", "Refresh"),
    Binding("plus", "nav('slower')", "Slower", show=False),
    Binding("minus", "nav('faster')", "Faster", show=False),
    Binding("?", "nav('help')", "Help"),
    Binding("q,ctrl+c", "nav('quit')", "Quit", priority=True),
    *(
        Binding(str(number), f"tab({number - 1})", f"Tab {number}", show=False)
        for number in range(1, 10)
    ),
]

# Keys that mean "cancel" while a confirm dialog is open.
DIALOG_CANCEL_KEYS: frozenset[NavKey] = frozenset(
    {NavKey.BACK, NavKey.SWITCH_NAMESPACE}
)


def resolve_nav_key(name: str, *, dialog_open: bool = False) -> NavKey | None:
    """Map a binding action argument to a NavKey.

    ``n`` and ``escape`` double as "cancel" while a confirm dialog is open.
    """
    try:
        key = NavKey(name)
    except ValueError:
        return None
    if dialog_open and key in DIALOG_CANCEL_KEYS:
        return NavKey.CANCEL
    return key


__all__ = [
    "APP_BINDINGS",
    "DIALOG_CANCEL_KEYS",
    "resolve_nav_key",
]
