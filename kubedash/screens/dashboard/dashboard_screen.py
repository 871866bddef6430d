"""Dashboard screen - draws Frames produced by the presenter."""

from __future__ import annotations

import logging
from contextlib import suppress

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.screen import Screen

from kubedash.constants.enums import OverlayKind, PaneKind
from kubedash.models.core.context_info import CliToolInfo
from kubedash.screens.dashboard.config import (
    ID_CLI_PANEL,
    ID_CONTEXT_PANEL,
    ID_FOOTER,
    ID_MESSAGE,
    ID_OVERLAY,
    ID_PANE_TITLE,
    ID_TABLE,
    ID_TABS,
    ID_UTILIZATION_PANEL,
)
from kubedash.screens.dashboard.presenter import Frame, HeaderInfo, TabInfo
from kubedash.widgets import CustomDataTable, CustomStatic, UsageGauge

logger = logging.getLogger(__name__)


def format_header(header: HeaderInfo) -> str:
    lines = [
        f"[b]Context:[/b] {escape(header.context)}   {header.status}",
        f"[b]Cluster:[/b] {escape(header.cluster or '-')}",
        f"[b]User:[/b] {escape(header.user or '-')}",
        f"[b]Namespace:[/b] {escape(header.namespace)}   "
        f"[dim]#{header.sequence} every {header.refresh_every}[/dim]",
    ]
    return "\n".join(lines)


def format_tabs(tabs: tuple[TabInfo, ...]) -> str:
    parts = []
    for index, tab in enumerate(tabs, start=1):
        label = f"{index}:{tab.label}"
        if tab.marker:
            label = f"{label}{tab.marker}"
        parts.append(f"[reverse b] {label} [/]" if tab.active else f" {label} ")
    return "".join(parts)


def format_cli_info(tools: list[CliToolInfo]) -> str:
    lines = ["[b]CLI Info[/b]"]
    for tool in tools:
        style = "green" if tool.available else "red"
        lines.append(f"{tool.name:<8}[{style}]{escape(tool.version)}[/{style}]")
    return "\n".join(lines)


class DashboardScreen(Screen[None]):
    """Single dashboard screen: info panels, tab bar, active pane, overlay."""

    DEFAULT_CSS = """
    DashboardScreen {
        layout: vertical;
    }
    #dashboard-top {
        height: 6;
    }
    #dashboard-top > * {
        border: round $primary;
        padding: 0 1;
        height: 6;
    }
    #dashboard-context {
        width: 2fr;
    }
    #dashboard-cli {
        width: 1fr;
    }
    #dashboard-utilization {
        width: 2fr;
    }
    #dashboard-tabs {
        height: 1;
        margin: 0 1;
    }
    #dashboard-pane {
        border: round $accent;
        height: 1fr;
    }
    #dashboard-pane-title {
        text-style: bold;
        padding: 0 1;
    }
    #dashboard-message {
        padding: 1 2;
        height: 1fr;
    }
    #dashboard-message.pane-error {
        color: $error;
    }
    #dashboard-overlay {
        dock: bottom;
        display: none;
        border: heavy $warning;
        background: $panel;
        padding: 0 1;
        margin: 0 4 2 4;
    }
    #dashboard-overlay.visible {
        display: block;
    }
    #dashboard-overlay.blocking {
        border: heavy $error;
    }
    #dashboard-footer {
        dock: bottom;
        height: 1;
        color: $text-muted;
        padding: 0 1;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self.last_frame: Frame | None = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="dashboard-top"):
            yield CustomStatic("", id=ID_CONTEXT_PANEL)
            yield CustomStatic("[b]CLI Info[/b]", id=ID_CLI_PANEL)
            with Vertical(id=ID_UTILIZATION_PANEL):
                yield CustomStatic("[b]Node utilization[/b]")
                yield UsageGauge("CPU", id="gauge-cpu")
                yield UsageGauge("Memory", id="gauge-memory")
        yield CustomStatic("", id=ID_TABS)
        with Vertical(id="dashboard-pane"):
            yield CustomStatic("", id=ID_PANE_TITLE)
            yield CustomDataTable(id=ID_TABLE)
            yield CustomStatic("", id=ID_MESSAGE)
        yield CustomStatic("", id=ID_OVERLAY)
        yield CustomStatic("", id=ID_FOOTER, markup=False)

    # =========================================================================
    # Drawing
    # =========================================================================

    def apply_frame(self, frame: Frame) -> None:
        """Update every widget from ``frame``."""
        self.last_frame = frame
        try:
            self._apply_header(frame)
            self._apply_pane(frame)
            self._apply_overlay(frame)
        except NoMatches:
            # Frame arrived before compose finished; the next one redraws.
            logger.debug("Dashboard widgets not mounted yet")

    def _apply_header(self, frame: Frame) -> None:
        self.query_one(f"#{ID_CONTEXT_PANEL}", CustomStatic).update(format_header(frame.header))
        self.query_one(f"#{ID_TABS}", CustomStatic).update(format_tabs(frame.tabs))
        usage = frame.utilization
        self.query_one("#gauge-cpu", UsageGauge).set_value(usage.cpu_percent, usage.message)
        self.query_one("#gauge-memory", UsageGauge).set_value(
            usage.memory_percent, usage.message
        )
        self.query_one(f"#{ID_FOOTER}", CustomStatic).update(frame.footer)

    def _apply_pane(self, frame: Frame) -> None:
        pane = frame.pane
        table = self.query_one(f"#{ID_TABLE}", CustomDataTable)
        message = self.query_one(f"#{ID_MESSAGE}", CustomStatic)
        self.query_one(f"#{ID_PANE_TITLE}", CustomStatic).update(escape(pane.title))

        is_table = pane.kind is PaneKind.TABLE
        table.display = is_table
        message.display = not is_table
        message.set_class(pane.kind is PaneKind.ERROR, "pane-error")
        if is_table:
            table.set_rows(pane.columns, pane.rows, pane.selected)
            return
        table.clear_rows()
        if pane.kind is PaneKind.DETAIL and pane.detail_lines:
            message.update(escape("\n".join(pane.detail_lines)))
        else:
            message.update(escape(pane.message))

    def _apply_overlay(self, frame: Frame) -> None:
        overlay = self.query_one(f"#{ID_OVERLAY}", CustomStatic)
        visible = frame.overlay_kind is not OverlayKind.NONE
        overlay.set_class(visible, "visible")
        overlay.set_class(frame.blocking, "blocking")
        overlay.update(escape(frame.overlay_text) if visible else "")

    def set_cli_info(self, tools: list[CliToolInfo]) -> None:
        with suppress(NoMatches):
            self.query_one(f"#{ID_CLI_PANEL}", CustomStatic).update(format_cli_info(tools))


__all__ = ["DashboardScreen", "format_cli_info", "format_header", "format_tabs"]
