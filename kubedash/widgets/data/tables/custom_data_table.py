"""CustomDataTable widget - standardized wrapper around Textual's DataTable."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING

from textual.containers import Container
from textual.widgets import DataTable as TextualDataTable

from kubedash.constants.limits import MAX_ROWS_DISPLAY

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from textual.app import ComposeResult


class CustomDataTable(Container):
    """Read-only row table driven entirely by rendered frames.

    The inner DataTable never takes focus: keys go to the app bindings and
    the state machine, and the table only mirrors the selection it is given.

    CSS Classes: widget-custom-data-table

    Example:
        ```python
        table = CustomDataTable(id="dashboard-table")
        table.set_rows(("Name", "Status"), [("web-1", "Running")], selected=0)
        ```
    """

    DEFAULT_CSS = """
    CustomDataTable {
        height: 1fr;
        width: 1fr;
        min-width: 0;
        min-height: 3;
        background: $surface;
    }
    CustomDataTable > DataTable {
        height: 1fr;
        width: 1fr;
        min-width: 0;
        border: none;
        background: transparent;
        overflow-x: auto;
        overflow-y: auto;
    }
    """

    def __init__(
        self,
        *,
        id: str | None = None,
        classes: str = "",
        zebra_stripes: bool = True,
    ) -> None:
        """Initialize the custom data table wrapper.

        Args:
            id: Widget ID.
            classes: CSS classes (widget-custom-data-table is automatically added).
            zebra_stripes: Whether to display alternating row colors.
        """
        super().__init__(id=id, classes=f"widget-custom-data-table {classes}".strip())
        self._zebra_stripes = zebra_stripes
        self._inner_widget: TextualDataTable | None = None
        self._columns: tuple[str, ...] = ()
        self._rows: tuple[tuple[str, ...], ...] = ()

    def compose(self) -> ComposeResult:
        """Compose the data table with Textual's DataTable widget."""
        table = TextualDataTable(cursor_type="row")
        table.can_focus = False
        table.zebra_stripes = self._zebra_stripes
        table.styles.scrollbar_size_horizontal = 1
        table.styles.scrollbar_size_vertical = 2
        self._inner_widget = table
        yield table

    @property
    def data_table(self) -> TextualDataTable | None:
        """Get the underlying Textual DataTable widget, None before compose."""
        return self._inner_widget

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    @contextmanager
    def batch_update(self):
        """Sync proxy for the inner DataTable's batch_update() context manager."""
        if self._inner_widget is not None:
            with self._inner_widget.batch_update():
                yield
        else:
            yield

    def set_rows(
        self,
        columns: Sequence[str],
        rows: Sequence[Sequence[str]],
        selected: int | None = None,
    ) -> None:
        """Replace the table contents and move the cursor to ``selected``.

        Rows are only rebuilt when columns or cell values changed, so a
        refresh that returns identical data keeps the scroll position.
        """
        columns = tuple(columns)
        rows = tuple(tuple(row) for row in rows[:MAX_ROWS_DISPLAY])
        table = self.data_table
        if table is None:
            logger.debug("Dropping %d rows for %s before compose", len(rows), self.id)
            return

        if columns != self._columns or rows != self._rows:
            with self.batch_update():
                if columns != self._columns:
                    table.clear(columns=True)
                    for label in columns:
                        table.add_column(label, key=label)
                else:
                    table.clear()
                for index, row in enumerate(rows):
                    table.add_row(*row, key=str(index))
            self._columns, self._rows = columns, rows

        if selected is not None and 0 <= selected < len(rows):
            table.move_cursor(row=selected)

    def clear_rows(self) -> None:
        self.set_rows((), ())


__all__ = ["CustomDataTable"]
