"""CustomStatic widget - Static with the standard widget CSS class."""

from __future__ import annotations

from rich.console import RenderableType
from textual.widgets import Static


class CustomStatic(Static):
    """Static text display used for panels, titles and messages.

    CSS Classes: widget-custom-static
    """

    DEFAULT_CSS = """
    CustomStatic {
        height: auto;
        width: 1fr;
    }
    """

    def __init__(
        self,
        content: RenderableType = "",
        *,
        markup: bool = True,
        id: str | None = None,
        classes: str = "",
    ) -> None:
        super().__init__(
            content,
            markup=markup,
            id=id,
            classes=f"widget-custom-static {classes}".strip(),
        )
        self._text = content if isinstance(content, str) else ""

    @property
    def text(self) -> str:
        """Last plain string passed to the widget."""
        return self._text

    def update(self, content: RenderableType = "") -> None:
        if isinstance(content, str):
            if content == self._text:
                return
            self._text = content
        super().update(content)
