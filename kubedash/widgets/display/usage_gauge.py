"""UsageGauge widget - labelled percentage bar for node utilization."""

from __future__ import annotations

from rich.text import Text

from kubedash.widgets.display.custom_static import CustomStatic


def gauge_text(label: str, percent: float | None, message: str = "", width: int = 20) -> Text:
    """Build a ``label [#####.....] 42.0%`` line, or ``label message``."""
    text = Text(f"{label:<7}", style="bold")
    if percent is None:
        text.append(message or "n/a", style="dim")
        return text

    filled = round(width * max(0.0, min(percent, 100.0)) / 100)
    if percent >= 90:
        style = "red"
    elif percent >= 70:
        style = "yellow"
    else:
        style = "green"
    text.append("[")
    text.append("#" * filled, style=style)
    text.append("." * (width - filled), style="dim")
    text.append(f"] {percent:5.1f}%")
    return text


class UsageGauge(CustomStatic):
    """Percentage gauge.

    CSS Classes: widget-usage-gauge
    """

    def __init__(self, label: str, *, id: str | None = None, classes: str = "") -> None:
        super().__init__(
            gauge_text(label, None),
            id=id,
            classes=f"widget-usage-gauge {classes}".strip(),
        )
        self._label = label
        self._value: tuple[float | None, str] = (None, "")

    @property
    def percent(self) -> float | None:
        return self._value[0]

    def set_value(self, percent: float | None, message: str = "") -> None:
        if (percent, message) == self._value:
            return
        self._value = (percent, message)
        self.update(gauge_text(self._label, percent, message))
