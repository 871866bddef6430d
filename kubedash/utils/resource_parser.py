"""Parsing helpers for Kubernetes quantities and timestamps.

- CPU quantities are parsed to cores (float).
- Memory quantities are parsed to bytes (float).
- Creation timestamps are parsed to aware UTC datetimes.
"""

from __future__ import annotations

from datetime import datetime, timezone

# Suffix multipliers for memory_str_to_bytes(), binary before decimal so that
# "Mi" is matched before "M".
_MEMORY_BYTES_MULTIPLIERS: tuple[tuple[str, int], ...] = (
    ("Ki", 1024),
    ("Mi", 1024**2),
    ("Gi", 1024**3),
    ("Ti", 1024**4),
    ("k", 1000),
    ("M", 1000**2),
    ("G", 1000**3),
    ("T", 1000**4),
)

_CPU_DIVISORS: tuple[tuple[str, int], ...] = (
    ("n", 1_000_000_000),
    ("u", 1_000_000),
    ("m", 1000),
)

_BYTE_UNITS: tuple[str, ...] = ("B", "Ki", "Mi", "Gi", "Ti")


def parse_cpu(cpu_str: str) -> float:
    """Parse a CPU quantity to cores.

    Handles nanocores ("250000000n"), microcores ("250000u"), millicores
    ("250m") and plain cores ("0.25", "2"). Returns 0.0 on parse error.
    """
    if not cpu_str:
        return 0.0

    cpu_str = str(cpu_str).strip()
    for suffix, divisor in _CPU_DIVISORS:
        if cpu_str.endswith(suffix):
            try:
                return float(cpu_str[: -len(suffix)]) / divisor
            except ValueError:
                return 0.0

    try:
        return float(cpu_str)
    except ValueError:
        return 0.0


def memory_str_to_bytes(memory_str: str) -> float:
    """Convert a memory quantity ("512Mi", "1Gi", "1000k") to bytes.

    Returns 0.0 on parse error or empty string.
    """
    if not memory_str:
        return 0.0

    memory_str = str(memory_str).strip()
    for suffix, mult in _MEMORY_BYTES_MULTIPLIERS:
        if memory_str.endswith(suffix):
            try:
                return float(memory_str[: -len(suffix)]) * mult
            except ValueError:
                return 0.0

    try:
        return float(memory_str)
    except ValueError:
        return 0.0


def format_bytes(value: float) -> str:
    """Format a byte count with binary units ("1.5Gi")."""
    amount = float(value)
    for unit in _BYTE_UNITS[:-1]:
        if abs(amount) < 1024:
            return f"{amount:.0f}{unit}" if unit == "B" else f"{amount:.1f}{unit}"
        amount /= 1024
    return f"{amount:.1f}{_BYTE_UNITS[-1]}"


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an RFC 3339 API timestamp ("2024-01-02T03:04:05Z")."""
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_age(seconds: float | None) -> str:
    """Format an age the way kubectl does: "45s", "12m", "3h", "5d"."""
    if seconds is None:
        return "<unknown>"
    total = int(seconds)
    if total < 60:
        return f"{total}s"
    minutes, secs = divmod(total, 60)
    if minutes < 10:
        return f"{minutes}m{secs}s" if secs else f"{minutes}m"
    if minutes < 60:
        return f"{minutes}m"
    hours, mins = divmod(minutes, 60)
    if hours < 8:
        return f"{hours}h{mins}m" if mins else f"{hours}h"
    if hours < 48:
        return f"{hours}h"
    days, rem_hours = divmod(hours, 24)
    if days < 8 and rem_hours:
        return f"{days}d{rem_hours}h"
    return f"{days}d"


__all__ = [
    "format_age",
    "format_bytes",
    "memory_str_to_bytes",
    "parse_cpu",
    "parse_timestamp",
]
