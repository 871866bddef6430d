"""Utility functions for KubeDash TUI."""

from kubedash.utils.resource_parser import (
    format_age,
    format_bytes,
    memory_str_to_bytes,
    parse_cpu,
    parse_timestamp,
)

__all__ = [
    "format_age",
    "format_bytes",
    "memory_str_to_bytes",
    "parse_cpu",
    "parse_timestamp",
]
