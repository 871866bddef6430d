"""Cluster client error taxonomy and kubectl stderr classification."""

from __future__ import annotations

from typing import ClassVar

from kubedash.constants.enums import FetchErrorKind
from kubedash.constants.limits import MAX_ERROR_MESSAGE_LENGTH


class ClusterClientError(Exception):
    """Base error raised by cluster client operations."""

    category: ClassVar[FetchErrorKind] = FetchErrorKind.SERVER


class ClusterConnectionError(ClusterClientError):
    category = FetchErrorKind.CONNECTION


class ClusterTimeoutError(ClusterClientError):
    category = FetchErrorKind.TIMEOUT


class ClusterAuthError(ClusterClientError):
    category = FetchErrorKind.AUTH_DENIED


class ResourceNotServedError(ClusterClientError):
    category = FetchErrorKind.NOT_SERVED


class ResourceNotFoundError(ClusterClientError):
    category = FetchErrorKind.NOT_FOUND


class ClusterServerError(ClusterClientError):
    category = FetchErrorKind.SERVER


class ContextResolutionError(ClusterClientError):
    """The requested context is unknown or its credentials are unusable."""

    category = FetchErrorKind.CONNECTION


_CONTEXT_TOKENS = (
    "context was not found",
    "no context exists",
    "does not exist",
    "invalid configuration",
)
_AUTH_TOKENS = (
    "forbidden",
    "unauthorized",
    "you must be logged in",
)
_NOT_SERVED_TOKENS = (
    "doesn't have a resource type",
    "the server could not find the requested resource",
    "no matches for kind",
    "metrics api not available",
    "metrics not available yet",
)
_NOT_FOUND_TOKENS = (
    "(notfound)",
    "not found",
)
_TIMEOUT_TOKENS = (
    "timed out",
    "timeout",
    "deadline exceeded",
    "i/o timeout",
)
_CONNECTION_TOKENS = (
    "unable to connect to the server",
    "connection refused",
    "no such host",
    "connection reset by peer",
    "network is unreachable",
    "certificate",
    "eof",
)

_PREFERRED_LINE_TOKENS = (
    "unable to connect to the server",
    "you must be logged in",
    "context deadline exceeded",
    "timed out",
    "certificate",
    "no such host",
    "forbidden",
    "unauthorized",
)


def summarize_error(raw_message: str, fallback: str = "kubectl command failed") -> str:
    """Extract a concise, user-facing line from kubectl output."""
    raw_message = (raw_message or "").strip()
    if not raw_message:
        return fallback

    lines = [line.strip() for line in raw_message.splitlines() if line.strip()]
    if not lines:
        return fallback

    selected_line = lines[-1]
    for line in reversed(lines):
        lower_line = line.lower()
        if line.startswith("error:") or line.startswith("Error from server") or any(
            token in lower_line for token in _PREFERRED_LINE_TOKENS
        ):
            selected_line = line
            break

    cleaned = selected_line.removeprefix("error:").strip()
    if len(cleaned) > MAX_ERROR_MESSAGE_LENGTH:
        return f"{cleaned[: MAX_ERROR_MESSAGE_LENGTH - 3].rstrip()}..."
    return cleaned or fallback


def classify_kubectl_error(stderr: str) -> ClusterClientError:
    """Map kubectl stderr to the matching ClusterClientError subclass."""
    message = summarize_error(stderr)
    text = (stderr or "").lower()

    # Order matters: "forbidden" responses also mention the resource name,
    # and "not found" appears inside several other messages.
    if "context" in text and any(token in text for token in _CONTEXT_TOKENS):
        return ContextResolutionError(message)
    if any(token in text for token in _AUTH_TOKENS):
        return ClusterAuthError(message)
    if any(token in text for token in _NOT_SERVED_TOKENS):
        return ResourceNotServedError(message)
    if any(token in text for token in _TIMEOUT_TOKENS):
        return ClusterTimeoutError(message)
    if any(token in text for token in _CONNECTION_TOKENS):
        return ClusterConnectionError(message)
    if any(token in text for token in _NOT_FOUND_TOKENS):
        return ResourceNotFoundError(message)
    return ClusterServerError(message)


__all__ = [
    "ClusterAuthError",
    "ClusterClientError",
    "ClusterConnectionError",
    "ClusterServerError",
    "ClusterTimeoutError",
    "ContextResolutionError",
    "ResourceNotFoundError",
    "ResourceNotServedError",
    "classify_kubectl_error",
    "summarize_error",
]
