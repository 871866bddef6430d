"""Tests for kubectl error classification."""

from __future__ import annotations

import pytest

from kubedash.constants.enums import FetchErrorKind
from kubedash.controllers.cluster.errors import (
    ClusterAuthError,
    ClusterConnectionError,
    ClusterServerError,
    ClusterTimeoutError,
    ContextResolutionError,
    ResourceNotFoundError,
    ResourceNotServedError,
    classify_kubectl_error,
    summarize_error,
)


class TestClassifyKubectlError:
    """Tests for classify_kubectl_error."""

    @pytest.mark.parametrize(
        ("stderr", "expected"),
        [
            (
                'Error from server (Forbidden): secrets is forbidden: User "dev" '
                'cannot list resource "secrets" in API group "" at the cluster scope',
                ClusterAuthError,
            ),
            ("error: You must be logged in to the server (Unauthorized)", ClusterAuthError),
            (
                'error: the server doesn\'t have a resource type "cronjobs"',
                ResourceNotServedError,
            ),
            ("Error from server (NotFound): the server could not find the requested resource", ResourceNotServedError),
            ('Error from server (NotFound): pods "web-0" not found', ResourceNotFoundError),
            ("Unable to connect to the server: dial tcp 10.0.0.1:6443: connect: connection refused", ClusterConnectionError),
            ("error: context deadline exceeded", ClusterTimeoutError),
            ('error: context "missing" does not exist', ContextResolutionError),
            ("Error from server (InternalError): etcdserver: leader changed", ClusterServerError),
        ],
    )
    def test_classification(self, stderr: str, expected: type) -> None:
        assert type(classify_kubectl_error(stderr)) is expected

    def test_category_matches_fetch_error_kind(self) -> None:
        """Test every error class exposes the FetchErrorKind it maps to."""
        assert ClusterAuthError.category is FetchErrorKind.AUTH_DENIED
        assert ClusterTimeoutError.category is FetchErrorKind.TIMEOUT
        assert ResourceNotServedError.category is FetchErrorKind.NOT_SERVED
        assert ResourceNotFoundError.category is FetchErrorKind.NOT_FOUND
        assert ClusterConnectionError.category is FetchErrorKind.CONNECTION
        assert ClusterServerError.category is FetchErrorKind.SERVER

    def test_message_is_summarized(self) -> None:
        error = classify_kubectl_error(
            "I0101 noisy klog line\nerror: You must be logged in to the server (Unauthorized)\n"
        )
        assert str(error) == "You must be logged in to the server (Unauthorized)"


class TestSummarizeError:
    """Tests for summarize_error."""

    def test_empty_uses_fallback(self) -> None:
        assert summarize_error("") == "kubectl command failed"
        assert summarize_error("   \n ", fallback="nope") == "nope"

    def test_prefers_error_line(self) -> None:
        raw = "W0101 warning\nerror: something broke\ntrailing detail"
        assert summarize_error(raw) == "something broke"

    def test_long_message_truncated(self) -> None:
        summary = summarize_error("error: " + "x" * 500)
        assert summary.endswith("...")
        assert len(summary) <= 160
