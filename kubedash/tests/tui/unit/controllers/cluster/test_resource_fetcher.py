"""Tests for ResourceFetcher."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from kubedash.constants.enums import FetchErrorKind, ResourceKind
from kubedash.controllers.cluster.errors import (
    ClusterAuthError,
    ClusterTimeoutError,
    ResourceNotServedError,
)
from kubedash.controllers.cluster.fetchers.resource_fetcher import ResourceFetcher


class TestResourceFetcher:
    """Tests for ResourceFetcher.fetch."""

    @pytest.mark.asyncio
    async def test_success_returns_records_in_api_order(self, fake_client, pod_items) -> None:
        fake_client.responses[ResourceKind.PODS] = pod_items(3)
        fetcher = ResourceFetcher(fake_client)

        outcome = await fetcher.fetch(ResourceKind.PODS, "default", "kind-dev")

        assert outcome.ok
        assert [r.name for r in outcome.records] == ["web-0", "web-1", "web-2"]
        assert fake_client.list_calls == [(ResourceKind.PODS, "default", "kind-dev")]

    @pytest.mark.asyncio
    async def test_cluster_scoped_kind_ignores_namespace(self, fake_client) -> None:
        """Test cluster-scoped kinds are always listed across all namespaces."""
        fetcher = ResourceFetcher(fake_client)

        await fetcher.fetch(ResourceKind.NODES, "default", "kind-dev")

        assert fake_client.list_calls == [(ResourceKind.NODES, "all", "kind-dev")]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (ClusterAuthError("secrets is forbidden"), FetchErrorKind.AUTH_DENIED),
            (ClusterTimeoutError("timed out"), FetchErrorKind.TIMEOUT),
            (ResourceNotServedError("no matches for kind"), FetchErrorKind.NOT_SERVED),
        ],
    )
    async def test_client_errors_become_tagged_outcomes(
        self, fake_client, error, expected: FetchErrorKind
    ) -> None:
        """Test client errors are returned, never raised."""
        fake_client.responses[ResourceKind.SECRETS] = error
        fetcher = ResourceFetcher(fake_client)

        outcome = await fetcher.fetch(ResourceKind.SECRETS, "all", "kind-dev")

        assert not outcome.ok
        assert outcome.error is not None
        assert outcome.error.kind is expected
        assert outcome.error.message == str(error)

    @pytest.mark.asyncio
    async def test_unusable_data_is_server_error(self) -> None:
        client = AsyncMock()
        client.list_resources.side_effect = TypeError("'NoneType' object is not iterable")
        fetcher = ResourceFetcher(client)

        outcome = await fetcher.fetch(ResourceKind.PODS, "all", None)

        assert outcome.error is not None
        assert outcome.error.kind is FetchErrorKind.SERVER

    @pytest.mark.asyncio
    async def test_duplicates_dropped(self, fake_client, pod_items) -> None:
        """Test the first occurrence of a duplicated identity wins."""
        items = pod_items(2)
        items.append(dict(items[0]))
        fake_client.responses[ResourceKind.PODS] = items
        fetcher = ResourceFetcher(fake_client)

        outcome = await fetcher.fetch(ResourceKind.PODS, "all", "kind-dev")

        assert [r.name for r in outcome.records] == ["web-0", "web-1"]

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, fake_client) -> None:
        fake_client.delays[ResourceKind.PODS] = 5
        fetcher = ResourceFetcher(fake_client)
        task = asyncio.create_task(fetcher.fetch(ResourceKind.PODS, "all", "kind-dev"))
        await asyncio.sleep(0.01)

        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
