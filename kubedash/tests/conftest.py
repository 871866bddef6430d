"""Shared fixtures for KubeDash tests."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from kubedash.constants.enums import ResourceKind
from kubedash.controllers.base.base_controller import BaseController
from kubedash.controllers.cluster.errors import (
    ClusterClientError,
    ContextResolutionError,
)
from kubedash.models.core.context_info import ContextInfo
from kubedash.models.core.resource_record import ResourceRecord

CREATED_AT = "2024-01-01T00:00:00Z"
NOW = datetime(2024, 1, 1, 1, 0, 0, tzinfo=timezone.utc)


class FakeClusterClient(BaseController):
    """In-memory cluster client.

    ``responses`` maps a kind to the raw items returned for it, or to an
    exception instance raised on every list call. ``delays`` adds an
    ``asyncio.sleep`` before answering.
    """

    def __init__(self, contexts: list[ContextInfo] | None = None) -> None:
        self.contexts = contexts or [
            ContextInfo(name="kind-dev", cluster="kind-dev", user="dev-admin", is_current=True),
            ContextInfo(name="kind-prod", cluster="kind-prod", user="prod-admin"),
        ]
        self.responses: dict[ResourceKind, list[dict[str, Any]] | Exception] = {}
        self.delays: dict[ResourceKind, float] = {}
        self.list_calls: list[tuple[ResourceKind, str, str | None]] = []
        self.deleted: list[tuple[ResourceKind, str | None, str, str | None]] = []
        self.delete_error: ClusterClientError | None = None
        self.resolve_error: ClusterClientError | None = None

    async def list_resources(
        self,
        kind: ResourceKind,
        scope: str,
        context: str | None,
    ) -> list[dict[str, Any]]:
        self.list_calls.append((kind, scope, context))
        delay = self.delays.get(kind)
        if delay:
            await asyncio.sleep(delay)
        response = self.responses.get(kind, [])
        if isinstance(response, Exception):
            raise response
        return list(response)

    async def delete_resource(
        self,
        kind: ResourceKind,
        namespace: str | None,
        name: str,
        context: str | None,
    ) -> None:
        if self.delete_error is not None:
            raise self.delete_error
        self.deleted.append((kind, namespace, name, context))

    async def resolve_context(self, name: str | None) -> ContextInfo:
        if self.resolve_error is not None:
            raise self.resolve_error
        for info in self.contexts:
            if (name and info.name == name) or (not name and info.is_current):
                return info
        raise ContextResolutionError(f'context "{name}" does not exist')

    async def list_contexts(self) -> list[ContextInfo]:
        return list(self.contexts)

    def calls_for(self, kind: ResourceKind) -> list[tuple[ResourceKind, str, str | None]]:
        return [call for call in self.list_calls if call[0] is kind]


def raw_object(name: str, namespace: str | None = None, **extra: Any) -> dict[str, Any]:
    """Minimal ``kubectl -o json`` item."""
    metadata: dict[str, Any] = {"name": name, "creationTimestamp": CREATED_AT}
    if namespace is not None:
        metadata["namespace"] = namespace
    return {"metadata": metadata, **extra}


def raw_pod(name: str, namespace: str = "default", phase: str = "Running") -> dict[str, Any]:
    return raw_object(
        name,
        namespace,
        spec={"nodeName": "node-1", "containers": [{"name": "app"}]},
        status={
            "phase": phase,
            "podIP": "10.0.0.1",
            "containerStatuses": [
                {"name": "app", "ready": phase == "Running", "restartCount": 0}
            ],
        },
    )


def make_record(
    kind: ResourceKind,
    name: str,
    namespace: str | None = None,
    status: str = "",
    **fields: Any,
) -> ResourceRecord:
    return ResourceRecord(
        kind=kind,
        name=name,
        namespace=namespace,
        status=status,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        fields=fields,
    )


@pytest.fixture
def fake_client() -> FakeClusterClient:
    """Create a FakeClusterClient with two contexts."""
    return FakeClusterClient()


@pytest.fixture
def pod_items() -> Callable[..., list[dict[str, Any]]]:
    """Factory for raw pod items: pod_items(3, namespace="default")."""

    def factory(count: int, namespace: str = "default") -> list[dict[str, Any]]:
        return [raw_pod(f"web-{index}", namespace) for index in range(count)]

    return factory


@pytest.fixture
def record() -> Callable[..., ResourceRecord]:
    """Factory for ResourceRecords."""
    return make_record


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def wait_until() -> Callable[..., Awaitable[None]]:
    """Poll ``predicate`` until it holds or fail after ``timeout`` seconds."""

    async def waiter(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not predicate():
            if loop.time() > deadline:
                pytest.fail("condition not met before timeout")
            await asyncio.sleep(0.01)

    return waiter


@pytest.fixture
def raw_item() -> Callable[..., dict[str, Any]]:
    """Factory for raw API items: raw_item("name", "namespace", status={...})."""
    return raw_object
