"""Base controller defining the cluster client contract for KubeDash.

The refresh scheduler, resource fetcher and event loop only talk to the
cluster through this interface, so tests can substitute an in-memory client
and the kubectl-backed implementation stays an edge adapter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from kubedash.constants.enums import ResourceKind
from kubedash.models.core.context_info import ContextInfo


class BaseController(ABC):
    """Cluster client contract.

    Every method raises a ``ClusterClientError`` subclass on failure; the
    subclass tells callers whether the problem was connectivity, a timeout,
    an authorization denial, an unserved kind, a missing object or a
    server-side fault.
    """

    @abstractmethod
    async def list_resources(
        self,
        kind: ResourceKind,
        scope: str,
        context: str | None,
    ) -> list[dict[str, Any]]:
        """List raw API objects of ``kind`` within ``scope``.

        Args:
            kind: Resource kind to list.
            scope: Namespace name or "all".
            context: Resolved context name.

        Returns:
            Raw objects in API order.
        """
        ...

    @abstractmethod
    async def delete_resource(
        self,
        kind: ResourceKind,
        namespace: str | None,
        name: str,
        context: str | None,
    ) -> None:
        """Delete one object."""
        ...

    @abstractmethod
    async def resolve_context(self, name: str | None) -> ContextInfo:
        """Resolve ``name`` (or the current context when None) to a handle.

        Raises:
            ContextResolutionError: The context does not exist.
        """
        ...

    @abstractmethod
    async def list_contexts(self) -> list[ContextInfo]:
        """Enumerate contexts available to the client."""
        ...

    async def current_context(self) -> ContextInfo:
        """Return the kubeconfig's current context."""
        return await self.resolve_context(None)
