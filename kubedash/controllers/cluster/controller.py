"""Cluster controller backed by the kubectl CLI.

This module implements the cluster client contract by shelling out to
``kubectl`` with JSON output. Commands run in worker threads through
``asyncio.to_thread`` so the UI event loop never waits on the network.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import subprocess
from typing import Any

from kubedash.constants.defaults import ALL_NAMESPACES
from kubedash.constants.enums import ResourceKind
from kubedash.constants.resources import kind_spec
from kubedash.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
)
from kubedash.controllers.base.base_controller import BaseController
from kubedash.controllers.cluster.errors import (
    ClusterClientError,
    ClusterConnectionError,
    ClusterServerError,
    ClusterTimeoutError,
    ContextResolutionError,
    classify_kubectl_error,
)
from kubedash.models.core.context_info import ContextInfo

logger = logging.getLogger(__name__)


class ClusterController(BaseController):
    """kubectl-backed cluster client."""

    _NODE_METRICS_PATH = "/apis/metrics.k8s.io/v1beta1/nodes"

    def __init__(
        self,
        kubectl_binary: str = "kubectl",
        request_timeout: str = CLUSTER_REQUEST_TIMEOUT,
        command_timeout: int = KUBECTL_COMMAND_TIMEOUT,
    ) -> None:
        """Initialize the cluster controller.

        Args:
            kubectl_binary: kubectl executable name or path.
            request_timeout: Value passed as ``--request-timeout``.
            command_timeout: Process-level timeout in seconds.
        """
        self.kubectl_binary = kubectl_binary
        self.request_timeout = request_timeout
        self.command_timeout = command_timeout

    # =========================================================================
    # kubectl runner
    # =========================================================================

    def _command_timeout(self) -> int:
        # During pytest runs, keep subprocess timeouts tighter so background
        # worker threads don't exceed per-test timeout budgets at teardown.
        if os.environ.get("PYTEST_CURRENT_TEST"):
            return min(self.command_timeout, 10)
        return self.command_timeout

    def _build_command(self, args: tuple[str, ...], context: str | None) -> list[str]:
        cmd = [self.kubectl_binary]
        if context:
            cmd.extend(["--context", context])
        cmd.extend(args)
        return cmd

    def _run_kubectl_sync(self, args: tuple[str, ...], context: str | None) -> str:
        """Run a kubectl command synchronously (thread-safe wrapper target)."""
        cmd = self._build_command(args, context)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._command_timeout(),
            )
        except subprocess.TimeoutExpired as exc:
            raise ClusterTimeoutError(
                f"kubectl {' '.join(args[:2])} timed out after {exc.timeout}s"
            ) from exc
        except OSError as exc:
            raise ClusterConnectionError(
                f"Unable to run {self.kubectl_binary}: {exc}"
            ) from exc

        if result.returncode != 0:
            raise classify_kubectl_error(result.stderr or result.stdout)
        return result.stdout

    async def _run_kubectl(self, args: tuple[str, ...], context: str | None = None) -> str:
        logger.debug("kubectl %s (context=%s)", " ".join(args), context or "current")
        return await asyncio.to_thread(self._run_kubectl_sync, args, context)

    async def _run_kubectl_json(
        self,
        args: tuple[str, ...],
        context: str | None = None,
    ) -> dict[str, Any]:
        output = await self._run_kubectl(args, context)
        if not output.strip():
            return {}
        try:
            data = json.loads(output)
        except json.JSONDecodeError as exc:
            raise ClusterServerError(f"Malformed kubectl JSON output: {exc}") from exc
        if not isinstance(data, dict):
            raise ClusterServerError("Unexpected kubectl JSON output")
        return data

    # =========================================================================
    # Argument builders
    # =========================================================================

    def build_list_args(self, kind: ResourceKind, scope: str) -> tuple[str, ...]:
        """Build kubectl arguments listing ``kind`` within ``scope``."""
        if kind is ResourceKind.CONTEXTS:
            return ("config", "view", "-o", "json")
        if kind is ResourceKind.NODE_METRICS:
            return (
                "get",
                "--raw",
                self._NODE_METRICS_PATH,
                f"--request-timeout={self.request_timeout}",
            )

        spec = kind_spec(kind)
        args: list[str] = ["get", spec.kubectl_resource]
        if spec.namespaced:
            if scope and scope != ALL_NAMESPACES:
                args.extend(["-n", scope])
            else:
                args.append("--all-namespaces")
        args.extend(["-o", "json", f"--request-timeout={self.request_timeout}"])
        return tuple(args)

    def build_delete_args(
        self,
        kind: ResourceKind,
        namespace: str | None,
        name: str,
    ) -> tuple[str, ...]:
        spec = kind_spec(kind)
        if not spec.deletable:
            raise ClusterClientError(f"{spec.label} cannot be deleted")
        args: list[str] = ["delete", spec.kubectl_resource, name]
        if spec.namespaced and namespace:
            args.extend(["-n", namespace])
        args.extend(["--wait=false", f"--request-timeout={self.request_timeout}"])
        return tuple(args)

    # =========================================================================
    # Cluster client contract
    # =========================================================================

    async def list_resources(
        self,
        kind: ResourceKind,
        scope: str,
        context: str | None,
    ) -> list[dict[str, Any]]:
        data = await self._run_kubectl_json(self.build_list_args(kind, scope), context)
        if kind is ResourceKind.CONTEXTS:
            return self._context_items(data)
        items = data.get("items", [])
        return [item for item in items if isinstance(item, dict)]

    async def delete_resource(
        self,
        kind: ResourceKind,
        namespace: str | None,
        name: str,
        context: str | None,
    ) -> None:
        await self._run_kubectl(self.build_delete_args(kind, namespace, name), context)
        logger.info(
            "Deleted %s %s%s",
            kind.value,
            f"{namespace}/" if namespace else "",
            name,
        )

    async def list_contexts(self) -> list[ContextInfo]:
        data = await self._run_kubectl_json(("config", "view", "-o", "json"))
        return [self._context_info(item) for item in self._context_items(data)]

    async def resolve_context(self, name: str | None) -> ContextInfo:
        contexts = await self.list_contexts()
        if not contexts:
            raise ContextResolutionError("No contexts found in kubeconfig")
        for info in contexts:
            if (name and info.name == name) or (not name and info.is_current):
                return info
        if name:
            raise ContextResolutionError(f'context "{name}" does not exist')
        raise ContextResolutionError("No current context is set in kubeconfig")

    # =========================================================================
    # kubeconfig parsing
    # =========================================================================

    @staticmethod
    def _context_items(config: dict[str, Any]) -> list[dict[str, Any]]:
        """Flatten ``kubectl config view`` contexts into list items."""
        current = config.get("current-context") or ""
        items: list[dict[str, Any]] = []
        for entry in config.get("contexts") or []:
            if not isinstance(entry, dict) or not entry.get("name"):
                continue
            context = entry.get("context") or {}
            items.append(
                {
                    "name": entry["name"],
                    "cluster": context.get("cluster", ""),
                    "user": context.get("user", ""),
                    "namespace": context.get("namespace"),
                    "current": entry["name"] == current,
                }
            )
        return items

    @staticmethod
    def _context_info(item: dict[str, Any]) -> ContextInfo:
        return ContextInfo(
            name=item["name"],
            cluster=item.get("cluster", ""),
            user=item.get("user", ""),
            namespace=item.get("namespace"),
            is_current=bool(item.get("current")),
        )


__all__ = ["ClusterController"]
