"""Record parser for cluster controller - turns raw API objects into records.

One parse function per ResourceKind, looked up by tag. Every function takes
the raw object dictionary returned by ``kubectl -o json`` and returns the
kind-specific ``fields`` mapping; common metadata (name, namespace, labels,
creation timestamp) is handled once in :meth:`RecordParser.parse`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from kubedash.constants.enums import NodeStatus, ResourceKind
from kubedash.constants.resources import kind_spec
from kubedash.models.core.resource_record import ResourceRecord
from kubedash.utils.resource_parser import (
    memory_str_to_bytes,
    parse_cpu,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

Fields = dict[str, Any]
_ParseFunc = Callable[[dict[str, Any]], tuple[str, Fields]]


class RecordParser:
    """Parses raw API objects into ResourceRecords."""

    _ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"
    _PRESSURE_CONDITIONS = (
        "MemoryPressure",
        "DiskPressure",
        "PIDPressure",
        "NetworkUnavailable",
    )

    def __init__(self) -> None:
        self._parsers: dict[ResourceKind, _ParseFunc] = {
            ResourceKind.PODS: self._parse_pod,
            ResourceKind.SERVICES: self._parse_service,
            ResourceKind.NODES: self._parse_node,
            ResourceKind.NAMESPACES: self._parse_namespace,
            ResourceKind.DEPLOYMENTS: self._parse_deployment,
            ResourceKind.REPLICA_SETS: self._parse_replica_set,
            ResourceKind.STATEFUL_SETS: self._parse_stateful_set,
            ResourceKind.DAEMON_SETS: self._parse_daemon_set,
            ResourceKind.JOBS: self._parse_job,
            ResourceKind.CRON_JOBS: self._parse_cron_job,
            ResourceKind.CONFIGMAPS: self._parse_config_map,
            ResourceKind.SECRETS: self._parse_secret,
            ResourceKind.EVENTS: self._parse_event,
            ResourceKind.NODE_METRICS: self._parse_node_metrics,
        }

    def parse(self, kind: ResourceKind, item: dict[str, Any]) -> ResourceRecord:
        """Parse one raw object of ``kind``.

        Raises:
            ValueError: The object has no name.
        """
        if kind is ResourceKind.CONTEXTS:
            return self._parse_context(item)

        metadata = item.get("metadata") or {}
        name = metadata.get("name")
        if not name:
            raise ValueError(f"{kind.value} object without metadata.name")

        status, fields = self._parsers[kind](item)
        namespace = metadata.get("namespace") if kind_spec(kind).namespaced else None
        return ResourceRecord(
            kind=kind,
            name=name,
            namespace=namespace,
            status=status,
            created_at=parse_timestamp(metadata.get("creationTimestamp")),
            labels={str(k): str(v) for k, v in (metadata.get("labels") or {}).items()},
            fields=fields,
        )

    def parse_all(
        self,
        kind: ResourceKind,
        items: list[dict[str, Any]],
    ) -> list[ResourceRecord]:
        """Parse ``items`` in API order, skipping malformed objects."""
        records: list[ResourceRecord] = []
        for item in items:
            try:
                records.append(self.parse(kind, item))
            except (ValueError, TypeError, AttributeError) as exc:
                logger.debug("Skipping malformed %s object: %s", kind.value, exc)
        return records

    # =========================================================================
    # Workloads
    # =========================================================================

    @staticmethod
    def _parse_pod(item: dict[str, Any]) -> tuple[str, Fields]:
        spec = item.get("spec") or {}
        status = item.get("status") or {}
        container_statuses = status.get("containerStatuses") or []

        total = len(spec.get("containers") or container_statuses)
        ready = sum(1 for c in container_statuses if c.get("ready"))
        restarts = sum(int(c.get("restartCount", 0) or 0) for c in container_statuses)

        phase = status.get("reason") or status.get("phase") or "Unknown"
        for container in container_statuses:
            state = container.get("state") or {}
            waiting = state.get("waiting") or {}
            terminated = state.get("terminated") or {}
            if waiting.get("reason"):
                phase = waiting["reason"]
                break
            if terminated.get("reason") and phase != "Succeeded":
                phase = terminated["reason"]
                break
        if (item.get("metadata") or {}).get("deletionTimestamp"):
            phase = "Terminating"

        return phase, {
            "ready": f"{ready}/{total}",
            "restarts": restarts,
            "node": spec.get("nodeName", ""),
            "ip": status.get("podIP", ""),
            "containers": [c.get("name", "") for c in spec.get("containers") or []],
        }

    @staticmethod
    def _parse_deployment(item: dict[str, Any]) -> tuple[str, Fields]:
        spec = item.get("spec") or {}
        status = item.get("status") or {}
        desired = int(spec.get("replicas", 1) or 0)
        ready = int(status.get("readyReplicas", 0) or 0)
        return ("Ready" if ready >= desired else "Progressing"), {
            "ready": f"{ready}/{desired}",
            "up_to_date": int(status.get("updatedReplicas", 0) or 0),
            "available": int(status.get("availableReplicas", 0) or 0),
        }

    @staticmethod
    def _parse_replica_set(item: dict[str, Any]) -> tuple[str, Fields]:
        spec = item.get("spec") or {}
        status = item.get("status") or {}
        desired = int(spec.get("replicas", 0) or 0)
        ready = int(status.get("readyReplicas", 0) or 0)
        return ("Ready" if ready >= desired else "Progressing"), {
            "desired": desired,
            "current": int(status.get("replicas", 0) or 0),
            "ready": ready,
        }

    @staticmethod
    def _parse_stateful_set(item: dict[str, Any]) -> tuple[str, Fields]:
        spec = item.get("spec") or {}
        status = item.get("status") or {}
        desired = int(spec.get("replicas", 1) or 0)
        ready = int(status.get("readyReplicas", 0) or 0)
        return ("Ready" if ready >= desired else "Progressing"), {
            "ready": f"{ready}/{desired}",
            "service": spec.get("serviceName", ""),
        }

    @staticmethod
    def _parse_daemon_set(item: dict[str, Any]) -> tuple[str, Fields]:
        status = item.get("status") or {}
        desired = int(status.get("desiredNumberScheduled", 0) or 0)
        ready = int(status.get("numberReady", 0) or 0)
        return ("Ready" if ready >= desired else "Progressing"), {
            "desired": desired,
            "current": int(status.get("currentNumberScheduled", 0) or 0),
            "ready": ready,
            "up_to_date": int(status.get("updatedNumberScheduled", 0) or 0),
            "available": int(status.get("numberAvailable", 0) or 0),
        }

    @staticmethod
    def _parse_job(item: dict[str, Any]) -> tuple[str, Fields]:
        spec = item.get("spec") or {}
        status = item.get("status") or {}
        completions = int(spec.get("completions", 1) or 0)
        succeeded = int(status.get("succeeded", 0) or 0)
        if int(status.get("failed", 0) or 0) and not status.get("active"):
            phase = "Failed"
        elif succeeded >= completions:
            phase = "Complete"
        else:
            phase = "Running"

        duration = ""
        started = parse_timestamp(status.get("startTime"))
        finished = parse_timestamp(status.get("completionTime"))
        if started and finished:
            duration = f"{int((finished - started).total_seconds())}s"
        return phase, {
            "completions": f"{succeeded}/{completions}",
            "duration": duration,
        }

    @staticmethod
    def _parse_cron_job(item: dict[str, Any]) -> tuple[str, Fields]:
        spec = item.get("spec") or {}
        status = item.get("status") or {}
        suspended = bool(spec.get("suspend", False))
        return ("Suspended" if suspended else "Scheduled"), {
            "schedule": spec.get("schedule", ""),
            "suspend": suspended,
            "active": len(status.get("active") or []),
            "last_schedule": status.get("lastScheduleTime", ""),
        }

    # =========================================================================
    # Networking / configuration
    # =========================================================================

    @staticmethod
    def _parse_service(item: dict[str, Any]) -> tuple[str, Fields]:
        spec = item.get("spec") or {}
        status = item.get("status") or {}
        ingress = (status.get("loadBalancer") or {}).get("ingress") or []
        external = [i.get("ip") or i.get("hostname", "") for i in ingress]
        external.extend(spec.get("externalIPs") or [])
        ports = []
        for port in spec.get("ports") or []:
            text = f"{port.get('port', '')}/{port.get('protocol', 'TCP')}"
            if port.get("nodePort"):
                text = f"{port.get('port', '')}:{port['nodePort']}/{port.get('protocol', 'TCP')}"
            ports.append(text)
        return spec.get("type", "ClusterIP"), {
            "type": spec.get("type", "ClusterIP"),
            "cluster_ip": spec.get("clusterIP", ""),
            "external_ip": ",".join(ip for ip in external if ip) or "<none>",
            "ports": ",".join(ports),
        }

    @staticmethod
    def _parse_config_map(item: dict[str, Any]) -> tuple[str, Fields]:
        data = item.get("data") or {}
        binary = item.get("binaryData") or {}
        return "", {"data": len(data) + len(binary)}

    @staticmethod
    def _parse_secret(item: dict[str, Any]) -> tuple[str, Fields]:
        return "", {
            "type": item.get("type", "Opaque"),
            "data": len(item.get("data") or {}),
        }

    @staticmethod
    def _parse_event(item: dict[str, Any]) -> tuple[str, Fields]:
        involved = item.get("involvedObject") or item.get("regarding") or {}
        obj = involved.get("name", "")
        if involved.get("kind"):
            obj = f"{involved['kind'].lower()}/{obj}"
        return item.get("type", "Normal"), {
            "reason": item.get("reason", ""),
            "object": obj,
            "message": (item.get("message") or item.get("note") or "").strip(),
            "count": int(item.get("count") or (item.get("series") or {}).get("count") or 1),
            "last_seen": item.get("lastTimestamp") or item.get("eventTime") or "",
        }

    # =========================================================================
    # Cluster-scoped
    # =========================================================================

    @staticmethod
    def _parse_namespace(item: dict[str, Any]) -> tuple[str, Fields]:
        return (item.get("status") or {}).get("phase", "Active"), {}

    @classmethod
    def _parse_node(cls, item: dict[str, Any]) -> tuple[str, Fields]:
        metadata = item.get("metadata") or {}
        status = item.get("status") or {}
        spec = item.get("spec") or {}
        labels = metadata.get("labels") or {}

        conditions = {
            c["type"]: c["status"]
            for c in status.get("conditions") or []
            if "type" in c and "status" in c
        }
        is_ready = conditions.get("Ready") == "True"
        node_status = NodeStatus.READY if is_ready else NodeStatus.NOT_READY
        if "Ready" not in conditions:
            node_status = NodeStatus.UNKNOWN
        phase = node_status.value
        if spec.get("unschedulable"):
            phase = f"{phase},SchedulingDisabled"

        roles = sorted(
            label.removeprefix(cls._ROLE_LABEL_PREFIX)
            for label in labels
            if label.startswith(cls._ROLE_LABEL_PREFIX)
        )
        allocatable = status.get("allocatable") or {}
        try:
            max_pods = int(float(allocatable.get("pods", "110")))
        except (ValueError, TypeError):
            max_pods = 110

        return phase, {
            "roles": ",".join(roles) or "<none>",
            "version": (status.get("nodeInfo") or {}).get("kubeletVersion", ""),
            "cpu_allocatable": parse_cpu(allocatable.get("cpu", "0")),
            "memory_allocatable": memory_str_to_bytes(allocatable.get("memory", "0")),
            "max_pods": max_pods,
            "pressure": [p for p in cls._PRESSURE_CONDITIONS if conditions.get(p) == "True"],
        }

    @staticmethod
    def _parse_node_metrics(item: dict[str, Any]) -> tuple[str, Fields]:
        usage = item.get("usage") or {}
        return "", {
            "cpu_usage": parse_cpu(usage.get("cpu", "0")),
            "memory_usage": memory_str_to_bytes(usage.get("memory", "0")),
            "window": item.get("window", ""),
        }

    @staticmethod
    def _parse_context(item: dict[str, Any]) -> ResourceRecord:
        name = item.get("name")
        if not name:
            raise ValueError("context without name")
        return ResourceRecord(
            kind=ResourceKind.CONTEXTS,
            name=name,
            status="current" if item.get("current") else "",
            fields={
                "cluster": item.get("cluster", ""),
                "user": item.get("user", ""),
                "namespace": item.get("namespace") or "",
            },
        )


__all__ = ["RecordParser"]
