"""Tests for RecordParser."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from kubedash.constants.enums import ResourceKind
from kubedash.controllers.cluster.parsers.record_parser import RecordParser


@pytest.fixture
def parser() -> RecordParser:
    return RecordParser()


class TestCommonMetadata:
    """Tests for metadata shared by every kind."""

    def test_name_namespace_labels_and_age(self, parser: RecordParser, raw_item) -> None:
        item = raw_item("web-0", "default", status={"phase": "Running"})
        item["metadata"]["labels"] = {"app": "web"}

        record = parser.parse(ResourceKind.PODS, item)

        assert record.name == "web-0"
        assert record.namespace == "default"
        assert record.labels == {"app": "web"}
        assert record.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_cluster_scoped_kind_drops_namespace(self, parser: RecordParser, raw_item) -> None:
        record = parser.parse(ResourceKind.NODES, raw_item("node-1", "ignored"))
        assert record.namespace is None

    def test_missing_name_raises(self, parser: RecordParser) -> None:
        with pytest.raises(ValueError):
            parser.parse(ResourceKind.PODS, {"metadata": {}})

    def test_parse_all_skips_malformed(self, parser: RecordParser, raw_item) -> None:
        """Test malformed objects are skipped and API order is kept."""
        items = [raw_item("b", "default"), {"metadata": {}}, raw_item("a", "default")]

        records = parser.parse_all(ResourceKind.CONFIGMAPS, items)

        assert [r.name for r in records] == ["b", "a"]


class TestPodParsing:
    """Tests for pod status and fields."""

    def test_running_pod(self, parser: RecordParser, pod_items) -> None:
        record = parser.parse(ResourceKind.PODS, pod_items(1)[0])

        assert record.status == "Running"
        assert record.field("ready") == "1/1"
        assert record.field("restarts") == 0
        assert record.field("node") == "node-1"
        assert record.field("containers") == ["app"]

    def test_waiting_reason_wins(self, parser: RecordParser, raw_item) -> None:
        item = raw_item(
            "crash",
            "default",
            spec={"containers": [{"name": "app"}]},
            status={
                "phase": "Running",
                "containerStatuses": [
                    {
                        "name": "app",
                        "ready": False,
                        "restartCount": 7,
                        "state": {"waiting": {"reason": "CrashLoopBackOff"}},
                    }
                ],
            },
        )

        record = parser.parse(ResourceKind.PODS, item)

        assert record.status == "CrashLoopBackOff"
        assert record.field("ready") == "0/1"
        assert record.field("restarts") == 7

    def test_terminating(self, parser: RecordParser, pod_items) -> None:
        item = pod_items(1)[0]
        item["metadata"]["deletionTimestamp"] = "2024-01-01T00:05:00Z"

        assert parser.parse(ResourceKind.PODS, item).status == "Terminating"


class TestWorkloadParsing:
    """Tests for controllers and batch kinds."""

    def test_deployment(self, parser: RecordParser, raw_item) -> None:
        item = raw_item(
            "api",
            "default",
            spec={"replicas": 3},
            status={"readyReplicas": 2, "updatedReplicas": 3, "availableReplicas": 2},
        )

        record = parser.parse(ResourceKind.DEPLOYMENTS, item)

        assert record.status == "Progressing"
        assert record.field("ready") == "2/3"
        assert record.field("up_to_date") == 3
        assert record.field("available") == 2

    def test_completed_job(self, parser: RecordParser, raw_item) -> None:
        item = raw_item(
            "migrate",
            "default",
            spec={"completions": 1},
            status={
                "succeeded": 1,
                "startTime": "2024-01-01T00:00:00Z",
                "completionTime": "2024-01-01T00:00:42Z",
            },
        )

        record = parser.parse(ResourceKind.JOBS, item)

        assert record.status == "Complete"
        assert record.field("completions") == "1/1"
        assert record.field("duration") == "42s"

    def test_failed_job(self, parser: RecordParser, raw_item) -> None:
        item = raw_item("migrate", "default", spec={"completions": 1}, status={"failed": 1})
        assert parser.parse(ResourceKind.JOBS, item).status == "Failed"

    def test_cron_job(self, parser: RecordParser, raw_item) -> None:
        item = raw_item(
            "nightly",
            "default",
            spec={"schedule": "0 2 * * *", "suspend": True},
            status={"active": [{"name": "nightly-1"}]},
        )

        record = parser.parse(ResourceKind.CRON_JOBS, item)

        assert record.status == "Suspended"
        assert record.field("schedule") == "0 2 * * *"
        assert record.field("active") == 1


class TestClusterScopedParsing:
    """Tests for nodes, namespaces, node metrics and contexts."""

    def test_cordoned_ready_node(self, parser: RecordParser, raw_item) -> None:
        item = raw_item(
            "node-1",
            spec={"unschedulable": True},
            status={
                "conditions": [
                    {"type": "Ready", "status": "True"},
                    {"type": "MemoryPressure", "status": "True"},
                ],
                "allocatable": {"cpu": "3920m", "memory": "16Gi", "pods": "110"},
                "nodeInfo": {"kubeletVersion": "v1.30.2"},
            },
        )
        item["metadata"]["labels"] = {"node-role.kubernetes.io/control-plane": ""}

        record = parser.parse(ResourceKind.NODES, item)

        assert record.status == "Ready,SchedulingDisabled"
        assert record.field("roles") == "control-plane"
        assert record.field("version") == "v1.30.2"
        assert record.field("cpu_allocatable") == pytest.approx(3.92)
        assert record.field("memory_allocatable") == 16 * 1024**3
        assert record.field("pressure") == ["MemoryPressure"]

    def test_node_without_conditions_is_unknown(self, parser: RecordParser, raw_item) -> None:
        assert parser.parse(ResourceKind.NODES, raw_item("node-2")).status == "Unknown"

    def test_namespace_phase(self, parser: RecordParser, raw_item) -> None:
        item = raw_item("old", status={"phase": "Terminating"})
        assert parser.parse(ResourceKind.NAMESPACES, item).status == "Terminating"

    def test_node_metrics(self, parser: RecordParser, raw_item) -> None:
        item = raw_item("node-1", usage={"cpu": "500000000n", "memory": "2Gi"}, window="10s")

        record = parser.parse(ResourceKind.NODE_METRICS, item)

        assert record.field("cpu_usage") == 0.5
        assert record.field("memory_usage") == 2 * 1024**3

    def test_context_item(self, parser: RecordParser) -> None:
        """Test flattened kubeconfig context items."""
        record = parser.parse(
            ResourceKind.CONTEXTS,
            {"name": "kind-dev", "cluster": "kind-dev", "user": "admin", "current": True},
        )

        assert record.name == "kind-dev"
        assert record.namespace is None
        assert record.status == "current"
        assert record.field("user") == "admin"


class TestConfigParsing:
    """Tests for services, config maps, secrets and events."""

    def test_service(self, parser: RecordParser, raw_item) -> None:
        item = raw_item(
            "web",
            "default",
            spec={
                "type": "NodePort",
                "clusterIP": "10.96.0.10",
                "ports": [{"port": 80, "nodePort": 30080, "protocol": "TCP"}],
            },
        )

        record = parser.parse(ResourceKind.SERVICES, item)

        assert record.field("type") == "NodePort"
        assert record.field("cluster_ip") == "10.96.0.10"
        assert record.field("external_ip") == "<none>"
        assert record.field("ports") == "80:30080/TCP"

    def test_config_map_and_secret_counts(self, parser: RecordParser, raw_item) -> None:
        config_map = raw_item("cfg", "default", data={"a": "1", "b": "2"})
        secret = raw_item("tls", "default", type="kubernetes.io/tls", data={"tls.crt": "x"})

        assert parser.parse(ResourceKind.CONFIGMAPS, config_map).field("data") == 2
        parsed_secret = parser.parse(ResourceKind.SECRETS, secret)
        assert parsed_secret.field("type") == "kubernetes.io/tls"
        assert parsed_secret.field("data") == 1

    def test_event(self, parser: RecordParser, raw_item) -> None:
        item = raw_item(
            "web-0.17a",
            "default",
            type="Warning",
            reason="BackOff",
            message="Back-off restarting failed container\n",
            count=5,
            involvedObject={"kind": "Pod", "name": "web-0"},
        )

        record = parser.parse(ResourceKind.EVENTS, item)

        assert record.status == "Warning"
        assert record.field("object") == "pod/web-0"
        assert record.field("count") == 5
        assert record.field("message") == "Back-off restarting failed container"
