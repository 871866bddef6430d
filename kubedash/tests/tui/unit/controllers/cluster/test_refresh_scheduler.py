"""Tests for RefreshScheduler.

The scheduler is driven against an in-memory client; tests start ``run()`` as
a task, observe published snapshots through ``on_published`` and stop it.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import pytest

from kubedash.constants.enums import FetchErrorKind, NavKey, ResourceKind, SchedulerState
from kubedash.controllers.cluster.errors import ClusterAuthError, ContextResolutionError
from kubedash.controllers.cluster.scheduler import RefreshScheduler
from kubedash.models.cache.snapshot_store import SnapshotStore
from kubedash.models.snapshot.cluster_snapshot import ClusterSnapshot
from kubedash.models.state.app_settings import RefreshConfig
from kubedash.models.state.navigation_state import NavigationState
from kubedash.navigation.events import KeyPress, SwitchContext
from kubedash.navigation.state_machine import transition


class Harness:
    """Scheduler plus everything it published or reported."""

    def __init__(self, client, config: RefreshConfig, **kwargs) -> None:
        self.store = SnapshotStore()
        self.published: list[ClusterSnapshot] = []
        self.errors: list[tuple[str, bool]] = []
        self.scheduler = RefreshScheduler(
            client,
            self.store,
            config,
            on_published=self.published.append,
            on_error=lambda message, blocking: self.errors.append((message, blocking)),
            **kwargs,
        )

    def full_cycles(self, context: str | None = None) -> list[ClusterSnapshot]:
        return [
            snapshot
            for snapshot in self.published
            if snapshot.outcomes and (context is None or snapshot.context == context)
        ]


def _config(*kinds: ResourceKind, **overrides) -> RefreshConfig:
    values = {
        "poll_interval": 3600.0,
        "enabled_kinds": frozenset(kinds),
        "max_concurrent": 4,
        "fetch_timeout": 2.0,
        "auth_denial_threshold": 3,
    }
    values.update(overrides)
    return RefreshConfig(**values)


@pytest.fixture
def running() -> Callable[..., object]:
    """Run a Harness's scheduler for the duration of an ``async with`` block."""

    @asynccontextmanager
    async def runner(harness: Harness) -> AsyncIterator[Harness]:
        task = asyncio.create_task(harness.scheduler.run())
        try:
            yield harness
        finally:
            harness.scheduler.stop()
            await asyncio.wait_for(task, timeout=2)

    return runner


class TestRefreshCycle:
    """Tests for a single refresh cycle."""

    @pytest.mark.asyncio
    async def test_partial_failure_keeps_other_kinds(
        self, fake_client, pod_items, running, wait_until
    ) -> None:
        """Test a timed-out kind does not affect the kinds that succeeded."""
        fake_client.responses[ResourceKind.PODS] = pod_items(3)
        fake_client.delays[ResourceKind.NODES] = 5
        harness = Harness(
            fake_client,
            _config(ResourceKind.PODS, ResourceKind.NODES, fetch_timeout=0.2),
        )

        async with running(harness):
            await wait_until(lambda: bool(harness.full_cycles()))

        snapshot = harness.full_cycles()[0]
        pods = snapshot.outcome(ResourceKind.PODS)
        nodes = snapshot.outcome(ResourceKind.NODES)
        assert pods is not None and pods.ok
        assert len(pods.records) == 3
        assert nodes is not None and nodes.error is not None
        assert nodes.error.kind is FetchErrorKind.TIMEOUT
        assert harness.store.read() is harness.published[-1]

    @pytest.mark.asyncio
    async def test_first_publish_is_empty_snapshot(self, fake_client, running, wait_until) -> None:
        harness = Harness(fake_client, _config(ResourceKind.PODS))

        async with running(harness):
            await wait_until(lambda: bool(harness.full_cycles()))

        first = harness.published[0]
        assert first.outcomes == {}
        assert first.sequence == 1
        assert harness.full_cycles()[0].context == "kind-dev"
        assert harness.scheduler.context == "kind-dev"

    @pytest.mark.asyncio
    async def test_sequences_strictly_increase(self, fake_client, running, wait_until) -> None:
        harness = Harness(fake_client, _config(ResourceKind.PODS, poll_interval=0.01))

        async with running(harness):
            await wait_until(lambda: len(harness.full_cycles()) >= 4)

        sequences = [snapshot.sequence for snapshot in harness.published]
        assert sequences == sorted(set(sequences))

    @pytest.mark.asyncio
    async def test_concurrency_bounded(self, fake_client, running, wait_until) -> None:
        """Test no more than max_concurrent fetches are in flight."""
        in_flight = 0
        peak = 0
        original = fake_client.list_resources

        async def tracking(kind, scope, context):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            try:
                await asyncio.sleep(0.02)
                return await original(kind, scope, context)
            finally:
                in_flight -= 1

        fake_client.list_resources = tracking
        kinds = (
            ResourceKind.PODS,
            ResourceKind.SERVICES,
            ResourceKind.CONFIGMAPS,
            ResourceKind.SECRETS,
            ResourceKind.JOBS,
        )
        harness = Harness(fake_client, _config(*kinds, max_concurrent=2))

        async with running(harness):
            await wait_until(lambda: bool(harness.full_cycles()))

        assert peak == 2
        assert set(harness.full_cycles()[0].outcomes) == set(kinds)


class TestAuthDenialPolicy:
    """Tests for disabling kinds after repeated authorization denials."""

    @pytest.mark.asyncio
    async def test_disabled_after_three_denials(self, fake_client, running, wait_until) -> None:
        """Test the fourth cycle makes no call for a kind denied three times."""
        fake_client.responses[ResourceKind.SECRETS] = ClusterAuthError("secrets is forbidden")
        harness = Harness(
            fake_client,
            _config(ResourceKind.SECRETS, ResourceKind.PODS, poll_interval=0.01),
        )

        async with running(harness):
            await wait_until(lambda: len(harness.full_cycles()) >= 6)

        assert len(fake_client.calls_for(ResourceKind.SECRETS)) == 3
        assert len(fake_client.calls_for(ResourceKind.PODS)) >= 6
        assert harness.scheduler.disabled_kinds == frozenset({ResourceKind.SECRETS})
        latest = harness.full_cycles()[-1].outcome(ResourceKind.SECRETS)
        assert latest is not None
        assert latest.disabled
        assert latest.error is not None
        assert latest.error.kind is FetchErrorKind.AUTH_DENIED

    @pytest.mark.asyncio
    async def test_success_resets_denial_count(self, fake_client, running, wait_until) -> None:
        """Test denials must be consecutive."""
        responses = iter(
            [
                ClusterAuthError("forbidden"),
                ClusterAuthError("forbidden"),
                [],
                ClusterAuthError("forbidden"),
                ClusterAuthError("forbidden"),
            ]
        )
        original = fake_client.list_resources

        async def flaky(kind, scope, context):
            fake_client.responses[kind] = next(responses, [])
            return await original(kind, scope, context)

        fake_client.list_resources = flaky
        harness = Harness(fake_client, _config(ResourceKind.SECRETS, poll_interval=0.01))

        async with running(harness):
            await wait_until(lambda: len(harness.full_cycles()) >= 6)

        assert harness.scheduler.disabled_kinds == frozenset()

    @pytest.mark.asyncio
    async def test_context_switch_reenables(self, fake_client, running, wait_until) -> None:
        fake_client.responses[ResourceKind.SECRETS] = ClusterAuthError("forbidden")
        harness = Harness(
            fake_client,
            _config(ResourceKind.SECRETS, poll_interval=0.01, auth_denial_threshold=1),
        )

        async with running(harness):
            await wait_until(lambda: bool(harness.scheduler.disabled_kinds))
            fake_client.responses[ResourceKind.SECRETS] = []
            harness.scheduler.switch_context("kind-prod")
            await wait_until(lambda: bool(harness.full_cycles("kind-prod")))

        assert harness.scheduler.disabled_kinds == frozenset()
        outcome = harness.full_cycles("kind-prod")[-1].outcome(ResourceKind.SECRETS)
        assert outcome is not None and outcome.ok


class TestContextSwitch:
    """Tests for context switching."""

    @pytest.mark.asyncio
    async def test_old_context_purged_before_new_data(
        self, fake_client, pod_items, running, wait_until
    ) -> None:
        """Test the first snapshot after a switch is empty and names the new context."""
        fake_client.responses[ResourceKind.PODS] = pod_items(2)
        harness = Harness(fake_client, _config(ResourceKind.PODS))

        async with running(harness):
            await wait_until(lambda: bool(harness.full_cycles("kind-dev")))
            switch_index = len(harness.published)
            harness.scheduler.switch_context("kind-prod")
            await wait_until(lambda: bool(harness.full_cycles("kind-prod")))

        purge = harness.published[switch_index]
        assert purge.context == "kind-prod"
        assert purge.outcomes == {}
        assert all(s.context == "kind-prod" for s in harness.published[switch_index:])
        assert fake_client.calls_for(ResourceKind.PODS)[-1][2] == "kind-prod"

    @pytest.mark.asyncio
    async def test_in_flight_cycle_discarded(
        self, fake_client, pod_items, running, wait_until
    ) -> None:
        """Test results of a cycle started under the old context are never published."""
        fake_client.responses[ResourceKind.PODS] = pod_items(1)
        fake_client.delays[ResourceKind.PODS] = 0.2
        harness = Harness(fake_client, _config(ResourceKind.PODS))

        async with running(harness):
            await wait_until(lambda: len(fake_client.list_calls) == 1)
            harness.scheduler.switch_context("kind-prod")
            await wait_until(lambda: bool(harness.full_cycles()))

        assert harness.full_cycles("kind-dev") == []
        assert len(harness.full_cycles("kind-prod")) == 1

    @pytest.mark.asyncio
    async def test_resolution_failure_is_blocking_error(
        self, fake_client, running, wait_until
    ) -> None:
        fake_client.resolve_error = ContextResolutionError('context "gone" does not exist')
        harness = Harness(fake_client, _config(ResourceKind.PODS), initial_context="gone")

        async with running(harness):
            await wait_until(lambda: bool(harness.errors))

        message, blocking = harness.errors[0]
        assert blocking
        assert "gone" in message
        assert harness.scheduler.state is SchedulerState.PAUSED
        assert fake_client.calls_for(ResourceKind.PODS) == []

    @pytest.mark.asyncio
    async def test_resolution_failure_still_lists_contexts(
        self, fake_client, running, wait_until
    ) -> None:
        """Test a bad initial context leaves the kubeconfig contexts available to switch to."""
        fake_client.responses[ResourceKind.CONTEXTS] = [
            {"name": "kind-dev", "cluster": "kind-dev", "user": "dev-admin", "current": True},
            {"name": "kind-prod", "cluster": "kind-prod", "user": "prod-admin"},
        ]
        harness = Harness(fake_client, _config(ResourceKind.PODS), initial_context="gone")

        async with running(harness):
            await wait_until(lambda: bool(harness.errors))

        snapshot = harness.store.read()
        assert snapshot.context == "gone"
        assert [record.name for record in snapshot.records(ResourceKind.CONTEXTS)] == [
            "kind-dev",
            "kind-prod",
        ]
        assert fake_client.calls_for(ResourceKind.CONTEXTS) == [
            (ResourceKind.CONTEXTS, "all", None)
        ]

        state = NavigationState(context="gone")
        _, command = transition(state, KeyPress(NavKey.SWITCH_CONTEXT), snapshot)
        assert command == SwitchContext("kind-dev")

    @pytest.mark.asyncio
    async def test_successful_switch_lifts_error_pause(
        self, fake_client, running, wait_until
    ) -> None:
        harness = Harness(fake_client, _config(ResourceKind.PODS), initial_context="gone")

        async with running(harness):
            await wait_until(lambda: bool(harness.errors))
            harness.scheduler.switch_context("kind-dev")
            await wait_until(lambda: bool(harness.full_cycles("kind-dev")))

        assert harness.scheduler.state is SchedulerState.IDLE


class TestPauseResume:
    """Tests for pause, resume, refresh-now and namespace changes."""

    @pytest.mark.asyncio
    async def test_paused_scheduler_makes_no_calls(self, fake_client, running, wait_until) -> None:
        harness = Harness(fake_client, _config(ResourceKind.PODS, poll_interval=0.05))

        async with running(harness):
            await wait_until(lambda: bool(harness.full_cycles()))
            harness.scheduler.pause()
            await wait_until(lambda: harness.scheduler.state is SchedulerState.PAUSED)
            calls = len(fake_client.list_calls)
            harness.scheduler.request_refresh()
            await asyncio.sleep(0.2)
            assert len(fake_client.list_calls) == calls

            harness.scheduler.resume()
            await wait_until(lambda: len(fake_client.list_calls) > calls)

    @pytest.mark.asyncio
    async def test_refresh_now(self, fake_client, running, wait_until) -> None:
        harness = Harness(fake_client, _config(ResourceKind.PODS))

        async with running(harness):
            await wait_until(lambda: len(harness.full_cycles()) == 1)
            harness.scheduler.request_refresh()
            await wait_until(lambda: len(harness.full_cycles()) == 2)

    @pytest.mark.asyncio
    async def test_namespace_switch_restarts_cycle(
        self, fake_client, running, wait_until
    ) -> None:
        """Test a namespace switch refetches namespaced kinds in the new scope."""
        harness = Harness(fake_client, _config(ResourceKind.PODS, ResourceKind.NODES))

        async with running(harness):
            await wait_until(lambda: len(harness.full_cycles()) == 1)
            harness.scheduler.switch_namespace("staging")
            await wait_until(lambda: len(harness.full_cycles()) == 2)

        assert fake_client.calls_for(ResourceKind.PODS)[-1][1] == "staging"
        assert fake_client.calls_for(ResourceKind.NODES)[-1][1] == "all"
        assert harness.full_cycles()[-1].namespace == "staging"
        assert harness.scheduler.namespace == "staging"

    @pytest.mark.asyncio
    async def test_set_interval(self, fake_client, running, wait_until) -> None:
        harness = Harness(fake_client, _config(ResourceKind.PODS))

        async with running(harness):
            await wait_until(lambda: len(harness.full_cycles()) == 1)
            harness.scheduler.set_interval(0.01)
            await wait_until(lambda: len(harness.full_cycles()) >= 3)

        assert harness.scheduler.config.poll_interval == 0.01


class TestStatusCallback:
    """Tests for on_status notifications."""

    @pytest.mark.asyncio
    async def test_cycle_reports_refreshing_then_idle(
        self, fake_client, running, wait_until
    ) -> None:
        states: list[SchedulerState] = []
        harness = Harness(fake_client, _config(ResourceKind.PODS), on_status=states.append)

        async with running(harness):
            await wait_until(lambda: bool(harness.full_cycles()))
            harness.scheduler.pause()
            await wait_until(lambda: harness.scheduler.state is SchedulerState.PAUSED)

        assert states == [
            SchedulerState.REFRESHING,
            SchedulerState.IDLE,
            SchedulerState.PAUSED,
        ]

    @pytest.mark.asyncio
    async def test_resolution_failure_reports_paused(
        self, fake_client, running, wait_until
    ) -> None:
        states: list[SchedulerState] = []
        harness = Harness(
            fake_client,
            _config(ResourceKind.PODS),
            initial_context="gone",
            on_status=states.append,
        )

        async with running(harness):
            await wait_until(lambda: bool(harness.errors))

        assert states == [SchedulerState.PAUSED]
