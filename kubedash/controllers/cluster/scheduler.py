"""Refresh scheduler - background fan-out of resource fetches.

The scheduler owns the RefreshConfig and is its only writer. Callers never
touch its state directly; every change (refresh now, pause, resume, context
or namespace switch, interval change, stop) is queued as a command and
applied by :meth:`RefreshScheduler.run` one at a time.

A refresh cycle runs as its own task. It fans out one fetch per enabled kind
bounded by an ``asyncio.Semaphore``, wraps every fetch in a per-kind
deadline, and reports back through the command queue. Each cycle carries the
generation it was started under; a cycle that was cancelled or superseded is
recognised by its stale generation and its outcomes are dropped unpublished.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from kubedash.constants.defaults import ALL_NAMESPACES
from kubedash.constants.enums import FetchErrorKind, ResourceKind, SchedulerState
from kubedash.constants.timeouts import CONTEXT_RESOLVE_TIMEOUT
from kubedash.controllers.base.base_controller import BaseController
from kubedash.controllers.cluster.errors import ClusterClientError
from kubedash.controllers.cluster.fetchers.resource_fetcher import ResourceFetcher
from kubedash.models.cache.snapshot_store import SnapshotStore
from kubedash.models.snapshot.cluster_snapshot import ClusterSnapshot, FetchOutcome
from kubedash.models.state.app_settings import RefreshConfig

logger = logging.getLogger(__name__)

PublishedCallback = Callable[[ClusterSnapshot], None]
ErrorCallback = Callable[[str, bool], None]
StatusCallback = Callable[[SchedulerState], None]


# =============================================================================
# Commands
# =============================================================================


@dataclass(frozen=True)
class _RefreshNow:
    pass


@dataclass(frozen=True)
class _Pause:
    pass


@dataclass(frozen=True)
class _Resume:
    pass


@dataclass(frozen=True)
class _SwitchContext:
    name: str | None


@dataclass(frozen=True)
class _SwitchNamespace:
    namespace: str


@dataclass(frozen=True)
class _SetInterval:
    seconds: float


@dataclass(frozen=True)
class _Stop:
    pass


@dataclass(frozen=True)
class _CycleDone:
    generation: int
    outcomes: tuple[FetchOutcome, ...]


_Command = (
    _RefreshNow
    | _Pause
    | _Resume
    | _SwitchContext
    | _SwitchNamespace
    | _SetInterval
    | _Stop
    | _CycleDone
)


class RefreshScheduler:
    """Idle / Refreshing / Paused refresh loop publishing ClusterSnapshots."""

    def __init__(
        self,
        client: BaseController,
        store: SnapshotStore,
        config: RefreshConfig,
        *,
        fetcher: ResourceFetcher | None = None,
        initial_context: str | None = None,
        initial_namespace: str = ALL_NAMESPACES,
        on_published: PublishedCallback | None = None,
        on_error: ErrorCallback | None = None,
        on_status: StatusCallback | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            client: Cluster client used for context resolution.
            store: Snapshot store this scheduler publishes into.
            config: Refresh tunables; owned by the scheduler from now on.
            fetcher: Resource fetcher, built from ``client`` when omitted.
            initial_context: Context to resolve on start, None for current.
            initial_namespace: Namespace scope, or "all".
            on_published: Called after every publish with the new snapshot.
            on_error: Called with (message, blocking) for scheduler-level errors.
            on_status: Called whenever the scheduler state changes.
        """
        self._client = client
        self._store = store
        self._config = config
        self._fetcher = fetcher or ResourceFetcher(client)
        self._requested_context = initial_context
        self._context: str | None = None
        self._context_resolved = False
        self._namespace = initial_namespace or ALL_NAMESPACES
        self._on_published = on_published
        self._on_error = on_error
        self._on_status = on_status

        self._commands: asyncio.Queue[_Command] = asyncio.Queue()
        self._state = SchedulerState.IDLE
        self._generation = 0
        self._cycle_task: asyncio.Task[None] | None = None
        self._next_due: float | None = None
        self._auth_denials: dict[ResourceKind, int] = {}
        self._disabled: set[ResourceKind] = set()
        self._paused_by_error = False

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def context(self) -> str | None:
        return self._context

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def config(self) -> RefreshConfig:
        return self._config

    @property
    def disabled_kinds(self) -> frozenset[ResourceKind]:
        return frozenset(self._disabled)

    def request_refresh(self) -> None:
        self._commands.put_nowait(_RefreshNow())

    def pause(self) -> None:
        self._commands.put_nowait(_Pause())

    def resume(self) -> None:
        self._commands.put_nowait(_Resume())

    def switch_context(self, name: str | None) -> None:
        self._commands.put_nowait(_SwitchContext(name))

    def switch_namespace(self, namespace: str) -> None:
        self._commands.put_nowait(_SwitchNamespace(namespace or ALL_NAMESPACES))

    def set_interval(self, seconds: float) -> None:
        self._commands.put_nowait(_SetInterval(seconds))

    def stop(self) -> None:
        self._commands.put_nowait(_Stop())

    async def run(self) -> None:
        """Process commands and timer ticks until stopped."""
        logger.info("Refresh scheduler started")
        try:
            await self._switch_context(self._requested_context)
            while True:
                command = await self._next_command()
                if command is None:
                    self._start_cycle()
                    continue
                if isinstance(command, _Stop):
                    break
                await self._handle(command)
        finally:
            self._cancel_cycle()
            logger.info("Refresh scheduler stopped")

    # =========================================================================
    # Command dispatch
    # =========================================================================

    async def _next_command(self) -> _Command | None:
        """Wait for the next command; None means the poll timer fired."""
        if self._state is not SchedulerState.IDLE or self._next_due is None:
            return await self._commands.get()
        remaining = self._next_due - asyncio.get_running_loop().time()
        if remaining <= 0:
            if self._commands.empty():
                return None
            return self._commands.get_nowait()
        try:
            return await asyncio.wait_for(self._commands.get(), timeout=remaining)
        except asyncio.TimeoutError:
            return None

    async def _handle(self, command: _Command) -> None:
        if isinstance(command, _CycleDone):
            self._finish_cycle(command)
        elif isinstance(command, _RefreshNow):
            if self._state is SchedulerState.IDLE:
                self._start_cycle()
        elif isinstance(command, _Pause):
            self._cancel_cycle()
            self._set_state(SchedulerState.PAUSED)
            self._paused_by_error = False
            logger.info("Refresh paused")
        elif isinstance(command, _Resume):
            if self._state is SchedulerState.PAUSED:
                logger.info("Refresh resumed")
                self._set_state(SchedulerState.IDLE)
                if not self._context_resolved:
                    await self._switch_context(self._requested_context)
                else:
                    self._start_cycle()
        elif isinstance(command, _SwitchContext):
            await self._switch_context(command.name)
        elif isinstance(command, _SwitchNamespace):
            self._switch_namespace(command.namespace)
        elif isinstance(command, _SetInterval):
            self._config.poll_interval = command.seconds
            if self._state is SchedulerState.IDLE:
                self._schedule_next()

    def _switch_namespace(self, namespace: str) -> None:
        if namespace == self._namespace:
            return
        logger.info("Switching namespace to %s", namespace)
        self._namespace = namespace
        if self._state is SchedulerState.PAUSED:
            return
        self._cancel_cycle()
        self._start_cycle()

    async def _switch_context(self, name: str | None) -> None:
        """Purge old-context state, resolve ``name`` and start a fresh cycle."""
        self._cancel_cycle()
        self._auth_denials.clear()
        self._disabled.clear()
        self._requested_context = name
        self._context_resolved = False
        self._context = name

        # Nothing from the previous context may outlive this publish.
        self._publish(ClusterSnapshot.empty(
            sequence=self._store.sequence + 1,
            context=name,
            namespace=self._namespace,
        ))

        try:
            info = await asyncio.wait_for(
                self._client.resolve_context(name),
                timeout=CONTEXT_RESOLVE_TIMEOUT,
            )
        except (ClusterClientError, asyncio.TimeoutError) as exc:
            message = str(exc) or "context resolution timed out"
            logger.error("Cannot resolve context %s: %s", name or "<current>", message)
            # Contexts come from kubeconfig and need no resolved context.
            contexts = await self._fetch_contexts()
            self._publish(
                ClusterSnapshot(
                    sequence=self._store.sequence + 1,
                    context=name,
                    namespace=self._namespace,
                    outcomes={ResourceKind.CONTEXTS: contexts},
                )
            )
            self._set_state(SchedulerState.PAUSED)
            self._paused_by_error = True
            self._report_error(f"Context {name or '<current>'}: {message}", blocking=True)
            return

        self._context = info.name
        self._context_resolved = True
        logger.info("Using context %s (cluster=%s)", info.name, info.cluster)
        if self._state is SchedulerState.PAUSED and not self._paused_by_error:
            return
        self._paused_by_error = False
        self._set_state(SchedulerState.IDLE)
        self._start_cycle()

    # =========================================================================
    # Refresh cycles
    # =========================================================================

    def _start_cycle(self) -> None:
        if not self._context_resolved:
            self._next_due = None
            return
        kinds = [
            kind
            for kind in ResourceKind
            if kind in self._config.enabled_kinds and kind not in self._disabled
        ]
        self._generation += 1
        self._set_state(SchedulerState.REFRESHING)
        self._cycle_task = asyncio.create_task(
            self._run_cycle(self._generation, kinds, self._namespace, self._context),
            name=f"refresh-cycle-{self._generation}",
        )
        logger.debug(
            "Refresh cycle %s started for %s kinds", self._generation, len(kinds)
        )

    async def _fetch_contexts(self) -> FetchOutcome:
        kind = ResourceKind.CONTEXTS
        try:
            return await asyncio.wait_for(
                self._fetcher.fetch(kind, ALL_NAMESPACES, None),
                timeout=self._config.fetch_timeout,
            )
        except asyncio.TimeoutError:
            return FetchOutcome.failure(
                kind, FetchErrorKind.TIMEOUT, "kubeconfig contexts timed out"
            )

    def _cancel_cycle(self) -> None:
        # Bumping the generation drops any _CycleDone already queued.
        self._generation += 1
        task = self._cycle_task
        self._cycle_task = None
        if task is not None and not task.done():
            task.cancel()
        if self._state is SchedulerState.REFRESHING:
            self._set_state(SchedulerState.IDLE)

    async def _run_cycle(
        self,
        generation: int,
        kinds: list[ResourceKind],
        scope: str,
        context: str | None,
    ) -> None:
        semaphore = asyncio.Semaphore(self._config.max_concurrent)
        timeout = self._config.fetch_timeout

        async def fetch_one(kind: ResourceKind) -> FetchOutcome:
            async with semaphore:
                try:
                    return await asyncio.wait_for(
                        self._fetcher.fetch(kind, scope, context),
                        timeout=timeout,
                    )
                except asyncio.TimeoutError:
                    return FetchOutcome.failure(
                        kind,
                        FetchErrorKind.TIMEOUT,
                        f"{kind.value} fetch timed out after {timeout:g}s",
                    )
                except Exception as exc:
                    logger.exception("Unexpected error fetching %s", kind.value)
                    return FetchOutcome.failure(kind, FetchErrorKind.SERVER, str(exc))

        outcomes = await asyncio.gather(*(fetch_one(kind) for kind in kinds))
        self._commands.put_nowait(_CycleDone(generation, tuple(outcomes)))

    def _finish_cycle(self, done: _CycleDone) -> None:
        if done.generation != self._generation:
            logger.debug("Discarding results of superseded cycle %s", done.generation)
            return
        self._cycle_task = None

        previous = self._store.read()
        staging: dict[ResourceKind, FetchOutcome] = {}
        for outcome in done.outcomes:
            staging[outcome.kind] = self._apply_disable_policy(outcome)
        if previous.context == self._context:
            for kind in self._disabled:
                if kind in staging:
                    continue
                carried = previous.outcome(kind)
                if carried is not None:
                    staging[kind] = carried.as_disabled()

        self._publish(
            ClusterSnapshot(
                sequence=self._store.sequence + 1,
                context=self._context,
                namespace=self._namespace,
                outcomes=staging,
            )
        )
        self._set_state(SchedulerState.IDLE)
        self._schedule_next()

    def _apply_disable_policy(self, outcome: FetchOutcome) -> FetchOutcome:
        kind = outcome.kind
        if outcome.error is None or outcome.error.kind is not FetchErrorKind.AUTH_DENIED:
            self._auth_denials.pop(kind, None)
            return outcome
        denials = self._auth_denials.get(kind, 0) + 1
        self._auth_denials[kind] = denials
        if denials < self._config.auth_denial_threshold:
            return outcome
        self._disabled.add(kind)
        logger.warning(
            "Disabling %s after %s consecutive authorization denials",
            kind.value,
            denials,
        )
        return outcome.as_disabled()

    def _schedule_next(self) -> None:
        self._next_due = asyncio.get_running_loop().time() + self._config.poll_interval

    # =========================================================================
    # Publishing
    # =========================================================================

    def _publish(self, snapshot: ClusterSnapshot) -> None:
        self._store.publish(snapshot)
        if self._on_published is not None:
            self._on_published(snapshot)

    def _report_error(self, message: str, *, blocking: bool) -> None:
        if self._on_error is not None:
            self._on_error(message, blocking)

    def _set_state(self, state: SchedulerState) -> None:
        if state is self._state:
            return
        self._state = state
        if self._on_status is not None:
            self._on_status(state)


__all__ = ["ErrorCallback", "PublishedCallback", "RefreshScheduler", "StatusCallback"]
