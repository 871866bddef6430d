"""Foreground event loop.

Terminal input and scheduler signals are posted to one ``asyncio.Queue`` and
dispatched one at a time to :func:`transition`. The loop is the only writer of
the NavigationState. Commands are executed before the next event is taken;
those needing the network (delete) run as background tasks and report failure
by posting an ``ErrorBanner`` back onto the queue.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from kubedash.constants.enums import SchedulerState
from kubedash.controllers.base.base_controller import BaseController
from kubedash.controllers.cluster.errors import ClusterClientError
from kubedash.controllers.cluster.scheduler import RefreshScheduler
from kubedash.models.cache.snapshot_store import SnapshotStore
from kubedash.models.snapshot.cluster_snapshot import ClusterSnapshot
from kubedash.models.state.navigation_state import NavigationState
from kubedash.navigation.events import (
    Command,
    DeleteResource,
    ErrorBanner,
    Event,
    PauseRefresh,
    RefreshNow,
    ResumeRefresh,
    SchedulerStatus,
    SetPollInterval,
    Shutdown,
    SnapshotUpdated,
    SwitchContext,
    SwitchNamespace,
    Tick,
)
from kubedash.navigation.state_machine import transition
from kubedash.screens.dashboard.presenter import Frame, render

logger = logging.getLogger(__name__)

DrawCallback = Callable[[Frame], None]


class EventLoop:
    """Single-consumer dispatch of input and refresh events."""

    def __init__(
        self,
        store: SnapshotStore,
        scheduler: RefreshScheduler,
        client: BaseController,
        *,
        state: NavigationState | None = None,
        draw: DrawCallback | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._scheduler = scheduler
        self._client = client
        self._state = state or NavigationState()
        self._draw = draw
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._events: asyncio.Queue[Event] = asyncio.Queue()
        self._background: set[asyncio.Task[None]] = set()
        self._stopped = False

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def stopped(self) -> bool:
        return self._stopped

    def post(self, event: Event) -> None:
        """Queue an event; safe to call from any coroutine on the loop."""
        if not self._stopped:
            self._events.put_nowait(event)

    def on_snapshot_published(self, snapshot: ClusterSnapshot) -> None:
        self.post(SnapshotUpdated(snapshot))

    def on_scheduler_error(self, message: str, blocking: bool) -> None:
        self.post(ErrorBanner(message, blocking=blocking))

    def on_scheduler_status(self, state: SchedulerState) -> None:
        self.post(SchedulerStatus(state))

    def tick(self) -> None:
        self.post(Tick())

    async def run(self) -> None:
        """Dispatch events until a Shutdown command is executed."""
        self.redraw()
        while not self._stopped:
            event = await self._events.get()
            self.dispatch(event)
        await self._drain_background()

    def dispatch(self, event: Event) -> Command | None:
        """Run one event through the state machine and execute its command."""
        snapshot = self._store.read()
        self._state, command = transition(self._state, event, snapshot)
        if command is not None:
            self._execute(command)
        self.redraw()
        return command

    def redraw(self) -> None:
        if self._draw is None or self._stopped:
            return
        snapshot, statuses = self._store.read_with_status()
        self._draw(render(self._state, snapshot, self._clock(), statuses))

    # =========================================================================
    # Commands
    # =========================================================================

    def _execute(self, command: Command) -> None:
        logger.debug("Executing %s", command)
        if isinstance(command, DeleteResource):
            self._spawn(self._delete(command))
        elif isinstance(command, SwitchContext):
            logger.info("Switching context to %s", command.name)
            self._scheduler.switch_context(command.name)
        elif isinstance(command, SwitchNamespace):
            self._scheduler.switch_namespace(command.namespace)
        elif isinstance(command, PauseRefresh):
            self._scheduler.pause()
        elif isinstance(command, ResumeRefresh):
            self._scheduler.resume()
        elif isinstance(command, RefreshNow):
            self._scheduler.request_refresh()
        elif isinstance(command, SetPollInterval):
            logger.info("Poll interval set to %sms", command.milliseconds)
            self._scheduler.set_interval(command.milliseconds / 1000)
        elif isinstance(command, Shutdown):
            self._scheduler.stop()
            self._stopped = True

    def _spawn(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _delete(self, command: DeleteResource) -> None:
        ref = command.ref
        try:
            await self._client.delete_resource(
                ref.kind,
                ref.namespace,
                ref.name,
                command.context,
            )
        except ClusterClientError as exc:
            logger.warning("Delete %s failed: %s", ref.display_name(), exc)
            self.post(ErrorBanner(f"Delete {ref.display_name()} failed: {exc}"))
            return
        self._scheduler.request_refresh()

    async def _drain_background(self) -> None:
        if not self._background:
            return
        pending = list(self._background)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)


__all__ = ["DrawCallback", "EventLoop"]
