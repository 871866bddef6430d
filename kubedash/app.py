"""Main application class for KubeDash TUI."""

from __future__ import annotations

import logging

from textual.app import App
from textual.binding import Binding
from textual.events import Resize as ResizeEvent
from textual.worker import Worker, WorkerState

from kubedash.constants import APP_TITLE, THEME_DEFAULT
from kubedash.constants.enums import NavKey, OverlayKind, SchedulerState
from kubedash.controllers.base.base_controller import BaseController
from kubedash.controllers.cluster.controller import ClusterController
from kubedash.controllers.cluster.fetchers.cli_info_fetcher import CliInfoFetcher
from kubedash.controllers.cluster.scheduler import RefreshScheduler
from kubedash.keyboard.app import APP_BINDINGS, resolve_nav_key
from kubedash.models.cache.snapshot_store import SnapshotStore
from kubedash.models.snapshot.cluster_snapshot import ClusterSnapshot
from kubedash.models.state.app_settings import AppSettings, RefreshConfig
from kubedash.models.state.navigation_state import NavigationState
from kubedash.navigation.event_loop import EventLoop
from kubedash.navigation.events import KeyPress, Resize
from kubedash.screens.dashboard import DashboardScreen, Frame

logger = logging.getLogger(__name__)


class KubeDashApp(App[None]):
    """Main TUI application for KubeDash.

    Wires the live-state engine together: the refresh scheduler publishes
    into the snapshot store, the event loop owns navigation state, and this
    app is the terminal collaborator that feeds it keys and resizes and draws
    the frames it renders.
    """

    TITLE = APP_TITLE
    BINDINGS: list[Binding] = APP_BINDINGS

    _WORKER_GROUP = "kubedash"

    settings: AppSettings

    def __init__(
        self,
        settings: AppSettings | None = None,
        client: BaseController | None = None,
        cli_info_fetcher: CliInfoFetcher | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.settings = settings or AppSettings()
        self.client = client or ClusterController()
        self._cli_info_fetcher = cli_info_fetcher or CliInfoFetcher()

        self.store = SnapshotStore()
        self.scheduler = RefreshScheduler(
            self.client,
            self.store,
            RefreshConfig.from_settings(self.settings),
            initial_context=self.settings.initial_context,
            initial_namespace=self.settings.initial_namespace,
            on_published=self._on_snapshot_published,
            on_error=self._on_scheduler_error,
            on_status=self._on_scheduler_status,
        )
        self.event_loop = EventLoop(
            self.store,
            self.scheduler,
            self.client,
            state=NavigationState(
                namespace=self.settings.initial_namespace,
                context=self.settings.initial_context,
                poll_interval_ms=self.settings.poll_rate_ms,
            ),
            draw=self._draw_frame,
        )
        self.dashboard = DashboardScreen()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self._apply_theme()
        self.push_screen(self.dashboard)
        self.set_interval(self.settings.tick_rate_ms / 1000, self.event_loop.tick)
        self.run_worker(
            self.scheduler.run(),
            name="refresh-scheduler",
            group=self._WORKER_GROUP,
        )
        self.run_worker(
            self._run_event_loop(),
            name="event-loop",
            group=self._WORKER_GROUP,
        )
        self.run_worker(
            self._load_cli_info(),
            name="cli-info",
            group=self._WORKER_GROUP,
        )

    def _apply_theme(self) -> None:
        theme_name = str(self.settings.theme or "").strip()
        if theme_name not in self.available_themes:
            logger.warning("Unknown theme %r, using %s", theme_name, THEME_DEFAULT)
            theme_name = THEME_DEFAULT
        self.theme = theme_name

    async def _run_event_loop(self) -> None:
        await self.event_loop.run()
        self.exit()

    async def _load_cli_info(self) -> None:
        tools = await self._cli_info_fetcher.fetch()
        self.dashboard.set_cli_info(tools)

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Log background failures; the scheduler and event loop must not die silently."""
        worker = event.worker
        if event.state is WorkerState.ERROR:
            logger.error("Worker %s failed: %s", worker.name, worker.error)

    # =========================================================================
    # Input
    # =========================================================================

    def action_nav(self, name: str) -> None:
        """Forward a bound key to the navigation state machine."""
        dialog_open = self.event_loop.state.overlay.kind is OverlayKind.CONFIRM_DIALOG
        key = resolve_nav_key(name, dialog_open=dialog_open)
        if key is None:
            logger.debug("Ignoring unknown navigation key %r", name)
            return
        self.event_loop.post(KeyPress(key))

    def action_tab(self, index: int) -> None:
        self.event_loop.post(KeyPress(NavKey.SWITCH_TAB, argument=index))

    def on_resize(self, event: ResizeEvent) -> None:
        self.event_loop.post(Resize(event.size.width, event.size.height))

    # =========================================================================
    # Output
    # =========================================================================

    def _on_snapshot_published(self, snapshot: ClusterSnapshot) -> None:
        self.event_loop.on_snapshot_published(snapshot)

    def _on_scheduler_error(self, message: str, blocking: bool) -> None:
        self.event_loop.on_scheduler_error(message, blocking)

    def _on_scheduler_status(self, state: SchedulerState) -> None:
        self.event_loop.on_scheduler_status(state)

    def _draw_frame(self, frame: Frame) -> None:
        if not self.dashboard.is_mounted:
            return
        self.dashboard.apply_frame(frame)


__all__ = ["KubeDashApp"]
