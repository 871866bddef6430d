"""Cluster snapshot store.

The store is the single synchronization point between the background refresh
scheduler and the foreground event loop.

Performance notes:
- ``read()`` is lock-free. The current snapshot and its per-kind status live
  in one immutable entry that is swapped by a single reference assignment, so
  a reader always gets a complete, internally consistent snapshot and keeps it
  for as long as it holds the reference.
- ``publish()`` acquires the lock so that the sequence check and the status
  merge are not interleaved with another publisher.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

from kubedash.constants.enums import FetchState, ResourceKind
from kubedash.models.snapshot.cluster_snapshot import ClusterSnapshot, FetchError

logger = logging.getLogger(__name__)


class StaleSnapshotError(ValueError):
    """Raised when publishing a snapshot whose sequence does not advance."""


@dataclass(frozen=True)
class KindStatus:
    """Last success / last error metadata for one kind."""

    kind: ResourceKind
    last_success_at: datetime | None = None
    last_error: FetchError | None = None
    disabled: bool = False

    @property
    def state(self) -> FetchState:
        if self.disabled:
            return FetchState.DISABLED
        if self.last_error is not None:
            return FetchState.ERROR
        if self.last_success_at is not None:
            return FetchState.SUCCESS
        return FetchState.LOADING


@dataclass(frozen=True)
class _StoreEntry:
    snapshot: ClusterSnapshot
    statuses: Mapping[ResourceKind, KindStatus] = field(
        default_factory=lambda: MappingProxyType({})
    )


class SnapshotStore:
    """Holds the latest published ClusterSnapshot."""

    def __init__(self, initial: ClusterSnapshot | None = None) -> None:
        self._lock = threading.Lock()
        self._entry = _StoreEntry(snapshot=initial or ClusterSnapshot.empty())

    def read(self) -> ClusterSnapshot:
        """Return the current snapshot."""
        return self._entry.snapshot

    def read_with_status(
        self,
    ) -> tuple[ClusterSnapshot, Mapping[ResourceKind, KindStatus]]:
        entry = self._entry
        return entry.snapshot, entry.statuses

    @property
    def sequence(self) -> int:
        return self._entry.snapshot.sequence

    def publish(self, snapshot: ClusterSnapshot) -> None:
        """Replace the current snapshot in one step."""
        with self._lock:
            current = self._entry
            if snapshot.sequence <= current.snapshot.sequence:
                raise StaleSnapshotError(
                    f"Snapshot sequence {snapshot.sequence} does not advance "
                    f"past {current.snapshot.sequence}"
                )
            statuses = self._merge_statuses(current, snapshot)
            self._entry = _StoreEntry(
                snapshot=snapshot,
                statuses=MappingProxyType(statuses),
            )
        logger.debug(
            "Published snapshot seq=%s context=%s kinds=%s",
            snapshot.sequence,
            snapshot.context,
            len(snapshot.outcomes),
        )

    @staticmethod
    def _merge_statuses(
        current: _StoreEntry,
        snapshot: ClusterSnapshot,
    ) -> dict[ResourceKind, KindStatus]:
        # A context switch starts metadata from scratch.
        if snapshot.context != current.snapshot.context:
            previous: Mapping[ResourceKind, KindStatus] = {}
        else:
            previous = current.statuses

        statuses: dict[ResourceKind, KindStatus] = {}
        for kind, outcome in snapshot.outcomes.items():
            prior = previous.get(kind)
            last_success_at = prior.last_success_at if prior else None
            if outcome.ok and not outcome.disabled:
                last_success_at = outcome.fetched_at
            statuses[kind] = KindStatus(
                kind=kind,
                last_success_at=last_success_at,
                last_error=outcome.error,
                disabled=outcome.disabled,
            )
        return statuses


__all__ = [
    "KindStatus",
    "SnapshotStore",
    "StaleSnapshotError",
]
