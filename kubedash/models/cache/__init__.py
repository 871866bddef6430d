"""Snapshot store."""

from kubedash.models.cache.snapshot_store import (
    KindStatus,
    SnapshotStore,
    StaleSnapshotError,
)

__all__ = ["KindStatus", "SnapshotStore", "StaleSnapshotError"]
