"""Immutable cluster snapshot models."""

from kubedash.models.snapshot.cluster_snapshot import (
    ClusterSnapshot,
    DuplicateRecordError,
    FetchError,
    FetchOutcome,
)

__all__ = ["ClusterSnapshot", "DuplicateRecordError", "FetchError", "FetchOutcome"]
