"""Immutable cluster snapshot model.

A snapshot maps every fetched ResourceKind to its FetchOutcome and records the
context/namespace scope the refresh cycle ran under. Snapshots are built in
full by the refresh scheduler and only then handed to the store, so readers
never see a mix of two cycles.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType

from kubedash.constants.defaults import ALL_NAMESPACES
from kubedash.constants.enums import FetchErrorKind, ResourceKind
from kubedash.models.core.resource_record import ResourceRecord, ResourceRef


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DuplicateRecordError(ValueError):
    """Raised when a snapshot would contain the same identity twice."""


@dataclass(frozen=True)
class FetchError:
    """Typed error descriptor for a failed fetch."""

    kind: FetchErrorKind
    message: str
    occurred_at: datetime = field(default_factory=_utcnow)

    @property
    def is_transient(self) -> bool:
        return self.kind in (
            FetchErrorKind.CONNECTION,
            FetchErrorKind.TIMEOUT,
            FetchErrorKind.SERVER,
        )


@dataclass(frozen=True)
class FetchOutcome:
    """Result of fetching one kind: ordered records or an error."""

    kind: ResourceKind
    records: tuple[ResourceRecord, ...] = ()
    error: FetchError | None = None
    fetched_at: datetime = field(default_factory=_utcnow)
    disabled: bool = False

    @classmethod
    def success(
        cls,
        kind: ResourceKind,
        records: tuple[ResourceRecord, ...] | list[ResourceRecord],
        fetched_at: datetime | None = None,
    ) -> FetchOutcome:
        return cls(kind=kind, records=tuple(records), fetched_at=fetched_at or _utcnow())

    @classmethod
    def failure(
        cls,
        kind: ResourceKind,
        error_kind: FetchErrorKind,
        message: str,
    ) -> FetchOutcome:
        error = FetchError(kind=error_kind, message=message)
        return cls(kind=kind, error=error, fetched_at=error.occurred_at)

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_disabled(self) -> FetchOutcome:
        """Return a copy tagged as disabled."""
        return replace(self, disabled=True)


@dataclass(frozen=True)
class ClusterSnapshot:
    """Immutable mapping of ResourceKind to FetchOutcome for one refresh cycle."""

    sequence: int
    context: str | None
    namespace: str = ALL_NAMESPACES
    outcomes: Mapping[ResourceKind, FetchOutcome] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        frozen = MappingProxyType(dict(self.outcomes))
        for kind, outcome in frozen.items():
            if outcome.kind is not kind:
                raise ValueError(
                    f"Outcome for {outcome.kind.value} stored under {kind.value}"
                )
            seen: set[ResourceRef] = set()
            for record in outcome.records:
                ref = record.ref
                if record.kind is not kind:
                    raise ValueError(
                        f"Record {ref.display_name()} stored under {kind.value}"
                    )
                if ref in seen:
                    raise DuplicateRecordError(
                        f"Duplicate record identity {ref.display_name()}"
                    )
                seen.add(ref)
        object.__setattr__(self, "outcomes", frozen)

    @classmethod
    def empty(
        cls,
        sequence: int = 0,
        context: str | None = None,
        namespace: str = ALL_NAMESPACES,
    ) -> ClusterSnapshot:
        return cls(sequence=sequence, context=context, namespace=namespace)

    def outcome(self, kind: ResourceKind) -> FetchOutcome | None:
        return self.outcomes.get(kind)

    def records(self, kind: ResourceKind) -> tuple[ResourceRecord, ...]:
        outcome = self.outcomes.get(kind)
        if outcome is None:
            return ()
        return outcome.records

    def find(self, ref: ResourceRef) -> ResourceRecord | None:
        for record in self.records(ref.kind):
            if record.name == ref.name and record.namespace == ref.namespace:
                return record
        return None


__all__ = [
    "ClusterSnapshot",
    "DuplicateRecordError",
    "FetchError",
    "FetchOutcome",
]
