"""Resource record models shared by fetchers, snapshots and rendering."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kubedash.constants.enums import ResourceKind


class ResourceRef(BaseModel):
    """Identity of a record: (kind, namespace, name)."""

    model_config = ConfigDict(frozen=True)

    kind: ResourceKind
    namespace: str | None = None
    name: str

    def display_name(self) -> str:
        if self.namespace:
            return f"{self.kind.value}/{self.namespace}/{self.name}"
        return f"{self.kind.value}/{self.name}"


class ResourceRecord(BaseModel):
    """Kind-specific attribute bag for one resource returned by the API.

    ``labels`` and ``fields`` are read-only copies of the mappings passed in.
    """

    model_config = ConfigDict(frozen=True)

    kind: ResourceKind
    name: str
    namespace: str | None = None
    status: str = ""
    created_at: datetime | None = None
    labels: Mapping[str, str] = Field(default_factory=lambda: MappingProxyType({}))
    fields: Mapping[str, Any] = Field(default_factory=lambda: MappingProxyType({}))

    @field_validator("labels", "fields", mode="after")
    @classmethod
    def _freeze(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @property
    def ref(self) -> ResourceRef:
        return ResourceRef(kind=self.kind, namespace=self.namespace, name=self.name)

    def age_seconds(self, now: datetime | None = None) -> float | None:
        """Seconds since creation, or None when the timestamp is unknown."""
        if self.created_at is None:
            return None
        current = now or datetime.now(timezone.utc)
        return max(0.0, (current - self.created_at).total_seconds())

    def field(self, key: str, default: Any = "") -> Any:
        return self.fields.get(key, default)


__all__ = [
    "ResourceRecord",
    "ResourceRef",
]
