"""Application settings models."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from kubedash.constants.defaults import (
    ALL_NAMESPACES,
    AUTH_DENIAL_THRESHOLD_DEFAULT,
    MAX_CONCURRENT_FETCHES_DEFAULT,
    POLL_RATE_MS_DEFAULT,
    THEME_DEFAULT,
    TICK_RATE_MS_DEFAULT,
)
from kubedash.constants.enums import ResourceKind
from kubedash.constants.limits import (
    AUTH_DENIAL_THRESHOLD_MIN,
    MAX_CONCURRENT_FETCHES_MAX,
    MAX_CONCURRENT_FETCHES_MIN,
    POLL_RATE_MS_MIN,
    TICK_RATE_MS_MAX,
)
from kubedash.constants.timeouts import FETCH_TIMEOUT_DEFAULT


def _all_kind_values() -> list[str]:
    return [kind.value for kind in ResourceKind]


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True)

    # Scope
    initial_context: str | None = None
    initial_namespace: str = ALL_NAMESPACES

    # Refresh cadence
    tick_rate_ms: int = TICK_RATE_MS_DEFAULT
    poll_rate_ms: int = Field(default=POLL_RATE_MS_DEFAULT, alias="poll_interval_ms")

    # Fetch tuning
    max_concurrent_fetches: int = MAX_CONCURRENT_FETCHES_DEFAULT
    fetch_timeout_seconds: float = FETCH_TIMEOUT_DEFAULT
    auth_denial_threshold: int = AUTH_DENIAL_THRESHOLD_DEFAULT
    enabled_kinds: list[str] = Field(default_factory=_all_kind_values)

    # UI preferences
    theme: str = THEME_DEFAULT

    @field_validator("tick_rate_ms")
    @classmethod
    def _check_tick_rate(cls, value: int) -> int:
        if value <= 0 or value >= TICK_RATE_MS_MAX:
            raise ValueError(f"Tick rate must be between 1 and {TICK_RATE_MS_MAX - 1} ms")
        return value

    @field_validator("max_concurrent_fetches")
    @classmethod
    def _clamp_concurrency(cls, value: int) -> int:
        return max(MAX_CONCURRENT_FETCHES_MIN, min(MAX_CONCURRENT_FETCHES_MAX, value))

    @field_validator("auth_denial_threshold")
    @classmethod
    def _clamp_threshold(cls, value: int) -> int:
        return max(AUTH_DENIAL_THRESHOLD_MIN, value)

    @field_validator("fetch_timeout_seconds")
    @classmethod
    def _check_fetch_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Fetch timeout must be positive")
        return value

    @field_validator("enabled_kinds")
    @classmethod
    def _check_kinds(cls, value: list[str]) -> list[str]:
        known = set(_all_kind_values())
        unknown = [item for item in value if item not in known]
        if unknown:
            raise ValueError(f"Unknown resource kinds: {', '.join(unknown)}")
        return value

    @field_validator("initial_namespace")
    @classmethod
    def _normalize_namespace(cls, value: str) -> str:
        return value.strip() or ALL_NAMESPACES

    @model_validator(mode="after")
    def _check_poll_rate(self) -> AppSettings:
        if self.poll_rate_ms < POLL_RATE_MS_MIN:
            raise ValueError(f"Poll rate must be at least {POLL_RATE_MS_MIN} ms")
        if self.poll_rate_ms % self.tick_rate_ms:
            raise ValueError("Poll rate must be multiple of tick-rate")
        return self

    @property
    def poll_interval_seconds(self) -> float:
        return self.poll_rate_ms / 1000

    def enabled_resource_kinds(self) -> frozenset[ResourceKind]:
        return frozenset(ResourceKind(value) for value in self.enabled_kinds)


@dataclass
class RefreshConfig:
    """Refresh tunables owned by the refresh scheduler."""

    poll_interval: float = POLL_RATE_MS_DEFAULT / 1000
    enabled_kinds: frozenset[ResourceKind] = field(
        default_factory=lambda: frozenset(ResourceKind)
    )
    max_concurrent: int = MAX_CONCURRENT_FETCHES_DEFAULT
    fetch_timeout: float = FETCH_TIMEOUT_DEFAULT
    auth_denial_threshold: int = AUTH_DENIAL_THRESHOLD_DEFAULT

    @classmethod
    def from_settings(cls, settings: AppSettings) -> RefreshConfig:
        return cls(
            poll_interval=settings.poll_interval_seconds,
            enabled_kinds=settings.enabled_resource_kinds(),
            max_concurrent=settings.max_concurrent_fetches,
            fetch_timeout=settings.fetch_timeout_seconds,
            auth_denial_threshold=settings.auth_denial_threshold,
        )


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""


__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSaveError",
    "RefreshConfig",
]
