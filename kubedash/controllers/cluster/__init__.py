"""Init file for cluster module."""

from kubedash.controllers.cluster.controller import ClusterController
from kubedash.controllers.cluster.errors import (
    ClusterAuthError,
    ClusterClientError,
    ClusterConnectionError,
    ClusterServerError,
    ClusterTimeoutError,
    ContextResolutionError,
    ResourceNotFoundError,
    ResourceNotServedError,
)
from kubedash.controllers.cluster.fetchers import CliInfoFetcher, ResourceFetcher
from kubedash.controllers.cluster.parsers import RecordParser
from kubedash.controllers.cluster.scheduler import RefreshScheduler

__all__ = [
    "CliInfoFetcher",
    "ClusterAuthError",
    "ClusterClientError",
    "ClusterConnectionError",
    "ClusterController",
    "ClusterServerError",
    "ClusterTimeoutError",
    "ContextResolutionError",
    "RecordParser",
    "RefreshScheduler",
    "ResourceFetcher",
    "ResourceNotFoundError",
    "ResourceNotServedError",
]
