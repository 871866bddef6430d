"""Controllers module for KubeDash TUI.

This module provides the cluster client contract, its kubectl-backed
implementation, and the refresh scheduler that drives resource fetching.
"""

from __future__ import annotations

# Base classes
from kubedash.controllers.base import BaseController

# Cluster domain
from kubedash.controllers.cluster import (
    ClusterController,
    RefreshScheduler,
    ResourceFetcher,
)

__all__ = [
    # Base
    "BaseController",
    # Cluster domain
    "ClusterController",
    "RefreshScheduler",
    "ResourceFetcher",
]
