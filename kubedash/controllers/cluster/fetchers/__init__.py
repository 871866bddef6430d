"""Fetchers for the cluster controller."""

from kubedash.controllers.cluster.fetchers.cli_info_fetcher import CliInfoFetcher
from kubedash.controllers.cluster.fetchers.resource_fetcher import ResourceFetcher

__all__ = ["CliInfoFetcher", "ResourceFetcher"]
