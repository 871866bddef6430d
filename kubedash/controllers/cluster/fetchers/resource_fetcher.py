"""Resource fetcher for cluster controller - one list call per resource kind."""

from __future__ import annotations

import logging

from kubedash.constants.defaults import ALL_NAMESPACES
from kubedash.constants.enums import FetchErrorKind, ResourceKind
from kubedash.constants.resources import kind_spec
from kubedash.controllers.base.base_controller import BaseController
from kubedash.controllers.cluster.errors import ClusterClientError
from kubedash.controllers.cluster.parsers.record_parser import RecordParser
from kubedash.models.core.resource_record import ResourceRecord, ResourceRef
from kubedash.models.snapshot.cluster_snapshot import FetchOutcome

logger = logging.getLogger(__name__)


class ResourceFetcher:
    """Fetches one resource kind and returns a FetchOutcome.

    Client failures are returned as tagged error outcomes, never raised, so a
    failing kind cannot take down the refresh cycle. Only task cancellation
    propagates. Retry policy belongs to the scheduler.
    """

    def __init__(
        self,
        client: BaseController,
        parser: RecordParser | None = None,
    ) -> None:
        """Initialize with a cluster client.

        Args:
            client: Cluster client used for list calls
            parser: Record parser, a default one is created when omitted
        """
        self._client = client
        self._parser = parser or RecordParser()

    async def fetch(
        self,
        kind: ResourceKind,
        scope: str,
        context: str | None,
    ) -> FetchOutcome:
        """Fetch ``kind`` within ``scope`` under ``context``."""
        if not kind_spec(kind).namespaced:
            scope = ALL_NAMESPACES
        try:
            items = await self._client.list_resources(kind, scope, context)
        except ClusterClientError as exc:
            logger.info("Fetch %s failed (%s): %s", kind.value, exc.category.value, exc)
            return FetchOutcome.failure(kind, exc.category, str(exc))
        except (ValueError, TypeError, KeyError) as exc:
            logger.warning("Fetch %s returned unusable data: %s", kind.value, exc)
            return FetchOutcome.failure(kind, FetchErrorKind.SERVER, str(exc))

        records = self._dedupe(self._parser.parse_all(kind, items))
        logger.debug("Fetched %s %s (scope=%s)", len(records), kind.value, scope)
        return FetchOutcome.success(kind, records)

    @staticmethod
    def _dedupe(records: list[ResourceRecord]) -> list[ResourceRecord]:
        """Keep the first record of every identity, preserving API order."""
        seen: set[ResourceRef] = set()
        unique: list[ResourceRecord] = []
        for record in records:
            ref = record.ref
            if ref in seen:
                logger.debug("Dropping duplicate %s", ref.display_name())
                continue
            seen.add(ref)
            unique.append(record)
        return unique


__all__ = ["ResourceFetcher"]
