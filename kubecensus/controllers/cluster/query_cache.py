"""Per-run memoization of cluster queries.

Each collection (namespaces, pods) is fetched at most once per QueryCache.
The first caller starts the fetch as a task; every caller, concurrent or
later, awaits that same task and sees the same result or the same error.
A failed fetch is not retried until a new QueryCache is built.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from kubecensus.controllers.cluster.fetchers import ClusterQueryService
from kubecensus.models.pod_info import PodInfo

logger = logging.getLogger(__name__)


class QueryCache:
    """Single-flight cache over a ClusterQueryService for one evaluation run."""

    SOURCE_NAMESPACES = "namespaces"
    SOURCE_PODS = "pods"

    def __init__(self, cluster: ClusterQueryService) -> None:
        """Initialize an empty cache.

        Args:
            cluster: Service answering the underlying list queries
        """
        self._cluster = cluster
        self._tasks: dict[str, asyncio.Task[Any]] = {}
        self._query_counts: dict[str, int] = {}

    async def get_namespaces(self) -> list[str]:
        """Return namespace names, querying the cluster at most once."""
        namespaces = await self._single_flight(
            self.SOURCE_NAMESPACES, self._cluster.list_namespaces
        )
        return list(namespaces)

    async def get_pods(self) -> list[PodInfo]:
        """Return all pods, querying the cluster at most once."""
        pods = await self._single_flight(self.SOURCE_PODS, self._cluster.list_pods)
        return list(pods)

    def query_counts(self) -> dict[str, int]:
        """Return how many underlying queries were issued per source."""
        return dict(self._query_counts)

    async def _single_flight(
        self, source: str, fetch: Callable[[], Awaitable[Any]]
    ) -> Any:
        # No await between lookup and insert, so only one task is ever created.
        task = self._tasks.get(source)
        if task is None:
            self._query_counts[source] = self._query_counts.get(source, 0) + 1
            logger.debug("Querying cluster for %s", source)
            task = asyncio.create_task(fetch(), name=f"kubecensus-query-{source}")
            task.add_done_callback(self._log_outcome)
            self._tasks[source] = task
        # Shield so a cancelled waiter does not cancel the fetch shared by others.
        return await asyncio.shield(task)

    @staticmethod
    def _log_outcome(task: asyncio.Task[Any]) -> None:
        if task.cancelled():
            logger.debug("Cluster query %s was cancelled", task.get_name())
            return
        error = task.exception()
        if error is not None:
            logger.debug("Cluster query %s failed: %s", task.get_name(), error)
