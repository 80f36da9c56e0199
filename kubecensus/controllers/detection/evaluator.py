"""Concurrent evaluation of an extension tree.

Siblings are evaluated concurrently, one task each. A node's children are
launched from inside that node's task once its detection reports present, so
deeper levels start as soon as their own parent resolves. Every task returns
the failures of its subtree; the parent concatenates them after the join.
"""

from __future__ import annotations

import asyncio
import logging

from kubecensus.constants.enums import InstallStatus
from kubecensus.controllers.cluster.query_cache import QueryCache
from kubecensus.controllers.detection.version_resolver import VersionResolver
from kubecensus.errors import NodeFailure, PartialDetectionError
from kubecensus.models.extension import ExtensionNode

logger = logging.getLogger(__name__)


class TreeEvaluator:
    """Writes a terminal result into every reachable node of a tree."""

    def __init__(self, cache: QueryCache, versions: VersionResolver) -> None:
        """Initialize the evaluator.

        Args:
            cache: Per-run query cache handed to detection strategies
            versions: Resolver handed to leaf version sources
        """
        self._cache = cache
        self._versions = versions

    async def evaluate(self, nodes: list[ExtensionNode]) -> None:
        """Evaluate ``nodes`` and all reachable descendants.

        Returns only after every launched task has finished. Results are
        written into each node's ``result`` slot.

        Raises:
            PartialDetectionError: If one or more nodes failed. Every node's
                result is complete when this is raised.
        """
        failures = await self._evaluate_group(nodes, parent_path="")
        if failures:
            raise PartialDetectionError(failures)

    async def _evaluate_group(
        self, nodes: list[ExtensionNode], parent_path: str
    ) -> list[NodeFailure]:
        outcomes = await asyncio.gather(
            *(
                self._evaluate_node(node, f"{parent_path}{node.name}")
                for node in nodes
            )
        )
        return [failure for outcome in outcomes for failure in outcome]

    async def _evaluate_node(self, node: ExtensionNode, path: str) -> list[NodeFailure]:
        logger.debug("Detecting %s (%s)", path, node.detector.describe())
        try:
            present = await node.detector.detect(self._cache)
        except (Exception, asyncio.CancelledError) as exc:
            return [self._record_failure(node, path, exc)]

        if not present:
            node.result.status = InstallStatus.NOT_FOUND
            logger.debug("%s not installed", path)
            return []

        node.result.status = InstallStatus.INSTALLED
        if node.children:
            return await self._evaluate_group(node.children, parent_path=f"{path}/")

        if node.version_source is None:
            error = ValueError(f"extension {path!r} has no version source")
            return [self._record_failure(node, path, error)]
        try:
            node.result.version = await node.version_source.resolve(self._versions)
        except (Exception, asyncio.CancelledError) as exc:
            return [self._record_failure(node, path, exc)]
        logger.debug("%s installed: %s", path, node.result.version)
        return []

    @staticmethod
    def _record_failure(
        node: ExtensionNode, path: str, error: BaseException
    ) -> NodeFailure:
        if isinstance(error, asyncio.CancelledError):
            logger.debug("Evaluation of %s was cancelled", path)
        else:
            logger.debug("Evaluation of %s failed: %s", path, error)
        node.result.status = InstallStatus.FAILED
        node.result.error = error
        return NodeFailure(path=path, error=error)
