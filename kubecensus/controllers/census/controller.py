"""Census controller - runs one detection pass over an extension tree.

Builds the per-run collaborators (query cache, registry client, resolver and
evaluator), evaluates the tree and returns a report. Nothing is reused across
runs.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from kubecensus.controllers.cluster import ClusterQueryService, KubectlFetcher, QueryCache
from kubecensus.controllers.detection import TreeEvaluator, VersionResolver
from kubecensus.controllers.registry import HttpTagRegistry, TagRegistry
from kubecensus.errors import NodeFailure, PartialDetectionError
from kubecensus.models.extension import ExtensionNode
from kubecensus.models.settings import CensusSettings

logger = logging.getLogger(__name__)


@dataclass
class CensusReport:
    """Outcome of one census run."""

    extensions: list[ExtensionNode]
    failures: list[NodeFailure] = field(default_factory=list)
    query_counts: dict[str, int] = field(default_factory=dict)
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        return not self.failures

    @property
    def error(self) -> PartialDetectionError | None:
        """Representative error for logging, or None when nothing failed."""
        return PartialDetectionError(self.failures) if self.failures else None


class CensusController:
    """Detects installed cluster extensions and their versions."""

    def __init__(
        self,
        settings: CensusSettings | None = None,
        *,
        cluster: ClusterQueryService | None = None,
        registry: TagRegistry | None = None,
    ) -> None:
        """Initialize the census controller.

        Args:
            settings: Run settings; defaults are used when omitted
            cluster: Cluster query service; a KubectlFetcher when omitted
            registry: Tag registry; an HttpTagRegistry is created per run when
                omitted and tag resolution is enabled
        """
        self.settings = settings or CensusSettings()
        self._cluster = cluster or KubectlFetcher(
            self.settings.context,
            binary=self.settings.kubectl_binary,
            timeout_seconds=self.settings.kubectl_timeout_seconds,
            request_timeout=self.settings.request_timeout,
        )
        self._registry = registry

    async def run(self, extensions: list[ExtensionNode]) -> CensusReport:
        """Evaluate ``extensions`` in place and return the run report."""
        start = time.monotonic()
        cache = QueryCache(self._cluster)
        owned_registry: HttpTagRegistry | None = None
        registry = self._registry if self.settings.resolve_tags else None
        if registry is None and self.settings.resolve_tags:
            owned_registry = HttpTagRegistry(
                scheme=self.settings.registry_scheme,
                timeout=self.settings.registry_timeout_seconds,
            )
            registry = owned_registry

        report = CensusReport(extensions=extensions)
        evaluator = TreeEvaluator(cache, VersionResolver(cache, registry))
        try:
            await evaluator.evaluate(extensions)
        except PartialDetectionError as exc:
            report.failures = exc.failures
        finally:
            if owned_registry is not None:
                await owned_registry.aclose()

        report.query_counts = cache.query_counts()
        report.duration_ms = (time.monotonic() - start) * 1000
        logger.info(
            "Census finished in %.0f ms (%d failure(s), queries=%s)",
            report.duration_ms,
            len(report.failures),
            report.query_counts,
        )
        return report
