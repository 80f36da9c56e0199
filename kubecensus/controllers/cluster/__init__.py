"""Init file for cluster module."""

from kubecensus.controllers.cluster.fetchers import ClusterQueryService, KubectlFetcher
from kubecensus.controllers.cluster.parsers import NamespaceParser, PodParser
from kubecensus.controllers.cluster.query_cache import QueryCache

__all__ = [
    "ClusterQueryService",
    "KubectlFetcher",
    "NamespaceParser",
    "PodParser",
    "QueryCache",
]
