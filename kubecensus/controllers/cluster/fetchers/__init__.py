"""Fetchers for cluster data."""

from kubecensus.controllers.cluster.fetchers.kubectl_fetcher import (
    ClusterQueryService,
    KubectlFetcher,
)

__all__ = ["ClusterQueryService", "KubectlFetcher"]
