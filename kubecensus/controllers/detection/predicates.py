"""Presence checks built on the query cache.

Cache errors are re-raised as DetectionError chained to the original error.
Nothing here retries; the cache already issues at most one query per run.
"""

from __future__ import annotations

from kubecensus.controllers.cluster.query_cache import QueryCache
from kubecensus.errors import DetectionError


async def has_namespace(cache: QueryCache, namespace: str) -> bool:
    """Return True if ``namespace`` exists verbatim."""
    try:
        namespaces = await cache.get_namespaces()
    except Exception as exc:
        raise DetectionError(f"namespace check for {namespace!r} failed: {exc}") from exc
    return namespace in namespaces


async def has_namespace_with_prefix(cache: QueryCache, prefix: str) -> bool:
    """Return True if any namespace name starts with ``prefix``."""
    try:
        namespaces = await cache.get_namespaces()
    except Exception as exc:
        raise DetectionError(
            f"namespace prefix check for {prefix!r} failed: {exc}"
        ) from exc
    return any(ns.startswith(prefix) for ns in namespaces)


async def has_pod_with_prefix(cache: QueryCache, namespace: str, pod_prefix: str) -> bool:
    """Return True if a pod in ``namespace`` has a name starting with ``pod_prefix``."""
    try:
        pods = await cache.get_pods()
    except Exception as exc:
        raise DetectionError(
            f"pod check for \"{namespace}/{pod_prefix}\" failed: {exc}"
        ) from exc
    return any(
        pod.namespace == namespace and pod.name.startswith(pod_prefix) for pod in pods
    )
