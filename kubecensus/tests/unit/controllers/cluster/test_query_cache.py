"""Tests for the single-flight query cache."""

from __future__ import annotations

import asyncio

import pytest

from kubecensus.controllers.cluster.query_cache import QueryCache
from kubecensus.errors import ClusterQueryError
from kubecensus.tests.fakes import FakeCluster, make_pod


class TestQueryCache:
    """Tests for QueryCache class."""

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_query(self) -> None:
        """Many concurrent callers trigger exactly one namespace query."""
        cluster = FakeCluster(namespaces=["default", "istio-system"])
        cache = QueryCache(cluster)

        results = await asyncio.gather(*(cache.get_namespaces() for _ in range(10)))

        assert cluster.calls["namespaces"] == 1
        assert all(r == ["default", "istio-system"] for r in results)

    @pytest.mark.asyncio
    async def test_later_callers_use_cached_value(self) -> None:
        """Calls after completion do not query again."""
        cluster = FakeCluster(pods=[make_pod("kube-system", "tiller-deploy-1", ("tiller", "t:1"))])
        cache = QueryCache(cluster)

        first = await cache.get_pods()
        second = await cache.get_pods()

        assert cluster.calls["pods"] == 1
        assert first == second
        assert cache.query_counts() == {"pods": 1}

    @pytest.mark.asyncio
    async def test_collections_are_independent(self) -> None:
        """Namespaces and pods are each queried once."""
        cluster = FakeCluster(namespaces=["a"], pods=[])
        cache = QueryCache(cluster)

        await asyncio.gather(
            cache.get_namespaces(), cache.get_pods(), cache.get_namespaces(), cache.get_pods()
        )

        assert cluster.calls == {"namespaces": 1, "pods": 1}

    @pytest.mark.asyncio
    async def test_failure_is_shared_by_concurrent_callers(self) -> None:
        """All concurrent waiters observe the same error from one query."""
        error = ClusterQueryError("connection refused")
        cluster = FakeCluster(namespace_error=error)
        cache = QueryCache(cluster)

        results = await asyncio.gather(
            *(cache.get_namespaces() for _ in range(5)), return_exceptions=True
        )

        assert cluster.calls["namespaces"] == 1
        assert all(r is error for r in results)

    @pytest.mark.asyncio
    async def test_failure_is_not_retried(self) -> None:
        """A failed fetch is remembered for the rest of the run."""
        cluster = FakeCluster(pod_error=ClusterQueryError("boom"))
        cache = QueryCache(cluster)

        with pytest.raises(ClusterQueryError):
            await cache.get_pods()
        cluster.pod_error = None
        with pytest.raises(ClusterQueryError):
            await cache.get_pods()

        assert cluster.calls["pods"] == 1

    @pytest.mark.asyncio
    async def test_new_cache_queries_again(self) -> None:
        """Each run builds its own cache; nothing leaks between them."""
        cluster = FakeCluster(namespaces=["a"])

        await QueryCache(cluster).get_namespaces()
        await QueryCache(cluster).get_namespaces()

        assert cluster.calls["namespaces"] == 2

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_cancel_shared_fetch(self) -> None:
        """Cancelling one waiter leaves the fetch running for the others."""
        cluster = FakeCluster(namespaces=["a"], delay=0.05)
        cache = QueryCache(cluster)

        first = asyncio.create_task(cache.get_namespaces())
        second = asyncio.create_task(cache.get_namespaces())
        await asyncio.sleep(0)
        first.cancel()

        assert await second == ["a"]
        with pytest.raises(asyncio.CancelledError):
            await first
        assert cluster.calls["namespaces"] == 1

    @pytest.mark.asyncio
    async def test_returned_list_is_a_copy(self) -> None:
        """Mutating a returned list does not change the cached collection."""
        cache = QueryCache(FakeCluster(namespaces=["a"]))

        (await cache.get_namespaces()).append("b")

        assert await cache.get_namespaces() == ["a"]
