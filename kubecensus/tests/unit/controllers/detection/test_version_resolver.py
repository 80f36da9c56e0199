"""Tests for the version resolver."""

from __future__ import annotations

import logging

import pytest

from kubecensus.controllers.cluster.query_cache import QueryCache
from kubecensus.controllers.detection.version_resolver import (
    VersionResolver,
    pick_display_tag,
)
from kubecensus.errors import (
    AmbiguousContainerError,
    ClusterQueryError,
    NotFoundError,
    RegistryError,
)
from kubecensus.tests.fakes import DIGEST, FakeCluster, FakeRegistry, make_pod

DIGEST_IMAGE = f"registry.example/app@{DIGEST}"


def _resolver(*pods, registry=None) -> VersionResolver:
    return VersionResolver(QueryCache(FakeCluster(pods=list(pods))), registry)


class TestDigestHelpers:
    """Tests for digest matching and tag choice."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "image",
        [
            "registry.example/app:v1",
            f"app@{DIGEST}",
            "registry.example/app@sha512:" + "a" * 128,
            "registry.example/app@sha256:" + "A" * 64,
        ],
    )
    async def test_non_digest_images_skip_registry(self, image: str) -> None:
        registry = FakeRegistry(tags=["v1"])

        assert await _resolver(registry=registry).version_from_image(image) == image
        assert registry.calls == []

    @pytest.mark.asyncio
    async def test_digest_image_splits_repository_and_digest(self) -> None:
        registry = FakeRegistry(tags=["v0.7.0"])
        image = f"gcr.io/knative-releases/serving/cmd/controller@{DIGEST}"

        version = await _resolver(registry=registry).version_from_image(image)

        assert version == "gcr.io/knative-releases/serving/cmd/controller:v0.7.0"
        assert registry.calls == [("gcr.io/knative-releases/serving/cmd/controller", DIGEST)]

    def test_pick_display_tag_skips_latest(self) -> None:
        assert pick_display_tag(["latest", "v1.2.3", "v1.2"]) == "v1.2.3"

    def test_pick_display_tag_only_latest(self) -> None:
        assert pick_display_tag(["latest"]) == "latest"

    def test_pick_display_tag_empty(self) -> None:
        with pytest.raises(RegistryError):
            pick_display_tag([])


class TestFindContainerImage:
    """Tests for pod and container disambiguation."""

    @pytest.mark.asyncio
    async def test_single_container_ignores_name(self) -> None:
        resolver = _resolver(make_pod("kube-system", "tiller-deploy-1", ("tiller", "tiller:v2")))

        image = await resolver.find_container_image("kube-system", "tiller-deploy-", "other")

        assert image == "tiller:v2"

    @pytest.mark.asyncio
    async def test_no_matching_pod(self) -> None:
        resolver = _resolver(make_pod("kube-system", "coredns-1", ("coredns", "coredns:1")))

        with pytest.raises(NotFoundError, match="kube-system/tiller-deploy-"):
            await resolver.find_container_image("kube-system", "tiller-deploy-")

    @pytest.mark.asyncio
    async def test_multiple_containers_without_name_is_ambiguous(self) -> None:
        resolver = _resolver(
            make_pod("istio-system", "istio-pilot-1", ("discovery", "pilot:1"), ("istio-proxy", "proxy:1"))
        )

        with pytest.raises(AmbiguousContainerError, match="2 containers"):
            await resolver.find_container_image("istio-system", "istio-pilot-")

    @pytest.mark.asyncio
    async def test_multiple_containers_with_name(self) -> None:
        resolver = _resolver(
            make_pod("istio-system", "istio-pilot-1", ("discovery", "pilot:1"), ("istio-proxy", "proxy:1"))
        )

        image = await resolver.find_container_image("istio-system", "istio-pilot-", "discovery")

        assert image == "pilot:1"

    @pytest.mark.asyncio
    async def test_multiple_containers_with_unknown_name(self) -> None:
        resolver = _resolver(make_pod("ns", "p-1", ("a", "a:1"), ("b", "b:1")))

        with pytest.raises(NotFoundError, match="'c'"):
            await resolver.find_container_image("ns", "p-", "c")

    @pytest.mark.asyncio
    async def test_first_matching_pod_wins(self) -> None:
        resolver = _resolver(
            make_pod("ns", "ctl-1", ("c", "img:1")),
            make_pod("ns", "ctl-2", ("c", "img:2")),
        )

        assert await resolver.find_container_image("ns", "ctl-") == "img:1"

    @pytest.mark.asyncio
    async def test_pod_query_error_propagates(self) -> None:
        resolver = VersionResolver(QueryCache(FakeCluster(pod_error=ClusterQueryError("down"))))

        with pytest.raises(ClusterQueryError):
            await resolver.find_container_image("ns", "p-")


class TestVersionFromImage:
    """Tests for the digest to tag fallback chain."""

    @pytest.mark.asyncio
    async def test_digest_resolves_to_non_latest_tag(self) -> None:
        registry = FakeRegistry(tags=["latest", "v1.2.3"])
        resolver = _resolver(registry=registry)

        version = await resolver.version_from_image(DIGEST_IMAGE)

        assert version == "registry.example/app:v1.2.3"
        assert registry.calls == [("registry.example/app", DIGEST)]

    @pytest.mark.asyncio
    async def test_digest_with_only_latest(self) -> None:
        resolver = _resolver(registry=FakeRegistry(tags=["latest"]))

        assert await resolver.version_from_image(DIGEST_IMAGE) == "registry.example/app:latest"

    @pytest.mark.asyncio
    async def test_registry_failure_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """A failed lookup returns the raw reference and logs a warning."""
        resolver = _resolver(registry=FakeRegistry(error=RegistryError("503")))

        with caplog.at_level(logging.WARNING):
            version = await resolver.version_from_image(DIGEST_IMAGE)

        assert version == DIGEST_IMAGE
        assert "failed to query tags" in caplog.text

    @pytest.mark.asyncio
    async def test_unexpected_registry_error_falls_back(self) -> None:
        resolver = _resolver(registry=FakeRegistry(error=RuntimeError("socket closed")))

        assert await resolver.version_from_image(DIGEST_IMAGE) == DIGEST_IMAGE

    @pytest.mark.asyncio
    async def test_no_tags_falls_back(self) -> None:
        resolver = _resolver(registry=FakeRegistry(tags=[]))

        assert await resolver.version_from_image(DIGEST_IMAGE) == DIGEST_IMAGE

    @pytest.mark.asyncio
    async def test_tagged_image_skips_registry(self) -> None:
        registry = FakeRegistry(tags=["v9"])
        resolver = _resolver(registry=registry)

        assert await resolver.version_from_image("registry.example/app:v1") == "registry.example/app:v1"
        assert registry.calls == []

    @pytest.mark.asyncio
    async def test_without_registry_returns_digest(self) -> None:
        assert await _resolver().version_from_image(DIGEST_IMAGE) == DIGEST_IMAGE


class TestResolveVersion:
    """End-to-end resolution from pod list to display version."""

    @pytest.mark.asyncio
    async def test_resolve_version_with_digest(self) -> None:
        resolver = _resolver(
            make_pod("knative-serving", "controller-6d", ("controller", DIGEST_IMAGE)),
            registry=FakeRegistry(tags=["v0.7.0"]),
        )

        version = await resolver.resolve_version("knative-serving", "controller-")

        assert version == "registry.example/app:v0.7.0"
