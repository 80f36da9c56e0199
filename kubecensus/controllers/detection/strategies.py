"""Detection and version strategies attached to extension nodes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from kubecensus.controllers.cluster.query_cache import QueryCache
from kubecensus.controllers.detection.predicates import (
    has_namespace,
    has_namespace_with_prefix,
    has_pod_with_prefix,
)
from kubecensus.controllers.detection.version_resolver import VersionResolver


class Detector(Protocol):
    """Reports whether a component is present."""

    async def detect(self, cache: QueryCache) -> bool: ...

    def describe(self) -> str: ...


class VersionSource(Protocol):
    """Produces the version string of an installed leaf component."""

    async def resolve(self, versions: VersionResolver) -> str: ...

    def describe(self) -> str: ...


@dataclass(frozen=True)
class NamespaceExists:
    """Present when a namespace with exactly this name exists."""

    namespace: str

    async def detect(self, cache: QueryCache) -> bool:
        return await has_namespace(cache, self.namespace)

    def describe(self) -> str:
        return f"namespace {self.namespace}"


@dataclass(frozen=True)
class NamespacePrefix:
    """Present when any namespace name starts with the prefix."""

    prefix: str

    async def detect(self, cache: QueryCache) -> bool:
        return await has_namespace_with_prefix(cache, self.prefix)

    def describe(self) -> str:
        return f"namespace prefix {self.prefix}"


@dataclass(frozen=True)
class PodPrefix:
    """Present when a pod in the namespace has a name with the prefix."""

    namespace: str
    pod_prefix: str

    async def detect(self, cache: QueryCache) -> bool:
        return await has_pod_with_prefix(cache, self.namespace, self.pod_prefix)

    def describe(self) -> str:
        return f"pod {self.namespace}/{self.pod_prefix}*"


@dataclass(frozen=True)
class PodImageVersion:
    """Version is the image of a container in the first matching pod."""

    namespace: str
    pod_prefix: str
    container: str | None = None

    async def resolve(self, versions: VersionResolver) -> str:
        return await versions.resolve_version(
            self.namespace, self.pod_prefix, self.container
        )

    def describe(self) -> str:
        suffix = f" container {self.container}" if self.container else ""
        return f"image of pod {self.namespace}/{self.pod_prefix}*{suffix}"

    @classmethod
    def for_deployment(
        cls, namespace: str, deployment: str, container: str | None = None
    ) -> PodImageVersion:
        """Match pods created by a deployment (``<deployment>-`` prefix)."""
        return cls(namespace, f"{deployment}-", container)
