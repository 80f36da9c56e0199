"""Version resolver - turns a running container image into a display version.

The image reference of the matching container is the version. Digest
references (``host/repo@sha256:...``) are looked up in the tag registry so a
human tag can be shown instead; that lookup is best-effort and any failure
falls back to the raw reference.
"""

from __future__ import annotations

import logging

from kubecensus.constants.defaults import LATEST_TAG
from kubecensus.constants.patterns import DIGEST_IMAGE_PATTERN
from kubecensus.controllers.cluster.query_cache import QueryCache
from kubecensus.controllers.registry import TagRegistry
from kubecensus.errors import AmbiguousContainerError, NotFoundError, RegistryError
from kubecensus.models.pod_info import PodInfo

logger = logging.getLogger(__name__)


def pick_display_tag(tags: list[str]) -> str:
    """Return the first tag that is not ``latest``, else the first tag.

    Raises:
        RegistryError: If ``tags`` is empty.
    """
    if not tags:
        raise RegistryError("no tags found")
    for tag in tags:
        if tag != LATEST_TAG:
            return tag
    return tags[0]


class VersionResolver:
    """Resolves leaf versions from the pod list and, optionally, a tag registry."""

    def __init__(self, cache: QueryCache, registry: TagRegistry | None = None) -> None:
        """Initialize the resolver.

        Args:
            cache: Per-run query cache providing the pod list
            registry: Tag registry for digest lookups; None disables them
        """
        self._cache = cache
        self._registry = registry

    async def find_pod(self, namespace: str, pod_prefix: str) -> PodInfo:
        """Return the first pod in ``namespace`` whose name starts with ``pod_prefix``."""
        for pod in await self._cache.get_pods():
            if pod.namespace == namespace and pod.name.startswith(pod_prefix):
                return pod
        raise NotFoundError(f"no pod found with \"{namespace}/{pod_prefix}\" prefix")

    async def find_container_image(
        self, namespace: str, pod_prefix: str, container_name: str | None = None
    ) -> str:
        """Return the image of the selected container of the matching pod.

        A single-container pod is used regardless of ``container_name``.

        Raises:
            NotFoundError: No matching pod, or no container named ``container_name``.
            AmbiguousContainerError: Several containers and no name given.
        """
        pod = await self.find_pod(namespace, pod_prefix)
        if len(pod.containers) == 1:
            return pod.containers[0].image
        if not pod.containers:
            raise NotFoundError(f"pod {pod.namespace}/{pod.name} has no containers")
        if not container_name:
            raise AmbiguousContainerError(
                f"pod {pod.name} has {len(pod.containers)} containers, could not "
                "disambiguate (container name filter not given)"
            )
        for container in pod.containers:
            if container.name == container_name:
                return container.image
        raise NotFoundError(
            f"could not find container name {container_name!r} in pod "
            f"{pod.namespace}/{pod.name}"
        )

    async def version_from_image(self, image: str) -> str:
        """Return a display version for ``image``; never fails on registry errors."""
        match = DIGEST_IMAGE_PATTERN.match(image)
        if match is None or self._registry is None:
            return image

        repository, digest = match.group("repository"), match.group("digest")
        try:
            tags = await self._registry.resolve_digest_tags(repository, digest)
            tag = pick_display_tag(tags)
        except Exception as exc:
            # Any registry failure degrades to the unresolved reference.
            logger.warning("failed to query tags for image %s: %s", image, exc)
            return image
        return f"{repository}:{tag}"

    async def resolve_version(
        self, namespace: str, pod_prefix: str, container_name: str | None = None
    ) -> str:
        """Locate the container image and turn it into a display version."""
        image = await self.find_container_image(namespace, pod_prefix, container_name)
        return await self.version_from_image(image)
