"""Tag registry client - maps an image digest back to human tags."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from kubecensus.constants.defaults import REGISTRY_SCHEME_DEFAULT
from kubecensus.constants.timeouts import REGISTRY_REQUEST_TIMEOUT
from kubecensus.errors import RegistryError

logger = logging.getLogger(__name__)


class TagRegistry(Protocol):
    """Resolves the tags a registry associates with a digest."""

    async def resolve_digest_tags(self, repository: str, digest: str) -> list[str]: ...


class HttpTagRegistry:
    """Queries a registry's ``/v2/<repo>/tags/list`` endpoint.

    The response is expected to carry a ``manifest`` map keyed by digest, each
    entry listing its tags under ``tag`` (the GCR flavour of the endpoint).
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        scheme: str = REGISTRY_SCHEME_DEFAULT,
        timeout: float = REGISTRY_REQUEST_TIMEOUT,
    ) -> None:
        """Initialize the registry client.

        Args:
            client: Optional shared HTTP client; one is created when omitted
            scheme: URL scheme used to reach registries
            timeout: Request timeout in seconds for an owned client
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self.scheme = scheme

    async def aclose(self) -> None:
        """Close the HTTP client if this registry created it."""
        if self._owns_client:
            await self._client.aclose()

    @staticmethod
    def _split_repository(repository: str) -> tuple[str, str]:
        host, _, path = repository.partition("/")
        if not host or not path:
            raise RegistryError(f"repository {repository!r} has no registry host")
        return host, path

    def tags_url(self, repository: str) -> str:
        host, path = self._split_repository(repository)
        return f"{self.scheme}://{host}/v2/{path}/tags/list"

    async def resolve_digest_tags(self, repository: str, digest: str) -> list[str]:
        """Return the tags associated with ``digest`` in ``repository``.

        Raises:
            RegistryError: On transport/HTTP errors, undecodable responses, or
                when the digest is not listed.
        """
        url = self.tags_url(repository)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            payload: Any = response.json()
        except httpx.HTTPError as exc:
            raise RegistryError(f"failed to query tags for {repository}: {exc}") from exc
        except ValueError as exc:
            raise RegistryError(
                f"failed to decode tag list for {repository}: {exc}"
            ) from exc

        manifest = payload.get("manifest") if isinstance(payload, dict) else None
        if not isinstance(manifest, dict):
            raise RegistryError(f"tag list for {repository} has no manifest map")
        entry = manifest.get(digest)
        if not isinstance(entry, dict):
            raise RegistryError(f"digest {digest!r} not found in manifest of {repository}")
        tags = entry.get("tag") or []
        if not isinstance(tags, list):
            raise RegistryError(f"malformed tags for {digest!r} in {repository}")
        logger.debug("Registry lists %d tag(s) for %s@%s", len(tags), repository, digest)
        return [str(tag) for tag in tags]
