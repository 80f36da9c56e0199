"""Pod parser for cluster controller - parses kubectl pod output into PodInfo."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from kubecensus.errors import ClusterDecodeError
from kubecensus.models.pod_info import ContainerInfo, PodInfo


class PodParser:
    """Parses ``kubectl get pods -o json`` output into structured formats."""

    def __init__(self) -> None:
        """Initialize pod parser."""
        pass

    def parse_pod(self, pod: dict[str, Any]) -> PodInfo:
        """Parse a single raw pod object into PodInfo.

        Args:
            pod: Raw pod dictionary from the API

        Returns:
            PodInfo object.
        """
        metadata = pod.get("metadata") or {}
        spec = pod.get("spec") or {}
        name = metadata.get("name")
        namespace = metadata.get("namespace")
        if not isinstance(name, str) or not isinstance(namespace, str):
            raise ClusterDecodeError("pod object is missing metadata.name/namespace")

        try:
            containers = [
                ContainerInfo(name=c.get("name", ""), image=c.get("image", ""))
                for c in spec.get("containers") or []
                if isinstance(c, dict)
            ]
        except ValidationError as exc:
            raise ClusterDecodeError(
                f"pod {namespace}/{name} has malformed containers: {exc}"
            ) from exc
        return PodInfo(namespace=namespace, name=name, containers=containers)

    def parse_pods(self, output: str) -> list[PodInfo]:
        """Parse a pod list document.

        Args:
            output: Raw JSON output of kubectl

        Returns:
            List of PodInfo in API order.
        """
        return [self.parse_pod(item) for item in _decode_items(output, "pods")]


class NamespaceParser:
    """Parses ``kubectl get namespaces -o json`` output."""

    def parse_namespaces(self, output: str) -> list[str]:
        """Return namespace names in API order."""
        names: list[str] = []
        for item in _decode_items(output, "namespaces"):
            name = (item.get("metadata") or {}).get("name")
            if not isinstance(name, str):
                raise ClusterDecodeError("namespace object is missing metadata.name")
            names.append(name)
        return names


def _decode_items(output: str, kind: str) -> list[dict[str, Any]]:
    """Decode a kubectl List document and return its items."""
    try:
        data = json.loads(output)
    except json.JSONDecodeError as exc:
        raise ClusterDecodeError(f"decoding {kind} json failed: {exc}") from exc
    if not isinstance(data, dict):
        raise ClusterDecodeError(f"decoding {kind} json failed: expected an object")
    items = data.get("items") or []
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        raise ClusterDecodeError(f"decoding {kind} json failed: malformed items")
    return items
