"""Exception hierarchy for kubecensus.

Cluster query and decode failures propagate into a node's result and mark it
failed. Registry failures never leave the version resolver.
"""

from __future__ import annotations

from dataclasses import dataclass


class CensusError(Exception):
    """Base exception for all kubecensus errors."""


class ClusterQueryError(CensusError):
    """Raised when the underlying cluster query (kubectl) fails."""


class ClusterDecodeError(CensusError):
    """Raised when the cluster query returns a malformed response."""


class NotFoundError(CensusError):
    """Raised when an expected namespace, pod or container is absent."""


class AmbiguousContainerError(CensusError):
    """Raised when a pod has several containers and none was named."""


class RegistryError(CensusError):
    """Raised when the tag registry fails or has no usable tag."""


class DetectionError(CensusError):
    """Raised by a detection predicate whose cluster query failed."""


class CatalogError(CensusError):
    """Raised when an extension catalog cannot be loaded or is invalid."""


@dataclass
class NodeFailure:
    """A failed node and the error stored in its result."""

    path: str
    error: BaseException

    def __str__(self) -> str:
        return f"failed to process {self.path!r}: {self.error}"


class PartialDetectionError(CensusError):
    """Raised after evaluation when one or more nodes failed.

    Per-node detail stays in each node's result; this only summarizes.
    """

    def __init__(self, failures: list[NodeFailure]) -> None:
        self.failures = failures
        first = failures[0] if failures else None
        message = str(first) if first else "detection failed"
        if len(failures) > 1:
            message = f"{message} (and {len(failures) - 1} more)"
        super().__init__(message)


__all__ = [
    "AmbiguousContainerError",
    "CatalogError",
    "CensusError",
    "ClusterDecodeError",
    "ClusterQueryError",
    "DetectionError",
    "NodeFailure",
    "NotFoundError",
    "PartialDetectionError",
    "RegistryError",
]
