"""Extension tree models.

An extension tree is built once before evaluation. Each node carries a
detection strategy, a version source when it is a leaf, and a result slot that
the evaluator writes exactly once.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from kubecensus.constants.enums import InstallStatus

if TYPE_CHECKING:
    from kubecensus.controllers.detection.strategies import Detector, VersionSource


@dataclass
class DetectionResult:
    """Outcome recorded for a single node."""

    status: InstallStatus = InstallStatus.UNKNOWN
    version: str | None = None
    error: BaseException | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "status": self.status.value,
            "version": self.version,
            "error": str(self.error) if self.error is not None else None,
        }


@dataclass
class ExtensionNode:
    """A named component with a presence check and optional children."""

    name: str
    detector: Detector
    version_source: VersionSource | None = None
    children: list[ExtensionNode] = field(default_factory=list)
    result: DetectionResult = field(default_factory=DetectionResult)

    def __post_init__(self) -> None:
        if self.is_leaf and self.version_source is None:
            raise ValueError(f"leaf extension {self.name!r} has no version source")
        if not self.is_leaf and self.version_source is not None:
            raise ValueError(
                f"extension {self.name!r} has subcomponents and a version source"
            )
        seen: set[str] = set()
        for child in self.children:
            if child.name in seen:
                raise ValueError(
                    f"duplicate subcomponent {child.name!r} in {self.name!r}"
                )
            seen.add(child.name)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self, depth: int = 0) -> Iterator[tuple[int, ExtensionNode]]:
        """Yield ``(depth, node)`` for this node and every descendant."""
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)

    def to_dict(self) -> dict[str, Any]:
        """Convert the subtree to a dictionary for serialization."""
        data: dict[str, Any] = {"name": self.name, **self.result.to_dict()}
        if self.children:
            data["components"] = [child.to_dict() for child in self.children]
        return data
