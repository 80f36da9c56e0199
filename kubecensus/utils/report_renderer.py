"""Report renderer - prints an evaluated extension tree."""

from __future__ import annotations

import json
from collections.abc import Iterator

from rich.text import Text

from kubecensus.constants.enums import InstallStatus
from kubecensus.models.extension import DetectionResult, ExtensionNode

_INDENT = "  "

_STATUS_STYLES = {
    InstallStatus.INSTALLED: "green",
    InstallStatus.NOT_FOUND: "dim",
    InstallStatus.UNKNOWN: "yellow",
    InstallStatus.FAILED: "red",
}


def status_text(result: DetectionResult) -> str:
    """Return the display text for a node's result."""
    if result.status is InstallStatus.INSTALLED:
        return result.version or ""
    if result.status is InstallStatus.NOT_FOUND:
        return "<not installed>"
    if result.status is InstallStatus.FAILED:
        error = result.error
        message = (str(error) or type(error).__name__) if error is not None else ""
        return f"<error>: {message}"
    return "???"


class ReportRenderer:
    """Renders extension results as an indented tree.

    Installed parents show only their name with their components beneath;
    components of parents that are not installed are not shown.
    """

    def __init__(self, nodes: list[ExtensionNode]) -> None:
        self.nodes = nodes

    def _rows(
        self, nodes: list[ExtensionNode], depth: int = 0
    ) -> Iterator[tuple[int, ExtensionNode, str | None]]:
        for node in nodes:
            installed = node.result.status is InstallStatus.INSTALLED
            if node.is_leaf or not installed:
                yield depth, node, status_text(node.result)
            else:
                yield depth, node, None
            if installed and not node.is_leaf:
                yield from self._rows(node.children, depth + 1)

    def lines(self) -> list[str]:
        """Return the report as plain text lines."""
        lines = []
        for depth, node, text in self._rows(self.nodes):
            line = f"{_INDENT * depth}- {node.name}:"
            if text is not None:
                line = f"{line} {text}"
            lines.append(line)
        return lines

    def rich_lines(self) -> list[Text]:
        """Return the report as styled rich Text lines."""
        lines = []
        for depth, node, text in self._rows(self.nodes):
            line = Text(f"{_INDENT * depth}- ")
            line.append(node.name, style="bold")
            line.append(":")
            if text is not None:
                line.append(" ")
                line.append(text, style=_STATUS_STYLES[node.result.status])
            lines.append(line)
        return lines

    def to_json(self) -> str:
        """Return the full tree, including hidden components, as JSON."""
        return json.dumps(
            {"extensions": [node.to_dict() for node in self.nodes]}, indent=2
        )
