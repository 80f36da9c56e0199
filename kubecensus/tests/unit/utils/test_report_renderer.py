"""Tests for the report renderer."""

from __future__ import annotations

import asyncio
import json

from kubecensus.constants.enums import InstallStatus
from kubecensus.controllers.detection.strategies import NamespaceExists, PodImageVersion
from kubecensus.errors import NotFoundError
from kubecensus.models.extension import DetectionResult, ExtensionNode
from kubecensus.utils.report_renderer import ReportRenderer, status_text


def _leaf(name: str, result: DetectionResult) -> ExtensionNode:
    node = ExtensionNode(
        name=name,
        detector=NamespaceExists(name),
        version_source=PodImageVersion(name, f"{name}-"),
    )
    node.result = result
    return node


def _parent(name: str, status: InstallStatus, *children: ExtensionNode) -> ExtensionNode:
    node = ExtensionNode(name=name, detector=NamespaceExists(name), children=list(children))
    node.result = DetectionResult(status=status)
    return node


class TestStatusText:
    """Tests for status_text."""

    def test_installed_shows_version(self) -> None:
        result = DetectionResult(InstallStatus.INSTALLED, version="gcr.io/app:v1")
        assert status_text(result) == "gcr.io/app:v1"

    def test_not_found(self) -> None:
        assert status_text(DetectionResult(InstallStatus.NOT_FOUND)) == "<not installed>"

    def test_unknown(self) -> None:
        assert status_text(DetectionResult()) == "???"

    def test_failed_shows_error(self) -> None:
        result = DetectionResult(InstallStatus.FAILED, error=NotFoundError("no pod"))
        assert status_text(result) == "<error>: no pod"

    def test_failed_with_empty_message_uses_type(self) -> None:
        result = DetectionResult(InstallStatus.FAILED, error=asyncio.CancelledError())
        assert status_text(result) == "<error>: CancelledError"


class TestReportRenderer:
    """Tests for ReportRenderer class."""

    def _tree(self) -> list[ExtensionNode]:
        return [
            _parent(
                "istio",
                InstallStatus.INSTALLED,
                _leaf("pilot", DetectionResult(InstallStatus.INSTALLED, version="pilot:1.1")),
                _leaf("policy", DetectionResult(InstallStatus.FAILED, error=NotFoundError("gone"))),
            ),
            _parent(
                "knative",
                InstallStatus.NOT_FOUND,
                _leaf("serving", DetectionResult()),
            ),
            _leaf("helm-tiller", DetectionResult(InstallStatus.NOT_FOUND)),
        ]

    def test_lines(self) -> None:
        assert ReportRenderer(self._tree()).lines() == [
            "- istio:",
            "  - pilot: pilot:1.1",
            "  - policy: <error>: gone",
            "- knative: <not installed>",
            "- helm-tiller: <not installed>",
        ]

    def test_failed_parent_shows_error_and_hides_children(self) -> None:
        parent = _parent(
            "istio", InstallStatus.FAILED, _leaf("pilot", DetectionResult())
        )
        parent.result.error = RuntimeError("kubectl down")

        assert ReportRenderer([parent]).lines() == ["- istio: <error>: kubectl down"]

    def test_rich_lines_match_plain_lines(self) -> None:
        renderer = ReportRenderer(self._tree())
        assert [t.plain for t in renderer.rich_lines()] == renderer.lines()

    def test_to_json_includes_every_node(self) -> None:
        data = json.loads(ReportRenderer(self._tree()).to_json())

        istio = data["extensions"][0]
        assert istio["status"] == "installed"
        assert istio["components"][0] == {
            "name": "pilot",
            "status": "installed",
            "version": "pilot:1.1",
            "error": None,
        }
        assert istio["components"][1]["error"] == "gone"
        assert data["extensions"][1]["components"][0]["status"] == "unknown"
