"""YAML extension catalogs.

A catalog file lists extensions in the same shape as the built-in tree::

    extensions:
      - name: linkerd
        detect: {kind: namespace, namespace: linkerd}
        components:
          - name: destination
            detect: {kind: pod-prefix, namespace: linkerd, pod_prefix: linkerd-destination-}
            version: {namespace: linkerd, pod_prefix: linkerd-destination-, container: destination}
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from kubecensus.constants.enums import DetectKind
from kubecensus.controllers.detection.strategies import (
    Detector,
    NamespaceExists,
    NamespacePrefix,
    PodImageVersion,
    PodPrefix,
)
from kubecensus.errors import CatalogError
from kubecensus.models.extension import ExtensionNode

logger = logging.getLogger(__name__)


class DetectSpec(BaseModel):
    """Detection strategy declaration."""

    model_config = ConfigDict(extra="forbid")

    kind: DetectKind
    namespace: str | None = None
    prefix: str | None = None
    pod_prefix: str | None = None

    @model_validator(mode="after")
    def _check_required_fields(self) -> DetectSpec:
        required = {
            DetectKind.NAMESPACE: ("namespace",),
            DetectKind.NAMESPACE_PREFIX: ("prefix",),
            DetectKind.POD_PREFIX: ("namespace", "pod_prefix"),
        }[self.kind]
        missing = [name for name in required if not getattr(self, name)]
        if missing:
            raise ValueError(
                f"detect kind {self.kind.value!r} requires {', '.join(missing)}"
            )
        return self

    def build(self) -> Detector:
        if self.kind is DetectKind.NAMESPACE:
            return NamespaceExists(self.namespace or "")
        if self.kind is DetectKind.NAMESPACE_PREFIX:
            return NamespacePrefix(self.prefix or "")
        return PodPrefix(self.namespace or "", self.pod_prefix or "")


class VersionSpec(BaseModel):
    """Version source declaration for a leaf."""

    model_config = ConfigDict(extra="forbid")

    namespace: str
    pod_prefix: str
    container: str | None = None

    def build(self) -> PodImageVersion:
        return PodImageVersion(self.namespace, self.pod_prefix, self.container)


class ExtensionSpec(BaseModel):
    """One extension or subcomponent."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    detect: DetectSpec
    version: VersionSpec | None = None
    components: list[ExtensionSpec] = Field(default_factory=list)

    def build(self) -> ExtensionNode:
        return ExtensionNode(
            name=self.name,
            detector=self.detect.build(),
            version_source=self.version.build() if self.version else None,
            children=[component.build() for component in self.components],
        )


ExtensionSpec.model_rebuild()


class CatalogSpec(BaseModel):
    """Top-level catalog document."""

    model_config = ConfigDict(extra="forbid")

    extensions: list[ExtensionSpec]


def build_catalog(data: object) -> list[ExtensionNode]:
    """Validate a parsed catalog document and build its extension tree.

    Raises:
        CatalogError: If the document does not describe a valid tree.
    """
    try:
        spec = CatalogSpec.model_validate(data)
        nodes = [extension.build() for extension in spec.extensions]
    except (ValidationError, ValueError) as exc:
        raise CatalogError(f"invalid catalog: {exc}") from exc

    names = [node.name for node in nodes]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise CatalogError(f"invalid catalog: duplicate extensions {duplicates}")
    return nodes


def load_catalog(path: str | Path) -> list[ExtensionNode]:
    """Load an extension tree from a YAML catalog file."""
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogError(f"cannot read catalog {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise CatalogError(f"invalid YAML in catalog {path}: {exc}") from exc
    nodes = build_catalog(data)
    logger.debug("Loaded %d extension(s) from %s", len(nodes), path)
    return nodes
