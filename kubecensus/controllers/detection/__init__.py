"""Extension detection engine: predicates, strategies, versions and evaluation."""

from kubecensus.controllers.detection.predicates import (
    has_namespace,
    has_namespace_with_prefix,
    has_pod_with_prefix,
)
from kubecensus.controllers.detection.version_resolver import VersionResolver
from kubecensus.controllers.detection.strategies import (
    Detector,
    NamespaceExists,
    NamespacePrefix,
    PodImageVersion,
    PodPrefix,
    VersionSource,
)
from kubecensus.controllers.detection.evaluator import TreeEvaluator

__all__ = [
    "Detector",
    "NamespaceExists",
    "NamespacePrefix",
    "PodImageVersion",
    "PodPrefix",
    "TreeEvaluator",
    "VersionResolver",
    "VersionSource",
    "has_namespace",
    "has_namespace_with_prefix",
    "has_pod_with_prefix",
]
