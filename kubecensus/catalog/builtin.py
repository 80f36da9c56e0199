"""Built-in extension catalog."""

from __future__ import annotations

from kubecensus.controllers.detection.strategies import (
    NamespaceExists,
    NamespacePrefix,
    PodImageVersion,
    PodPrefix,
)
from kubecensus.models.extension import ExtensionNode

ISTIO_NAMESPACE = "istio-system"
KNATIVE_NAMESPACE_PREFIX = "knative-"
TILLER_NAMESPACE = "kube-system"


def _istio() -> ExtensionNode:
    def component(name: str, deployment: str, container: str | None) -> ExtensionNode:
        return ExtensionNode(
            name=name,
            detector=PodPrefix(ISTIO_NAMESPACE, f"{deployment}-"),
            version_source=PodImageVersion.for_deployment(
                ISTIO_NAMESPACE, deployment, container
            ),
        )

    return ExtensionNode(
        name="istio",
        detector=NamespacePrefix(ISTIO_NAMESPACE),
        children=[
            component("pilot", "istio-pilot", "discovery"),
            component("sidecar-injector", "istio-sidecar-injector", None),
            component("policy", "istio-policy", "mixer"),
            component("prometheus", "prometheus", "prometheus"),
        ],
    )


def _knative() -> ExtensionNode:
    def component(name: str, namespace: str, deployment: str) -> ExtensionNode:
        return ExtensionNode(
            name=name,
            detector=NamespaceExists(namespace),
            version_source=PodImageVersion.for_deployment(namespace, deployment),
        )

    return ExtensionNode(
        name="knative",
        detector=NamespacePrefix(KNATIVE_NAMESPACE_PREFIX),
        children=[
            component("serving", "knative-serving", "controller"),
            component("build", "knative-build", "build-controller"),
            component("eventing", "knative-eventing", "eventing-controller"),
        ],
    )


def _helm_tiller() -> ExtensionNode:
    return ExtensionNode(
        name="helm-tiller",
        detector=PodPrefix(TILLER_NAMESPACE, "tiller-deploy-"),
        version_source=PodImageVersion.for_deployment(
            TILLER_NAMESPACE, "tiller-deploy", "tiller"
        ),
    )


def default_catalog() -> list[ExtensionNode]:
    """Return a fresh tree of the extensions detected by default."""
    return [_istio(), _knative(), _helm_tiller()]
