"""All enum definitions for kubecensus."""

from enum import Enum

# =============================================================================
# Status Enums
# =============================================================================


class InstallStatus(Enum):
    """Terminal state of a single extension node after evaluation."""

    UNKNOWN = "unknown"
    NOT_FOUND = "not-found"
    INSTALLED = "installed"
    FAILED = "failed"


class DetectKind(Enum):
    """Detection strategies available to catalog files."""

    NAMESPACE = "namespace"
    NAMESPACE_PREFIX = "namespace-prefix"
    POD_PREFIX = "pod-prefix"
