"""Constants module for kubecensus.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- timeouts.py: Timeout values
- defaults.py: Default values for settings
- patterns.py: Regex patterns
"""

from kubecensus.constants.defaults import (
    KUBECTL_BINARY_DEFAULT,
    LATEST_TAG,
    LOG_LEVEL_ENV_VAR,
    REGISTRY_SCHEME_DEFAULT,
    RESOLVE_TAGS_DEFAULT,
)
from kubecensus.constants.enums import DetectKind, InstallStatus
from kubecensus.constants.patterns import DIGEST_IMAGE_PATTERN
from kubecensus.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
    REGISTRY_REQUEST_TIMEOUT,
)

__all__ = [
    # Timeouts
    "CLUSTER_REQUEST_TIMEOUT",
    # Patterns
    "DIGEST_IMAGE_PATTERN",
    "KUBECTL_BINARY_DEFAULT",
    "KUBECTL_COMMAND_TIMEOUT",
    "LATEST_TAG",
    "LOG_LEVEL_ENV_VAR",
    "REGISTRY_REQUEST_TIMEOUT",
    "REGISTRY_SCHEME_DEFAULT",
    "RESOLVE_TAGS_DEFAULT",
    # Enums
    "DetectKind",
    "InstallStatus",
]
