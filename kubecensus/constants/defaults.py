"""Default values for settings.

All default values used in the CensusSettings model.
"""

from typing import Final

KUBECTL_BINARY_DEFAULT: Final = "kubectl"
REGISTRY_SCHEME_DEFAULT: Final = "https"
RESOLVE_TAGS_DEFAULT: Final = True

# Tag skipped when choosing a display tag for a digest
LATEST_TAG: Final = "latest"

LOG_LEVEL_ENV_VAR: Final = "KUBECENSUS_LOG_LEVEL"

__all__ = [
    "KUBECTL_BINARY_DEFAULT",
    "LATEST_TAG",
    "LOG_LEVEL_ENV_VAR",
    "REGISTRY_SCHEME_DEFAULT",
    "RESOLVE_TAGS_DEFAULT",
]
