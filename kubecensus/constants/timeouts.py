"""Timeout constants.

All timeout values for cluster queries and registry lookups.
"""

from typing import Final

# ============================================================================
# API/Cluster timeouts (string format for kubectl)
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = "30s"

# Process-level command timeout (must be greater than request timeout)
KUBECTL_COMMAND_TIMEOUT: Final = 45

# ============================================================================
# Registry timeouts (float, in seconds)
# ============================================================================

REGISTRY_REQUEST_TIMEOUT: Final = 10.0

__all__ = [
    "CLUSTER_REQUEST_TIMEOUT",
    "KUBECTL_COMMAND_TIMEOUT",
    "REGISTRY_REQUEST_TIMEOUT",
]
