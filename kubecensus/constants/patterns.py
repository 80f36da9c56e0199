"""Regex patterns for image reference parsing."""

import re

# <registry-host>/<repository>@sha256:<64 lowercase hex chars>
DIGEST_IMAGE_PATTERN = re.compile(
    r"^(?P<repository>[^/@]+/[^@]+)@(?P<digest>sha256:[0-9a-f]{64})$"
)

__all__ = [
    "DIGEST_IMAGE_PATTERN",
]
