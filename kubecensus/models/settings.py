"""Application settings models."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from kubecensus.constants.defaults import (
    KUBECTL_BINARY_DEFAULT,
    REGISTRY_SCHEME_DEFAULT,
    RESOLVE_TAGS_DEFAULT,
)
from kubecensus.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
    REGISTRY_REQUEST_TIMEOUT,
)

logger = logging.getLogger(__name__)


class CensusSettings(BaseModel):
    """Settings for one census run, with validation."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    # Cluster access
    context: str | None = None
    kubectl_binary: str = KUBECTL_BINARY_DEFAULT
    kubectl_timeout_seconds: int = KUBECTL_COMMAND_TIMEOUT
    request_timeout: str = CLUSTER_REQUEST_TIMEOUT

    # Digest -> tag resolution
    resolve_tags: bool = RESOLVE_TAGS_DEFAULT
    registry_scheme: str = REGISTRY_SCHEME_DEFAULT  # https|http
    registry_timeout_seconds: float = REGISTRY_REQUEST_TIMEOUT

    # Optional YAML catalog replacing the built-in extensions
    catalog_path: str | None = None


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


def load_settings(path: str | Path | None = None, **overrides: Any) -> CensusSettings:
    """Load settings from an optional YAML file, then apply overrides.

    Overrides whose value is None are ignored so unset CLI options keep the
    file (or default) value.

    Raises:
        ConfigLoadError: If the file cannot be read, parsed or validated.
    """
    data: dict[str, Any] = {}
    if path is not None:
        try:
            raw = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigLoadError(f"cannot read settings file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigLoadError(f"invalid YAML in settings file {path}: {exc}") from exc
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigLoadError(f"settings file {path} must contain a mapping")
        data.update(raw)
        logger.debug("Loaded settings from %s", path)

    data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return CensusSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigLoadError(f"invalid settings: {exc}") from exc
