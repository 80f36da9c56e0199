"""Data models for kubecensus."""

from kubecensus.models.extension import DetectionResult, ExtensionNode
from kubecensus.models.pod_info import ContainerInfo, PodInfo
from kubecensus.models.settings import (
    CensusSettings,
    ConfigError,
    ConfigLoadError,
    load_settings,
)

__all__ = [
    "CensusSettings",
    "ConfigError",
    "ConfigLoadError",
    "ContainerInfo",
    "DetectionResult",
    "ExtensionNode",
    "PodInfo",
    "load_settings",
]
