"""Controllers module for kubecensus.

This module provides the controllers that query the cluster, resolve image
tags and evaluate extension trees.
"""

from __future__ import annotations

# Census orchestration
from kubecensus.controllers.census import CensusController, CensusReport

# Cluster domain
from kubecensus.controllers.cluster import KubectlFetcher, QueryCache

# Detection engine
from kubecensus.controllers.detection import TreeEvaluator, VersionResolver

# Registry domain
from kubecensus.controllers.registry import HttpTagRegistry

__all__ = [
    "CensusController",
    "CensusReport",
    "HttpTagRegistry",
    "KubectlFetcher",
    "QueryCache",
    "TreeEvaluator",
    "VersionResolver",
]
