"""Parsers for cluster query output."""

from kubecensus.controllers.cluster.parsers.pod_parser import NamespaceParser, PodParser

__all__ = ["NamespaceParser", "PodParser"]
