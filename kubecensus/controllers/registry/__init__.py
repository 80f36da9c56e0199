"""Container registry clients."""

from kubecensus.controllers.registry.tag_registry import HttpTagRegistry, TagRegistry

__all__ = ["HttpTagRegistry", "TagRegistry"]
