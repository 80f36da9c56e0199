"""Extension catalogs: the built-in tree and YAML-defined trees."""

from kubecensus.catalog.builtin import default_catalog
from kubecensus.catalog.loader import build_catalog, load_catalog

__all__ = ["build_catalog", "default_catalog", "load_catalog"]
