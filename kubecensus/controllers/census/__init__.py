"""Census orchestration."""

from kubecensus.controllers.census.controller import CensusController, CensusReport

__all__ = ["CensusController", "CensusReport"]
