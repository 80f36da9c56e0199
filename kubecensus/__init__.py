"""kubecensus - reports which optional extensions a cluster runs, and their versions."""

__version__ = "0.1.0"
