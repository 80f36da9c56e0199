"""Utility functions and classes for kubecensus."""

from kubecensus.utils.report_renderer import ReportRenderer, status_text

__all__ = [
    # Report
    "ReportRenderer",
    "status_text",
]
