"""Report output."""

from .output import OutputError, ReportRenderer

__all__ = ["OutputError", "ReportRenderer"]
