"""Workflow orchestration: per-molecule analysis and reporting."""

from .runner import GeometryAnalysis, GeometryResult
from .report import format_report, format_json, render

__all__ = [
    "GeometryAnalysis",
    "GeometryResult",
    "format_report",
    "format_json",
    "render",
]
