"""Reporters for recorded spy calls."""

from methodspy.application.reporters.console import (
    ReportConfig,
    SpyConsoleReporter,
    format_outcome,
)

__all__ = [
    "ReportConfig",
    "SpyConsoleReporter",
    "format_outcome",
]
