"""pytest plugin for methodspy.

Provides:
    spies: Fresh SpyRegistry per test. Every spied method is restored
        and the registry emptied when the test finishes.

On failure, tests that used the spies fixture get a "spy calls" report
section listing every recorded call.

Configuration (pytest.ini or pyproject.toml):
    spy_report_on_failure: Attach the report section (default: true)
    spy_report_width: Report width in characters (default: 120)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from methodspy.application.registry import SpyRegistry
from methodspy.application.reporters import ReportConfig, SpyConsoleReporter

# Register fixtures from fixtures module
from methodspy.presentation.pytest_plugin.fixtures import spies

if TYPE_CHECKING:
    from collections.abc import Generator

# Export fixtures for pytest discovery
__all__ = [
    "spies",
]

REPORT_SECTION = "spy calls"

_report_config_key = pytest.StashKey[ReportConfig]()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register ini options."""
    parser.addini(
        "spy_report_on_failure",
        type="bool",
        default=True,
        help="attach recorded spy calls to failed test reports",
    )
    parser.addini(
        "spy_report_width",
        default="120",
        help="width of the spy call report",
    )


def _get_ini_value(config: pytest.Config, name: str, default: str) -> str:
    """Get ini value from pytest config with fallback.

    Args:
        config: pytest Config object
        name: ini option name
        default: default value if not set

    Returns:
        String value of ini option
    """
    value = config.getini(name)
    if value:
        return str(value)
    return default


def pytest_configure(config: pytest.Config) -> None:
    """Validate ini options once per session. FAIL-FIRST."""
    raw_width = _get_ini_value(config, "spy_report_width", "120")
    try:
        report_config = ReportConfig(width=int(raw_width))
    except ValueError as exc:
        raise pytest.UsageError(f"invalid spy_report_width {raw_width!r}: {exc}") from exc
    config.stash[_report_config_key] = report_config


@pytest.hookimpl(wrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item,
    call: pytest.CallInfo[None],
) -> Generator[None, pytest.TestReport, pytest.TestReport]:
    """Attach the spy call report to failed tests using the spies fixture."""
    del call  # Unused
    report = yield

    if report.when != "call" or not report.failed:
        return report
    if not item.config.getini("spy_report_on_failure"):
        return report

    # Note: funcargs exists on pytest.Function only
    registry = getattr(item, "funcargs", {}).get("spies")
    if isinstance(registry, SpyRegistry) and len(registry):
        reporter = SpyConsoleReporter(item.config.stash[_report_config_key])
        report.sections.append((REPORT_SECTION, reporter.report(registry)))

    return report
