"""Application layer for spying.

Components:
- spy: Spy and the interceptor it installs
- registry: SpyRegistry (lookup, dedup, bulk release)
- reporters: Call history formatting (rich console)
"""

from methodspy.application.registry import SpyRegistry
from methodspy.application.reporters import ReportConfig, SpyConsoleReporter
from methodspy.application.spy import BoundInterceptor, Spy, SpyInterceptor

__all__ = [
    "BoundInterceptor",
    "Spy",
    "SpyInterceptor",
    "SpyRegistry",
    "ReportConfig",
    "SpyConsoleReporter",
]
