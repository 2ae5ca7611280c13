"""methodspy - spies and mocks for methods of live Python objects."""

__version__ = "0.1.0"

from methodspy.application.registry import SpyRegistry
from methodspy.application.spy import BoundInterceptor, Spy, SpyInterceptor
from methodspy.domain.call_record import CallRecord
from methodspy.domain.enums import SpyMode
from methodspy.domain.exceptions import (
    CallIndexError,
    InvalidMethodNameError,
    InvalidTargetError,
    MethodSpyError,
    MissingMethodError,
    NoCallsError,
    NotInvocableError,
)

__all__ = [
    "BoundInterceptor",
    "CallIndexError",
    "CallRecord",
    "InvalidMethodNameError",
    "InvalidTargetError",
    "MethodSpyError",
    "MissingMethodError",
    "NoCallsError",
    "NotInvocableError",
    "Spy",
    "SpyInterceptor",
    "SpyMode",
    "SpyRegistry",
    "__version__",
]
