"""methodspy domain layer.

Value objects, enums and errors. No patching logic.
Only imports: typing, dataclasses, enum, types, collections.abc
"""

from methodspy.domain.behavior import MockBehavior, ReturnValue, Substitute
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
    # Exceptions
    "MethodSpyError",
    "InvalidTargetError",
    "InvalidMethodNameError",
    "MissingMethodError",
    "NotInvocableError",
    "CallIndexError",
    "NoCallsError",
    # Enums
    "SpyMode",
    # Value objects
    "CallRecord",
    "MockBehavior",
    "ReturnValue",
    "Substitute",
]
