"""Domain exceptions: all public errors of methodspy.

Every error is raised synchronously by the failing operation.
Nothing is swallowed or retried inside the library.
"""

from __future__ import annotations


class MethodSpyError(Exception):
    """Base for all methodspy error exceptions.

    Allows: except MethodSpyError to catch all library errors.
    """


class InvalidTargetError(MethodSpyError, TypeError):
    """Spy target is not an object that owns patchable attributes.

    Raised for None, for bare functions/methods (spying needs the owning
    object), and for objects that refuse attribute assignment.

    Attributes:
        got: Type of the rejected target.
        reason: Why the target was rejected.
    """

    def __init__(self, got: type, reason: str) -> None:
        """Initialize with rejected type and reason."""
        if not reason:
            raise ValueError("reason must not be empty")

        self.got = got
        self.reason = reason
        super().__init__(f"Spy creation failed: {reason}, got {got.__name__}")


class InvalidMethodNameError(MethodSpyError, TypeError):
    """Method name is not a string.

    Attributes:
        got: Actual type received.
    """

    def __init__(self, got: type) -> None:
        """Initialize with actual type."""
        self.got = got
        super().__init__(f"method name must be str, got {got.__name__}")


class MissingMethodError(MethodSpyError, AttributeError):
    """Target has no attribute with the requested name.

    Attributes:
        method_name: Requested attribute name.
        target_type: Type of the target searched.
    """

    def __init__(self, method_name: str, target_type: type) -> None:
        """Initialize with name and target type."""
        self.method_name = method_name
        self.target_type = target_type
        super().__init__(f"{target_type.__name__} object has no attribute {method_name!r} to spy on")


class NotInvocableError(MethodSpyError, TypeError):
    """Substitute requested for a mock value that is not callable.

    Attributes:
        got: Type of the mock value.
    """

    def __init__(self, got: type) -> None:
        """Initialize with mock value type."""
        self.got = got
        super().__init__(f"mock value must be callable to invoke it, got {got.__name__}")


class CallIndexError(MethodSpyError, IndexError):
    """Explicit call index outside the recorded calls.

    Attributes:
        index: Requested index.
        count: Number of recorded calls.
    """

    def __init__(self, index: int, count: int) -> None:
        """Initialize with index and call count."""
        self.index = index
        self.count = count
        super().__init__(f"call index {index} out of range for {count} recorded call(s)")


class NoCallsError(MethodSpyError, LookupError):
    """Most recent call requested but the spy was never called.

    Attributes:
        method_name: Name of the spied method.
    """

    def __init__(self, method_name: str) -> None:
        """Initialize with spied method name."""
        self.method_name = method_name
        super().__init__(f"spy on {method_name!r} has not been called")
