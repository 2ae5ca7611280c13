"""Mock behaviour value objects.

A spy in MOCK mode either returns a literal or calls a substitute.
The variant is fixed when the behaviour is configured, so the
callable check happens once, at configuration time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

from methodspy.domain.exceptions import NotInvocableError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


@dataclass(frozen=True, slots=True)
class ReturnValue:
    """Return the stored value verbatim, invoke nothing.

    Attributes:
        value: Returned for every call (callables are returned, not called).
    """

    value: Any = None

    @property
    def raw(self) -> Any:
        """Configured value."""
        return self.value

    def resolve(self, receiver: object, args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> Any:
        """Produce the call result."""
        del receiver, args, kwargs
        return self.value


@dataclass(frozen=True, slots=True)
class Substitute:
    """Call the stored function in place of the original.

    The function receives the receiver first, like a method receives self:
    func(receiver, *args, **kwargs).

    Attributes:
        func: Substitute callable.
    """

    func: Callable[..., Any]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not callable(self.func):
            raise NotInvocableError(type(self.func))

    @property
    def raw(self) -> Callable[..., Any]:
        """Configured substitute."""
        return self.func

    def resolve(self, receiver: object, args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> Any:
        """Produce the call result by calling the substitute."""
        return self.func(receiver, *args, **kwargs)


MockBehavior: TypeAlias = ReturnValue | Substitute
