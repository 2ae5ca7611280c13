"""Call record value object."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True, eq=False)
class CallRecord:
    """One observed invocation of a spied method.

    Externally immutable, single-write internal: the record is created
    when the call arrives and its outcome is written once when the call
    finishes. Recursive calls therefore keep arrival order, and the call
    in progress is already counted while it runs.

    Arguments are stored by reference, never copied. Records compare by
    identity: two calls with equal arguments are still two calls.

    Attributes:
        args: Positional arguments, in order.
        kwargs: Keyword arguments (read-only view).
        context: Effective receiver the call was made on.
    """

    args: tuple[Any, ...]
    kwargs: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    context: object = None
    _returned: Any = None
    _raised: BaseException | None = None
    _completed: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.args, tuple):
            raise TypeError(f"args must be tuple, got {type(self.args).__name__}")
        if not isinstance(self.kwargs, MappingProxyType):
            object.__setattr__(self, "kwargs", MappingProxyType(dict(self.kwargs)))

    @property
    def returned(self) -> Any:
        """Value the call produced. None while running or after a raise."""
        return self._returned

    @property
    def raised(self) -> BaseException | None:
        """Exception the call propagated, if any."""
        return self._raised

    @property
    def completed(self) -> bool:
        """Whether the outcome has been written."""
        return self._completed

    def _complete(self, returned: Any = None, raised: BaseException | None = None) -> None:
        """Write the outcome. Only the owning spy calls this, once per record."""
        if self._completed:
            raise RuntimeError("call outcome already recorded")
        object.__setattr__(self, "_returned", returned)
        object.__setattr__(self, "_raised", raised)
        object.__setattr__(self, "_completed", True)
