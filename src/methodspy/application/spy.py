"""Spy: interception, call recording and mode transitions for one slot."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from methodspy.domain.behavior import ReturnValue, Substitute
from methodspy.domain.call_record import CallRecord
from methodspy.domain.enums import SpyMode
from methodspy.domain.exceptions import CallIndexError, NoCallsError
from methodspy.infrastructure.slots import Slot

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from methodspy.domain.behavior import MockBehavior

_UNSET: Any = object()


class SpyInterceptor:
    """Callable installed in the spied slot.

    Receiver resolution is late-bound:
      - obj.method(...) on an instance or module: the owner is the receiver.
      - installed on a class and reached through an instance: the
        instance is the receiver (descriptor binding).
      - installed on a class and reached through a subclass: the
        subclass is the receiver.
      - interceptor.call_as(other, ...): other is the receiver.
    """

    __slots__ = ("__weakref__", "_spy")

    def __init__(self, spy: Spy) -> None:
        self._spy = spy

    @property
    def spy(self) -> Spy:
        """Spy this interceptor reports to."""
        return self._spy

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._spy._intercept(self._spy.target, args, kwargs)

    def call_as(self, receiver: object, /, *args: Any, **kwargs: Any) -> Any:
        """Invoke with an explicit receiver instead of the owner."""
        return self._spy._intercept(receiver, args, kwargs)

    def __get__(self, instance: object, owner: type | None = None) -> Any:
        if instance is not None:
            return BoundInterceptor(self, instance)
        # Looked up through a subclass: the subclass is the receiver.
        if owner is not None and owner is not self._spy.target:
            return BoundInterceptor(self, owner)
        return self

    def __repr__(self) -> str:
        return f"<SpyInterceptor for {self._spy.method_name!r}>"


class BoundInterceptor:
    """Interceptor looked up through an instance or a subclass.

    Calls use that object as the receiver; call_as() still overrides it.
    """

    __slots__ = ("_interceptor", "_receiver")

    def __init__(self, interceptor: SpyInterceptor, receiver: object) -> None:
        self._interceptor = interceptor
        self._receiver = receiver

    @property
    def spy(self) -> Spy:
        return self._interceptor.spy

    @property
    def receiver(self) -> object:
        """Object the interceptor was looked up through."""
        return self._receiver

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._interceptor.call_as(self._receiver, *args, **kwargs)

    def call_as(self, receiver: object, /, *args: Any, **kwargs: Any) -> Any:
        """Invoke with an explicit receiver instead of the bound one."""
        return self._interceptor.call_as(receiver, *args, **kwargs)

    def __repr__(self) -> str:
        return (
            f"<BoundInterceptor for {self._interceptor.spy.method_name!r} "
            f"on {type(self._receiver).__name__}>"
        )


class Spy:
    """Instrumented stand-in for one (target, method name) slot.

    Created patched and active, in MOCK mode returning the mock value.
    Mode-transition methods return the spy for chaining:

        spy = registry.create_spy(client, "fetch", payload)
        spy.and_execute()

    Contracts:
        - Calls are recorded in arrival order, recursive calls included.
        - Records only ever get appended, or all dropped by reset().
        - Reconfiguring the spy never alters recorded calls.
        - Exceptions from the original or the substitute propagate
          unchanged; the call stays recorded with raised set.
    """

    __slots__ = ("_active", "_behavior", "_calls", "_interceptor", "_mode", "_slot")

    def __init__(self, target: object, method_name: str, mock_value: Any = None) -> None:
        """Patch target.method_name and start recording.

        Raises:
            InvalidTargetError: target is None, a bare routine, or
                refuses attribute assignment.
            InvalidMethodNameError: method_name is not str.
            MissingMethodError: target has no such attribute.
        """
        self._slot = Slot.capture(target, method_name)
        self._mode = SpyMode.MOCK
        self._behavior: MockBehavior = ReturnValue(mock_value)
        self._calls: list[CallRecord] = []
        self._interceptor = SpyInterceptor(self)
        self._active = False
        self.resume()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def target(self) -> object:
        """Object owning the spied slot."""
        return self._slot.owner

    @property
    def method_name(self) -> str:
        """Name of the spied slot."""
        return self._slot.name

    @property
    def label(self) -> str:
        """Display name such as Greeter.greet or json.dumps."""
        return self._slot.label

    @property
    def original_method(self) -> Any:
        """Attribute value before patching."""
        return self._slot.original

    @property
    def interceptor(self) -> SpyInterceptor:
        """Wrapper installed while the spy is active."""
        return self._interceptor

    @property
    def mode(self) -> SpyMode:
        return self._mode

    @property
    def invoke_substitute(self) -> bool:
        """Mock value is called rather than returned."""
        return isinstance(self._behavior, Substitute)

    @property
    def mock_value(self) -> Any:
        return self._behavior.raw

    @property
    def active(self) -> bool:
        """Slot currently holds the interceptor."""
        return self._active

    @property
    def calls(self) -> tuple[CallRecord, ...]:
        """Snapshot of recorded calls, oldest first."""
        return tuple(self._calls)

    # ------------------------------------------------------------------
    # Interception
    # ------------------------------------------------------------------

    def _intercept(self, receiver: object, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        """Record the call, resolve it by current mode, return the result."""
        record = CallRecord(args=args, kwargs=kwargs, context=receiver)
        self._calls.append(record)

        try:
            if self._mode is SpyMode.EXECUTE:
                returned = self._slot.bind(receiver)(*args, **kwargs)
            else:
                returned = self._behavior.resolve(receiver, args, kwargs)
        except BaseException as exc:
            record._complete(raised=exc)
            raise

        record._complete(returned=returned)
        return returned

    # ------------------------------------------------------------------
    # Mode transitions
    # ------------------------------------------------------------------

    def and_execute(self) -> Self:
        """Delegate calls to the original method."""
        self._mode = SpyMode.EXECUTE
        return self

    start_executing = and_execute

    def and_mock(self, value: Any = _UNSET) -> Self:
        """Return the mock value (or value, when given) for every call.

        Always switches back to returning the value verbatim, even after
        and_invoke().
        """
        raw = self._behavior.raw if value is _UNSET else value
        self._behavior = ReturnValue(raw)
        self._mode = SpyMode.MOCK
        return self

    start_mocking = and_mock

    def and_invoke(self) -> Self:
        """Call the mock value as a substitute for every call.

        The substitute receives the receiver first:
        substitute(receiver, *args, **kwargs).

        Raises:
            NotInvocableError: Mock value is not callable.
        """
        self._behavior = Substitute(self._behavior.raw)
        self._mode = SpyMode.MOCK
        return self

    def update_value(self, value: Any) -> Self:
        """Replace the mock value, keeping mode and invoke setting.

        Raises:
            NotInvocableError: A substitute is configured and value is
                not callable.
        """
        if isinstance(self._behavior, Substitute):
            self._behavior = Substitute(value)
        else:
            self._behavior = ReturnValue(value)
        return self

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def called(self) -> int:
        """Number of recorded calls."""
        return len(self._calls)

    def get_call(self, index: int | None = None) -> CallRecord:
        """Record of call number index, or of the most recent call.

        Raises:
            CallIndexError: index is a bool or outside [0, called()).
            NoCallsError: index omitted and no calls recorded.
        """
        count = len(self._calls)
        if index is None:
            if not count:
                raise NoCallsError(self.method_name)
            return self._calls[-1]
        if isinstance(index, bool) or not 0 <= index < count:
            raise CallIndexError(index, count)
        return self._calls[index]

    def called_with(self, index: int | None = None) -> tuple[Any, ...]:
        """Positional arguments of a call. Same indexing as get_call()."""
        return self.get_call(index).args

    def called_with_kwargs(self, index: int | None = None) -> Mapping[str, Any]:
        """Keyword arguments of a call. Same indexing as get_call()."""
        return self.get_call(index).kwargs

    def returned_with(self, index: int | None = None) -> Any:
        """Return value of a call. Same indexing as get_call()."""
        return self.get_call(index).returned

    def get_context(self, index: int | None = None) -> object:
        """Receiver of a call. Same indexing as get_call()."""
        return self.get_call(index).context

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> Self:
        """Drop every recorded call."""
        self._calls = []
        return self

    def release(self) -> Self:
        """Restore the original slot. Recording stops, calls are kept."""
        if self._active:
            self._slot.restore()
            self._active = False
        return self

    def resume(self) -> Self:
        """Reinstall the interceptor. Recorded calls are kept.

        Also available as restore(). It reinstalls the interceptor and
        does not put the original method back; release() does that.
        """
        if not self._active:
            self._slot.install(self._interceptor)
            self._active = True
        return self

    restore = resume

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "active" if self._active else "released"
        return (
            f"<Spy {self.label} "
            f"{self._mode.name} {state} calls={len(self._calls)}>"
        )
