"""Spy registry: one index of active spies per test run."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from methodspy.application.spy import Spy
from methodspy.infrastructure.slots import ensure_valid_name, ensure_valid_target

if TYPE_CHECKING:
    from collections.abc import Iterator

_UNSET: Any = object()


class SpyRegistry:
    """Index from method name to the spies watching that name.

    Explicitly constructed and passed around (the pytest plugin hands
    each test its own instance through the spies fixture), never
    module-level state.

    Contracts:
        - At most one spy per (target identity, method name).
        - Targets are matched by identity, never by equality.
        - remove_spies() forgets spies without restoring them; use
          clear() for the release-then-forget cycle.
    """

    __slots__ = ("_by_method_name",)

    def __init__(self) -> None:
        self._by_method_name: dict[str, list[Spy]] = {}

    def create_spy(self, target: object, method_name: str, mock_value: Any = _UNSET) -> Spy:
        """Spy on target.method_name, reusing an existing spy for that pair.

        An existing spy only gets its mock value replaced, and only when
        mock_value is passed; its mode and invoke setting stay as they are.

        Args:
            target: Object owning the method (instance, class or module).
            method_name: Attribute name on target.
            mock_value: Value returned (or substitute invoked) in MOCK mode.

        Returns:
            The new or existing spy.

        Raises:
            InvalidTargetError: Invalid target.
            InvalidMethodNameError: method_name is not str.
            MissingMethodError: target has no such attribute.
            NotInvocableError: Existing spy invokes a substitute and
                mock_value is not callable.
        """
        ensure_valid_target(target)
        spy = self.get_spy(target, method_name)

        if spy is None:
            spy = Spy(target, method_name, None if mock_value is _UNSET else mock_value)
            self._by_method_name.setdefault(method_name, []).append(spy)
        elif mock_value is not _UNSET:
            spy.update_value(mock_value)

        return spy

    def get_spy(self, target: object, method_name: str) -> Spy | None:
        """Spy registered for (target, method_name), or None.

        Raises:
            InvalidMethodNameError: method_name is not str.
        """
        ensure_valid_name(method_name)
        for spy in self._by_method_name.get(method_name, ()):
            if spy.target is target:
                return spy
        return None

    def release_all(self) -> None:
        """Restore every tracked method. Spies stay registered."""
        for spy in self:
            spy.release()

    def remove_spies(self) -> None:
        """Forget every spy. Does not restore any method."""
        self._by_method_name = {}

    def clear(self) -> None:
        """Restore every tracked method, then forget every spy."""
        self.release_all()
        self.remove_spies()

    def __iter__(self) -> Iterator[Spy]:
        for spies in tuple(self._by_method_name.values()):
            yield from tuple(spies)

    def __len__(self) -> int:
        return sum(len(spies) for spies in self._by_method_name.values())

    def __contains__(self, spy: object) -> bool:
        return any(tracked is spy for tracked in self)

    def __repr__(self) -> str:
        return f"<SpyRegistry spies={len(self)}>"
