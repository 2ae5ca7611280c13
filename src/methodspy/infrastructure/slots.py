"""Infrastructure layer: attribute slot patching.

Installs a replacement value at a named attribute of an owning object,
remembers what was there, and puts it back. Also binds the original
attribute to an arbitrary receiver so a delegated call runs "as" the
object it was invoked on.

FAIL-FIRST: invalid targets are rejected before anything is patched.
"""

from __future__ import annotations

import functools
import inspect
from dataclasses import dataclass
from typing import Any

from methodspy.domain.exceptions import (
    InvalidMethodNameError,
    InvalidTargetError,
    MissingMethodError,
)

_MISSING = object()


def ensure_valid_target(target: object) -> None:
    """Reject targets that cannot own a patchable attribute.

    Raises:
        InvalidTargetError: target is None or a bare routine.
    """
    if target is None:
        raise InvalidTargetError(type(target), "target must not be None")
    if inspect.isroutine(target) or isinstance(target, functools.partial):
        raise InvalidTargetError(
            type(target),
            "cannot spy on a free function, pass its owning object and the attribute name",
        )


def ensure_valid_name(method_name: object) -> None:
    """Reject non-string attribute names.

    Raises:
        InvalidMethodNameError: method_name is not str.
    """
    if not isinstance(method_name, str):
        raise InvalidMethodNameError(type(method_name))


def _own_namespace(target: object) -> dict[str, Any] | None:
    """Target's own __dict__, or None for slotted/builtin objects."""
    try:
        return vars(target)
    except TypeError:
        return None


@dataclass(frozen=True, slots=True)
class Slot:
    """A named attribute on an owning object, with its pre-patch state.

    Attributes:
        owner: Object the attribute was looked up on.
        name: Attribute name.
        original: Value getattr(owner, name) produced before patching.
        saved: Raw value from owner.__dict__, or _MISSING when the
            attribute was inherited (release deletes the override).
        descriptor: Class-level attribute to rebind for foreign
            receivers, or None when the original is used as-is.
    """

    owner: object
    name: str
    original: Any
    saved: Any
    descriptor: Any

    @classmethod
    def capture(cls, owner: object, name: str) -> Slot:
        """Record the current state of owner.name.

        Raises:
            InvalidTargetError: Invalid owner.
            InvalidMethodNameError: name is not str.
            MissingMethodError: owner has no such attribute.
        """
        ensure_valid_target(owner)
        ensure_valid_name(name)

        original = getattr(owner, name, _MISSING)
        if original is _MISSING:
            raise MissingMethodError(name, type(owner))

        namespace = _own_namespace(owner)
        saved = _MISSING if namespace is None else namespace.get(name, _MISSING)

        # Instance-level callables are never bound, everything found on a
        # class goes through the descriptor protocol.
        static = inspect.getattr_static(owner, name, None)
        descriptor = None
        if (inspect.isclass(owner) or saved is _MISSING) and hasattr(type(static), "__get__"):
            descriptor = static

        return cls(
            owner=owner,
            name=name,
            original=original,
            saved=saved,
            descriptor=descriptor,
        )

    @property
    def label(self) -> str:
        """Owner.name, using the owner's own name for classes and modules."""
        if inspect.isclass(self.owner) or inspect.ismodule(self.owner):
            return f"{self.owner.__name__}.{self.name}"
        return f"{type(self.owner).__name__}.{self.name}"

    @property
    def inherited(self) -> bool:
        """Attribute was not in owner.__dict__ before patching."""
        return self.saved is _MISSING

    def install(self, value: object) -> None:
        """Put value at owner.name.

        Raises:
            InvalidTargetError: owner refuses attribute assignment.
        """
        try:
            setattr(self.owner, self.name, value)
        except (AttributeError, TypeError) as exc:
            raise InvalidTargetError(
                type(self.owner),
                f"target does not accept assignment to {self.name!r}",
            ) from exc

    def restore(self) -> None:
        """Put the pre-patch state back."""
        if self.inherited:
            namespace = _own_namespace(self.owner)
            if namespace is not None and self.name in namespace:
                delattr(self.owner, self.name)
            return
        setattr(self.owner, self.name, self.saved)

    def bind(self, receiver: object) -> Any:
        """Original attribute as seen from receiver.

        The owner itself gets the original captured at patch time. Any
        other receiver gets the class-level attribute rebound to it, so
        self inside the original is the receiver.
        """
        if receiver is self.owner or self.descriptor is None:
            return self.original
        if inspect.isclass(receiver):
            return self.descriptor.__get__(None, receiver)
        return self.descriptor.__get__(receiver, type(receiver))
