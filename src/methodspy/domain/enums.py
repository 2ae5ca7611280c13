"""Domain enumerations."""

from enum import Enum, auto


class SpyMode(Enum):
    """How an intercepted call is resolved."""

    MOCK = auto()  # canned value or substitute
    EXECUTE = auto()  # delegate to the original method
