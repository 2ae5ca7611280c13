"""pytest fixtures for spying.

Every test gets its own registry, so spies never leak between tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from methodspy.application.registry import SpyRegistry

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def spies() -> Iterator[SpyRegistry]:
    """Registry for the current test.

    Teardown releases every spy (originals restored) and then empties
    the registry.

    Returns:
        Empty SpyRegistry
    """
    registry = SpyRegistry()
    yield registry
    registry.clear()
