"""Tests for SpyConsoleReporter."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from methodspy.application.registry import SpyRegistry
from methodspy.application.reporters.console import (
    ReportConfig,
    SpyConsoleReporter,
    format_outcome,
)
from methodspy.domain.call_record import CallRecord
from tests.factories import Greeter, make_greeter, make_plain_target

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def registry() -> Iterator[SpyRegistry]:
    """Registry cleared after the test."""
    registry = SpyRegistry()
    yield registry
    registry.clear()


class TestReportConfig:
    """FAIL-FIRST validation of ReportConfig."""

    def test_defaults(self) -> None:
        config = ReportConfig()
        assert not config.color
        assert config.width == 120
        assert config.max_calls is None

    def test_width_too_small(self) -> None:
        with pytest.raises(ValueError, match="width must be >= 20"):
            ReportConfig(width=5)

    def test_max_calls_zero(self) -> None:
        with pytest.raises(ValueError, match="max_calls"):
            ReportConfig(max_calls=0)

    def test_frozen(self) -> None:
        pytest.raises(AttributeError, setattr, ReportConfig(), "width", 80)


class TestFormatOutcome:
    """format_outcome()."""

    def test_running(self) -> None:
        assert format_outcome(CallRecord(args=())) == "(running)"

    def test_returned(self) -> None:
        record = CallRecord(args=())
        record._complete(returned="stuff")
        assert format_outcome(record) == "'stuff'"

    def test_raised(self) -> None:
        record = CallRecord(args=())
        record._complete(raised=ValueError("boom"))
        assert format_outcome(record) == "raised ValueError: boom"


class TestSpyConsoleReporter:
    """Rendered report."""

    def test_empty(self) -> None:
        output = SpyConsoleReporter().report([])
        assert "SPIES (0)" in output

    def test_spy_header_and_calls(self, registry: SpyRegistry) -> None:
        obj = make_plain_target()
        registry.create_spy(obj, "foo", "stuff")
        obj.foo("first", flag=True)
        obj.foo.call_as("elsewhere")

        output = SpyConsoleReporter().report(registry)

        assert "SPIES (1)" in output
        assert "SimpleNamespace.foo mode=MOCK (return) active calls=2" in output
        assert "'first'" in output
        assert "flag=True" in output
        assert "owner" in output
        assert "'elsewhere'" in output
        assert "'stuff'" in output

    def test_class_target_header(self, registry: SpyRegistry) -> None:
        registry.create_spy(Greeter, "greet", "stuff")
        make_greeter().greet()

        output = SpyConsoleReporter().report(registry)

        assert "Greeter.greet mode=MOCK (return) active calls=1" in output
        assert "type.greet" not in output

    def test_uncalled_spy(self, registry: SpyRegistry) -> None:
        registry.create_spy(make_plain_target(), "foo")
        assert "no calls" in SpyConsoleReporter().report(registry)

    def test_released_and_raised(self, registry: SpyRegistry) -> None:
        greeter = make_greeter()
        spy = registry.create_spy(greeter, "fail").and_execute()
        with pytest.raises(ValueError):
            greeter.fail("boom")
        spy.release()

        output = SpyConsoleReporter().report(registry)

        assert "mode=EXECUTE (return) released calls=1" in output
        assert "raised ValueError: boom" in output

    def test_markup_in_values_kept_literal(self, registry: SpyRegistry) -> None:
        obj = make_plain_target()
        registry.create_spy(obj, "foo")
        obj.foo("[bold]x[/bold]")

        assert "[bold]x[/bold]" in SpyConsoleReporter().report(registry)

    def test_max_calls_keeps_most_recent(self, registry: SpyRegistry) -> None:
        obj = make_plain_target()
        registry.create_spy(obj, "foo")
        for value in ("alpha", "beta", "gamma"):
            obj.foo(value)

        output = SpyConsoleReporter(ReportConfig(max_calls=1)).report(registry)

        assert "2 earlier call(s) omitted" in output
        assert "'gamma'" in output
        assert "'alpha'" not in output

    def test_optional_columns(self, registry: SpyRegistry) -> None:
        obj = make_plain_target()
        registry.create_spy(obj, "foo")
        obj.foo(flag=True)

        config = ReportConfig(show_kwargs=False, show_context=False)
        output = SpyConsoleReporter(config).report(registry)

        assert "Kwargs" not in output
        assert "Context" not in output
        assert "flag=True" not in output

    def test_no_ansi_by_default(self, registry: SpyRegistry) -> None:
        obj = make_plain_target()
        registry.create_spy(obj, "foo")
        obj.foo()
        assert "\x1b[" not in SpyConsoleReporter().report(registry)
