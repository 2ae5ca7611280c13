"""Tests for the pytest plugin.

Runs throwaway test files through pytester; the plugin itself is
loaded through its pytest11 entry point.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from methodspy.presentation.pytest_plugin import REPORT_SECTION

if TYPE_CHECKING:
    import pytest

TARGET_MODULE = """
    class Client:
        def fetch(self, path):
            return "real " + path

    client = Client()
"""


class TestSpiesFixture:
    """spies fixture lifecycle."""

    def test_fixture_provides_registry(self, pytester: pytest.Pytester) -> None:
        pytester.makepyfile(
            """
            from methodspy import SpyRegistry

            def test_registry(spies):
                assert isinstance(spies, SpyRegistry)
                assert len(spies) == 0
            """
        )
        result = pytester.runpytest()
        result.assert_outcomes(passed=1)

    def test_methods_restored_between_tests(self, pytester: pytest.Pytester) -> None:
        pytester.makepyfile(target=TARGET_MODULE)
        pytester.makepyfile(
            """
            from target import client

            def test_first(spies):
                spies.create_spy(client, "fetch", "fake")
                assert client.fetch("/a") == "fake"

            def test_second(spies):
                assert client.fetch("/a") == "real /a"
                assert spies.get_spy(client, "fetch") is None
            """
        )
        result = pytester.runpytest()
        result.assert_outcomes(passed=2)

    def test_methods_restored_after_failure(self, pytester: pytest.Pytester) -> None:
        pytester.makepyfile(target=TARGET_MODULE)
        pytester.makepyfile(
            """
            from target import client

            def test_first(spies):
                spies.create_spy(client, "fetch", "fake")
                raise AssertionError("planned")

            def test_second():
                assert client.fetch("/a") == "real /a"
            """
        )
        result = pytester.runpytest()
        result.assert_outcomes(passed=1, failed=1)


class TestFailureReport:
    """Spy call section on failed tests."""

    def test_section_attached(self, pytester: pytest.Pytester) -> None:
        pytester.makepyfile(target=TARGET_MODULE)
        pytester.makepyfile(
            """
            from target import client

            def test_fails(spies):
                spies.create_spy(client, "fetch", "fake")
                client.fetch("/users")
                assert False
            """
        )
        result = pytester.runpytest()
        result.assert_outcomes(failed=1)
        result.stdout.fnmatch_lines(
            [
                f"*{REPORT_SECTION}*",
                "*Client.fetch mode=MOCK (return) active calls=1*",
                "*'/users'*'fake'*",
            ]
        )

    def test_no_section_when_passing(self, pytester: pytest.Pytester) -> None:
        pytester.makepyfile(target=TARGET_MODULE)
        pytester.makepyfile(
            """
            from target import client

            def test_passes(spies):
                spies.create_spy(client, "fetch", "fake")
                client.fetch("/users")
            """
        )
        result = pytester.runpytest("-rA")
        result.assert_outcomes(passed=1)
        result.stdout.no_fnmatch_line(f"*- {REPORT_SECTION} -*")

    def test_no_section_without_spies(self, pytester: pytest.Pytester) -> None:
        pytester.makepyfile(
            """
            def test_fails(spies):
                assert False
            """
        )
        result = pytester.runpytest()
        result.assert_outcomes(failed=1)
        result.stdout.no_fnmatch_line(f"*- {REPORT_SECTION} -*")

    def test_section_disabled_by_ini(self, pytester: pytest.Pytester) -> None:
        pytester.makeini(
            """
            [pytest]
            spy_report_on_failure = false
            """
        )
        pytester.makepyfile(target=TARGET_MODULE)
        pytester.makepyfile(
            """
            from target import client

            def test_fails(spies):
                spies.create_spy(client, "fetch", "fake")
                client.fetch("/users")
                assert False
            """
        )
        result = pytester.runpytest()
        result.assert_outcomes(failed=1)
        result.stdout.no_fnmatch_line(f"*- {REPORT_SECTION} -*")


class TestConfiguration:
    """ini option validation."""

    def test_invalid_width_is_usage_error(self, pytester: pytest.Pytester) -> None:
        pytester.makeini(
            """
            [pytest]
            spy_report_width = narrow
            """
        )
        pytester.makepyfile("def test_nothing(): pass")
        result = pytester.runpytest()
        assert result.ret == 4  # pytest.ExitCode.USAGE_ERROR
        result.stderr.fnmatch_lines(["*invalid spy_report_width 'narrow'*"])
