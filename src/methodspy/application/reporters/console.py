"""Console reporter: recorded spy calls → rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from collections.abc import Iterable

    from methodspy.application.spy import Spy
    from methodspy.domain.call_record import CallRecord


@dataclass(frozen=True, slots=True)
class ReportConfig:
    """Configuration for console reporter.

    All fields have defaults. Immutable (frozen dataclass).

    Attributes:
        color: Emit ANSI styling. Off by default so the report reads
            cleanly inside pytest sections and log files.
        width: Console width in characters.
        max_calls: Max calls shown per spy (most recent kept). None = all.
        show_kwargs: Add a keyword-arguments column.
        show_context: Add a receiver column.
    """

    color: bool = False
    width: int = 120
    max_calls: int | None = None
    show_kwargs: bool = True
    show_context: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width < 20:
            raise ValueError(f"width must be >= 20, got {self.width}")
        if self.max_calls is not None and self.max_calls < 1:
            raise ValueError(f"max_calls must be >= 1 or None, got {self.max_calls}")


def format_outcome(record: CallRecord) -> str:
    """Short outcome text: return value, raised exception or in-progress."""
    if not record.completed:
        return "(running)"
    if record.raised is not None:
        return f"raised {type(record.raised).__name__}: {record.raised}"
    return repr(record.returned)


class SpyConsoleReporter:
    """Console reporter: renders every spy's call history.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ReportConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ReportConfig()

    def report(self, spies: Iterable[Spy]) -> str:
        """Format recorded calls of all spies.

        Args:
            spies: Spies to render, typically a SpyRegistry.

        Returns:
            Formatted string, one table per spy.
        """
        output = StringIO()
        console = Console(
            file=output,
            force_terminal=self._config.color,
            no_color=not self._config.color,
            width=self._config.width,
        )

        tracked = tuple(spies)
        console.rule(f"[bold]SPIES[/bold] ({len(tracked)})")

        for spy in tracked:
            self._render_spy(console, spy)

        return output.getvalue()

    def _render_spy(self, console: Console, spy: Spy) -> None:
        """Render header and call table for one spy."""
        state = "active" if spy.active else "released"
        behavior = "invoke" if spy.invoke_substitute else "return"
        console.print(
            f"[bold]{escape(spy.label)}[/bold] "
            f"mode={spy.mode.name} ({behavior}) {state} calls={spy.called()}"
        )

        calls = spy.calls
        first = 0
        if self._config.max_calls is not None and len(calls) > self._config.max_calls:
            first = len(calls) - self._config.max_calls
            console.print(f"[dim]... {first} earlier call(s) omitted[/dim]")

        if not calls:
            console.print("[dim]  no calls[/dim]")
            console.print()
            return

        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("#", style="dim")
        table.add_column("Args")
        if self._config.show_kwargs:
            table.add_column("Kwargs")
        if self._config.show_context:
            table.add_column("Context", style="dim")
        table.add_column("Outcome", style="green")

        for index in range(first, len(calls)):
            table.add_row(*self._row(index, calls[index], spy))

        console.print(table)
        console.print()

    def _row(self, index: int, record: CallRecord, spy: Spy) -> list[Text]:
        """Cells for one call. Plain Text, so reprs are never read as markup."""
        row = [str(index), ", ".join(repr(arg) for arg in record.args) or "-"]
        if self._config.show_kwargs:
            row.append(", ".join(f"{k}={v!r}" for k, v in record.kwargs.items()) or "-")
        if self._config.show_context:
            row.append("owner" if record.context is spy.target else repr(record.context))
        row.append(format_outcome(record))
        return [Text(cell) for cell in row]
