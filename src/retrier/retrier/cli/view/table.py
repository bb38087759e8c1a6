"""ResultTable — prints each AttemptResult as one table row as soon as it arrives.

Rows are written one at a time so the table grows while attempts are still
running; the header is written lazily before the first row. Not safe to
share between concurrent writers.
"""

from dataclasses import dataclass

from rich.console import Console
from rich.text import Text

from retrier.command.domain.result import AttemptResult
from retrier.config.domain.duration import format_duration, round_duration

_HEADERS = ("", "RealTime", "SystemTime", "UserTime", "Success", "Error")


@dataclass(frozen=True)
class _Row:
    success: bool = False
    real_seconds: float = 0.0
    user_seconds: float = 0.0
    system_seconds: float = 0.0
    error: str = ""


class ResultTable:
    """Streams rows of ``# RealTime SystemTime UserTime Success Error``."""

    def __init__(self, console: Console) -> None:
        self._console = console
        self._line = 0

    @property
    def rows_printed(self) -> int:
        return self._line

    def print_row(self, result: AttemptResult) -> None:
        self._line += 1
        if self._line == 1:
            self._print_headers()
        self._print_row(row=_map_row(result=result))

    def _print_headers(self) -> None:
        blank, real, system, user, success, error = _HEADERS
        header = f"{blank:>4} {real:>10} {system:>10} {user:>10} {success:>10} {error:>10}"
        self._console.print(Text(header, style="bold"), soft_wrap=True)

    def _print_row(self, row: _Row) -> None:
        line = Text()
        line.append(f"{self._line:>4} ")
        line.append(f"{format_duration(round_real_time(row.real_seconds)):>10} ")
        line.append(f"{format_duration(row.system_seconds):>10} ")
        line.append(f"{format_duration(row.user_seconds):>10} ")
        line.append(f"{str(row.success).lower():>10}", style="green" if row.success else "red")
        line.append(f" {row.error:>10}", style="red" if row.error else "")
        self._console.print(line, soft_wrap=True)


def _map_row(result: AttemptResult) -> _Row:
    error = result.error.message if result.error is not None else ""
    # Only a process that actually produced an exit status has timings to show.
    if not result.executed or result.exit_code is None:
        return _Row(error=error)
    return _Row(
        success=result.success,
        real_seconds=result.real_seconds,
        user_seconds=result.user_seconds,
        system_seconds=result.system_seconds,
        error=error,
    )


def round_real_time(seconds: float) -> float:
    """Round a wall-clock duration to a precision that fits its magnitude."""
    if seconds >= 3600:
        return round_duration(seconds, 60)
    if seconds >= 60:
        return round_duration(seconds, 1)
    if seconds >= 1:
        return round_duration(seconds, 0.001)
    if seconds >= 0.001:
        return round_duration(seconds, 0.000001)
    return round_duration(seconds, 0.001)
