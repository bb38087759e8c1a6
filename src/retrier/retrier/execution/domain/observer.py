"""RetryObserver — run and attempt lifecycle events for a retry run."""

from typing import Protocol


class RetryObserver(Protocol):
    """Receives one call per lifecycle transition of a run and its attempts.

    Attempts cancelled before Running are all announced; ``reported`` marks
    the single one whose cancellation produced the shared result.
    """

    def run_started(
        self,
        run_id: str,
        command: list[str],
        max_attempts: int,
        concurrency: int,
        delay_seconds: float,
    ) -> None: ...

    def run_aborted(self, run_id: str, reason: str) -> None: ...

    def run_completed(
        self,
        run_id: str,
        total_results: int,
        cancelled: bool,
        elapsed_seconds: float,
    ) -> None: ...

    def attempt_started(self, run_id: str, attempt: int) -> None: ...

    def attempt_completed(
        self,
        run_id: str,
        attempt: int,
        success: bool,
        exit_code: int | None,
        real_seconds: float,
    ) -> None: ...

    def attempt_cancelled(
        self,
        run_id: str,
        attempt: int,
        phase: str,
        reported: bool,
    ) -> None: ...
