"""StructlogRetryObserver — production observer that delegates to structlog."""

import structlog


class StructlogRetryObserver:
    """Logs retry domain events to structlog.

    Does NOT inherit from RetryObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def run_started(
        self,
        run_id: str,
        command: list[str],
        max_attempts: int,
        concurrency: int,
        delay_seconds: float,
    ) -> None:
        self._log.info(
            "retry.run.started",
            run_id=run_id,
            command=command,
            max_attempts=max_attempts,
            concurrency=concurrency,
            delay_seconds=delay_seconds,
        )

    def run_aborted(self, run_id: str, reason: str) -> None:
        self._log.error("retry.run.aborted", run_id=run_id, reason=reason)

    def run_completed(
        self,
        run_id: str,
        total_results: int,
        cancelled: bool,
        elapsed_seconds: float,
    ) -> None:
        self._log.info(
            "retry.run.completed",
            run_id=run_id,
            total_results=total_results,
            cancelled=cancelled,
            elapsed_seconds=round(elapsed_seconds, 3),
        )

    def attempt_started(self, run_id: str, attempt: int) -> None:
        self._log.debug("retry.attempt.started", run_id=run_id, attempt=attempt)

    def attempt_completed(
        self,
        run_id: str,
        attempt: int,
        success: bool,
        exit_code: int | None,
        real_seconds: float,
    ) -> None:
        log = self._log.info if success else self._log.warning
        log(
            "retry.attempt.completed",
            run_id=run_id,
            attempt=attempt,
            success=success,
            exit_code=exit_code,
            real_seconds=round(real_seconds, 3),
        )

    def attempt_cancelled(
        self,
        run_id: str,
        attempt: int,
        phase: str,
        reported: bool,
    ) -> None:
        self._log.warning(
            "retry.attempt.cancelled",
            run_id=run_id,
            attempt=attempt,
            phase=phase,
            reported=reported,
        )
