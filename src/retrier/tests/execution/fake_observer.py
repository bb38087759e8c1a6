"""FakeRetryObserver — records retry domain events for assertion in tests."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RunStartedEvent:
    run_id: str
    command: list[str]
    max_attempts: int
    concurrency: int
    delay_seconds: float


@dataclass(frozen=True)
class RunAbortedEvent:
    run_id: str
    reason: str


@dataclass(frozen=True)
class RunCompletedEvent:
    run_id: str
    total_results: int
    cancelled: bool
    elapsed_seconds: float


@dataclass(frozen=True)
class AttemptStartedEvent:
    run_id: str
    attempt: int


@dataclass(frozen=True)
class AttemptCompletedEvent:
    run_id: str
    attempt: int
    success: bool
    exit_code: int | None
    real_seconds: float


@dataclass(frozen=True)
class AttemptCancelledEvent:
    run_id: str
    attempt: int
    phase: str
    reported: bool


class FakeRetryObserver:
    """Records all emitted retry events as typed frozen dataclasses.

    Use in tests to assert which events were emitted and with what data,
    without mocking or patching.
    """

    def __init__(self) -> None:
        self._run_started: list[RunStartedEvent] = []
        self._run_aborted: list[RunAbortedEvent] = []
        self._run_completed: list[RunCompletedEvent] = []
        self._attempt_started: list[AttemptStartedEvent] = []
        self._attempt_completed: list[AttemptCompletedEvent] = []
        self._attempt_cancelled: list[AttemptCancelledEvent] = []

    @property
    def started(self) -> list[RunStartedEvent]:
        return self._run_started

    @property
    def aborted(self) -> list[RunAbortedEvent]:
        return self._run_aborted

    @property
    def completed(self) -> list[RunCompletedEvent]:
        return self._run_completed

    @property
    def attempts_started(self) -> list[AttemptStartedEvent]:
        return self._attempt_started

    @property
    def attempts_completed(self) -> list[AttemptCompletedEvent]:
        return self._attempt_completed

    @property
    def attempts_cancelled(self) -> list[AttemptCancelledEvent]:
        return self._attempt_cancelled

    def run_started(
        self,
        run_id: str,
        command: list[str],
        max_attempts: int,
        concurrency: int,
        delay_seconds: float,
    ) -> None:
        self._run_started.append(
            RunStartedEvent(
                run_id=run_id,
                command=command,
                max_attempts=max_attempts,
                concurrency=concurrency,
                delay_seconds=delay_seconds,
            )
        )

    def run_aborted(self, run_id: str, reason: str) -> None:
        self._run_aborted.append(RunAbortedEvent(run_id=run_id, reason=reason))

    def run_completed(
        self,
        run_id: str,
        total_results: int,
        cancelled: bool,
        elapsed_seconds: float,
    ) -> None:
        self._run_completed.append(
            RunCompletedEvent(
                run_id=run_id,
                total_results=total_results,
                cancelled=cancelled,
                elapsed_seconds=elapsed_seconds,
            )
        )

    def attempt_started(self, run_id: str, attempt: int) -> None:
        self._attempt_started.append(AttemptStartedEvent(run_id=run_id, attempt=attempt))

    def attempt_completed(
        self,
        run_id: str,
        attempt: int,
        success: bool,
        exit_code: int | None,
        real_seconds: float,
    ) -> None:
        self._attempt_completed.append(
            AttemptCompletedEvent(
                run_id=run_id,
                attempt=attempt,
                success=success,
                exit_code=exit_code,
                real_seconds=real_seconds,
            )
        )

    def attempt_cancelled(
        self,
        run_id: str,
        attempt: int,
        phase: str,
        reported: bool,
    ) -> None:
        self._attempt_cancelled.append(
            AttemptCancelledEvent(
                run_id=run_id,
                attempt=attempt,
                phase=phase,
                reported=reported,
            )
        )
