"""RetryOrchestrator — launches every attempt and streams their results."""

import asyncio
import time
import uuid
from collections.abc import AsyncIterator, Callable
from typing import TypeAlias

from retrier.command.domain.errors import CommandNotFoundError
from retrier.command.domain.result import AttemptResult
from retrier.command.domain.runner import ProcessRunner
from retrier.command.domain.spec import CommandSpec
from retrier.config.domain.policy import RetryPolicy
from retrier.core.cancellation import CancellationToken, RunCancelledError
from retrier.execution.domain.clock import Clock
from retrier.execution.domain.gate import ConcurrencyGate
from retrier.execution.domain.observer import RetryObserver
from retrier.execution.domain.phase import AttemptPhase
from retrier.execution.domain.signal_once import SignalOnce
from retrier.execution.domain.stream import ResultStream

GateFactory: TypeAlias = Callable[[int], ConcurrencyGate]


class RetryOrchestrator:
    """Runs one command under a retry policy and yields results as they arrive.

    Processes, slots, time and logging all come in through ports, so tests
    drive the attempt state machine with fakes and no real subprocess.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        gate_factory: GateFactory,
        clock: Clock,
        observer: RetryObserver,
    ) -> None:
        self._runner = runner
        self._gate_factory = gate_factory
        self._clock = clock
        self._observer = observer

    async def run(
        self,
        spec: CommandSpec,
        policy: RetryPolicy,
        token: CancellationToken,
    ) -> AsyncIterator[AttemptResult]:
        """Yield one AttemptResult per finished attempt, in delivery order.

        A missing executable yields a single lookup-error result and nothing
        else. Attempts cancelled before reaching the Running phase share one
        cancellation result. Closing the iterator early (for example with
        ``contextlib.aclosing``) cancels the remaining attempts and kills
        their processes.
        """
        stream = ResultStream()
        producer = asyncio.create_task(
            self._produce(spec=spec, policy=policy, token=token, stream=stream)
        )
        try:
            async for result in stream:
                yield result
            await producer
        finally:
            if not producer.done():
                producer.cancel()
                await asyncio.wait({producer})

    async def _produce(
        self,
        spec: CommandSpec,
        policy: RetryPolicy,
        token: CancellationToken,
        stream: ResultStream,
    ) -> None:
        run_id = str(uuid.uuid4())
        started_at = time.monotonic()
        self._observer.run_started(
            run_id=run_id,
            command=spec.argv,
            max_attempts=policy.max_attempts,
            concurrency=policy.concurrency,
            delay_seconds=policy.delay_seconds,
        )
        try:
            try:
                self._runner.locate(spec.name)
            except CommandNotFoundError as exc:
                self._observer.run_aborted(run_id=run_id, reason=str(exc))
                stream.put(AttemptResult.not_executed(error=exc))
                return

            gate = self._gate_factory(policy.concurrency)
            cancellation_reported = SignalOnce()
            async with asyncio.TaskGroup() as tg:
                for attempt in range(1, policy.max_attempts + 1):
                    tg.create_task(
                        self._run_attempt(
                            run_id=run_id,
                            attempt=attempt,
                            spec=spec,
                            policy=policy,
                            token=token,
                            gate=gate,
                            cancellation_reported=cancellation_reported,
                            stream=stream,
                        )
                    )
        finally:
            stream.close()
            self._observer.run_completed(
                run_id=run_id,
                total_results=stream.delivered,
                cancelled=token.cancelled,
                elapsed_seconds=time.monotonic() - started_at,
            )

    async def _run_attempt(
        self,
        run_id: str,
        attempt: int,
        spec: CommandSpec,
        policy: RetryPolicy,
        token: CancellationToken,
        gate: ConcurrencyGate,
        cancellation_reported: SignalOnce,
        stream: ResultStream,
    ) -> None:
        """Drive one attempt through Waiting-for-slot, Sleeping and Running."""
        try:
            await gate.acquire(token)
        except RunCancelledError as exc:
            self._report_cancelled(
                run_id=run_id,
                attempt=attempt,
                phase=AttemptPhase.WAITING_FOR_SLOT,
                error=exc,
                cancellation_reported=cancellation_reported,
                stream=stream,
            )
            return

        try:
            if policy.delay_seconds > 0:
                try:
                    await self._clock.sleep(policy.delay_seconds, token)
                except RunCancelledError as exc:
                    self._report_cancelled(
                        run_id=run_id,
                        attempt=attempt,
                        phase=AttemptPhase.SLEEPING,
                        error=exc,
                        cancellation_reported=cancellation_reported,
                        stream=stream,
                    )
                    return
                # The delay may finish in the same iteration the token fires.
                if token.cancelled:
                    self._report_cancelled(
                        run_id=run_id,
                        attempt=attempt,
                        phase=AttemptPhase.SLEEPING,
                        error=token.error(),
                        cancellation_reported=cancellation_reported,
                        stream=stream,
                    )
                    return

            self._observer.attempt_started(run_id=run_id, attempt=attempt)
            result = await self._runner.run(spec=spec, token=token, attempt=attempt)
        finally:
            gate.release()

        # A result cut short while Running is still reported on its own.
        stream.put(result)
        if isinstance(result.error, RunCancelledError):
            self._observer.attempt_cancelled(
                run_id=run_id,
                attempt=attempt,
                phase=AttemptPhase.RUNNING,
                reported=True,
            )
        else:
            self._observer.attempt_completed(
                run_id=run_id,
                attempt=attempt,
                success=result.success,
                exit_code=result.exit_code,
                real_seconds=result.real_seconds,
            )

    def _report_cancelled(
        self,
        run_id: str,
        attempt: int,
        phase: AttemptPhase,
        error: RunCancelledError,
        cancellation_reported: SignalOnce,
        stream: ResultStream,
    ) -> None:
        reported = cancellation_reported.fire()
        if reported:
            stream.put(AttemptResult.not_executed(error=error))
        self._observer.attempt_cancelled(
            run_id=run_id,
            attempt=attempt,
            phase=phase,
            reported=reported,
        )
