"""CancellationToken — one-shot, permanent cancellation signal for a run."""

import asyncio
import enum
from collections.abc import Awaitable
from typing import TypeVar

from retrier.core.errors import RetrierError

T = TypeVar("T")


class CancellationReason(enum.StrEnum):
    INTERRUPTED = "interrupted"
    DEADLINE_EXCEEDED = "deadline_exceeded"


class RunCancelledError(RetrierError):
    """Carried by results whose attempt was cut short by the cancellation token."""

    def __init__(self, reason: CancellationReason) -> None:
        self.reason = reason
        if reason is CancellationReason.DEADLINE_EXCEEDED:
            super().__init__("context deadline exceeded")
        else:
            super().__init__("context canceled")


class CancellationToken:
    """Fires at most once and stays fired for the rest of the run.

    The token is fired either externally (OS interrupt) via ``cancel`` or by
    an armed deadline. The first reason wins; later calls are no-ops. Every
    suspension point of a run races its work against the token through
    ``guard``.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: CancellationReason | None = None
        self._deadline: asyncio.TimerHandle | None = None

    @property
    def cancelled(self) -> bool:
        return self._reason is not None

    @property
    def reason(self) -> CancellationReason | None:
        return self._reason

    def cancel(self, reason: CancellationReason = CancellationReason.INTERRUPTED) -> bool:
        """Fire the token. Returns True only for the call that actually fired it."""
        if self._reason is not None:
            return False
        self._reason = reason
        self._event.set()
        self.disarm()
        return True

    def cancel_after(self, seconds: float) -> None:
        """Arm a deadline on the running loop; fires with DEADLINE_EXCEEDED."""
        self.disarm()
        loop = asyncio.get_running_loop()
        self._deadline = loop.call_later(
            seconds, self.cancel, CancellationReason.DEADLINE_EXCEEDED
        )

    def disarm(self) -> None:
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None

    async def wait(self) -> None:
        await self._event.wait()

    def error(self) -> RunCancelledError:
        if self._reason is None:
            raise RuntimeError("Cancellation token has not fired")
        return RunCancelledError(reason=self._reason)

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """Await *awaitable* unless the token fires first.

        If the token wins, the pending work is cancelled and RunCancelledError
        is raised. If the work finished first its result is returned, even
        when the token fired in the same loop iteration.

        Raises:
            RunCancelledError: if the token fired before the work finished.
        """
        if self.cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise self.error()

        work = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not work.done():
                work.cancel()
                # Task.cancel only requests cancellation; let the work unwind.
                await asyncio.wait({work})

        if work.cancelled() and self.cancelled:
            raise self.error()
        return work.result()
