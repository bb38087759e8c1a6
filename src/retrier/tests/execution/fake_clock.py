"""FakeClock — Clock implementation recording sleeps instead of waiting."""

import asyncio

from retrier.core.cancellation import CancellationToken


class FakeClock:
    """Satisfies the Clock protocol. Returns immediately unless ``hold`` is set.

    Every requested duration is recorded in ``sleeps``. Tasks whose sleep has
    completed are remembered so a fake runner can check that an attempt only
    reached Running after sleeping.
    """

    def __init__(self, hold: asyncio.Event | None = None) -> None:
        self._hold = hold
        self.sleeps: list[float] = []
        self.sleeping = 0
        self._slept_tasks: set[asyncio.Task[object]] = set()

    async def sleep(self, seconds: float, token: CancellationToken) -> None:
        self.sleeps.append(seconds)
        self.sleeping += 1
        try:
            if self._hold is not None:
                await token.guard(self._hold.wait())
            else:
                await token.guard(asyncio.sleep(0))
        finally:
            self.sleeping -= 1
        task = asyncio.current_task()
        if task is not None:
            self._slept_tasks.add(task)

    def current_task_has_slept(self) -> bool:
        return asyncio.current_task() in self._slept_tasks
