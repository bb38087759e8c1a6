"""SemaphoreGate — counting-semaphore implementation of the ConcurrencyGate port."""

import asyncio

from retrier.core.cancellation import CancellationToken


class SemaphoreGate:
    """Fixed-capacity slot pool backed by ``asyncio.Semaphore``.

    Slots carry no identity and waiters are woken in whatever order the
    semaphore chooses. Does NOT inherit from ConcurrencyGate (structural
    typing via Protocol).
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"Gate capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._semaphore = asyncio.Semaphore(capacity)
        self._in_use = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def in_use(self) -> int:
        return self._in_use

    async def acquire(self, token: CancellationToken) -> None:
        """Wait for a free slot unless the token fires first.

        A slot granted in the same instant the token fired is handed straight
        back, so a cancelled acquisition never holds a slot.

        Raises:
            RunCancelledError: if the token fired before or while waiting.
        """
        await token.guard(self._semaphore.acquire())
        if token.cancelled:
            self._semaphore.release()
            raise token.error()
        self._in_use += 1

    def release(self) -> None:
        self._in_use -= 1
        self._semaphore.release()
