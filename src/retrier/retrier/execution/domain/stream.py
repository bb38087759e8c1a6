"""ResultStream — ordered-delivery channel of attempt results."""

import asyncio
from collections.abc import AsyncIterator

from retrier.command.domain.result import AttemptResult
from retrier.core.errors import RetrierError


class StreamClosedError(RetrierError):
    """Raised when a producer pushes a result after the stream was closed."""

    def __init__(self) -> None:
        super().__init__("Failed to deliver result: stream is already closed")


class ResultStream:
    """Single-consumer, multi-producer channel closed exactly once.

    Results are yielded in delivery order, which need not match attempt
    order. Iteration ends once ``close`` has been called and every result
    delivered before it has been consumed.
    """

    _END = object()

    def __init__(self) -> None:
        self._queue: asyncio.Queue[AttemptResult | object] = asyncio.Queue()
        self._closed = False
        self._delivered = 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def delivered(self) -> int:
        return self._delivered

    def put(self, result: AttemptResult) -> None:
        if self._closed:
            raise StreamClosedError()
        self._delivered += 1
        self._queue.put_nowait(result)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(self._END)

    async def __aiter__(self) -> AsyncIterator[AttemptResult]:
        while True:
            item = await self._queue.get()
            if item is self._END:
                return
            assert isinstance(item, AttemptResult)
            yield item
