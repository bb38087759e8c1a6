"""Clock Protocol — injectable time source for the inter-attempt delay."""

from typing import Protocol

from retrier.core.cancellation import CancellationToken


class Clock(Protocol):
    async def sleep(self, seconds: float, token: CancellationToken) -> None: ...
