"""AsyncioClock — production Clock sleeping on the running event loop."""

import asyncio

from retrier.core.cancellation import CancellationToken


class AsyncioClock:
    """Sleeps with ``asyncio.sleep``, cut short by the cancellation token.

    Satisfies the Clock protocol structurally.
    """

    async def sleep(self, seconds: float, token: CancellationToken) -> None:
        await token.guard(asyncio.sleep(max(0.0, seconds)))
