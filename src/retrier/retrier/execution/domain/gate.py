"""ConcurrencyGate Protocol — bounded slot pool in front of the Running phase."""

from typing import Protocol

from retrier.core.cancellation import CancellationToken


class ConcurrencyGate(Protocol):
    """Structural interface for any strategy deciding which attempt may run next.

    ``acquire`` blocks until a slot is granted or the token fires, in which
    case it raises RunCancelledError without holding a slot. ``release``
    returns a slot unconditionally; any release may satisfy any waiter.
    """

    async def acquire(self, token: CancellationToken) -> None: ...

    def release(self) -> None: ...
