"""ProcessRunner Protocol — structural interface for executing one attempt."""

from typing import Protocol

from retrier.command.domain.result import AttemptResult
from retrier.command.domain.spec import CommandSpec
from retrier.core.cancellation import CancellationToken


class ProcessRunner(Protocol):
    """Locates an executable and runs single attempts of a command.

    ``locate`` must be called before any attempt is scheduled; a lookup
    failure aborts the whole run. ``run`` never raises for execution
    problems: exit status, start failures and token cancellation are all
    reported on the returned AttemptResult.
    """

    def locate(self, name: str) -> str: ...

    async def run(
        self,
        spec: CommandSpec,
        token: CancellationToken,
        attempt: int,
    ) -> AttemptResult: ...
