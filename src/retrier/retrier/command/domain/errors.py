"""Error types describing why an attempt did not succeed."""

from retrier.core.errors import RetrierError


class CommandNotFoundError(RetrierError):
    """Raised when the executable cannot be located. Fatal for the whole run."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'exec: "{name}": executable file not found in $PATH')


class CommandExitError(RetrierError):
    """The process ran but exited with a non-zero status or died from a signal."""

    def __init__(self, exit_code: int, signal_name: str | None = None) -> None:
        self.exit_code = exit_code
        self.signal_name = signal_name
        if signal_name is not None:
            super().__init__(f"signal: {signal_name}")
        else:
            super().__init__(f"exit status {exit_code}")


class CommandStartError(RetrierError):
    """The process could not be started even though lookup succeeded."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to start command: {reason}")
