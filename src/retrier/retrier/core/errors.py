"""Base exception class for all retrier-specific errors."""


class RetrierError(Exception):
    """Base class for all retrier errors.

    Errors travel in two ways: raised as exceptions where a caller must stop
    (configuration, programming errors), or carried as data on an
    AttemptResult where the run goes on (lookup, cancellation, exit status).
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RetrierError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))
