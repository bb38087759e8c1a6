"""AttemptResult value object — the outcome of a single attempt."""

from pydantic import BaseModel, ConfigDict, Field

from retrier.core.errors import RetrierError


class AttemptResult(BaseModel):
    """Immutable value object capturing everything observed about one attempt.

    ``executed`` is False only for the results that stand in for attempts that
    never ran: the single lookup-failure result and the single shared
    cancellation result. Those carry an error, no attempt number, and zero
    durations.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    attempt: int | None = Field(default=None, ge=1)
    executed: bool
    stdout: bytes = b""
    stderr: bytes = b""
    success: bool = False
    exit_code: int | None = None
    user_seconds: float = Field(default=0.0, ge=0.0)
    system_seconds: float = Field(default=0.0, ge=0.0)
    real_seconds: float = Field(default=0.0, ge=0.0)
    error: RetrierError | None = None

    @classmethod
    def not_executed(cls, error: RetrierError) -> "AttemptResult":
        """Build the placeholder result for attempts that never ran."""
        return cls(executed=False, error=error)
