"""Retry policy configuration model."""

from pydantic import BaseModel, Field

from retrier.config.domain.observer import ConfigObserver

DEFAULT_TIMEOUT_SECONDS = 24 * 60 * 60.0


class RetryPolicy(BaseModel, frozen=True):
    """How many attempts to launch, how far apart, and how many at once.

    ``timeout_seconds`` bounds the whole run; None disables the deadline.
    """

    max_attempts: int = Field(default=1, ge=1)
    delay_seconds: float = Field(default=0.0, ge=0.0)
    concurrency: int = Field(default=1, ge=1)
    timeout_seconds: float | None = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0.0)


def emit_policy_warnings(policy: RetryPolicy, observer: ConfigObserver) -> None:
    """Report policy combinations that are valid but cannot do useful work."""
    if policy.timeout_seconds is not None and policy.delay_seconds >= policy.timeout_seconds:
        observer.config_long_delay_warning(
            delay_seconds=policy.delay_seconds,
            timeout_seconds=policy.timeout_seconds,
        )
