"""PolicySettings — partial policy read from a config file, merged under CLI flags."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from retrier.config.domain.duration import parse_duration
from retrier.config.domain.policy import RetryPolicy


class PolicySettings(BaseModel):
    """Every field is optional; only fields present in the file are applied.

    Duration fields accept either a Go-style string (``"1m30s"``) or a plain
    number of seconds. ``timeout: null`` disables the overall deadline.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    max_attempts: int | None = Field(default=None, ge=1, alias="max")
    delay_seconds: float | None = Field(default=None, ge=0.0, alias="sleep")
    concurrency: int | None = Field(default=None, ge=1)
    timeout_seconds: float | None = Field(default=None, gt=0.0, alias="timeout")

    @field_validator("delay_seconds", "timeout_seconds", mode="before")
    @classmethod
    def _parse_duration_strings(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_duration(value)
        return value

    def to_policy(self, **overrides: Any) -> RetryPolicy:
        """Build a RetryPolicy from the file values, with *overrides* taking precedence.

        Overrides whose value is None are treated as "not given on the
        command line"; pass ``timeout_seconds=None`` through the file instead
        to disable the deadline.
        """
        values: dict[str, Any] = {name: getattr(self, name) for name in self.model_fields_set}
        values.update({name: value for name, value in overrides.items() if value is not None})
        return RetryPolicy(**values)
