"""Error types raised by config infrastructure."""

from pathlib import Path

from retrier.core.errors import RetrierError


class MissingEnvVarsError(RetrierError):
    """Raised when one or more referenced environment variables are not set."""

    def __init__(self, missing_vars: list[str]) -> None:
        self.missing_vars = missing_vars
        var_list = ", ".join(sorted(missing_vars))
        super().__init__(
            f"Failed to load config: missing environment variables: {var_list}"
        )


class ConfigValidationError(RetrierError):
    """Raised when the policy file is malformed or holds out-of-range values."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to validate config: {reason}")


class ConfigLoadError(RetrierError):
    """Raised when the policy file cannot be opened or read."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to load config: cannot read file: {path}")
