"""Tests verifying the RetrierError type hierarchy."""

from pathlib import Path

from retrier.command.domain.errors import (
    CommandExitError,
    CommandNotFoundError,
    CommandStartError,
)
from retrier.config.domain.duration import InvalidDurationError
from retrier.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)
from retrier.core.cancellation import CancellationReason, RunCancelledError
from retrier.core.errors import RetrierError
from retrier.execution.domain.stream import StreamClosedError


class TestRetrierErrorHierarchy:
    """All retrier-specific exceptions inherit from RetrierError."""

    def test_missing_env_vars_error_is_retrier_error(self) -> None:
        error = MissingEnvVarsError(missing_vars=["MY_VAR"])
        assert isinstance(error, RetrierError)

    def test_config_validation_error_is_retrier_error(self) -> None:
        error = ConfigValidationError(reason="bad value")
        assert isinstance(error, RetrierError)

    def test_config_load_error_is_retrier_error(self) -> None:
        error = ConfigLoadError(path=Path("/some/retrier.yaml"))
        assert isinstance(error, RetrierError)

    def test_command_errors_are_retrier_errors(self) -> None:
        assert isinstance(CommandNotFoundError(name="nope"), RetrierError)
        assert isinstance(CommandExitError(exit_code=1), RetrierError)
        assert isinstance(CommandStartError(reason="denied"), RetrierError)

    def test_run_cancelled_error_is_retrier_error(self) -> None:
        error = RunCancelledError(reason=CancellationReason.INTERRUPTED)
        assert isinstance(error, RetrierError)

    def test_stream_closed_error_is_retrier_error(self) -> None:
        assert isinstance(StreamClosedError(), RetrierError)

    def test_invalid_duration_error_is_also_value_error(self) -> None:
        error = InvalidDurationError(value="5x")
        assert isinstance(error, RetrierError)
        assert isinstance(error, ValueError)

    def test_retrier_error_is_exception(self) -> None:
        error = RetrierError("test")
        assert isinstance(error, Exception)


class TestRetrierErrorEquality:
    """Errors compare by type and message so results can be compared as values."""

    def test_same_type_and_message_are_equal(self) -> None:
        assert CommandExitError(exit_code=2) == CommandExitError(exit_code=2)

    def test_different_message_is_not_equal(self) -> None:
        assert CommandExitError(exit_code=2) != CommandExitError(exit_code=3)

    def test_different_type_with_same_message_is_not_equal(self) -> None:
        assert RetrierError("exit status 1") != CommandExitError(exit_code=1)

    def test_equal_errors_hash_alike(self) -> None:
        errors = {CommandNotFoundError(name="x"), CommandNotFoundError(name="x")}
        assert len(errors) == 1


class TestCommandErrorMessages:
    """Messages match what users of the tool already see in their terminals."""

    def test_not_found_message(self) -> None:
        error = CommandNotFoundError(name="unknown")
        assert str(error) == 'exec: "unknown": executable file not found in $PATH'

    def test_exit_status_message(self) -> None:
        assert str(CommandExitError(exit_code=1)) == "exit status 1"

    def test_signal_message(self) -> None:
        error = CommandExitError(exit_code=-9, signal_name="SIGKILL")
        assert str(error) == "signal: SIGKILL"

    def test_start_error_message_starts_with_failed(self) -> None:
        error = CommandStartError(reason="Permission denied")
        assert str(error).startswith("Failed to ")
        assert "Permission denied" in str(error)


class TestConfigErrorMessages:
    """Config errors name what went wrong."""

    def test_missing_env_vars_lists_names(self) -> None:
        error = MissingEnvVarsError(missing_vars=["A", "B"])
        assert "A" in str(error)
        assert "B" in str(error)

    def test_config_load_error_includes_path(self) -> None:
        error = ConfigLoadError(path=Path("/etc/retrier.yaml"))
        assert "/etc/retrier.yaml" in str(error)

    def test_config_validation_error_includes_reason(self) -> None:
        error = ConfigValidationError(reason="max: must be >= 1")
        assert str(error).startswith("Failed to validate config")
        assert "max: must be >= 1" in str(error)
