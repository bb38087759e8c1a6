"""CLI entrypoint for retrier — typer app running a command under a retry policy."""

import asyncio
import logging
import signal
import sys
from contextlib import aclosing
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console

from retrier.cli.view.table import ResultTable
from retrier.command.domain.spec import CommandSpec
from retrier.command.infrastructure.subprocess_runner import SubprocessRunner
from retrier.config.domain.duration import InvalidDurationError, parse_duration
from retrier.config.domain.policy import RetryPolicy, emit_policy_warnings
from retrier.config.domain.settings import PolicySettings
from retrier.config.infrastructure.observer import StructlogConfigObserver
from retrier.config.infrastructure.yaml_loader import YamlConfigLoader
from retrier.core.cancellation import CancellationReason, CancellationToken
from retrier.core.errors import RetrierError
from retrier.execution.application.orchestrator import RetryOrchestrator
from retrier.execution.infrastructure.asyncio_clock import AsyncioClock
from retrier.execution.infrastructure.observer import StructlogRetryObserver
from retrier.execution.infrastructure.semaphore_gate import SemaphoreGate

app = typer.Typer(add_completion=False)

_HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _package_version() -> str:
    try:
        return version("retrier")
    except PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(_package_version())
        raise typer.Exit()


def _configure_structlog(log_format: str, verbose: bool) -> None:
    """Configure structlog to write to stderr so stdout carries only the table."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.", err=True)
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.INFO if verbose else logging.WARNING
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _parse_duration_option(value: str | None, option: str) -> float | None:
    if value is None:
        return None
    try:
        return parse_duration(value)
    except InvalidDurationError as exc:
        typer.echo(f"Invalid value for {option}: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _build_policy(
    config_path: Path | None,
    max_attempts: int | None,
    delay_seconds: float | None,
    concurrency: int | None,
    timeout_seconds: float | None,
) -> RetryPolicy:
    """Merge the optional policy file with explicit flags; flags win."""
    config_observer = StructlogConfigObserver()
    settings = PolicySettings()
    if config_path is not None:
        settings = YamlConfigLoader(observer=config_observer).load(path=config_path)
    policy = settings.to_policy(
        max_attempts=max_attempts,
        delay_seconds=delay_seconds,
        concurrency=concurrency,
        timeout_seconds=timeout_seconds,
    )
    emit_policy_warnings(policy=policy, observer=config_observer)
    return policy


def _on_signal(signum: signal.Signals, token: CancellationToken) -> None:
    if token.cancel(CancellationReason.INTERRUPTED):
        typer.echo(f"exiting (signaled {signum.name})", err=True)


def _install_signal_handlers(
    loop: asyncio.AbstractEventLoop,
    token: CancellationToken,
) -> list[signal.Signals]:
    installed: list[signal.Signals] = []
    for signum in _HANDLED_SIGNALS:
        try:
            loop.add_signal_handler(signum, _on_signal, signum, token)
        except (NotImplementedError, RuntimeError):
            # No loop signal support here (Windows, non-main thread); Ctrl-C
            # then surfaces as KeyboardInterrupt in run().
            continue
        installed.append(signum)
    return installed


async def _retry(spec: CommandSpec, policy: RetryPolicy, table: ResultTable) -> None:
    token = CancellationToken()
    loop = asyncio.get_running_loop()
    installed = _install_signal_handlers(loop=loop, token=token)
    if policy.timeout_seconds is not None:
        token.cancel_after(policy.timeout_seconds)

    orchestrator = RetryOrchestrator(
        runner=SubprocessRunner(),
        gate_factory=SemaphoreGate,
        clock=AsyncioClock(),
        observer=StructlogRetryObserver(),
    )
    try:
        async with aclosing(orchestrator.run(spec=spec, policy=policy, token=token)) as results:
            async for result in results:
                table.print_row(result=result)
    finally:
        token.disarm()
        for signum in installed:
            loop.remove_signal_handler(signum)


@app.command(context_settings={"allow_interspersed_args": False})
def run(
    command: list[str] | None = typer.Argument(
        None,
        metavar="COMMAND [ARGS]...",
        help="Command to execute, followed by its arguments",
        show_default=False,
    ),
    max_attempts: int | None = typer.Option(
        None,
        "--max",
        min=1,
        help="Maximum number of executions  [default: 1]",
        show_default=False,
    ),
    timeout: str | None = typer.Option(
        None,
        "--timeout",
        help="Limits the duration of all executions, e.g. 1h2m3s  [default: 24h]",
        show_default=False,
    ),
    sleep: str | None = typer.Option(
        None,
        "--sleep",
        help="Delay before each execution, e.g. 500ms  [default: 0s]",
        show_default=False,
    ),
    concurrency: int | None = typer.Option(
        None,
        "--concurrency",
        min=1,
        help="Maximum number of concurrent executions  [default: 1]",
        show_default=False,
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="YAML policy file; explicit options override its values",
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log run and attempt events at info level",
    ),
    show_version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Run COMMAND repeatedly and print one row per execution as it finishes."""
    if not command:
        typer.echo("Error: missing command", err=True)
        raise typer.Exit(code=1)

    try:
        _configure_structlog(log_format=log_format, verbose=verbose)
        policy = _build_policy(
            config_path=config_path,
            max_attempts=max_attempts,
            delay_seconds=_parse_duration_option(sleep, "--sleep"),
            concurrency=concurrency,
            timeout_seconds=_parse_duration_option(timeout, "--timeout"),
        )
        spec = CommandSpec(name=command[0], args=tuple(command[1:]))
        table = ResultTable(console=Console(highlight=False))

        asyncio.run(_retry(spec=spec, policy=policy, table=table))

    except KeyboardInterrupt:
        typer.echo("Retry interrupted.", err=True)
        sys.exit(1)
    except RetrierError as exc:
        typer.echo(str(exc), err=True)
        sys.exit(1)
    except ValidationError as exc:
        typer.echo(f"Invalid arguments: {exc}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    app()
