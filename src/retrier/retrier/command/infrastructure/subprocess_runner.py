"""Subprocess-based runner executing one attempt of the target command."""

import asyncio
import os
import shutil
import signal
import subprocess
import tempfile
import threading
import time
from dataclasses import dataclass
from typing import IO

from retrier.command.domain.errors import (
    CommandExitError,
    CommandNotFoundError,
    CommandStartError,
)
from retrier.command.domain.result import AttemptResult
from retrier.command.domain.spec import CommandSpec
from retrier.core.cancellation import CancellationToken, RunCancelledError
from retrier.core.errors import RetrierError


@dataclass(frozen=True, slots=True)
class _ExitStatus:
    exit_code: int | None
    user_seconds: float
    system_seconds: float
    ended_at: float


class SubprocessRunner:
    """Runs the command with ``subprocess.Popen`` and reaps it on its own thread.

    stdout and stderr go to anonymous temporary files so a chatty process can
    never block on a full pipe, and are read back into memory once the
    process has been reaped. Every process gets its own reaper thread, so no
    pool size caps how many attempts can finish at once. Reaping uses
    ``os.wait4`` where available so the child's own user/system CPU time is
    reported; elsewhere those are zero.

    Satisfies the ProcessRunner protocol structurally.
    """

    def locate(self, name: str) -> str:
        """Return the resolved executable path.

        Raises:
            CommandNotFoundError: if *name* is not an executable file or not on PATH.
        """
        path = shutil.which(name)
        if path is None:
            raise CommandNotFoundError(name=name)
        return path

    async def run(
        self,
        spec: CommandSpec,
        token: CancellationToken,
        attempt: int,
    ) -> AttemptResult:
        started_at = time.monotonic()
        with tempfile.TemporaryFile() as stdout_file, tempfile.TemporaryFile() as stderr_file:
            try:
                process = subprocess.Popen(
                    spec.argv,
                    stdin=subprocess.DEVNULL,
                    stdout=stdout_file,
                    stderr=stderr_file,
                )
            except OSError as exc:
                return AttemptResult(
                    attempt=attempt,
                    executed=True,
                    real_seconds=time.monotonic() - started_at,
                    error=CommandStartError(reason=str(exc)),
                )

            reaper = _start_reaper(process)
            cancelled: RunCancelledError | None = None
            try:
                status = await token.guard(asyncio.shield(reaper))
            except RunCancelledError as exc:
                cancelled = exc
                _kill(process)
                status = await reaper
            except asyncio.CancelledError:
                _kill(process)
                await reaper
                raise

            real_seconds = max(0.0, status.ended_at - started_at)
            stdout = _read_back(stdout_file)
            stderr = _read_back(stderr_file)

        error: RetrierError | None = cancelled or _exit_error(status.exit_code)
        return AttemptResult(
            attempt=attempt,
            executed=True,
            stdout=stdout,
            stderr=stderr,
            success=error is None,
            exit_code=status.exit_code,
            user_seconds=status.user_seconds,
            system_seconds=status.system_seconds,
            real_seconds=real_seconds,
            error=error,
        )


def _start_reaper(process: subprocess.Popen[bytes]) -> asyncio.Future[_ExitStatus]:
    """Reap *process* on a dedicated daemon thread, settling a future on the loop."""
    loop = asyncio.get_running_loop()
    future: asyncio.Future[_ExitStatus] = loop.create_future()

    def reap() -> None:
        try:
            status = _wait_for_exit(process)
        except Exception as exc:
            loop.call_soon_threadsafe(_settle_error, future, exc)
            return
        loop.call_soon_threadsafe(_settle, future, status)

    threading.Thread(target=reap, name=f"reaper-{process.pid}", daemon=True).start()
    return future


def _settle(future: asyncio.Future[_ExitStatus], status: _ExitStatus) -> None:
    if not future.done():
        future.set_result(status)


def _settle_error(future: asyncio.Future[_ExitStatus], exc: Exception) -> None:
    if not future.done():
        future.set_exception(exc)


def _wait_for_exit(process: subprocess.Popen[bytes]) -> _ExitStatus:
    """Block until *process* exits and collect its resource usage."""
    if not hasattr(os, "wait4"):
        process.wait()
        return _ExitStatus(
            exit_code=process.returncode,
            user_seconds=0.0,
            system_seconds=0.0,
            ended_at=time.monotonic(),
        )

    try:
        _, wait_status, usage = os.wait4(process.pid, 0)
    except ChildProcessError:
        # Reaped by Popen itself while being killed; usage is gone with it.
        process.wait()
        return _ExitStatus(
            exit_code=process.returncode,
            user_seconds=0.0,
            system_seconds=0.0,
            ended_at=time.monotonic(),
        )

    ended_at = time.monotonic()
    exit_code = os.waitstatus_to_exitcode(wait_status)
    process.returncode = exit_code
    return _ExitStatus(
        exit_code=exit_code,
        user_seconds=usage.ru_utime,
        system_seconds=usage.ru_stime,
        ended_at=ended_at,
    )


def _kill(process: subprocess.Popen[bytes]) -> None:
    try:
        process.kill()
    except OSError:
        return


def _read_back(handle: IO[bytes]) -> bytes:
    handle.flush()
    handle.seek(0)
    return handle.read()


def _exit_error(exit_code: int | None) -> CommandExitError | None:
    if exit_code is None or exit_code == 0:
        return None
    if exit_code < 0:
        try:
            signal_name = signal.Signals(-exit_code).name
        except ValueError:
            signal_name = str(-exit_code)
        return CommandExitError(exit_code=exit_code, signal_name=signal_name)
    return CommandExitError(exit_code=exit_code)
