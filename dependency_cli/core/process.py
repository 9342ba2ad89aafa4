"""External command execution: asyncio subprocesses with a bounded timeout."""

from __future__ import annotations

import asyncio
import contextlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import structlog

from dependency_cli.exceptions import CommandNotFoundError, CommandTimeoutError

log = structlog.get_logger("dependency_cli.process")


@dataclass
class CommandResult:
    """Outcome of one external command.

    ``stdout``/``stderr`` are empty strings when the streams were inherited
    instead of captured.
    """

    args: list[str]
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def json(self) -> Any:
        """Decode stdout as JSON, regardless of the exit code.

        Raises ``ValueError`` when stdout is empty or not valid JSON.
        """
        text = self.stdout.strip()
        if not text:
            raise ValueError("no output")
        return json.loads(text)


class CommandRunner(Protocol):
    """Callable that runs one command; :func:`run_command` is the real one."""

    async def __call__(
        self,
        args: list[str],
        *,
        cwd: Path,
        timeout: float,
        capture: bool = True,
    ) -> CommandResult: ...


async def run_command(
    args: list[str],
    *,
    cwd: Path,
    timeout: float,
    capture: bool = True,
) -> CommandResult:
    """Run *args* in *cwd* and return its :class:`CommandResult`.

    A non-zero exit status is *not* an error here: callers decide per
    command whether the output is still usable.

    Raises ``CommandNotFoundError`` if the executable is missing and
    ``CommandTimeoutError`` if it runs longer than *timeout* seconds (the
    child is killed first).
    """
    pipe = asyncio.subprocess.PIPE if capture else None
    log.debug("process.start", cmd=args, cwd=str(cwd))
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            cwd=str(cwd),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=pipe,
            stderr=pipe,
        )
    except FileNotFoundError as exc:
        raise CommandNotFoundError(args, f"executable not found ({exc.strerror})") from exc

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        await _kill(proc)
        log.warning("process.timeout", cmd=args, timeout=timeout)
        raise CommandTimeoutError(args, timeout) from None
    except BaseException:
        # Cancellation included: the child never outlives this call.
        await _kill(proc)
        log.debug("process.cancelled", cmd=args)
        raise

    result = CommandResult(
        args=list(args),
        exit_code=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace") if stdout else "",
        stderr=stderr.decode("utf-8", errors="replace") if stderr else "",
    )
    log.debug("process.exit", cmd=args, exit_code=result.exit_code)
    return result


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
    await proc.wait()
