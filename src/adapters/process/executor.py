"""One-shot subprocess execution (asyncio).

Each call spawns one child, waits for it, captures stdout/stderr as bytes and
decodes them. A non-zero exit or a spawn failure becomes `CommandFailed`.
There is no retry here; callers that need one (the device handshake) own it.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Mapping, Sequence

from core.domain.errors import CommandFailed
from core.domain.models import CommandInvocation, CommandResult

logger = logging.getLogger(__name__)

_EXIT_POLL_SECONDS = 0.05


def merged_environment(overlay: Mapping[str, str] | None) -> dict[str, str]:
    """Inherited environment with `overlay` applied on top."""

    env = dict(os.environ)
    if overlay:
        env.update({key: str(value) for key, value in overlay.items()})
    return env


def decode_output(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


async def spawn(
    argv: Sequence[str],
    *,
    working_directory: Path | None = None,
    environment: Mapping[str, str] | None = None,
    stdout: int | None = asyncio.subprocess.PIPE,
    stderr: int | None = asyncio.subprocess.PIPE,
    new_session: bool = False,
) -> asyncio.subprocess.Process:
    """Launch `argv` and return the running child.

    Shared by the executor and the process supervisor. With `new_session` the
    child leads its own process group, so signals can reach its descendants.
    """

    if not argv:
        raise ValueError("argv must contain at least the binary path")
    try:
        return await asyncio.create_subprocess_exec(
            *[str(arg) for arg in argv],
            stdin=asyncio.subprocess.DEVNULL,
            stdout=stdout,
            stderr=stderr,
            cwd=str(working_directory) if working_directory is not None else None,
            env=merged_environment(environment),
            start_new_session=new_session and os.name == "posix",
        )
    except OSError as err:
        logger.error("Could not spawn %s: %s", argv[0], err)
        raise CommandFailed(argv, str(err)) from err


async def wait_for_exit(process: asyncio.subprocess.Process, timeout: float | None = None) -> int | None:
    """Wait until the child itself has exited; return its code, or None on timeout.

    `Process.wait()` also waits for every pipe to close, which never happens
    while a descendant still holds stdout open.
    """

    loop = asyncio.get_running_loop()
    deadline = None if timeout is None else loop.time() + timeout
    while process.returncode is None:
        if deadline is not None and loop.time() >= deadline:
            return None
        await asyncio.sleep(_EXIT_POLL_SECONDS)
    return process.returncode


class CommandExecutor:
    """Runs commands to completion; implements `CommandRunner`."""

    def __init__(
        self,
        *,
        working_directory: Path | None = None,
        environment: Mapping[str, str] | None = None,
    ) -> None:
        self._working_directory = working_directory
        self._environment = dict(environment or {})

    async def execute(self, invocation: CommandInvocation) -> CommandResult:
        """Run `invocation` and return its result, whatever the exit code."""

        env = {**self._environment, **(invocation.environment or {})}
        cwd = invocation.working_directory or self._working_directory
        logger.debug("Running %s", " ".join(invocation.argv))

        process = await spawn(invocation.argv, working_directory=cwd, environment=env)
        try:
            stdout, stderr = await process.communicate()
        except BaseException:
            # Cancelled or interrupted: the child must not outlive the call.
            if process.returncode is None:
                logger.debug("Killing %s (pid %s) after interrupted call", invocation.argv[0], process.pid)
                try:
                    process.kill()
                except ProcessLookupError:
                    pass
            await wait_for_exit(process)
            raise
        exit_code = process.returncode if process.returncode is not None else -1
        return CommandResult(exit_code=exit_code, stdout=decode_output(stdout), stderr=decode_output(stderr))

    async def run(
        self,
        argv: Sequence[str],
        *,
        working_directory: Path | None = None,
        environment: Mapping[str, str] | None = None,
    ) -> str:
        """Run `argv` and return stdout, or raise `CommandFailed`."""

        invocation = CommandInvocation(argv=argv, working_directory=working_directory, environment=environment)
        result = await self.execute(invocation)
        if not result.ok:
            # Some binaries print diagnostics on stdout only.
            diagnostic = result.stderr.strip() or result.stdout.strip() or f"exit code {result.exit_code}"
            raise CommandFailed(invocation.argv, diagnostic, exit_code=result.exit_code)
        return result.stdout
