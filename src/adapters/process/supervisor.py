"""Supervision of one long-running child process (node, ogmios, kupo).

Lifecycle: NOT_STARTED -> RUNNING -> TERMINATED, never backwards. A
supervisor wraps exactly one OS process; start a new supervisor to run the
binary again.

Output:
- SUPPRESSED: output is drained into a bounded buffer (`recent_output`).
- STREAMED: output is additionally exposed as a live, ordered, line-oriented
  async iterator (`output_lines`), consumable once.

An unexpected exit is picked up by a background watcher and reflected by the
next `state`/`is_running` query; it is never raised from the background.

On POSIX the child leads its own process group and stop signals go to the
whole group, so wrapper scripts cannot leave descendants holding the output
pipe open.
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
from collections import deque
from pathlib import Path
from typing import AsyncIterator, Mapping, Sequence

from adapters.process.executor import decode_output, spawn, wait_for_exit
from core.domain.errors import ProcessAlreadyRunning, ProcessStateError
from core.domain.models import OutputMode, ProcessState

logger = logging.getLogger(__name__)

_END = object()

# Output still buffered after the child exits is drained for at most this long.
_DRAIN_SECONDS = 2.0


class ProcessSupervisor:
    def __init__(
        self,
        *,
        name: str = "process",
        working_directory: Path | None = None,
        environment: Mapping[str, str] | None = None,
        output_mode: OutputMode = OutputMode.SUPPRESSED,
        stop_grace_seconds: float = 10.0,
        buffer_lines: int = 200,
    ) -> None:
        self.name = name
        self.output_mode = output_mode
        self._working_directory = working_directory
        self._environment = dict(environment or {})
        self._grace = stop_grace_seconds

        self._state = ProcessState.NOT_STARTED
        self._process: asyncio.subprocess.Process | None = None
        self._argv: tuple[str, ...] = ()
        self._recent: deque[str] = deque(maxlen=buffer_lines)
        self._queue: asyncio.Queue[object] | None = None
        self._reader: asyncio.Task[None] | None = None
        self._watcher: asyncio.Task[None] | None = None
        self._stop_requested = False
        self._stream_closed = False
        self._dropped = 0
        self._start_lock = asyncio.Lock()

    # --- status ---------------------------------------------------------

    @property
    def state(self) -> ProcessState:
        if self._state is ProcessState.RUNNING and self._process is not None:
            if self._process.returncode is not None:
                # The watcher closes the output stream once it is drained.
                self._state = ProcessState.TERMINATED
        return self._state

    @property
    def is_running(self) -> bool:
        return self.state is ProcessState.RUNNING

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process is not None else None

    @property
    def returncode(self) -> int | None:
        return self._process.returncode if self._process is not None else None

    @property
    def argv(self) -> tuple[str, ...]:
        return self._argv

    @property
    def exited_unexpectedly(self) -> bool:
        return self.state is ProcessState.TERMINATED and not self._stop_requested

    @property
    def dropped_lines(self) -> int:
        """Lines discarded from the live stream because nobody consumed them."""

        return self._dropped

    def recent_output(self) -> list[str]:
        return list(self._recent)

    # --- lifecycle ------------------------------------------------------

    async def start(self, argv: Sequence[str]) -> None:
        """Spawn the child and return once it is running.

        Raises `ProcessAlreadyRunning` while RUNNING and `ProcessStateError`
        once TERMINATED. If the spawn fails the state stays NOT_STARTED.
        """

        async with self._start_lock:
            current = self.state
            if current is ProcessState.RUNNING:
                raise ProcessAlreadyRunning(f"{self.name} is already running (pid {self.pid})")
            if current is ProcessState.TERMINATED:
                raise ProcessStateError(f"{self.name} has already terminated; use a new supervisor")

            logger.info("Starting process: %s", " ".join(str(arg) for arg in argv))
            logger.info(
                "Starting process with output %s...",
                "shown" if self.output_mode is OutputMode.STREAMED else "hidden",
            )
            process = await spawn(
                argv,
                working_directory=self._working_directory,
                environment=self._environment,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                new_session=True,
            )

            self._process = process
            self._argv = tuple(str(arg) for arg in argv)
            self._state = ProcessState.RUNNING
            if self.output_mode is OutputMode.STREAMED:
                self._queue = asyncio.Queue(maxsize=self._recent.maxlen or 0)
            self._reader = asyncio.create_task(self._read_output(process))
            self._watcher = asyncio.create_task(self._watch(process))

    async def wait(self) -> int:
        """Wait for the child to exit and return its exit code."""

        if self._state is ProcessState.NOT_STARTED or self._watcher is None:
            raise ProcessStateError(f"{self.name} has not been started")
        await asyncio.shield(self._watcher)
        assert self._process is not None
        return self._process.returncode if self._process.returncode is not None else -1

    async def stop(self) -> None:
        """Ask the child to exit (SIGINT), escalating to SIGTERM then SIGKILL.

        A no-op unless RUNNING.
        """

        if self.state is not ProcessState.RUNNING:
            logger.debug("stop() ignored for %s in state %s", self.name, self._state.value)
            return

        assert self._process is not None
        process = self._process
        self._stop_requested = True
        logger.info("Stopping process %s...", self.name)

        self._signal(process, signal.SIGINT if os.name == "posix" else signal.SIGTERM)
        if await wait_for_exit(process, self._grace) is None:
            logger.warning("Process did not terminate gracefully, forcing termination")
            self._signal(process, signal.SIGTERM)
            if await wait_for_exit(process, self._grace) is None:
                logger.warning("Process still alive, killing %s", self.name)
                self._signal(process, signal.SIGKILL if os.name == "posix" else signal.SIGTERM)
                await wait_for_exit(process)

        if self._watcher is not None:
            await self._watcher

    async def output_lines(self) -> AsyncIterator[str]:
        """Yield output lines as the child produces them (STREAMED mode)."""

        if self.output_mode is not OutputMode.STREAMED:
            raise ProcessStateError(f"{self.name} output is suppressed; use recent_output()")
        if self._queue is None:
            raise ProcessStateError(f"{self.name} has not been started")

        queue = self._queue
        while not self._stream_closed:
            item = await queue.get()
            if item is _END:
                self._stream_closed = True
                return
            yield str(item)

    # --- internals ------------------------------------------------------

    @staticmethod
    def _signal(process: asyncio.subprocess.Process, signum: int) -> None:
        try:
            if os.name == "posix":
                os.killpg(process.pid, signum)
            else:
                process.send_signal(signum)
        except ProcessLookupError:
            pass

    def _publish(self, item: object) -> None:
        if self._queue is None:
            return
        if self._queue.full():
            # Oldest line is dropped when nobody consumes the stream.
            self._queue.get_nowait()
            self._dropped += 1
            if self._dropped == 1:
                logger.warning("%s output is not being consumed; dropping the oldest lines", self.name)
        self._queue.put_nowait(item)

    @staticmethod
    async def _next_line(stream: asyncio.StreamReader) -> bytes:
        """Next line with its newline; lines over the reader limit are read in pieces."""

        chunks: list[bytes] = []
        while True:
            try:
                chunks.append(await stream.readuntil(b"\n"))
                break
            except asyncio.IncompleteReadError as exc:
                chunks.append(exc.partial)
                break
            except asyncio.LimitOverrunError as exc:
                chunks.append(await stream.read(exc.consumed))
        return b"".join(chunks)

    async def _read_output(self, process: asyncio.subprocess.Process) -> None:
        stream = process.stdout
        if stream is None:
            return
        while True:
            raw = await self._next_line(stream)
            if not raw:
                break
            line = decode_output(raw).rstrip("\r\n")
            self._recent.append(line)
            self._publish(line)

    async def _watch(self, process: asyncio.subprocess.Process) -> None:
        try:
            code = await wait_for_exit(process)
            await self._drain_reader()
            logger.info("Process %s terminated with exit code: %s", self.name, code)
            if not self._stop_requested:
                logger.warning("Process %s exited without a stop request", self.name)
        finally:
            self._mark_terminated()

    async def _drain_reader(self) -> None:
        reader = self._reader
        if reader is None:
            return
        done, _ = await asyncio.wait({reader}, timeout=_DRAIN_SECONDS)
        if not done:
            # A descendant outside the process group still holds the pipe.
            logger.warning("Output of %s still open after exit; no longer reading it", self.name)
            reader.cancel()
        elif not reader.cancelled() and reader.exception() is not None:
            logger.error("Reading output of %s failed: %s", self.name, reader.exception())

    def _mark_terminated(self) -> None:
        self._state = ProcessState.TERMINATED
        self._publish(_END)
