"""Contracts implemented by binary façades and process adapters.

Façades conform by composition: each one holds a resolved
`BinaryDescriptor` and delegates to the shared executor/supervisor.
"""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator, Mapping, Protocol, Sequence, runtime_checkable

from core.domain.models import BinaryDescriptor, ProcessState


@runtime_checkable
class CommandRunner(Protocol):
    """Runs one argv to completion and returns its standard output."""

    async def run(
        self,
        argv: Sequence[str],
        *,
        working_directory: Path | None = None,
        environment: Mapping[str, str] | None = None,
    ) -> str:
        ...


@runtime_checkable
class Sleeper(Protocol):
    async def __call__(self, seconds: float) -> None:
        ...


@runtime_checkable
class Resolvable(Protocol):
    """A façade bound to a resolved and version-gated binary."""

    binary_name: str
    minimum_version: str

    @property
    def descriptor(self) -> BinaryDescriptor:
        ...

    async def version(self) -> str:
        ...


@runtime_checkable
class Invokable(Resolvable, Protocol):
    """A façade exposing one-shot request/response commands."""

    async def run_command(self, arguments: Sequence[str]) -> str:
        ...


@runtime_checkable
class Supervisable(Resolvable, Protocol):
    """A façade wrapping one long-running daemon process."""

    @property
    def state(self) -> ProcessState:
        ...

    @property
    def is_running(self) -> bool:
        ...

    async def start(self, arguments: Sequence[str] = ()) -> None:
        ...

    async def stop(self) -> None:
        ...

    def output_lines(self) -> AsyncIterator[str]:
        ...


__all__ = [
    "CommandRunner",
    "Invokable",
    "Resolvable",
    "Sleeper",
    "Supervisable",
]
