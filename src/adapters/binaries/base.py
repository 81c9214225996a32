"""Shared façade machinery.

A façade is built with `await SomeFacade.create(config, ...)`:
1) required configuration sections are checked (`ConfigurationMissing`);
2) the binary is resolved (explicit path, else PATH) into a `BinaryDescriptor`;
3) the working directory is created if missing;
4) the version gate runs once.

Construction is all-or-nothing: if any step fails no façade is returned.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import AsyncIterator, ClassVar, Sequence, TypeVar

from adapters.process.executor import CommandExecutor
from adapters.process.supervisor import ProcessSupervisor
from core.config import AppSettings, Config
from core.domain.errors import CardanoToolsError, ConfigurationMissing
from core.domain.models import BinaryDescriptor, OutputMode, ProcessState
from core.domain.semver import SemVer
from core.environment import SocketPathChannel
from core.interfaces.binary import CommandRunner
from core.services.binary_resolver import describe_binary, ensure_working_directory
from core.services.version_gate import VersionGate

logger = logging.getLogger(__name__)

F = TypeVar("F", bound="BinaryFacade")


class BinaryFacade:
    """One-shot command façade over a single external binary."""

    binary_name: ClassVar[str]
    minimum_version: ClassVar[str]
    version_arguments: ClassVar[tuple[str, ...]] = ("--version",)

    def __init__(
        self,
        descriptor: BinaryDescriptor,
        *,
        config: Config,
        working_directory: Path,
        runner: CommandRunner | None = None,
        settings: AppSettings | None = None,
        socket: SocketPathChannel | None = None,
    ) -> None:
        self._descriptor = descriptor
        self.config = config
        self.working_directory = working_directory
        self.settings = settings or AppSettings()
        self.socket = socket or SocketPathChannel()
        self._runner: CommandRunner = runner or CommandExecutor()
        self._version: SemVer | None = None

    # --- construction ---------------------------------------------------

    @classmethod
    async def create(
        cls: type[F],
        config: Config,
        *,
        runner: CommandRunner | None = None,
        settings: AppSettings | None = None,
        socket: SocketPathChannel | None = None,
        path_env: str | None = None,
    ) -> F:
        cls.validate_config(config)
        descriptor = describe_binary(
            cls.binary_name,
            cls.minimum_version,
            cls.configured_path(config),
            path_env=path_env,
        )
        working_directory = ensure_working_directory(cls.configured_working_dir(config) or Path.cwd())

        facade = cls(
            descriptor,
            config=config,
            working_directory=working_directory,
            runner=runner,
            settings=settings,
            socket=socket,
        )
        facade.prepare()
        await facade._gate()
        return facade

    @classmethod
    def validate_config(cls, config: Config) -> None:
        if config.cardano is None:
            raise ConfigurationMissing(f"Cardano configuration missing for {cls.binary_name}")

    @classmethod
    def configured_path(cls, config: Config) -> Path | None:
        return None

    @classmethod
    def configured_working_dir(cls, config: Config) -> Path | None:
        return config.cardano.working_dir if config.cardano else None

    def prepare(self) -> None:
        """Hook for side effects that must precede the version check."""

    async def _gate(self) -> None:
        gate = VersionGate(self.version_text, self._descriptor.minimum_version, binary_name=self.binary_name)
        self._version = await gate.check()

    # --- operations -----------------------------------------------------

    @property
    def descriptor(self) -> BinaryDescriptor:
        return self._descriptor

    @property
    def binary_path(self) -> Path:
        return self._descriptor.resolved_path

    @property
    def checked_version(self) -> SemVer | None:
        return self._version

    def environment(self) -> dict[str, str]:
        """Variables overlaid on the inherited environment of every child."""

        return self.socket.environment()

    def _ensure_ready(self) -> None:
        if self._version is None:
            raise CardanoToolsError(
                f"{self.binary_name} façade has not passed its version check; build it with create()"
            )

    async def _invoke(self, arguments: Sequence[str]) -> str:
        argv = [str(self.binary_path), *[str(arg) for arg in arguments]]
        return await self._runner.run(
            argv,
            working_directory=self.working_directory,
            environment=self.environment(),
        )

    async def version_text(self) -> str:
        """Raw output of the binary's version-reporting subcommand."""

        return await self._invoke(self.version_arguments)

    async def version(self) -> str:
        return str(SemVer.parse(await self.version_text()))

    async def run_command(self, arguments: Sequence[str]) -> str:
        self._ensure_ready()
        return await self._invoke(arguments)


class DaemonFacade(BinaryFacade):
    """Façade over a binary meant to run until stopped."""

    def __init__(self, descriptor: BinaryDescriptor, **kwargs) -> None:
        super().__init__(descriptor, **kwargs)
        self._supervisor: ProcessSupervisor | None = None

    def show_output(self) -> bool | None:
        return None

    @property
    def output_mode(self) -> OutputMode:
        return OutputMode.from_show_output(self.show_output())

    @property
    def supervisor(self) -> ProcessSupervisor:
        if self._supervisor is None:
            self._supervisor = ProcessSupervisor(
                name=self.binary_name,
                working_directory=self.working_directory,
                environment=self.environment(),
                output_mode=self.output_mode,
                stop_grace_seconds=self.settings.stop_grace_seconds,
                buffer_lines=self.settings.output_buffer_lines,
            )
        return self._supervisor

    @property
    def state(self) -> ProcessState:
        return self._supervisor.state if self._supervisor is not None else ProcessState.NOT_STARTED

    @property
    def is_running(self) -> bool:
        return self.state is ProcessState.RUNNING

    async def start(self, arguments: Sequence[str] = ()) -> None:
        """Launch the daemon with `arguments` and return once it is running."""

        self._ensure_ready()
        argv = [str(self.binary_path), *[str(arg) for arg in arguments]]
        await self.supervisor.start(argv)

    async def run(self, arguments: Sequence[str] = ()) -> int:
        """Launch the daemon and wait for it to exit."""

        await self.start(arguments)
        return await self.supervisor.wait()

    async def wait(self) -> int:
        return await self.supervisor.wait()

    async def stop(self) -> None:
        if self._supervisor is not None:
            await self._supervisor.stop()

    def output_lines(self) -> AsyncIterator[str]:
        return self.supervisor.output_lines()

    def recent_output(self) -> list[str]:
        return self._supervisor.recent_output() if self._supervisor is not None else []
