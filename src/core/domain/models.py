"""Domain models for binaries, commands, processes and devices.

Pydantic models describe values that cross a boundary (descriptors, device
sessions); lightweight dataclasses hold the transient per-call values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Sequence

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from core.domain.semver import SemVer


class BinaryDescriptor(BaseModel):
    """A resolved, verified external binary.

    Built once per façade by the resolver; `resolved_path` is only ever set
    after the path was confirmed to exist and be executable.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, description="Binary name, e.g. 'cardano-node'.")
    minimum_version: SemVer = Field(..., description="Lowest supported version.")
    resolved_path: Path = Field(..., description="Absolute path to the executable.")


@dataclass(frozen=True)
class CommandInvocation:
    """One subprocess call: argv[0] is the resolved binary path."""

    argv: Sequence[str]
    working_directory: Path | None = None
    environment: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        if not self.argv:
            raise ValueError("argv must contain at least the binary path")
        object.__setattr__(self, "argv", tuple(str(arg) for arg in self.argv))


@dataclass(frozen=True)
class CommandResult:
    exit_code: int
    stdout: str
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class ProcessState(str, Enum):
    """Lifecycle of a supervised process; transitions only move forward."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    TERMINATED = "terminated"


class OutputMode(str, Enum):
    """How a supervised process's stdout/stderr are handled."""

    SUPPRESSED = "suppressed"
    STREAMED = "streamed"

    @classmethod
    def from_show_output(cls, show_output: bool | None) -> "OutputMode":
        return cls.SUPPRESSED if show_output is False else cls.STREAMED


class HardwareWalletType(str, Enum):
    """Supported hardware-wallet vendors."""

    LEDGER = "LEDGER"
    TREZOR = "TREZOR"

    @property
    def display_name(self) -> str:
        return "Ledger" if self is HardwareWalletType.LEDGER else "Trezor"


class DeviceSession(BaseModel):
    """State of one hardware-wallet handshake sequence."""

    vendor: HardwareWalletType | None = Field(default=None)
    reported_version: str = Field(default="")
    attempts_used: int = Field(default=0, ge=0)
    max_attempts: int = Field(default=10, ge=1)
    unlocked: bool = Field(default=False)
    status_text: str = Field(default="", description="Raw device status output.")

    @model_validator(mode="after")
    def _attempts_within_budget(self) -> "DeviceSession":
        if self.attempts_used > self.max_attempts:
            raise ValueError("attempts_used cannot exceed max_attempts")
        return self


@dataclass
class BinaryCheck:
    """Outcome of a resolve + version check, as reported by `doctor`."""

    name: str
    ok: bool
    path: Path | None = None
    version: str | None = None
    minimum: str | None = None
    detail: str = ""
