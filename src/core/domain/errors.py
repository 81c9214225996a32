"""Error taxonomy shared by every binary façade.

Every failure is surfaced as a typed exception carrying its context as
attributes, so callers can branch on the kind instead of parsing messages.
"""

from __future__ import annotations

from typing import Sequence


class CardanoToolsError(Exception):
    """Base class for every error raised by this package."""


class BinaryError(CardanoToolsError):
    """A binary could not be used as configured."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class BinaryNotFound(BinaryError):
    """Configured or searched-for executable does not exist."""


class NotExecutable(BinaryError):
    """Path exists but is not a regular file or lacks execute permission."""


class UnsupportedVersion(CardanoToolsError):
    def __init__(self, current: str, minimum: str) -> None:
        super().__init__(f"Unsupported version: {current}. Minimum required: {minimum}")
        self.current = current
        self.minimum = minimum


class InvalidOutput(CardanoToolsError):
    """Expected text (version, status marker) was not found in a command's output."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class CommandFailed(CardanoToolsError):
    """A command exited non-zero or could not be spawned."""

    def __init__(self, argv: Sequence[str], diagnostic: str, exit_code: int | None = None) -> None:
        self.argv = list(argv)
        self.diagnostic = diagnostic
        self.exit_code = exit_code
        super().__init__(f"Command failed: {' '.join(self.argv)}. Error: {diagnostic}")


class ProcessStateError(CardanoToolsError):
    """An operation is not valid in the process's current lifecycle state."""


class ProcessAlreadyRunning(ProcessStateError):
    def __init__(self, message: str = "Process is already running") -> None:
        super().__init__(message)


class DeviceUnreachable(CardanoToolsError):
    def __init__(self, attempts: int) -> None:
        super().__init__(f"Hardware wallet could not be accessed after {attempts} attempts")
        self.attempts = attempts


class UnsupportedDeviceVendor(CardanoToolsError):
    def __init__(self, status: str = "") -> None:
        super().__init__("Only Ledger and Trezor Hardware Wallets are supported")
        self.status = status


class DeviceVendorMismatch(CardanoToolsError):
    def __init__(self, detected: str, required: str) -> None:
        super().__init__(
            f"This function is NOT available on {detected}, only available on {required}"
        )
        self.detected = detected
        self.required = required


class ConfigurationMissing(CardanoToolsError):
    """A required configuration field (binary path, socket path, section) is absent."""
