"""Façade: cardano-hw-cli (Ledger/Trezor bridge).

Signing operations must be preceded by `start_hardware_wallet`, which runs
the bounded-retry device handshake.
"""

from __future__ import annotations

from pathlib import Path

from adapters.binaries.base import BinaryFacade
from core.config import Config
from core.domain.models import DeviceSession, HardwareWalletType
from core.interfaces.binary import Sleeper
from core.services.device_handshake import BackoffStrategy, DeviceHandshake, fixed_backoff


class CardanoHwCli(BinaryFacade):
    binary_name = "cardano-hw-cli"
    minimum_version = "1.10.0"
    version_arguments = ("version",)

    _handshake: DeviceHandshake | None = None
    _handshake_options: tuple[BackoffStrategy | None, Sleeper | None] = (None, None)

    @classmethod
    def configured_path(cls, config: Config) -> Path | None:
        return config.cardano.hw_cli if config.cardano else None

    async def device_version(self) -> str:
        """Status of the connected device (`device version`)."""

        return await self.run_command(["device", "version"])

    def handshake(
        self,
        *,
        backoff: BackoffStrategy | None = None,
        sleeper: Sleeper | None = None,
    ) -> DeviceHandshake:
        """The façade's single handshake instance (created on first use).

        `backoff` and `sleeper` only apply to that first call; passing
        different ones afterwards raises `ValueError`.
        """

        if self._handshake is None:
            self._handshake_options = (backoff, sleeper)
            self._handshake = DeviceHandshake(
                self.device_version,
                max_attempts=self.settings.handshake_max_attempts,
                backoff=backoff or fixed_backoff(self.settings.handshake_retry_delay_seconds),
                sleeper=sleeper,
            )
        elif backoff is not None or sleeper is not None:
            configured_backoff, configured_sleeper = self._handshake_options
            if (backoff is not None and backoff is not configured_backoff) or (
                sleeper is not None and sleeper is not configured_sleeper
            ):
                raise ValueError(f"{self.binary_name} handshake is already configured")
        return self._handshake

    async def start_hardware_wallet(self, only_for: HardwareWalletType | None = None) -> DeviceSession:
        return await self.handshake().run(only_for)
