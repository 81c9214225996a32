"""Façade: cardano-cli (one-shot queries and transaction tooling)."""

from __future__ import annotations

import logging
from pathlib import Path

from adapters.binaries.base import BinaryFacade
from core.config import Config

logger = logging.getLogger(__name__)


class CardanoCli(BinaryFacade):
    binary_name = "cardano-cli"
    minimum_version = "8.0.0"

    @classmethod
    def configured_path(cls, config: Config) -> Path | None:
        return config.cardano.cli if config.cardano else None

    def prepare(self) -> None:
        socket = self.config.cardano.socket if self.config.cardano else None
        if socket is not None:
            self.socket.publish(socket, writer=self.binary_name)

    async def help(self) -> str:
        return await self.run_command(["help"])
