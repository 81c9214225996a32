"""Façade: cardano-node (long-running daemon).

The node owns the socket path: constructing it publishes the configured
socket for every dependent façade and for child processes.
"""

from __future__ import annotations

from pathlib import Path

from adapters.binaries.base import DaemonFacade
from core.config import Config
from core.domain.errors import ConfigurationMissing


class CardanoNode(DaemonFacade):
    binary_name = "cardano-node"
    minimum_version = "8.0.0"

    @classmethod
    def validate_config(cls, config: Config) -> None:
        super().validate_config(config)
        assert config.cardano is not None
        if config.cardano.socket is None:
            raise ConfigurationMissing("Cardano node socket path is required for cardano-node run")

    @classmethod
    def configured_path(cls, config: Config) -> Path | None:
        return config.cardano.node if config.cardano else None

    def prepare(self) -> None:
        assert self.config.cardano is not None and self.config.cardano.socket is not None
        self.socket.publish(self.config.cardano.socket, writer=self.binary_name)

    def show_output(self) -> bool | None:
        return self.config.cardano.show_output if self.config.cardano else None
