"""Façade: ogmios (WebSocket bridge to the node, long-running)."""

from __future__ import annotations

from pathlib import Path

from adapters.binaries.base import DaemonFacade
from core.config import Config
from core.domain.errors import ConfigurationMissing


class Ogmios(DaemonFacade):
    binary_name = "ogmios"
    minimum_version = "6.13.0"

    @classmethod
    def validate_config(cls, config: Config) -> None:
        super().validate_config(config)
        if config.ogmios is None:
            raise ConfigurationMissing("Ogmios configuration missing")

    @classmethod
    def configured_path(cls, config: Config) -> Path | None:
        return config.ogmios.binary if config.ogmios else None

    @classmethod
    def configured_working_dir(cls, config: Config) -> Path | None:
        return config.ogmios.working_dir if config.ogmios else None

    def show_output(self) -> bool | None:
        return self.config.ogmios.show_output if self.config.ogmios else None
