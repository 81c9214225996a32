"""Façade: kupo (chain indexer, long-running)."""

from __future__ import annotations

from pathlib import Path

from adapters.binaries.base import DaemonFacade
from core.config import Config
from core.domain.errors import ConfigurationMissing


class Kupo(DaemonFacade):
    binary_name = "kupo"
    minimum_version = "2.3.4"

    @classmethod
    def validate_config(cls, config: Config) -> None:
        if config.kupo is None:
            raise ConfigurationMissing("Kupo configuration missing")

    @classmethod
    def configured_path(cls, config: Config) -> Path | None:
        return config.kupo.binary if config.kupo else None

    @classmethod
    def configured_working_dir(cls, config: Config) -> Path | None:
        return config.kupo.working_dir if config.kupo else None

    def show_output(self) -> bool | None:
        return self.config.kupo.show_output if self.config.kupo else None
