"""Façade: mithril-client (certified snapshot downloader)."""

from __future__ import annotations

from pathlib import Path

from adapters.binaries.base import BinaryFacade
from core.config import Config
from core.domain.errors import ConfigurationMissing
from core.environment import EnvVar


class MithrilClient(BinaryFacade):
    binary_name = "mithril-client"
    minimum_version = "0.12.38"

    @classmethod
    def validate_config(cls, config: Config) -> None:
        super().validate_config(config)
        if config.mithril is None:
            raise ConfigurationMissing("Mithril configuration missing")

    @classmethod
    def configured_path(cls, config: Config) -> Path | None:
        return config.mithril.binary if config.mithril else None

    @classmethod
    def configured_working_dir(cls, config: Config) -> Path | None:
        if config.mithril and config.mithril.working_dir:
            return config.mithril.working_dir
        return super().configured_working_dir(config)

    def environment(self) -> dict[str, str]:
        env = super().environment()
        mithril = self.config.mithril
        if mithril is None:
            return env
        values = {
            EnvVar.AGGREGATOR_ENDPOINT: mithril.aggregator_endpoint,
            EnvVar.GENESIS_VERIFICATION_KEY: mithril.genesis_verification_key,
            EnvVar.ANCILLARY_VERIFICATION_KEY: mithril.ancillary_verification_key,
        }
        env.update({var.value: value for var, value in values.items() if value})
        return env

    async def help(self) -> str:
        return await self.run_command(["help"])
