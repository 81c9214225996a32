"""Façade: cardano-signer.

The binary has no version flag; its `help` banner carries the version
(``cardano-signer 1.17.0-beta ...``).
"""

from __future__ import annotations

from pathlib import Path

from adapters.binaries.base import BinaryFacade
from core.config import Config


class CardanoSigner(BinaryFacade):
    binary_name = "cardano-signer"
    minimum_version = "1.17.0"
    version_arguments = ("help",)

    @classmethod
    def configured_path(cls, config: Config) -> Path | None:
        return config.cardano.signer if config.cardano else None
