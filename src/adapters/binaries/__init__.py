"""Façades over the external Cardano binaries.

Each module wraps one binary and composes the shared resolver, version gate,
executor and supervisor.
"""

from adapters.binaries.base import BinaryFacade, DaemonFacade
from adapters.binaries.cardano_cli import CardanoCli
from adapters.binaries.cardano_hw_cli import CardanoHwCli
from adapters.binaries.cardano_node import CardanoNode
from adapters.binaries.cardano_signer import CardanoSigner
from adapters.binaries.kupo import Kupo
from adapters.binaries.mithril_client import MithrilClient
from adapters.binaries.ogmios import Ogmios

FACADES: tuple[type[BinaryFacade], ...] = (
    CardanoCli,
    CardanoNode,
    CardanoHwCli,
    CardanoSigner,
    Ogmios,
    Kupo,
    MithrilClient,
)

__all__ = [
    "BinaryFacade",
    "CardanoCli",
    "CardanoHwCli",
    "CardanoNode",
    "CardanoSigner",
    "DaemonFacade",
    "FACADES",
    "Kupo",
    "MithrilClient",
    "Ogmios",
]
