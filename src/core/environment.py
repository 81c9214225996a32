"""Environment variables read by the external Cardano binaries.

The names are fixed by the binaries themselves. Internally the socket path is
passed around as an explicit `SocketPathChannel` value; writing it into
`os.environ` only exists so child processes (cardano-cli, kupo, ...) find it.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class EnvVar(str, Enum):
    NETWORK = "NETWORK"
    CARDANO_CONFIG = "CARDANO_CONFIG"
    CARDANO_DATABASE_PATH = "CARDANO_DATABASE_PATH"
    CARDANO_SOCKET_PATH = "CARDANO_SOCKET_PATH"
    CARDANO_NODE_SOCKET_PATH = "CARDANO_NODE_SOCKET_PATH"
    CARDANO_TOPOLOGY = "CARDANO_TOPOLOGY"
    AGGREGATOR_ENDPOINT = "AGGREGATOR_ENDPOINT"
    GENESIS_VERIFICATION_KEY = "GENESIS_VERIFICATION_KEY"
    ANCILLARY_VERIFICATION_KEY = "ANCILLARY_VERIFICATION_KEY"

    def get(self) -> str | None:
        value = os.environ.get(self.value)
        return value if value else None

    def set(self, value: str | None) -> None:
        if value is None:
            os.environ.pop(self.value, None)
        else:
            os.environ[self.value] = value


class SocketPathChannel:
    """Shared node socket path handed to every dependent façade.

    One façade (the node, or the CLI when no node is managed in-process)
    publishes; dependent façades read `path` at their own construction.
    """

    # cardano-cli reads the second name.
    _VARIABLES = (EnvVar.CARDANO_SOCKET_PATH, EnvVar.CARDANO_NODE_SOCKET_PATH)

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._writer: str | None = None

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def writer(self) -> str | None:
        return self._writer

    def publish(self, path: Path, *, writer: str) -> None:
        if self._writer is not None and self._writer != writer and self._path != path:
            logger.warning(
                "Socket path %s published by %s overrides %s set by %s",
                path,
                writer,
                self._path,
                self._writer,
            )
        self._path = path
        self._writer = writer
        for variable in self._VARIABLES:
            variable.set(str(path))

    def environment(self) -> dict[str, str]:
        """Overlay for child processes that need the socket path."""

        if self._path is None:
            return {}
        return {variable.value: str(self._path) for variable in self._VARIABLES}
