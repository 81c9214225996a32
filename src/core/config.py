"""Core configuration.

Two layers:
- `AppSettings` (pydantic-settings): ambient knobs read from the environment
  and `.env` files (log level, handshake budget, grace periods).
- `Config` and its sections: the structured per-binary configuration each
  façade is constructed from. It is supplied by the caller or loaded from a
  JSON document.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.environment import EnvVar


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "cardano-tools"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "cardano-tools"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "cardano-tools"
    return Path.home() / ".config" / "cardano-tools"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Ambient settings shared by the CLI, services and adapters."""

    model_config = SettingsConfigDict(
        env_prefix="CARDANO_TOOLS_",
        extra="ignore",
        case_sensitive=False,
        # Project `.env` first, then the per-user one.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level for the CLI (DEBUG, INFO, WARNING...).",
    )
    config_path: Path | None = Field(
        default=None,
        description="JSON document with the structured binary configuration.",
    )
    handshake_max_attempts: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Polls of the hardware wallet before giving up.",
    )
    handshake_retry_delay_seconds: float = Field(
        default=10.0,
        ge=0,
        description="Delay between hardware-wallet polls (seconds).",
    )
    stop_grace_seconds: float = Field(
        default=10.0,
        ge=0,
        description="Time a daemon gets to exit after SIGINT before escalation.",
    )
    output_buffer_lines: int = Field(
        default=200,
        ge=1,
        description="Lines of daemon output retained in suppressed mode.",
    )


class _Section(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class CardanoConfig(_Section):
    """Node, CLI, hardware-wallet and signer settings."""

    cli: Path | None = Field(default=None, description="cardano-cli binary path.")
    node: Path | None = Field(default=None, description="cardano-node binary path.")
    hw_cli: Path | None = Field(default=None, description="cardano-hw-cli binary path.")
    signer: Path | None = Field(default=None, description="cardano-signer binary path.")

    socket: Path | None = Field(default=None, description="Node socket path.")
    config: Path | None = Field(default=None, description="Node configuration file.")
    topology: Path | None = Field(default=None)
    database: Path | None = Field(default=None)

    network: str = Field(default="mainnet", min_length=1)
    working_dir: Path | None = Field(default=None)
    show_output: bool | None = Field(default=None)


class OgmiosConfig(_Section):
    binary: Path | None = Field(default=None)
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=1337, ge=1, le=65535)
    working_dir: Path | None = Field(default=None)
    show_output: bool | None = Field(default=None)


class KupoConfig(_Section):
    binary: Path | None = Field(default=None)
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=1442, ge=1, le=65535)
    since: str | None = Field(default=None)
    working_dir: Path | None = Field(default=None)
    show_output: bool | None = Field(default=None)


class MithrilConfig(_Section):
    binary: Path | None = Field(default=None)
    aggregator_endpoint: str | None = Field(default=None)
    genesis_verification_key: str | None = Field(default=None)
    ancillary_verification_key: str | None = Field(default=None)
    download_dir: Path | None = Field(default=None)
    working_dir: Path | None = Field(default=None)


class Config(_Section):
    """Root of the structured configuration handed to façades."""

    cardano: CardanoConfig | None = Field(default=None)
    ogmios: OgmiosConfig | None = Field(default=None)
    kupo: KupoConfig | None = Field(default=None)
    mithril: MithrilConfig | None = Field(default=None)

    @classmethod
    def load(cls, path: Path) -> "Config":
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))

    @classmethod
    def default(cls) -> "Config":
        """Config with no explicit binaries: every façade searches PATH.

        The socket path and network are taken from the variables the node
        tooling itself reads.
        """

        socket = EnvVar.CARDANO_SOCKET_PATH.get()
        return cls(
            cardano=CardanoConfig(
                socket=Path(socket) if socket else None,
                network=EnvVar.NETWORK.get() or "mainnet",
                working_dir=Path.cwd(),
            ),
            ogmios=OgmiosConfig(),
            kupo=KupoConfig(),
            mithril=MithrilConfig(
                aggregator_endpoint=EnvVar.AGGREGATOR_ENDPOINT.get(),
                genesis_verification_key=EnvVar.GENESIS_VERIFICATION_KEY.get(),
                ancillary_verification_key=EnvVar.ANCILLARY_VERIFICATION_KEY.get(),
            ),
        )


def load_config(settings: AppSettings | None = None) -> Config:
    settings = settings or AppSettings()
    if settings.config_path is not None:
        return Config.load(settings.config_path)
    return Config.default()
