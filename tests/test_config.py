from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from core.config import AppSettings, Config, load_config
from core.domain.models import DeviceSession, HardwareWalletType
from core.environment import EnvVar, SocketPathChannel


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARDANO_TOOLS_HANDSHAKE_MAX_ATTEMPTS", "3")
    monkeypatch.setenv("CARDANO_TOOLS_STOP_GRACE_SECONDS", "1.5")
    settings = AppSettings(_env_file=None)
    assert settings.handshake_max_attempts == 3
    assert settings.stop_grace_seconds == 1.5
    assert settings.handshake_retry_delay_seconds == 10.0


def test_settings_validation() -> None:
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, handshake_max_attempts=0)


def test_config_load_json(tmp_path: Path) -> None:
    document = {
        "cardano": {"node": "/opt/cardano/bin/cardano-node", "socket": "/ipc/node.socket", "network": "preview"},
        "kupo": {"port": 1443, "show_output": False},
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    config = Config.load(path)

    assert config.cardano is not None
    assert config.cardano.node == Path("/opt/cardano/bin/cardano-node")
    assert config.cardano.network == "preview"
    assert config.kupo is not None and config.kupo.port == 1443
    assert config.ogmios is None


def test_load_config_prefers_file(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"cardano": {"network": "preprod"}}), encoding="utf-8")
    config = load_config(AppSettings(_env_file=None, config_path=path))
    assert config.cardano is not None and config.cardano.network == "preprod"


def test_default_config_reads_node_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(EnvVar.CARDANO_SOCKET_PATH.value, "/ipc/node.socket")
    monkeypatch.setenv(EnvVar.NETWORK.value, "preview")
    config = Config.default()
    assert config.cardano is not None
    assert config.cardano.socket == Path("/ipc/node.socket")
    assert config.cardano.network == "preview"
    assert config.cardano.cli is None


def test_socket_channel_publish_and_overlay(caplog: pytest.LogCaptureFixture) -> None:
    channel = SocketPathChannel()
    assert channel.environment() == {}

    channel.publish(Path("/ipc/a.socket"), writer="cardano-node")
    assert os.environ[EnvVar.CARDANO_SOCKET_PATH.value] == "/ipc/a.socket"
    assert channel.environment() == {
        "CARDANO_SOCKET_PATH": "/ipc/a.socket",
        "CARDANO_NODE_SOCKET_PATH": "/ipc/a.socket",
    }

    with caplog.at_level(logging.WARNING, logger="core.environment"):
        channel.publish(Path("/ipc/b.socket"), writer="cardano-cli")
    assert channel.writer == "cardano-cli"
    assert any("overrides" in record.getMessage() for record in caplog.records)


def test_env_var_unset() -> None:
    EnvVar.NETWORK.set("mainnet")
    assert EnvVar.NETWORK.get() == "mainnet"
    EnvVar.NETWORK.set(None)
    assert EnvVar.NETWORK.get() is None


def test_device_session_attempt_budget() -> None:
    with pytest.raises(ValidationError):
        DeviceSession(attempts_used=11, max_attempts=10)
    session = DeviceSession(vendor=HardwareWalletType.TREZOR, attempts_used=10, max_attempts=10)
    assert session.vendor.display_name == "Trezor"
