from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli import doctor
from cli.main import app
from conftest import write_script
from core.config import AppSettings, CardanoConfig, Config
from core.domain.models import BinaryCheck

runner = CliRunner()


@pytest.mark.asyncio
async def test_check_all_reports_each_binary(bin_dir: Path, settings: AppSettings, tmp_path: Path) -> None:
    cli_bin = write_script(bin_dir, "cardano-cli", 'echo "cardano-cli 8.1.2 - linux-x86_64 - ghc-9.2"')
    config = Config(cardano=CardanoConfig(cli=cli_bin, working_dir=tmp_path))

    checks = await doctor.check_all(config, settings)

    by_name = {check.name: check for check in checks}
    assert by_name["cardano-cli"].ok
    assert by_name["cardano-cli"].version == "8.1.2"
    assert not by_name["ogmios"].ok
    assert "Ogmios configuration missing" in by_name["ogmios"].detail


def test_doctor_exit_code_reflects_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_check_all(config, settings):
        return [
            BinaryCheck(name="cardano-cli", ok=True, version="8.1.2", minimum="8.0.0"),
            BinaryCheck(name="kupo", ok=False, minimum="2.3.4", detail="kupo not found in PATH"),
        ]

    monkeypatch.setattr(doctor, "check_all", fake_check_all)
    result = runner.invoke(app, ["--quiet", "doctor", "run"])
    assert result.exit_code == 1
    assert "cardano-cli" in result.stdout
    assert "kupo" in result.stdout


def test_hw_wallet_reports_failure(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CARDANO_TOOLS_CONFIG_PATH", str(tmp_path / "config.json"))
    (tmp_path / "config.json").write_text('{"cardano": {"hw_cli": "%s"}}' % (tmp_path / "missing"), encoding="utf-8")
    result = runner.invoke(app, ["--quiet", "hw-wallet", "check"])
    assert result.exit_code == 1
    assert "not found" in result.stdout


def test_hw_wallet_without_subcommand_shows_help() -> None:
    result = runner.invoke(app, ["--quiet", "hw-wallet"])
    assert "check" in result.output
