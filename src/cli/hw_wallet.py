"""Hardware-wallet commands: detect the device and check its app/firmware."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from adapters.binaries import CardanoHwCli
from cli.ui_components import build_device_panel
from core.config import AppSettings, load_config
from core.domain.errors import CardanoToolsError
from core.domain.models import DeviceSession, HardwareWalletType

app = typer.Typer(no_args_is_help=True, help="Ledger/Trezor checks through cardano-hw-cli.")

_console = Console()


async def run_handshake(settings: AppSettings, only_for: HardwareWalletType | None) -> DeviceSession:
    hw_cli = await CardanoHwCli.create(load_config(settings), settings=settings)
    return await hw_cli.start_hardware_wallet(only_for)


@app.command()
def check(
    vendor: HardwareWalletType | None = typer.Option(
        None,
        "--vendor",
        case_sensitive=False,
        help="Require a specific vendor (LEDGER or TREZOR).",
    ),
) -> None:
    """Detect the connected hardware wallet and check its app/firmware."""

    settings = AppSettings()
    try:
        session = asyncio.run(run_handshake(settings, vendor))
    except CardanoToolsError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    except KeyboardInterrupt:
        _console.print("[yellow]Hardware wallet check cancelled.[/yellow]")
        raise typer.Exit(code=130)
    _console.print(build_device_panel(session))
