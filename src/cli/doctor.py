"""Doctor command: resolve and version-check every configured binary."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

import typer
from rich.console import Console

from adapters.binaries import FACADES, BinaryFacade
from cli.ui_components import build_binaries_table
from core.config import AppSettings, Config, get_user_env_file, load_config
from core.domain.errors import CardanoToolsError
from core.domain.models import BinaryCheck
from core.environment import SocketPathChannel

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics for the Cardano binaries.")

_console = Console()


async def check_facade(
    facade_cls: type[BinaryFacade],
    config: Config,
    settings: AppSettings,
    socket: SocketPathChannel,
) -> BinaryCheck:
    try:
        facade = await facade_cls.create(config, settings=settings, socket=socket)
    except (CardanoToolsError, OSError) as exc:
        logger.debug("%s check failed: %s", facade_cls.binary_name, exc)
        return BinaryCheck(
            name=facade_cls.binary_name,
            ok=False,
            minimum=facade_cls.minimum_version,
            detail=str(exc),
        )
    return BinaryCheck(
        name=facade_cls.binary_name,
        ok=True,
        path=facade.binary_path,
        version=str(facade.checked_version),
        minimum=facade_cls.minimum_version,
    )


async def check_all(
    config: Config,
    settings: AppSettings,
    facades: Sequence[type[BinaryFacade]] = FACADES,
) -> list[BinaryCheck]:
    socket = SocketPathChannel()
    return list(await asyncio.gather(*(check_facade(cls, config, settings, socket) for cls in facades)))


@app.command()
def run() -> None:
    """Check every binary and show what is missing or too old."""

    settings = AppSettings()
    try:
        config = load_config(settings)
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"Could not load configuration: {exc}") from exc

    checks = asyncio.run(check_all(config, settings))
    _console.print(build_binaries_table(checks))

    if not all(check.ok for check in checks):
        _console.print(
            "\n[yellow]Note:[/yellow] set explicit binary paths in the JSON file pointed to by "
            f"CARDANO_TOOLS_CONFIG_PATH (e.g. in {get_user_env_file()}) or add the binaries to PATH."
        )
        raise typer.Exit(code=1)
