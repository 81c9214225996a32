"""Typer entrypoint: `cardano-tools`."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli import doctor, hw_wallet
from cli.ui_components import print_banner
from core.config import AppSettings

app = typer.Typer(no_args_is_help=True, help="Typed wrappers around the Cardano ecosystem binaries.")
app.add_typer(doctor.app, name="doctor")
app.add_typer(hw_wallet.app, name="hw-wallet")

_console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Hide the banner."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    if not quiet:
        print_banner(_console)


def run() -> None:
    app()
