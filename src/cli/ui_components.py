"""Rich components for the CLI.

Kept apart from the commands so tables/panels can be reused by `doctor` and
`hw-wallet`.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import BinaryCheck, DeviceSession


def print_banner(console: Console) -> None:
    title = Text("cardano-tools", style="bold cyan")
    subtitle = Text("Node • Indexers • Signers • Hardware wallets", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_binaries_table(checks: Iterable[BinaryCheck]) -> Table:
    table = Table(title="Cardano binaries")
    table.add_column("Binary", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Version", style="green")
    table.add_column("Minimum", style="dim")
    table.add_column("Path / details", style="magenta")

    for check in checks:
        status = "[green]OK[/green]" if check.ok else "[red]FAIL[/red]"
        location = str(check.path) if check.path else ""
        details = " ".join(part for part in (location, check.detail) if part)
        table.add_row(check.name, status, check.version or "-", check.minimum or "-", details)
    return table


def build_device_panel(session: DeviceSession) -> Panel:
    body = Text()
    vendor = session.vendor.display_name if session.vendor else "unknown"
    body.append(f"Vendor: {vendor}\n", style="bold")
    body.append(f"Reported version: {session.reported_version or '-'}\n")
    body.append(f"Attempts used: {session.attempts_used}/{session.max_attempts}", style="dim")
    return Panel(body, title=Text("Hardware wallet", style="bold yellow"), border_style="yellow")
