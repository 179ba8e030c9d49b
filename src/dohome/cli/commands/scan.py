from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.table import Table

from dohome.cli.common import (
    build_client_or_exit,
    collect_devices,
    load_settings_or_exit,
)
from dohome.utils.redaction import Redactor

logger = logging.getLogger(__name__)


def scan(
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Seconds to listen for devices. Uses config default if omitted.",
    ),
    redact: bool = typer.Option(
        False,
        "--redact",
        help="Redact addresses and device keys in output",
    ),
) -> None:
    """Discover DoHome devices via UDP broadcast."""
    console = Console()

    settings = load_settings_or_exit()
    if timeout is None:
        timeout = settings.listener.scan_timeout

    console.print("Discovering DoHome devices...")
    logger.info("Broadcast discovery: timeout=%.2fs", timeout)
    with build_client_or_exit(settings) as client:
        devices = collect_devices(client, timeout)

    if not devices:
        console.print("No DoHome devices found.")
        return

    redactor = Redactor(enabled=redact)
    table = Table()
    table.add_column("Short ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Station IP")
    table.add_column("AP IP")
    table.add_column("Chip")
    table.add_column("Device ID")
    table.add_column("Key")

    for device in devices:
        table.add_row(
            device.short_id,
            device.device_name,
            redactor.redact_ip(device.sta_ip),
            redactor.redact_ip(device.host_ip),
            device.chip,
            redactor.redact_device_id(device.device_id),
            redactor.redact_key(device.device_key),
        )

    console.print(table)
    console.print(f"\n[green]Found {len(devices)} device(s)[/green]")


def register(app: typer.Typer) -> None:
    app.command()(scan)
