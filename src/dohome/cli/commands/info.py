from __future__ import annotations

import typer
from rich.console import Console

from dohome.cli.common import load_settings_or_exit
from dohome.core import DeviceSession
from dohome.errors import DoHomeError


def register(app: typer.Typer) -> None:
    @app.command()
    def info(host: str = typer.Argument(..., help="Device station IP")) -> None:
        """Query a device directly over its TCP control channel."""
        settings = load_settings_or_exit()
        console = Console()

        with DeviceSession(
            host,
            port=settings.network.control_port,
            timeout=settings.network.command_timeout,
        ) as session:
            try:
                details = session.get_device_info()
                version = session.get_version()
                color = session.get_led_status()
            except DoHomeError as exc:
                typer.echo(str(exc), err=True)
                raise typer.Exit(1) from exc

        console.print(f"[bold]Device {host}[/bold]\n")
        console.print(f"Device ID: {details.get('dev_id', '')}")
        console.print(f"Chip: {details.get('chip', '')}")
        console.print(f"Firmware: {version}")
        console.print(f"Connected to router: {'yes' if details.get('conn') else 'no'}")
        console.print(
            "Color: "
            + " ".join(f"{name}={level}" for name, level in color.channels().items())
        )
