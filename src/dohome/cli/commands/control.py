from __future__ import annotations

from collections.abc import Callable
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console

from dohome.cli.common import (
    build_client_or_exit,
    collect_devices,
    load_settings_or_exit,
    select_devices,
)
from dohome.core import DoHomeClient
from dohome.models import Color, Device

DeviceOption = Annotated[
    list[str] | None,
    typer.Option(
        "--device", "-d", help="Short id to target (repeatable); all devices if omitted"
    ),
]
TimeoutOption = Annotated[
    float | None,
    typer.Option("--timeout", "-t", help="Seconds to listen for devices first"),
]


def _send(
    short_ids: list[str] | None,
    timeout: float | None,
    action: Callable[[DoHomeClient, list[Device]], None],
) -> None:
    console = Console()
    settings = load_settings_or_exit()
    if timeout is None:
        timeout = settings.listener.scan_timeout

    with build_client_or_exit(settings) as client:
        targets = select_devices(collect_devices(client, timeout), short_ids)
        if not targets:
            console.print("[yellow]![/yellow] No matching devices found")
            raise typer.Exit(1)
        action(client, targets)

    names = ", ".join(device.short_id for device in targets)
    console.print(f"[green]✓[/green] Sent to {len(targets)} device(s): {names}")


def turn_on(device: DeviceOption = None, timeout: TimeoutOption = None) -> None:
    """Switch devices on (warm white)."""
    _send(device, timeout, lambda client, targets: client.turn_on(targets))


def turn_off(device: DeviceOption = None, timeout: TimeoutOption = None) -> None:
    """Switch devices off."""
    _send(device, timeout, lambda client, targets: client.turn_off(targets))


def change_color(
    red: int = typer.Argument(..., help="Red level (0-5000)"),
    green: int = typer.Argument(..., help="Green level (0-5000)"),
    blue: int = typer.Argument(..., help="Blue level (0-5000)"),
    white: int = typer.Option(0, "--white", help="White level (0-5000)"),
    warmth: int = typer.Option(0, "--warmth", help="Warm white level (0-5000)"),
    smooth: bool = typer.Option(False, "--smooth", help="Fade to the new color"),
    duration: int | None = typer.Option(
        None, "--duration", help="Fade duration, implies --smooth"
    ),
    device: DeviceOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Set a color on devices."""
    try:
        color = Color(red=red, green=green, blue=blue, white=white, warmth=warmth)
    except ValidationError as exc:
        typer.echo(f"Invalid color: {exc}", err=True)
        raise typer.Exit(1) from exc

    _send(
        device,
        timeout,
        lambda client, targets: client.change_color(color, targets, smooth, duration),
    )


def register(app: typer.Typer) -> None:
    app.command("on")(turn_on)
    app.command("off")(turn_off)
    app.command("color")(change_color)
