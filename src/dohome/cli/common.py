from __future__ import annotations

import time
from collections.abc import Iterable
from pathlib import Path

import typer

from dohome.config import Settings, get_settings, resolve_config_path
from dohome.core import DoHomeClient
from dohome.models import Device

SCAN_DISCOVER_INTERVAL_MS = 1000


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def resolve_config_path_or_exit(allow_missing: bool = False) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def build_client_or_exit(settings: Settings) -> DoHomeClient:
    try:
        return DoHomeClient(settings)
    except (OSError, RuntimeError) as exc:
        typer.echo(f"Could not open broadcast sockets: {exc}", err=True)
        raise typer.Exit(1) from exc


def collect_devices(client: DoHomeClient, timeout: float) -> list[Device]:
    """Listen for ``timeout`` seconds, probing every second, then stop."""
    client.start_listener(discover_interval_ms=SCAN_DISCOVER_INTERVAL_MS)
    try:
        time.sleep(timeout)
    finally:
        client.stop_listener()
    return client.devices


def select_devices(
    devices: Iterable[Device], short_ids: list[str] | None
) -> list[Device]:
    """Devices matching ``short_ids`` (case-insensitive); all when none given."""
    if not short_ids:
        return list(devices)
    wanted = {short_id.lower() for short_id in short_ids}
    return [device for device in devices if device.short_id.lower() in wanted]
