from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from dohome.errors import ConfigurationError

CONFIG_ENV_VAR = "DOHOME_CONFIG"
CONFIG_DIRNAME = "dohome"
CONFIG_FILENAME = "config.toml"

MIN_INTERVAL_MS = 500


def default_config_path() -> Path:
    """``$XDG_CONFIG_HOME/dohome/config.toml``, falling back to ``~/.config``."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / CONFIG_DIRNAME / CONFIG_FILENAME


def validate_interval(name: str, value: int) -> int:
    """Periodic intervals are either 0 (disabled) or at least 500 ms."""
    if value != 0 and value < MIN_INTERVAL_MS:
        raise ConfigurationError(
            f"{name} must be 0 or at least {MIN_INTERVAL_MS} ms, got {value}"
        )
    return value


class NetworkConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    command_port: int = Field(default=6091, ge=1, le=65535)
    discovery_port: int = Field(default=6095, ge=1, le=65535)
    control_port: int = Field(default=5555, ge=1, le=65535)
    broadcast_address: str = "255.255.255.255"
    local_addresses: list[str] = Field(default_factory=list)
    command_timeout: float = Field(default=5.0, gt=0)


class ListenerConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    refresh_interval_ms: int = 0
    discover_interval_ms: int = 0
    settle_delay: float = Field(default=0.25, ge=0)
    scan_timeout: float = Field(default=3.0, gt=0)
    company_id: str = "_DOIT"
    device_type: str = "_DT-WYRGB"

    @field_validator("refresh_interval_ms", "discover_interval_ms")
    @classmethod
    def _check_interval(cls, value: int, info: ValidationInfo) -> int:
        return validate_interval(info.field_name or "interval", value)


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    network: NetworkConfig = Field(default_factory=NetworkConfig)
    listener: ListenerConfig = Field(default_factory=ListenerConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(os.path.expandvars(env_path)).expanduser()
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def _toml_string(value: str) -> str:
    return json.dumps(value)


def render_settings_toml(settings: Settings) -> str:
    network = settings.network
    listener = settings.listener
    addresses = ", ".join(_toml_string(address) for address in network.local_addresses)
    lines = [
        "# dohome configuration",
        "",
        "[network]",
        f"command_port = {network.command_port}",
        f"discovery_port = {network.discovery_port}",
        f"control_port = {network.control_port}",
        f"broadcast_address = {_toml_string(network.broadcast_address)}",
        "# empty: every IPv4 address of this host",
        f"local_addresses = [{addresses}]",
        f"command_timeout = {network.command_timeout}",
        "",
        "[listener]",
        f"refresh_interval_ms = {listener.refresh_interval_ms}",
        f"discover_interval_ms = {listener.discover_interval_ms}",
        f"settle_delay = {listener.settle_delay}",
        f"scan_timeout = {listener.scan_timeout}",
        f"company_id = {_toml_string(listener.company_id)}",
        f"device_type = {_toml_string(listener.device_type)}",
        "",
    ]
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
