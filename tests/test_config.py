from __future__ import annotations

import pytest
from pydantic import ValidationError

from dohome.config import (
    ListenerConfig,
    NetworkConfig,
    Settings,
    get_settings,
    load_settings,
    resolve_config_path,
    validate_interval,
    write_settings,
)
from dohome.errors import ConfigurationError


def test_defaults():
    settings = Settings()
    assert settings.network.command_port == 6091
    assert settings.network.discovery_port == 6095
    assert settings.network.control_port == 5555
    assert settings.network.local_addresses == []
    assert settings.listener.refresh_interval_ms == 0


def test_round_trip(tmp_path):
    path = tmp_path / "dohome" / "config.toml"
    settings = Settings(
        network=NetworkConfig(local_addresses=["192.168.1.10"], command_timeout=2.5),
        listener=ListenerConfig(refresh_interval_ms=1000, scan_timeout=5.0),
    )

    write_settings(settings, path)

    assert load_settings(path) == settings


@pytest.mark.parametrize("value", [0, 500, 60_000])
def test_valid_intervals(value):
    assert validate_interval("refresh_interval_ms", value) == value


@pytest.mark.parametrize("value", [1, 499, -1])
def test_invalid_intervals(value):
    with pytest.raises(ConfigurationError, match="refresh_interval_ms"):
        validate_interval("refresh_interval_ms", value)


def test_listener_config_rejects_short_interval():
    with pytest.raises(ValidationError):
        ListenerConfig(discover_interval_ms=100)


def test_load_rejects_bad_interval(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[listener]\nrefresh_interval_ms = 200\n")

    with pytest.raises(ValueError, match="Invalid config file"):
        load_settings(path)


def test_load_rejects_unknown_keys(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[network]\nport = 1\n")

    with pytest.raises(ValueError):
        load_settings(path)


def test_load_rejects_bad_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[network\n")

    with pytest.raises(ValueError, match="Invalid TOML"):
        load_settings(path)


def test_env_var_points_to_missing_file(tmp_path, monkeypatch):
    monkeypatch.setenv("DOHOME_CONFIG", str(tmp_path / "missing.toml"))

    with pytest.raises(FileNotFoundError):
        resolve_config_path()
    path, exists = resolve_config_path(allow_missing=True)
    assert path == tmp_path / "missing.toml"
    assert not exists


def test_get_settings_uses_xdg_default(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_settings() == Settings()

    get_settings.cache_clear()
    write_settings(
        Settings(listener=ListenerConfig(scan_timeout=9.0)),
        tmp_path / "dohome" / "config.toml",
    )
    assert get_settings().listener.scan_timeout == 9.0
