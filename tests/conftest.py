from __future__ import annotations

from collections.abc import Callable

import pytest

from dohome.config import get_settings
from dohome.models import Device

DEVICE_ID = "286dcd00fb6c_DT-WYRGB_W600"


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("DOHOME_CONFIG", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_pong() -> Callable[..., bytes]:
    def _make(
        device_id: str = DEVICE_ID,
        company_id: str = "_DOIT",
        device_type: str = "_DT-WYRGB",
        sta_ip: str = "192.168.1.42",
    ) -> bytes:
        return (
            f"cmd=pong&compandy_id={company_id}&device_type={device_type}"
            f"&device_id={device_id}&device_key=k3yk3yk3y&device_name=Desk"
            f"&host_ip=192.168.4.1&sta_ip={sta_ip}&chip=W600 "
        ).encode("ascii")

    return _make


@pytest.fixture
def make_echo() -> Callable[..., bytes]:
    def _make(op: str, device_id: str = DEVICE_ID) -> bytes:
        return f"cmd=echo&dev={device_id}&op={op}".encode("ascii")

    return _make


@pytest.fixture
def device() -> Device:
    return Device(
        device_id=DEVICE_ID,
        short_id="fb6c",
        host_ip="192.168.4.1",
        sta_ip="192.168.1.42",
        device_name="Desk",
        device_type="_DT-WYRGB",
        company_id="_DOIT",
        chip="W600",
        device_key="k3yk3yk3y",
    )
