from __future__ import annotations

import json

import pytest

from dohome.config import NetworkConfig, Settings
from dohome.core import DoHomeClient
from dohome.models import Color, ListenerState


class FakeSocket:
    def __init__(self, address: str, port: int, broadcast_address: str) -> None:
        self.local_endpoint = (address, port)
        self.broadcast_address = broadcast_address
        self.sent: list[tuple[bytes, int]] = []
        self.closed = False

    def send(self, data: bytes, port: int) -> None:
        self.sent.append((data, port))

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def sockets() -> list[FakeSocket]:
    return []


@pytest.fixture
def client(sockets):
    def factory(address, port, broadcast_address):
        sock = FakeSocket(address, port, broadcast_address)
        sockets.append(sock)
        return sock

    settings = Settings(
        network=NetworkConfig(local_addresses=["10.0.0.2", "192.168.1.10"])
    )
    client = DoHomeClient(settings, socket_factory=factory)
    yield client
    client.close()


def _op(data: bytes) -> dict:
    return json.loads(data.split(b"&op=", 1)[1])


def test_binds_command_and_discovery_socket_per_address(client, sockets):
    endpoints = sorted(sock.local_endpoint for sock in sockets)
    assert endpoints == [
        ("10.0.0.2", 6091),
        ("10.0.0.2", 6095),
        ("192.168.1.10", 6091),
        ("192.168.1.10", 6095),
    ]
    assert client.listener_state is ListenerState.STOPPED


def test_send_command_without_targets_is_noop(client, sockets):
    client.send_command('{"cmd":25}', [])
    assert all(sock.sent == [] for sock in sockets)


def test_send_command_goes_out_on_command_sockets(client, sockets, device):
    client.send_command('{"cmd":25}', [device])

    command_sockets = [s for s in sockets if s.local_endpoint[1] == 6091]
    discovery_sockets = [s for s in sockets if s.local_endpoint[1] == 6095]
    for sock in command_sockets:
        assert sock.sent == [(b'cmd=ctrl&devices={[fb6c]}&op={"cmd":25}', 6091)]
    assert all(sock.sent == [] for sock in discovery_sockets)


def test_change_color_payload(client, sockets, device):
    client.change_color(Color(red=4000, green=1000), [device], smooth=True, duration=30)

    data, _ = sockets[0].sent[0]
    assert _op(data) == {
        "cmd": 6,
        "r": 4000,
        "g": 1000,
        "b": 0,
        "w": 0,
        "m": 0,
        "smooth": 1,
        "t": 30,
    }


def test_change_color_duration_implies_smoothing(client, sockets, device):
    client.change_color(Color(blue=10), [device], duration=30)

    data, _ = sockets[0].sent[0]
    assert _op(data)["smooth"] == 1
    assert _op(data)["t"] == 30


def test_change_color_without_duration(client, sockets, device):
    client.change_color(Color(blue=10), [device])

    data, _ = sockets[0].sent[0]
    assert "t" not in _op(data)
    assert _op(data)["smooth"] == 0


def test_turn_on_and_off(client, sockets, device):
    client.turn_on([device])
    client.turn_off([device])

    on, off = (_op(data) for data, _ in sockets[0].sent)
    assert on == {"cmd": 6, "r": 0, "g": 0, "b": 0, "w": 5000, "m": 4000, "on": 1}
    assert off == {"cmd": 6, "r": 0, "g": 0, "b": 0, "w": 0, "m": 0, "on": 0}


def test_discover_devices_sends_probe(client, sockets):
    client.discover_devices()
    assert sockets[0].sent == [(b"cmd=ping", 6091)]


def test_session_is_cached_per_device(client, device):
    session = client.session(device)
    assert session is client.session(device)
    assert (session.host, session.port) == ("192.168.1.42", 5555)


def test_close_releases_sockets(client, sockets):
    client.close()
    assert all(sock.closed for sock in sockets)


def test_stop_listener_when_never_started(client):
    client.stop_listener()
    assert client.listener_state is ListenerState.STOPPED
