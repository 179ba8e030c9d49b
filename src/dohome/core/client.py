"""Public entry point for discovering and controlling devices."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from dohome.config import Settings
from dohome.core import commands
from dohome.core.codec import encode_ctrl
from dohome.core.dispatcher import DiscoveryCallback, ProtocolDispatcher
from dohome.core.registry import DeviceRegistry
from dohome.core.session import DeviceSession
from dohome.core.supervisor import ListenerSupervisor
from dohome.core.transport import BroadcastSocket, local_ipv4_addresses
from dohome.models import Color, Device, ListenerState

logger = logging.getLogger(__name__)

SocketFactory = Callable[[str, int, str], BroadcastSocket]


class DoHomeClient:
    """Discovers devices and broadcasts commands to them.

    One command socket and one discovery socket is bound per local IPv4
    address (``network.local_addresses`` in the settings, or every address
    of this host when empty).
    """

    def __init__(
        self,
        settings: Settings | None = None,
        socket_factory: SocketFactory = BroadcastSocket,
    ) -> None:
        self.settings = settings or Settings()
        network = self.settings.network
        listener = self.settings.listener

        addresses = network.local_addresses or local_ipv4_addresses()
        self._sockets: list[BroadcastSocket] = []
        try:
            command_sockets = [
                self._bind(socket_factory, address, network.command_port)
                for address in addresses
            ]
            discovery_sockets = [
                self._bind(socket_factory, address, network.discovery_port)
                for address in addresses
            ]
        except OSError:
            self._close_sockets()
            raise

        self._registry = DeviceRegistry()
        self._dispatcher = ProtocolDispatcher(
            self._registry,
            company_id=listener.company_id,
            device_type=listener.device_type,
        )
        self._supervisor = ListenerSupervisor(
            command_sockets,
            discovery_sockets,
            self._dispatcher,
            self._registry,
            command_port=network.command_port,
            discovery_port=network.discovery_port,
            settle_delay=listener.settle_delay,
        )
        self._sessions: dict[str, DeviceSession] = {}
        self._sessions_lock = threading.Lock()

    def _bind(
        self, factory: SocketFactory, address: str, port: int
    ) -> BroadcastSocket:
        sock = factory(address, port, self.settings.network.broadcast_address)
        self._sockets.append(sock)
        return sock

    @property
    def listener_state(self) -> ListenerState:
        return self._supervisor.state

    @property
    def devices(self) -> list[Device]:
        """Snapshot of every device discovered so far."""
        return self._registry.all_devices()

    def find_device(self, device_id: str) -> Device | None:
        return self._registry.find_by_id(device_id)

    def subscribe(self, callback: DiscoveryCallback) -> Callable[[], None]:
        """Register ``callback(device)`` for new devices; returns an unsubscribe."""
        return self._dispatcher.subscribe(callback)

    def start_listener(
        self, refresh_interval_ms: int = 0, discover_interval_ms: int = 0
    ) -> None:
        self._supervisor.start(refresh_interval_ms, discover_interval_ms)

    def stop_listener(self) -> None:
        self._supervisor.stop()

    def wait_stopped(self, timeout: float | None = None) -> bool:
        return self._supervisor.wait_stopped(timeout)

    def discover_devices(self) -> None:
        self._supervisor.discover()

    def send_command(
        self, payload: str | Mapping[str, Any], devices: Iterable[Device]
    ) -> None:
        """Broadcast ``payload`` to ``devices``; nothing is sent without targets."""
        targets = [device.short_id for device in devices]
        if not targets:
            return
        self._supervisor.broadcast(encode_ctrl(targets, payload))

    def turn_on(self, devices: Iterable[Device]) -> None:
        self.send_command(commands.turn_on(), devices)

    def turn_off(self, devices: Iterable[Device]) -> None:
        self.send_command(commands.turn_off(), devices)

    def change_color(
        self,
        color: Color,
        devices: Iterable[Device],
        smooth: bool = False,
        duration: int | None = None,
    ) -> None:
        """Broadcast ``color``; giving a ``duration`` implies a smooth fade."""
        smooth = smooth or duration is not None
        self.send_command(commands.change_color(color, smooth, duration), devices)

    def session(self, device: Device) -> DeviceSession:
        """TCP control channel to ``device``, reused across calls."""
        with self._sessions_lock:
            session = self._sessions.get(device.device_id)
            if session is None:
                network = self.settings.network
                session = DeviceSession(
                    device.sta_ip,
                    port=network.control_port,
                    timeout=network.command_timeout,
                )
                self._sessions[device.device_id] = session
            return session

    def close(self, timeout: float | None = 5.0) -> None:
        """Stop listening, then release sockets and sessions."""
        self._supervisor.stop()
        if not self._supervisor.wait_stopped(timeout):
            logger.warning("Listener threads still running after %.1fs", timeout)
        with self._sessions_lock:
            for session in self._sessions.values():
                session.close()
            self._sessions.clear()
        self._close_sockets()

    def _close_sockets(self) -> None:
        for sock in self._sockets:
            sock.close()
        self._sockets.clear()

    def __enter__(self) -> DoHomeClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
