"""Direct TCP request/response channel to a single device."""

from __future__ import annotations

import ipaddress
import json
import logging
import socket
import threading
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, TypeVar

from dohome.core import commands
from dohome.core.commands import Payload
from dohome.errors import (
    DeviceCommandError,
    DeviceConnectionError,
    MalformedMessageError,
)
from dohome.models import Color, ColorPattern, Command, DeviceTimer

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONTROL_PORT = 5555
DEFAULT_TIMEOUT = 5.0
REPLY_BUFFER_SIZE = 1024

# firmware answers IS_CONNECT_TO_ROUTER with a misplaced quote
_BROKEN_ROUTER_REPLY = '"cmd":19",ip"'
_FIXED_ROUTER_REPLY = '"cmd":19,"ip"'


def decode_reply(raw: bytes) -> dict[str, Any]:
    """Parse a device reply and raise on a non-zero ``res`` code."""
    text = raw.decode("ascii", errors="replace").strip()
    text = text.replace(_BROKEN_ROUTER_REPLY, _FIXED_ROUTER_REPLY)
    try:
        reply = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedMessageError(f"Invalid reply: {text!r}") from exc
    if not isinstance(reply, dict):
        raise MalformedMessageError(f"Reply is not an object: {text!r}")

    res = reply.get("res", 0)
    if res != 0:
        raise DeviceCommandError(res, reply.get("cmd"))
    return reply


def _timers(reply: dict[str, Any]) -> list[DeviceTimer]:
    return [DeviceTimer.from_payload(item) for item in reply.get("timers", [])]


class DeviceSession:
    """One device, one connection, one command in flight at a time."""

    def __init__(
        self, host: str, port: int = CONTROL_PORT, timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self._sock: socket.socket | None = None
        self._lock = threading.Lock()

    def request(self, payload: Payload) -> dict[str, Any]:
        line = commands.serialize_line(payload)
        with self._lock:
            try:
                sock = self._connect()
                sock.sendall(line.encode("ascii"))
                raw = sock.recv(REPLY_BUFFER_SIZE)
            except OSError as exc:
                self._disconnect()
                raise DeviceConnectionError(
                    f"Command to {self.host}:{self.port} failed: {exc}"
                ) from exc
        if not raw:
            with self._lock:
                self._disconnect()
            raise DeviceConnectionError(
                f"{self.host}:{self.port} closed the connection"
            )
        logger.debug("Device %s replied: %r", self.host, raw)
        return decode_reply(raw)

    def close(self) -> None:
        with self._lock:
            self._disconnect()

    def __enter__(self) -> DeviceSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _connect(self) -> socket.socket:
        if self._sock is None:
            logger.debug("Connecting to %s:%d", self.host, self.port)
            self._sock = socket.create_connection(
                (self.host, self.port), timeout=self.timeout
            )
        return self._sock

    def _disconnect(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def query(self, command: Command, parse: Callable[[dict[str, Any]], T]) -> T:
        """Send an argument-less ``command`` and convert its reply with ``parse``."""
        reply = self.request(commands.simple(command))
        try:
            return parse(reply)
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise MalformedMessageError(
                f"Unexpected reply to {command.name}: {reply!r}"
            ) from exc

    def reboot(self) -> None:
        self.request(commands.simple(Command.REBOOT))

    def get_device_info(self) -> dict[str, Any]:
        return self.request(commands.simple(Command.GET_DEV_INFO))

    def change_color(
        self, color: Color, smooth: bool = False, duration: int | None = None
    ) -> None:
        self.request(commands.change_color(color, smooth, duration))

    def turn_off(self) -> None:
        self.request(commands.turn_off())

    def set_preset_mode(self, pattern: ColorPattern) -> None:
        self.request(commands.set_preset_mode(pattern))

    def get_device_time(self) -> datetime:
        return self.query(
            Command.GET_DEV_TIME,
            lambda reply: datetime.fromtimestamp(reply["stamps"], tz=timezone.utc),
        )

    def set_device_time(self, moment: datetime) -> None:
        self.request(commands.set_device_time(moment))

    def set_shutdown_timer(self, moment: datetime, repeat: bool = False) -> int:
        ts = commands.generate_ts()
        self.request(commands.set_shutdown_timer(moment, repeat, ts))
        return ts

    def set_powerup_timer(self, moment: datetime, repeat: bool = False) -> int:
        ts = commands.generate_ts()
        self.request(commands.set_powerup_timer(moment, repeat, ts))
        return ts

    def router_config(self, ssid: str, password: str, bssid: str = "") -> None:
        self.request(commands.router_config(ssid, password, bssid))

    def delay_shutdown(self, minutes: int) -> int:
        ts = commands.generate_ts()
        self.request(commands.delay_shutdown(minutes, ts))
        return ts

    def is_connected_to_router(self) -> str:
        """Address the device holds on the router network."""
        return self.query(
            Command.IS_CONNECT_TO_ROUTER,
            lambda reply: str(ipaddress.ip_address(reply["ip"])),
        )

    def get_version(self) -> str:
        return self.query(Command.GET_VERSION, lambda reply: str(reply["ver"]))

    def get_timers(self) -> list[DeviceTimer]:
        return self.query(Command.GET_DEV_TIMER, _timers)

    def get_delay_info(self) -> list[DeviceTimer]:
        return self.query(Command.GET_DELAY_INFO, _timers)

    def cancel_timer(self, ts: int) -> None:
        self.request(commands.cancel_timer(ts))

    def get_led_status(self) -> Color:
        return self.query(Command.GET_LED_STATUS, Color.model_validate)

    def modify_timer(self, index: int, moment: datetime, repeat: bool) -> None:
        self.request(commands.modify_timer(index, moment, repeat))

    def reset_access_point(self) -> None:
        self.request(commands.simple(Command.RESET_AP))

    def set_timezone_offset(self, offset: int) -> None:
        if not 0 <= offset <= 23:
            raise ValueError(f"Timezone offset must be between 0 and 23, got {offset}")
        self.request(commands.set_timezone(offset))

    def factory_reset(self) -> None:
        self.request(commands.factory_reset())
