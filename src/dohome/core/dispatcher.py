"""Routing of decoded broadcast messages to the device registry."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum

from dohome.core.codec import parse_message
from dohome.core.registry import DeviceRegistry
from dohome.core.transport import Endpoint
from dohome.models import (
    CtrlMessage,
    Device,
    EchoMessage,
    InvalidMessage,
    PongMessage,
    UnknownMessage,
)

logger = logging.getLogger(__name__)

DEFAULT_COMPANY_ID = "_DOIT"
DEFAULT_DEVICE_TYPE = "_DT-WYRGB"

DiscoveryCallback = Callable[[Device], None]


class DispatchResult(str, Enum):
    SELF_ECHO = "self_echo"
    INVALID = "invalid"
    IGNORED = "ignored"
    DISCOVERED = "discovered"
    KNOWN = "known"
    UNKNOWN_DEVICE = "unknown_device"
    UPDATED = "updated"


class ProtocolDispatcher:
    """Decide what a received datagram means and apply it.

    ``dispatch`` never raises; it is called directly from the receive loops.
    """

    def __init__(
        self,
        registry: DeviceRegistry,
        company_id: str = DEFAULT_COMPANY_ID,
        device_type: str = DEFAULT_DEVICE_TYPE,
    ) -> None:
        self._registry = registry
        self._company_id = company_id
        self._device_type = device_type
        self._subscribers: list[DiscoveryCallback] = []
        self._subscribers_lock = threading.Lock()

    def subscribe(self, callback: DiscoveryCallback) -> Callable[[], None]:
        """Call ``callback(device)`` once for every newly discovered device."""
        with self._subscribers_lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._subscribers_lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def dispatch(
        self, data: bytes, source: Endpoint, local: Endpoint
    ) -> DispatchResult:
        if source == local:
            return DispatchResult.SELF_ECHO

        message = parse_message(data)

        if isinstance(message, InvalidMessage):
            logger.debug(
                "Received invalid message from %s:%d: %s (%r)",
                *source,
                message.reason,
                data,
            )
            return DispatchResult.INVALID
        if isinstance(message, CtrlMessage):
            return DispatchResult.IGNORED
        if isinstance(message, PongMessage):
            return self._handle_pong(message)
        if isinstance(message, EchoMessage):
            return self._handle_echo(message, source, local)
        if isinstance(message, UnknownMessage):
            logger.debug(
                "Received unhandled message from %s:%d: %r", *source, data
            )
        return DispatchResult.IGNORED

    def _handle_pong(self, message: PongMessage) -> DispatchResult:
        if (
            message.company_id != self._company_id
            or message.device_type != self._device_type
        ):
            logger.debug(
                "Ignoring %s device %s from %s",
                message.device_type,
                message.device_id,
                message.company_id,
            )
            return DispatchResult.IGNORED

        candidate = Device(
            device_id=message.device_id,
            short_id=message.short_id,
            host_ip=message.host_ip,
            sta_ip=message.sta_ip,
            device_name=message.device_name,
            device_type=message.device_type,
            company_id=message.company_id,
            chip=message.chip,
            device_key=message.device_key,
        )
        device, was_new = self._registry.register_if_absent(candidate)
        if not was_new:
            return DispatchResult.KNOWN

        logger.info("Discovered device %s at %s", device.short_id, device.sta_ip)
        self._notify(device)
        return DispatchResult.DISCOVERED

    def _handle_echo(
        self, message: EchoMessage, source: Endpoint, local: Endpoint
    ) -> DispatchResult:
        device = self._registry.find_by_id(message.device_id)
        if device is None:
            logger.debug("Echo from unknown device %s", message.device_id)
            return DispatchResult.UNKNOWN_DEVICE

        logger.debug("Device %s sent: %s", device.short_id, message.op)
        if message.color is None:
            logger.debug(
                "Received [%s:%d] on [%s:%d]: command %d",
                *source,
                *local,
                message.command,
            )
            return DispatchResult.IGNORED

        device.update_color(message.color)
        return DispatchResult.UPDATED

    def _notify(self, device: Device) -> None:
        with self._subscribers_lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(device)
            except Exception:
                logger.exception("Discovery callback failed for %s", device.short_id)
