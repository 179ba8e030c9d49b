"""Data models for dohome."""

from dohome.models.color import Color
from dohome.models.device import Device, short_id_from_device_id
from dohome.models.enums import (
    ColorPattern,
    Command,
    ErrorCode,
    ListenerState,
    TimerType,
)
from dohome.models.messages import (
    CtrlMessage,
    EchoMessage,
    InvalidMessage,
    PongMessage,
    UnknownMessage,
    WireMessage,
)
from dohome.models.timer import DeviceTimer

__all__ = [
    "Color",
    "ColorPattern",
    "Command",
    "CtrlMessage",
    "Device",
    "DeviceTimer",
    "EchoMessage",
    "ErrorCode",
    "InvalidMessage",
    "ListenerState",
    "PongMessage",
    "TimerType",
    "UnknownMessage",
    "WireMessage",
    "short_id_from_device_id",
]
