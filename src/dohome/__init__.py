"""dohome - discover and control DoHome LED controllers on the local network."""

from __future__ import annotations

from importlib.metadata import version

from .config import ListenerConfig, NetworkConfig, Settings, get_settings
from .core import DeviceSession, DoHomeClient
from .errors import (
    ConfigurationError,
    DeviceCommandError,
    DeviceConnectionError,
    DoHomeError,
    MalformedMessageError,
)
from .models import Color, ColorPattern, Device, DeviceTimer, ListenerState

__all__ = [
    "Color",
    "ColorPattern",
    "ConfigurationError",
    "Device",
    "DeviceCommandError",
    "DeviceConnectionError",
    "DeviceSession",
    "DeviceTimer",
    "DoHomeClient",
    "DoHomeError",
    "ListenerConfig",
    "ListenerState",
    "MalformedMessageError",
    "NetworkConfig",
    "Settings",
    "__version__",
    "get_settings",
]

__version__ = version("dohome")
