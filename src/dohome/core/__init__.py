from __future__ import annotations

from .client import DoHomeClient
from .codec import DISCOVERY_PROBE, decode_fields, encode_ctrl, parse_message
from .dispatcher import DispatchResult, ProtocolDispatcher
from .registry import DeviceRegistry
from .session import DeviceSession
from .supervisor import ListenerSupervisor
from .transport import BroadcastSocket, local_ipv4_addresses

__all__ = [
    "DISCOVERY_PROBE",
    "BroadcastSocket",
    "DeviceRegistry",
    "DeviceSession",
    "DispatchResult",
    "DoHomeClient",
    "ListenerSupervisor",
    "ProtocolDispatcher",
    "decode_fields",
    "encode_ctrl",
    "local_ipv4_addresses",
    "parse_message",
]
