"""Decoded broadcast messages.

``dohome.core.codec.parse_message`` turns every datagram into exactly one of
these variants; anything it cannot validate becomes an ``InvalidMessage``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from dohome.models.color import Color


@dataclass(frozen=True)
class CtrlMessage:
    device_ids: list[str]
    op: str


@dataclass(frozen=True)
class PongMessage:
    device_id: str
    short_id: str
    device_key: str
    device_name: str
    device_type: str
    company_id: str
    host_ip: str
    sta_ip: str
    chip: str


@dataclass(frozen=True)
class EchoMessage:
    device_id: str
    command: int
    payload: dict[str, Any]
    op: str
    color: Color | None = None


@dataclass(frozen=True)
class UnknownMessage:
    cmd: str
    fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class InvalidMessage:
    reason: str


WireMessage = CtrlMessage | PongMessage | EchoMessage | UnknownMessage | InvalidMessage
