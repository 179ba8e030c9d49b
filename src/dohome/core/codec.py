"""Encoding and decoding of the ``key=value&key=value`` broadcast framing."""

from __future__ import annotations

import ipaddress
import json
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from dohome.core.commands import to_json
from dohome.errors import MalformedMessageError
from dohome.models import (
    Color,
    Command,
    CtrlMessage,
    EchoMessage,
    InvalidMessage,
    PongMessage,
    UnknownMessage,
    WireMessage,
    short_id_from_device_id,
)

DISCOVERY_PROBE = b"cmd=ping"

# the device firmware spells it this way
COMPANY_ID_FIELD = "compandy_id"

PONG_FIELDS = (
    COMPANY_ID_FIELD,
    "device_type",
    "device_id",
    "device_key",
    "device_name",
    "host_ip",
    "sta_ip",
    "chip",
)


def serialize_payload(payload: str | Mapping[str, Any]) -> str:
    """Compact JSON for a command object; strings pass through untouched."""
    if isinstance(payload, str):
        return payload
    return to_json(dict(payload))


def encode_ctrl(short_ids: Iterable[str], payload: str | Mapping[str, Any]) -> bytes:
    """Build a ``cmd=ctrl`` envelope addressed to ``short_ids``."""
    device_ids = ",".join(short_ids)
    op = serialize_payload(payload)
    return f"cmd=ctrl&devices={{[{device_ids}]}}&op={op}".encode("ascii")


def decode_device_ids(value: str) -> list[str]:
    """Inverse of the ``{[id1,id2]}`` device list encoding."""
    if not (value.startswith("{[") and value.endswith("]}")):
        raise MalformedMessageError(f"Invalid device list: {value!r}")
    inner = value[2:-2]
    if not inner:
        return []
    return inner.split(",")


def decode_fields(data: bytes) -> dict[str, str]:
    """Split a datagram into its fields.

    All or nothing: a single bad segment rejects the whole message.
    """
    try:
        message = data.decode("ascii")
    except UnicodeDecodeError as exc:
        raise MalformedMessageError("Message is not ASCII") from exc

    if not message:
        raise MalformedMessageError("Empty message")

    parts = message.split("&")
    if len(parts) < 2:
        raise MalformedMessageError(f"Message too short: {message!r}")

    fields: dict[str, str] = {}
    for part in parts:
        pair = part.split("=")
        if len(pair) != 2:
            raise MalformedMessageError(f"Invalid field {part!r} in {message!r}")
        key, value = pair
        if key in fields:
            raise MalformedMessageError(f"Duplicate field {key!r} in {message!r}")
        fields[key] = value
    return fields


def _require(fields: dict[str, str], names: Iterable[str]) -> None:
    missing = [name for name in names if name not in fields]
    if missing:
        raise MalformedMessageError(f"Missing field(s): {', '.join(missing)}")


def _ip(value: str) -> str:
    try:
        return str(ipaddress.ip_address(value))
    except ValueError as exc:
        raise MalformedMessageError(f"Invalid IP address: {value!r}") from exc


def _parse_pong(fields: dict[str, str]) -> PongMessage:
    _require(fields, PONG_FIELDS)
    device_id = fields["device_id"]
    try:
        short_id = short_id_from_device_id(device_id)
    except ValueError as exc:
        raise MalformedMessageError(str(exc)) from exc
    return PongMessage(
        device_id=device_id,
        short_id=short_id,
        device_key=fields["device_key"],
        device_name=fields["device_name"],
        device_type=fields["device_type"],
        company_id=fields[COMPANY_ID_FIELD],
        host_ip=_ip(fields["host_ip"]),
        sta_ip=_ip(fields["sta_ip"]),
        chip=fields["chip"].strip(),
    )


def _parse_echo(fields: dict[str, str]) -> EchoMessage:
    _require(fields, ("dev", "op"))
    op = fields["op"]
    try:
        payload = json.loads(op)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise MalformedMessageError(f"Invalid JSON in op: {op!r}") from exc
    if not isinstance(payload, dict):
        raise MalformedMessageError(f"op is not an object: {op!r}")

    command = payload.get("cmd")
    if not isinstance(command, int) or isinstance(command, bool):
        raise MalformedMessageError(f"op has no command code: {op!r}")

    color = None
    if command == Command.GET_LED_STATUS:
        try:
            color = Color.model_validate(payload)
        except ValidationError as exc:
            raise MalformedMessageError(f"Invalid color in op: {op!r}") from exc

    return EchoMessage(
        device_id=fields["dev"], command=command, payload=payload, op=op, color=color
    )


def _parse_ctrl(fields: dict[str, str]) -> CtrlMessage:
    _require(fields, ("devices", "op"))
    return CtrlMessage(device_ids=decode_device_ids(fields["devices"]), op=fields["op"])


def parse_message(data: bytes) -> WireMessage:
    """Decode a datagram into a typed message. Never raises."""
    try:
        fields = decode_fields(data)
        cmd = fields.get("cmd")
        if cmd is None:
            return InvalidMessage("Missing field: cmd")
        if cmd == "ctrl":
            return _parse_ctrl(fields)
        if cmd == "pong":
            return _parse_pong(fields)
        if cmd == "echo":
            return _parse_echo(fields)
        return UnknownMessage(cmd=cmd, fields=fields)
    except MalformedMessageError as exc:
        return InvalidMessage(str(exc))
