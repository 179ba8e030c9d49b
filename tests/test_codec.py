"""Tests for the broadcast wire format."""

from __future__ import annotations

import json

import pytest

from dohome.core.codec import (
    DISCOVERY_PROBE,
    decode_device_ids,
    decode_fields,
    encode_ctrl,
    parse_message,
)
from dohome.errors import MalformedMessageError
from dohome.models import (
    Color,
    CtrlMessage,
    EchoMessage,
    InvalidMessage,
    PongMessage,
    UnknownMessage,
)


def test_encode_ctrl_envelope():
    data = encode_ctrl(["A1B2", "C3D4"], '{"cmd":25}')
    assert data == b'cmd=ctrl&devices={[A1B2,C3D4]}&op={"cmd":25}'


def test_encode_ctrl_serializes_mapping_compactly():
    data = encode_ctrl(["A1B2"], {"cmd": 6, "r": 10, "smooth": 0})
    assert data.endswith(b'&op={"cmd":6,"r":10,"smooth":0}')


def test_ctrl_roundtrip_recovers_ids_and_payload():
    payload = '{"cmd":6,"r":4000,"g":1000,"b":0,"w":0,"m":0,"smooth":1,"t":20}'
    message = parse_message(encode_ctrl(["A1B2", "C3D4"], payload))

    assert isinstance(message, CtrlMessage)
    assert message.device_ids == ["A1B2", "C3D4"]
    assert message.op == payload
    assert json.loads(message.op)["cmd"] == 6


def test_discovery_probe_is_too_short_to_decode():
    with pytest.raises(MalformedMessageError):
        decode_fields(DISCOVERY_PROBE)
    assert isinstance(parse_message(DISCOVERY_PROBE), InvalidMessage)


def test_decode_rejects_whole_message_on_bad_segment():
    with pytest.raises(MalformedMessageError):
        decode_fields(b"cmd=pong&device_id=abc&broken")
    with pytest.raises(MalformedMessageError):
        decode_fields(b"cmd=pong&device_id=a=b")


def test_decode_rejects_duplicate_keys():
    with pytest.raises(MalformedMessageError):
        decode_fields(b"cmd=pong&cmd=echo")


def test_decode_rejects_non_ascii():
    with pytest.raises(MalformedMessageError):
        decode_fields("cmd=pong&device_name=Küche".encode())


def test_decode_fields():
    assert decode_fields(b"cmd=echo&dev=xyz") == {"cmd": "echo", "dev": "xyz"}


def test_decode_device_ids_rejects_unbracketed_list():
    with pytest.raises(MalformedMessageError):
        decode_device_ids("A1B2,C3D4")
    assert decode_device_ids("{[]}") == []


def test_missing_cmd_is_invalid():
    message = parse_message(b"dev=abc&op={}")
    assert isinstance(message, InvalidMessage)
    assert "cmd" in message.reason


def test_parse_pong(make_pong):
    message = parse_message(make_pong())

    assert isinstance(message, PongMessage)
    assert message.device_id == "286dcd00fb6c_DT-WYRGB_W600"
    assert message.short_id == "fb6c"
    assert message.company_id == "_DOIT"
    assert message.sta_ip == "192.168.1.42"
    assert message.chip == "W600"


def test_pong_with_missing_field_is_invalid():
    message = parse_message(b"cmd=pong&compandy_id=_DOIT&device_type=_DT-WYRGB")
    assert isinstance(message, InvalidMessage)
    assert "device_id" in message.reason


def test_pong_with_bad_ip_is_invalid(make_pong):
    assert isinstance(parse_message(make_pong(sta_ip="not-an-ip")), InvalidMessage)


def test_pong_with_short_device_id_is_invalid(make_pong):
    assert isinstance(parse_message(make_pong(device_id="ab_DT")), InvalidMessage)


def test_parse_status_echo(make_echo):
    message = parse_message(
        make_echo('{"res":0,"cmd":25,"r":100,"g":200,"b":300,"w":400,"m":500}')
    )

    assert isinstance(message, EchoMessage)
    assert message.command == 25
    assert message.color == Color(red=100, green=200, blue=300, white=400, warmth=500)


def test_parse_other_echo_has_no_color(make_echo):
    message = parse_message(make_echo('{"res":0,"cmd":6}'))

    assert isinstance(message, EchoMessage)
    assert message.command == 6
    assert message.color is None


@pytest.mark.parametrize(
    "op",
    [
        "not json",
        "[25]",
        '{"res":0}',
        '{"cmd":"25"}',
        '{"cmd":25,"r":9000,"g":0,"b":0,"w":0,"m":0}',
        "[" * 100_000,
    ],
)
def test_bad_echo_payload_is_invalid(make_echo, op):
    assert isinstance(parse_message(make_echo(op)), InvalidMessage)


def test_unknown_command():
    message = parse_message(b"cmd=hello&x=1")
    assert isinstance(message, UnknownMessage)
    assert message.cmd == "hello"
