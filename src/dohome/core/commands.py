"""JSON command objects sent in ``op`` fields and over the TCP channel."""

from __future__ import annotations

import json
import random
from datetime import datetime
from typing import Any

from dohome.models import Color, ColorPattern, Command, TimerType

Payload = dict[str, Any]

LINE_END = "\r\n"


def to_json(payload: Payload) -> str:
    return json.dumps(payload, separators=(",", ":"))


def serialize_line(payload: Payload) -> str:
    """TCP framing: one JSON object per CRLF-terminated line."""
    return to_json(payload) + LINE_END


def generate_ts() -> int:
    """Random 32-bit id the device uses to refer to a timer."""
    return random.getrandbits(32)


def status_query() -> Payload:
    return {"cmd": Command.GET_LED_STATUS.value}


def change_color(
    color: Color, smooth: bool = False, duration: int | None = None
) -> Payload:
    """``duration`` only applies to smooth transitions."""
    payload: Payload = {"cmd": Command.CHANGE_COLOR.value, **color.channels()}
    payload["smooth"] = 1 if smooth else 0
    if smooth and duration is not None:
        payload["t"] = duration
    return payload


def turn_on() -> Payload:
    return {
        "cmd": Command.CHANGE_COLOR.value,
        **Color(white=5000, warmth=4000).channels(),
        "on": 1,
    }


def turn_off() -> Payload:
    return {"cmd": Command.CHANGE_COLOR.value, **Color().channels(), "on": 0}


def set_preset_mode(pattern: ColorPattern) -> Payload:
    return {"cmd": Command.SET_PRESET_MODE.value, "index": int(pattern)}


def _clock(moment: datetime) -> Payload:
    return {
        "year": moment.year,
        "month": moment.month,
        "day": moment.day,
        "hour": moment.hour,
        "minute": moment.minute,
        "second": moment.second,
    }


def set_device_time(moment: datetime) -> Payload:
    return {"cmd": Command.SYNC_DEV_TIME.value, **_clock(moment)}


def set_shutdown_timer(moment: datetime, repeat: bool, ts: int) -> Payload:
    return {
        "cmd": Command.SET_SHUTDOWN_TIMER.value,
        "ts": ts,
        **_clock(moment),
        "repeat": 1 if repeat else 0,
    }


def set_powerup_timer(moment: datetime, repeat: bool, ts: int) -> Payload:
    return {
        "cmd": Command.SET_POWERUP_TIMER.value,
        "ts": ts,
        **_clock(moment),
        "type": TimerType.TIMER_CONSTANT.value,
        "repeat": 1 if repeat else 0,
    }


def modify_timer(index: int, moment: datetime, repeat: bool) -> Payload:
    return {
        "cmd": Command.MODIFY_TIMER.value,
        "index": index,
        **_clock(moment),
        "repeat": 1 if repeat else 0,
    }


def router_config(ssid: str, password: str, bssid: str = "") -> Payload:
    return {
        "cmd": Command.ROUTER_CONFIG.value,
        "ssid": ssid,
        "pass": password,
        "bssid": bssid,
    }


def delay_shutdown(minutes: int, ts: int) -> Payload:
    return {"cmd": Command.DELAY_SHUTDOWN.value, "time": minutes, "ts": ts}


def cancel_timer(ts: int) -> Payload:
    return {"cmd": Command.CANCEL_TIMER.value, "ts": ts}


def set_timezone(offset: int) -> Payload:
    return {"cmd": Command.SET_TIMEZONE.value, "offset": offset}


def factory_reset() -> Payload:
    return {"cmd": Command.FACTORY_RESET.value, "en": 1}


def simple(command: Command) -> Payload:
    """Commands that carry no arguments, e.g. ``GET_VERSION``."""
    return {"cmd": command.value}
