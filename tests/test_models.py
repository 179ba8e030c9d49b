from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from dohome.errors import DeviceCommandError
from dohome.models import (
    Color,
    Device,
    DeviceTimer,
    ErrorCode,
    TimerType,
    short_id_from_device_id,
)


def test_short_id_is_tail_of_first_segment():
    assert short_id_from_device_id("286dcd00fb6c_DT-WYRGB_W600") == "fb6c"
    assert short_id_from_device_id("abcd") == "abcd"


def test_short_id_rejects_short_head():
    with pytest.raises(ValueError):
        short_id_from_device_id("abc_DT-WYRGB")


def test_color_accepts_wire_names():
    color = Color.model_validate({"r": 1, "g": 2, "b": 3, "w": 4, "m": 5, "cmd": 25})
    assert color == Color(red=1, green=2, blue=3, white=4, warmth=5)
    assert color.channels() == {"r": 1, "g": 2, "b": 3, "w": 4, "m": 5}


@pytest.mark.parametrize("level", [-1, 5001])
def test_color_range(level):
    with pytest.raises(ValidationError):
        Color(red=level)


def test_color_is_off():
    assert Color().is_off
    assert not Color(warmth=1).is_off


def test_color_from_rgb_scales_by_lightness():
    # lightness of pure red is 0.5
    assert Color.from_rgb(255, 0, 0) == Color(red=2500)
    assert Color.from_rgb(0, 0, 0).is_off
    assert Color.from_rgb(255, 255, 255) == Color(red=5000, green=5000, blue=5000)


def test_color_from_rgb_rejects_out_of_range():
    with pytest.raises(ValueError):
        Color.from_rgb(256, 0, 0)


def test_device_update_color(device: Device):
    device.update_color(Color(blue=100))
    assert device.last_known_color == Color(blue=100)
    assert str(device) == "Desk (fb6c @ 192.168.1.42)"


def test_timer_from_payload():
    timer = DeviceTimer.from_payload(
        {
            "index": 2,
            "ts": 99,
            "type": 1,
            "repeat": 0,
            "year": 2022,
            "mon": 1,
            "day": 2,
            "hour": 3,
            "min": 4,
            "sec": 5,
        }
    )
    assert timer.index == 2
    assert timer.timer_type is TimerType.TIMER_CONSTANT
    assert timer.repeat is False
    assert timer.fire_at == datetime(2022, 1, 2, 3, 4, 5)


def test_command_error_names_known_codes():
    error = DeviceCommandError(26, 99)
    assert error.code is ErrorCode.ERR_WIFI_UNKNOWN_CMD
    assert "99" in str(error)


def test_command_error_keeps_unknown_codes():
    error = DeviceCommandError(400)
    assert error.code == 400
    assert "unknown error 400" in str(error)
