from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from dohome.models.enums import TimerType


class DeviceTimer(BaseModel):
    """A timer stored on the device, as reported by ``GET_DEV_TIMER``."""

    model_config = {"frozen": True, "extra": "forbid"}

    index: int
    ts: int
    timer_type: TimerType
    repeat: bool
    fire_at: datetime

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> DeviceTimer:
        return cls(
            index=payload["index"],
            ts=payload["ts"],
            timer_type=TimerType(payload["type"]),
            repeat=payload["repeat"] == 1,
            fire_at=datetime(
                payload["year"],
                payload["mon"],
                payload["day"],
                payload["hour"],
                payload["min"],
                payload["sec"],
            ),
        )
