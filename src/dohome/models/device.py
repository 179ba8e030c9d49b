"""Device models."""

from __future__ import annotations

from pydantic import BaseModel

from dohome.models.color import Color

SHORT_ID_LENGTH = 4


def short_id_from_device_id(device_id: str) -> str:
    """Addressing token: last four characters of the first ``_`` segment.

    ``286dcd00fb6c_DT-WYRGB_W600`` becomes ``fb6c``.
    """
    head = device_id.split("_", 1)[0]
    if len(head) < SHORT_ID_LENGTH:
        raise ValueError(f"Device id too short for a short id: {device_id!r}")
    return head[-SHORT_ID_LENGTH:]


class Device(BaseModel):
    """A controller found on the network.

    Network fields are recorded at first discovery and never refreshed.
    """

    model_config = {"extra": "forbid", "validate_assignment": True}

    device_id: str
    short_id: str
    host_ip: str
    sta_ip: str
    device_name: str
    device_type: str
    company_id: str
    chip: str
    device_key: str
    last_known_color: Color | None = None

    def update_color(self, color: Color) -> None:
        self.last_known_color = color

    def __str__(self) -> str:
        return f"{self.device_name} ({self.short_id} @ {self.sta_ip})"
