"""Five-channel color value used by the device API."""

from __future__ import annotations

from pydantic import BaseModel, Field

MAX_LEVEL = 5000


class Color(BaseModel):
    """Channel levels between 0 and 5000, serialized as ``r g b w m``."""

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    red: int = Field(default=0, ge=0, le=MAX_LEVEL, alias="r")
    green: int = Field(default=0, ge=0, le=MAX_LEVEL, alias="g")
    blue: int = Field(default=0, ge=0, le=MAX_LEVEL, alias="b")
    white: int = Field(default=0, ge=0, le=MAX_LEVEL, alias="w")
    warmth: int = Field(default=0, ge=0, le=MAX_LEVEL, alias="m")

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> Color:
        """Scale an 8-bit RGB color by its HSL lightness."""
        for value in (red, green, blue):
            if not 0 <= value <= 255:
                raise ValueError(f"RGB component out of range: {value}")
        lightness = (max(red, green, blue) + min(red, green, blue)) / 2 / 255
        scale = lightness * 100

        def channel(value: int) -> int:
            return round((50 * value // 255) * scale)

        return cls(red=channel(red), green=channel(green), blue=channel(blue))

    def channels(self) -> dict[str, int]:
        """Wire representation, e.g. ``{"r": 4000, "g": 0, ...}``."""
        return self.model_dump(by_alias=True)

    @property
    def is_off(self) -> bool:
        return not any(self.channels().values())
