from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Redactor:
    enabled: bool = True
    _key_map: dict[str, int] = field(default_factory=dict)
    _key_counter: int = 0

    def redact_ip(self, ip: str) -> str:
        if not self.enabled:
            return ip
        parts = ip.split(".")
        if len(parts) == 4 and all(part.isdigit() for part in parts):
            return f"x.x.x.{parts[3]}"
        return ip

    def redact_key(self, key: str) -> str:
        """Keep a short prefix and number each distinct key."""
        if not self.enabled or not key:
            return key
        counter = self._key_map.get(key)
        if counter is None:
            self._key_counter += 1
            counter = self._key_counter
            self._key_map[key] = counter
        return f"{key[:2]}…#{counter:02d}"

    def redact_device_id(self, device_id: str) -> str:
        """``286dcd00fb6c_DT-WYRGB_W600`` becomes ``xxxxxxxxfb6c_DT-WYRGB_W600``."""
        if not self.enabled:
            return device_id
        head, sep, tail = device_id.partition("_")
        if len(head) <= 4:
            return device_id
        return "x" * (len(head) - 4) + head[-4:] + sep + tail
