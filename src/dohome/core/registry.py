from __future__ import annotations

import threading

from dohome.models import Device


class DeviceRegistry:
    """Known devices keyed by full device id.

    Safe to use from every listener thread. Devices are only ever added.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._devices: dict[str, Device] = {}

    def find_by_id(self, device_id: str) -> Device | None:
        with self._lock:
            return self._devices.get(device_id)

    def register_if_absent(self, candidate: Device) -> tuple[Device, bool]:
        """Store ``candidate`` unless its id is known; return the stored device."""
        with self._lock:
            existing = self._devices.get(candidate.device_id)
            if existing is not None:
                return existing, False
            self._devices[candidate.device_id] = candidate
            return candidate, True

    def all_devices(self) -> list[Device]:
        """Point-in-time copy in discovery order."""
        with self._lock:
            return list(self._devices.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._devices)

    def __contains__(self, device_id: object) -> bool:
        with self._lock:
            return device_id in self._devices
