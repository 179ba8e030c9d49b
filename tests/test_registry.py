from __future__ import annotations

import threading

from dohome.core import DeviceRegistry


def test_register_if_absent_keeps_first(device):
    registry = DeviceRegistry()

    stored, was_new = registry.register_if_absent(device)
    assert was_new is True
    assert stored is device

    moved = device.model_copy(update={"sta_ip": "192.168.1.99"})
    stored_again, was_new_again = registry.register_if_absent(moved)
    assert was_new_again is False
    assert stored_again is device
    assert registry.find_by_id(device.device_id).sta_ip == "192.168.1.42"
    assert len(registry) == 1


def test_find_unknown_returns_none():
    assert DeviceRegistry().find_by_id("nope") is None


def test_snapshot_is_a_copy(device):
    registry = DeviceRegistry()
    registry.register_if_absent(device)

    snapshot = registry.all_devices()
    registry.register_if_absent(
        device.model_copy(update={"device_id": "aaaa1111_X", "short_id": "1111"})
    )

    assert [d.short_id for d in snapshot] == ["fb6c"]
    assert [d.short_id for d in registry.all_devices()] == ["fb6c", "1111"]


def test_concurrent_registration_registers_once(device):
    registry = DeviceRegistry()
    barrier = threading.Barrier(8)
    results: list[bool] = []
    results_lock = threading.Lock()

    def register() -> None:
        barrier.wait()
        _, was_new = registry.register_if_absent(device.model_copy())
        with results_lock:
            results.append(was_new)

    threads = [threading.Thread(target=register) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 1
    assert len(registry) == 1
