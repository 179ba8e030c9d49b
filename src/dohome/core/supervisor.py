"""Lifecycle of the broadcast listener threads.

Every bound socket gets its own receive thread; optional timer threads poll
device status and repeat the discovery probe. Receives block in a selector
that also watches a wake-up socket pair, so ``stop`` interrupts them without
waiting for network traffic.
"""

from __future__ import annotations

import logging
import selectors
import socket
import threading
import time
from collections.abc import Callable, Sequence

from dohome.config import validate_interval
from dohome.core import commands
from dohome.core.codec import DISCOVERY_PROBE, encode_ctrl
from dohome.core.dispatcher import ProtocolDispatcher
from dohome.core.registry import DeviceRegistry
from dohome.core.transport import BroadcastSocket
from dohome.models import ListenerState

logger = logging.getLogger(__name__)

DEFAULT_SETTLE_DELAY = 0.25

_LISTENING = (ListenerState.STARTING, ListenerState.RUNNING)


class _WakeChannel:
    """Socket pair whose read end turns readable, for good, after ``wake``."""

    def __init__(self) -> None:
        self.reader, self._writer = socket.socketpair()

    def wake(self) -> None:
        self._writer.send(b"\0")

    def close(self) -> None:
        self.reader.close()
        self._writer.close()


class ListenerSupervisor:
    def __init__(
        self,
        command_sockets: Sequence[BroadcastSocket],
        discovery_sockets: Sequence[BroadcastSocket],
        dispatcher: ProtocolDispatcher,
        registry: DeviceRegistry,
        *,
        command_port: int,
        discovery_port: int,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
    ) -> None:
        self._command_sockets = list(command_sockets)
        self._discovery_sockets = list(discovery_sockets)
        self._dispatcher = dispatcher
        self._registry = registry
        self._command_port = command_port
        self._discovery_port = discovery_port
        self._settle_delay = settle_delay

        self._state = ListenerState.STOPPED
        self._state_lock = threading.Lock()
        self._stopped = threading.Event()
        self._stopped.set()
        self._cancel = threading.Event()
        self._wake: _WakeChannel | None = None
        self._workers: list[threading.Thread] = []

    @property
    def state(self) -> ListenerState:
        with self._state_lock:
            return self._state

    @property
    def workers(self) -> list[threading.Thread]:
        with self._state_lock:
            return list(self._workers)

    def start(
        self, refresh_interval_ms: int = 0, discover_interval_ms: int = 0
    ) -> None:
        """Launch the listener threads. A no-op unless currently stopped.

        Intervals are in milliseconds; 0 disables the timer, anything else
        must be at least 500.
        """
        validate_interval("refresh_interval_ms", refresh_interval_ms)
        validate_interval("discover_interval_ms", discover_interval_ms)

        with self._state_lock:
            if self._state is not ListenerState.STOPPED:
                logger.debug("Listener is %s, ignoring start", self._state.value)
                return
            self._state = ListenerState.STARTING
            self._stopped.clear()
            self._cancel = cancel = threading.Event()
            self._wake = wake = _WakeChannel()

            workers = []
            for sock in [*self._command_sockets, *self._discovery_sockets]:
                host, port = sock.local_endpoint
                workers.append(
                    self._spawn(
                        f"dohome-recv-{host}:{port}",
                        self._receive_loop,
                        sock,
                        cancel,
                        wake,
                    )
                )
            if refresh_interval_ms > 0:
                workers.append(
                    self._spawn(
                        "dohome-refresh",
                        self._repeat,
                        self.refresh_status,
                        refresh_interval_ms,
                        cancel,
                    )
                )
            if discover_interval_ms > 0:
                workers.append(
                    self._spawn(
                        "dohome-discover",
                        self._repeat,
                        self.discover,
                        discover_interval_ms,
                        cancel,
                    )
                )
            self._workers = workers
            self._state = ListenerState.RUNNING

        logger.info("Listener running with %d thread(s)", len(workers))
        self.discover()
        time.sleep(self._settle_delay)

    def stop(self) -> None:
        """Request shutdown and return immediately.

        The state reads ``STOPPED`` once every listener thread has exited;
        use ``wait_stopped`` to block until then.
        """
        with self._state_lock:
            if self._state not in _LISTENING:
                return
            self._state = ListenerState.STOPPING
            self._cancel.set()
            wake = self._wake
            workers = list(self._workers)

        logger.info("Stopping listener")
        if wake is not None:
            wake.wake()
        threading.Thread(
            target=self._finish_stop,
            args=(workers, wake),
            name="dohome-shutdown",
            daemon=True,
        ).start()

    def wait_stopped(self, timeout: float | None = None) -> bool:
        return self._stopped.wait(timeout)

    def discover(self) -> None:
        """Broadcast one discovery probe."""
        self.broadcast(DISCOVERY_PROBE)

    def refresh_status(self) -> None:
        """Ask every known device to echo its current color."""
        devices = self._registry.all_devices()
        if not devices:
            return
        short_ids = [device.short_id for device in devices]
        self.broadcast(encode_ctrl(short_ids, commands.status_query()))

    def broadcast(self, data: bytes, include_discovery: bool = False) -> None:
        for sock in self._command_sockets:
            self._send(sock, data, self._command_port)
        if include_discovery:
            for sock in self._discovery_sockets:
                self._send(sock, data, self._discovery_port)

    def _send(self, sock: BroadcastSocket, data: bytes, port: int) -> None:
        try:
            sock.send(data, port)
        except OSError as exc:
            logger.warning("Broadcast to port %d via %r failed: %s", port, sock, exc)

    def _spawn(
        self, name: str, target: Callable[..., None], *args: object
    ) -> threading.Thread:
        thread = threading.Thread(target=target, args=args, name=name, daemon=True)
        thread.start()
        return thread

    def _receive_loop(
        self, sock: BroadcastSocket, cancel: threading.Event, wake: _WakeChannel
    ) -> None:
        with selectors.DefaultSelector() as selector:
            selector.register(sock, selectors.EVENT_READ)
            selector.register(wake.reader, selectors.EVENT_READ)
            while not cancel.is_set():
                try:
                    ready = [key.fileobj for key, _ in selector.select()]
                except (OSError, ValueError):
                    # socket closed under us; only expected while stopping
                    if cancel.is_set():
                        break
                    raise
                if cancel.is_set() or sock not in ready:
                    continue
                try:
                    source, data = sock.receive()
                except OSError as exc:
                    if cancel.is_set():
                        break
                    logger.warning("Receive on %r failed: %s", sock, exc)
                    continue
                try:
                    self._dispatcher.dispatch(data, source, sock.local_endpoint)
                except Exception:
                    logger.exception("Dispatch of %r from %s:%d failed", data, *source)
        logger.debug("Receive loop on %r exited", sock)

    def _repeat(
        self, action: Callable[[], None], interval_ms: int, cancel: threading.Event
    ) -> None:
        while not cancel.is_set():
            action()
            cancel.wait(interval_ms / 1000)

    def _finish_stop(
        self, workers: list[threading.Thread], wake: _WakeChannel | None
    ) -> None:
        for worker in workers:
            worker.join()
        if wake is not None:
            wake.close()
        with self._state_lock:
            self._state = ListenerState.STOPPED
            self._workers = []
            self._wake = None
            self._stopped.set()
        logger.info("Listener stopped")
