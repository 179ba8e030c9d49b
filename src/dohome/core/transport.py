"""UDP broadcast sockets bound to a single local interface."""

from __future__ import annotations

import logging
import socket

logger = logging.getLogger(__name__)

BROADCAST_ADDRESS = "255.255.255.255"
RECEIVE_BUFFER_SIZE = 4096

Endpoint = tuple[str, int]


class BroadcastSocket:
    """A UDP socket bound to ``(address, port)`` that stays on the local segment."""

    def __init__(
        self,
        address: str,
        port: int,
        broadcast_address: str = BROADCAST_ADDRESS,
    ) -> None:
        self._broadcast_address = broadcast_address
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
            self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_DONTROUTE, 1)
            self._sock.bind((address, port))
        except OSError:
            self._sock.close()
            raise
        host, bound_port = self._sock.getsockname()[:2]
        self._local_endpoint: Endpoint = (host, bound_port)
        logger.debug("Bound broadcast socket on %s:%d", host, bound_port)

    @property
    def local_endpoint(self) -> Endpoint:
        return self._local_endpoint

    def fileno(self) -> int:
        return self._sock.fileno()

    def receive(self) -> tuple[Endpoint, bytes]:
        """Block until a datagram arrives; return ``(source, data)``."""
        data, source = self._sock.recvfrom(RECEIVE_BUFFER_SIZE)
        return (source[0], source[1]), data

    def send(self, data: bytes, port: int) -> None:
        """Broadcast ``data`` to ``port``. No delivery confirmation."""
        self._sock.sendto(data, (self._broadcast_address, port))

    def close(self) -> None:
        self._sock.close()

    def __enter__(self) -> BroadcastSocket:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        host, port = self._local_endpoint
        return f"BroadcastSocket({host}:{port})"


def local_ipv4_addresses() -> list[str]:
    """IPv4 addresses the host name resolves to, in resolver order."""
    try:
        infos = socket.getaddrinfo(
            socket.gethostname(), None, socket.AF_INET, socket.SOCK_DGRAM
        )
    except OSError as exc:
        raise RuntimeError("Could not resolve local network addresses") from exc

    addresses: list[str] = []
    for info in infos:
        address = str(info[4][0])
        if address not in addresses:
            addresses.append(address)
    logger.debug("Local IPv4 addresses: %s", ", ".join(addresses))
    return addresses
