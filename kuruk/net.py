"""UDP endpoints for publishing and receiving vision packets."""

from __future__ import annotations

import logging
import select
import socket
import threading
from typing import Optional

__all__ = ["VisionServer", "VisionReceiver"]

_logger = logging.getLogger(__name__)

_MAX_DATAGRAM = 65535


class VisionServer:
    """Sends datagrams to a (usually multicast) address and port.

    The multicast TTL is 1, so packets stay on the local network.
    Sending is serialised by a lock so the server can be shared
    between threads.
    """

    def __init__(self, port: int, address: str) -> None:
        self.port = int(port)
        self.address = address
        self._lock = threading.Lock()
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self._socket.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, 1)

    def send(self, datagram: bytes) -> bool:
        """Send one datagram; report and return False if it did not go out whole."""
        with self._lock:
            try:
                sent = self._socket.sendto(datagram, (self.address, self.port))
            except OSError:
                sent = -1
        if sent != len(datagram):
            print(
                "Sending UDP datagram failed (maybe too large?). "
                f"Size was: {len(datagram)} byte(s).",
                flush=True,
            )
            return False
        return True

    def change_port(self, port: int) -> None:
        """Send subsequent datagrams to ``port``."""
        with self._lock:
            self.port = int(port)

    def change_address(self, address: str) -> None:
        """Send subsequent datagrams to ``address``."""
        with self._lock:
            self.address = address

    def close(self) -> None:
        """Release the socket."""
        with self._lock:
            self._socket.close()

    def __enter__(self) -> "VisionServer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"VisionServer(address={self.address!r}, port={self.port})"


class VisionReceiver:
    """Listens on an address and port for vision datagrams.

    The socket is bound with address reuse so several listeners can
    share it. ``timeout`` is how long :meth:`receive` waits for the
    first datagram; ``None`` waits indefinitely.
    """

    def __init__(self, address: str, port: int) -> None:
        self.timeout: Optional[float] = None
        self._socket: Optional[socket.socket] = None
        self.address = address
        self.port = int(port)
        self._bind(address, int(port))

    def _bind(self, address: str, port: int) -> None:
        if self._socket is not None:
            self._socket.close()
            self._socket = None
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((address, port))
        except OSError as exc:
            sock.close()
            _logger.error("socket not bound: %s", exc)
            raise
        sock.setblocking(False)
        self._socket = sock
        self.address = address
        self.port = sock.getsockname()[1]

    def set_port_and_address(self, port: int, address: str) -> None:
        """Listen on ``address``:``port`` from now on."""
        self._bind(address, int(port))

    def receive(self) -> list[bytes]:
        """Wait for a datagram, then return it with every other one already pending.

        Returns an empty list if nothing arrives within ``timeout``.
        """
        if self._socket is None:
            raise OSError("receiver is closed")
        ready, _, _ = select.select([self._socket], [], [], self.timeout)
        if not ready:
            return []
        datagrams = []
        while True:
            try:
                data = self._socket.recv(_MAX_DATAGRAM)
            except BlockingIOError:
                break
            datagrams.append(data)
        return datagrams

    def close(self) -> None:
        """Release the socket."""
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def __enter__(self) -> "VisionReceiver":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"VisionReceiver(address={self.address!r}, port={self.port})"