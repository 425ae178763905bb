"""TCP transport to the BouyomiChan application link.

Each exchange opens a fresh connection, writes one packet, optionally
reads the reply until the application closes the stream, and closes.
Nothing is kept open between calls.
"""

from __future__ import annotations

import logging
import socket

from ..errors import BouyomiConnectionError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 50001
DEFAULT_TIMEOUT = 3.0  # seconds, for connect and for each read/write
RECV_SIZE = 64


class TCPConnection:
    """Describes where the application listens and performs exchanges.

    Usage::

        conn = TCPConnection("127.0.0.1", 50001)
        conn.send(packet)
        reply = conn.send_and_receive(query_packet)
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int | str = DEFAULT_PORT,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        try:
            self._port = int(port)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Port must be numeric, got {port!r}") from e
        self._host = host
        self._timeout = timeout

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def _connect(self) -> socket.socket:
        try:
            return socket.create_connection(
                (self._host, self._port), timeout=self._timeout
            )
        except (OSError, UnicodeError) as e:
            logger.warning(
                "Failed to connect to BouyomiChan at %s:%s: %s",
                self._host,
                self._port,
                e,
            )
            raise BouyomiConnectionError(
                f"Could not connect to BouyomiChan at {self._host}:{self._port}: {e}",
                e,
            ) from e

    @staticmethod
    def _write(sock: socket.socket, packet: bytes) -> None:
        try:
            sock.sendall(packet)
        except OSError as e:
            raise TransportError(f"Failed to send packet: {e}", e) from e

    def send(self, packet: bytes) -> None:
        """Send a packet without waiting for a reply.

        Raises:
            BouyomiConnectionError: If the connection cannot be opened.
            TransportError: If the packet cannot be written in full.
        """
        with self._connect() as sock:
            self._write(sock, packet)
        logger.debug("Sent %d bytes to %s:%s", len(packet), self._host, self._port)

    def send_and_receive(self, packet: bytes) -> bytes:
        """Send a packet and read the reply until the peer closes.

        Returns:
            Every byte received; empty if the application closed without
            answering.

        Raises:
            BouyomiConnectionError: If the connection cannot be opened.
            TransportError: If writing or reading fails.
        """
        with self._connect() as sock:
            self._write(sock, packet)
            chunks: list[bytes] = []
            try:
                while True:
                    chunk = sock.recv(RECV_SIZE)
                    if not chunk:
                        break
                    chunks.append(chunk)
            except OSError as e:
                logger.warning("Failed to read response: %s", e)
                raise TransportError(f"Failed to read response: {e}", e) from e

        response = b"".join(chunks)
        logger.debug(
            "Exchanged %d/%d bytes with %s:%s",
            len(packet),
            len(response),
            self._host,
            self._port,
        )
        return response
