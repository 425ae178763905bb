"""Shared fixtures: a loopback stand-in for the BouyomiChan application link."""

from __future__ import annotations

import queue
import socket
import threading

import pytest

from bouyomi_client.protocol.commands import QUERY_COMMANDS
from bouyomi_client.protocol.framing import TALK_COMMAND, TALK_HEADER_SIZE


def _recv_exact(conn: socket.socket, size: int) -> bytes:
    data = b""
    while len(data) < size:
        chunk = conn.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


def _read_packet(conn: socket.socket) -> bytes:
    """Read one packet the way the application does: command first."""
    head = _recv_exact(conn, 2)
    if int.from_bytes(head, "little", signed=True) != TALK_COMMAND:
        return head
    header = head + _recv_exact(conn, TALK_HEADER_SIZE - 2)
    length = int.from_bytes(header[11:15], "little")
    return header + _recv_exact(conn, length)


class FakeBouyomi:
    """Accepts connections, records packets, and answers queries.

    ``replies`` maps a query command ID to the bytes sent back before
    closing. A query without an entry is closed with no reply. With
    ``hang`` set, queries are never answered or closed until shutdown.
    """

    def __init__(self, replies: dict[int, bytes] | None = None, hang: bool = False):
        self.replies = dict(replies or {})
        self.hang = hang
        self.packets: queue.Queue[bytes] = queue.Queue()
        self._stop = threading.Event()
        self._sock = socket.create_server(("127.0.0.1", 0))
        self._sock.settimeout(0.05)
        self.port = self._sock.getsockname()[1]
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            conn.settimeout(5)
            with conn:
                packet = _read_packet(conn)
                self.packets.put(packet)
                command = int.from_bytes(packet[:2], "little", signed=True)
                if command not in QUERY_COMMANDS:
                    continue
                if self.hang:
                    self._stop.wait(5)
                    continue
                conn.sendall(self.replies.get(command, b""))

    def next_packet(self, timeout: float = 2.0) -> bytes:
        return self.packets.get(timeout=timeout)

    def close(self) -> None:
        self._stop.set()
        self._sock.close()
        self._thread.join(timeout=2)


@pytest.fixture
def fake_bouyomi():
    server = FakeBouyomi()
    yield server
    server.close()


@pytest.fixture
def refused_port() -> int:
    """A loopback port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
