"""Response parsing for query commands.

The application answers each query with one unsigned byte and then
closes the connection.
"""

from __future__ import annotations

from ..errors import ProtocolError


def parse_response_byte(data: bytes) -> int:
    """Return the first byte of a query response.

    Raises:
        ProtocolError: If the application sent nothing back.
    """
    if not data:
        raise ProtocolError("Empty response from BouyomiChan")
    return data[0]


def parse_flag(data: bytes) -> bool:
    """Parse a pause/playing response: 0 is False, anything else True."""
    return parse_response_byte(data) != 0


def parse_task_count(data: bytes) -> int:
    """Parse a remaining-task response.

    The count travels in a single byte, so anything above 255 queued
    tasks cannot be reported by the application.
    """
    return parse_response_byte(data)
