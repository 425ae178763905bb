"""Error types raised by the BouyomiChan client.

Every failure surfaces as a :class:`BouyomiError`. Subclasses tell
I/O-origin failures (connect, write, read) apart from protocol and
encoding failures.
"""

from __future__ import annotations


class BouyomiError(Exception):
    """Base class for all client errors."""

    is_io_error = False

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class BouyomiConnectionError(BouyomiError):
    """The TCP connection to the target application could not be opened."""

    is_io_error = True


class TransportError(BouyomiError):
    """Writing the packet or reading the response failed mid-exchange."""

    is_io_error = True


class ProtocolError(BouyomiError):
    """The application replied with an absent or malformed response."""


class EncodingError(BouyomiError):
    """A message or voice parameter cannot be represented on the wire."""
