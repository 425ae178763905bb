"""Transport layer: one TCP exchange per command."""

from .tcp_connection import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT, TCPConnection
