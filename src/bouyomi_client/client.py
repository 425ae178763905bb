"""High-level BouyomiChan client.

Every operation is a single synchronous exchange on its own connection,
so one client may be shared between threads.
"""

from __future__ import annotations

import logging
import time

from .errors import BouyomiError
from .models.talk_config import TalkConfig
from .protocol.commands import Command, build_command, build_talk
from .protocol.parser import parse_flag, parse_task_count
from .transport.tcp_connection import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    TCPConnection,
)

logger = logging.getLogger(__name__)

POLL_INTERVAL = 1.0


class BouyomiClient:
    """Client for the BouyomiChan application link (TCP).

    The target and default voice are fixed once built; the ``with_*``
    methods return a new client instead of mutating this one::

        reimu = BouyomiClient().with_config(TalkConfig(voice=1))
        reimu.talk("hello")
        reimu.wait(60)
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int | str = DEFAULT_PORT,
        config: TalkConfig | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        self._connection = TCPConnection(host, port, timeout)
        self._config = config if config is not None else TalkConfig()

    def __repr__(self) -> str:
        return (
            f"BouyomiClient(host={self.host!r}, port={self.port}, "
            f"config={self._config!r})"
        )

    @property
    def host(self) -> str:
        return self._connection.host

    @property
    def port(self) -> int:
        return self._connection.port

    @property
    def timeout(self) -> float | None:
        return self._connection.timeout

    @property
    def config(self) -> TalkConfig:
        return self._config

    def with_host(self, host: str) -> BouyomiClient:
        return BouyomiClient(host, self.port, self._config, self.timeout)

    def with_port(self, port: int | str) -> BouyomiClient:
        return BouyomiClient(self.host, port, self._config, self.timeout)

    def with_config(self, config: TalkConfig) -> BouyomiClient:
        return BouyomiClient(self.host, self.port, config, self.timeout)

    def with_timeout(self, timeout: float | None) -> BouyomiClient:
        return BouyomiClient(self.host, self.port, self._config, timeout)

    # ─── SPEECH ───────────────────────────────────────────────────────

    def talk(self, message: str) -> None:
        """Queue ``message`` using the client's default voice."""
        self.talk_with_config(message, self._config)

    def talk_with_config(self, message: str, config: TalkConfig) -> None:
        """Queue ``message`` voiced with ``config``.

        Returns once the packet is sent; use :meth:`wait` to block until
        the application has finished speaking.

        Raises:
            EncodingError: If the message or a parameter cannot be encoded.
            BouyomiConnectionError: If the application is unreachable.
            TransportError: If the packet cannot be written.
        """
        packet = build_talk(message, config)
        self._connection.send(packet)
        logger.debug("Queued talk (%d bytes) with %r", len(packet), config)

    # ─── PLAYBACK CONTROL ─────────────────────────────────────────────

    def _send(self, command: Command) -> None:
        self._connection.send(build_command(command))

    def _query(self, command: Command) -> bytes:
        return self._connection.send_and_receive(build_command(command))

    def pause(self) -> None:
        self._send(Command.PAUSE)

    def resume(self) -> None:
        self._send(Command.RESUME)

    def skip(self) -> None:
        """Skip the message currently being spoken."""
        self._send(Command.SKIP)

    def clear(self) -> None:
        """Drop every queued message."""
        self._send(Command.CLEAR)

    # ─── STATUS ───────────────────────────────────────────────────────

    def is_pause(self) -> bool:
        """Return whether playback is paused.

        Raises:
            BouyomiError: If the query fails; no state is guessed.
        """
        return parse_flag(self._query(Command.GET_PAUSE))

    def is_now_playing(self) -> bool:
        """Return whether a message is being spoken right now.

        Raises:
            BouyomiError: If the query fails; no state is guessed.
        """
        return parse_flag(self._query(Command.GET_NOW_PLAYING))

    def get_remaining_tasks(self) -> int:
        """Return the number of queued messages (0-255, protocol-capped)."""
        return parse_task_count(self._query(Command.GET_TASK_COUNT))

    def wait(self, limit_sec: int) -> bool:
        """Block while the application is speaking, up to a time budget.

        Polls once per second for iterations ``1..limit_sec``, i.e. at
        most ``limit_sec - 1`` polls, and returns on the first poll that
        reports nothing playing. A failed poll is logged and ends the
        wait; this method never raises.

        Returns:
            True if playback was seen to finish, False if the budget ran
            out or a poll failed.
        """
        for _ in range(1, limit_sec):
            try:
                playing = self.is_now_playing()
            except BouyomiError as e:
                logger.warning("Failed to get playing status: %s", e)
                return False

            if not playing:
                return True

            time.sleep(POLL_INTERVAL)

        return False
