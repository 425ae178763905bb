"""Command identifiers and per-command packet builders.

Each command is a 16-bit identifier sent first in every packet. Only
talk carries a payload; the query commands are answered with a single
byte before the application closes the connection.
"""

from __future__ import annotations

from enum import IntEnum

from ..models.talk_config import TalkConfig
from .framing import encode_command, encode_talk


class Command(IntEnum):
    """Command identifiers understood by the application."""

    TALK = 0x0001
    PAUSE = 0x0010
    RESUME = 0x0020
    SKIP = 0x0030
    CLEAR = 0x0040
    GET_PAUSE = 0x0110
    GET_NOW_PLAYING = 0x0120
    GET_TASK_COUNT = 0x0130

    @property
    def expects_response(self) -> bool:
        return self in QUERY_COMMANDS


QUERY_COMMANDS: frozenset[Command] = frozenset({
    Command.GET_PAUSE,
    Command.GET_NOW_PLAYING,
    Command.GET_TASK_COUNT,
})


def build_command(command: Command) -> bytes:
    """Build the 2-byte packet for a command without payload."""
    if command == Command.TALK:
        raise ValueError("Talk needs a message; use build_talk()")
    return encode_command(command.value)


def build_talk(message: str, config: TalkConfig) -> bytes:
    """Build a talk packet for ``message`` voiced with ``config``."""
    return encode_talk(
        message,
        speed=config.speed,
        tone=config.tone,
        volume=config.volume,
        voice=config.voice,
        code=config.code,
    )


def build_pause() -> bytes:
    return build_command(Command.PAUSE)


def build_resume() -> bytes:
    return build_command(Command.RESUME)


def build_skip() -> bytes:
    """Build a Skip command, dropping the message being spoken."""
    return build_command(Command.SKIP)


def build_clear() -> bytes:
    """Build a Clear command, dropping every queued message."""
    return build_command(Command.CLEAR)


def build_get_pause() -> bytes:
    return build_command(Command.GET_PAUSE)


def build_get_now_playing() -> bytes:
    return build_command(Command.GET_NOW_PLAYING)


def build_get_task_count() -> bytes:
    return build_command(Command.GET_TASK_COUNT)
