"""Packet encoder and decoder for the BouyomiChan application link protocol.

Talk packet layout (all integers little-endian)::

    +---------+-------+------+--------+-------+------+---------+-------------+
    | Command | Speed | Tone | Volume | Voice | Code | Length  |   Message   |
    | int16   | int16 | int16| int16  | int16 | u8   | uint32  | UTF-8 bytes |
    +---------+-------+------+--------+-------+------+---------+-------------+

- Command: 0x0001 for talk
- Speed/Tone/Volume: -1 keeps the application's current setting
- Voice: 0 keeps the application's default voice
- Length: byte length of the UTF-8 message

Every other command is the bare 2-byte command identifier with no payload.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import EncodingError

TALK_COMMAND = 0x0001
COMMAND_SIZE = 2
TALK_HEADER_SIZE = 15  # cmd(2) + speed(2) + tone(2) + volume(2) + voice(2) + code(1) + len(4)
MAX_MESSAGE_LENGTH = 0xFFFFFFFF


@dataclass
class Packet:
    """A decoded outbound packet."""

    command: int
    speed: int | None = None
    tone: int | None = None
    volume: int | None = None
    voice: int | None = None
    code: int | None = None
    message: str | None = None

    def __repr__(self) -> str:
        if self.message is None:
            return f"Packet(command=0x{self.command:04X})"
        return (
            f"Packet(command=0x{self.command:04X}, speed={self.speed}, "
            f"tone={self.tone}, volume={self.volume}, voice={self.voice}, "
            f"code={self.code}, message={self.message!r})"
        )


def _int16(value: int, name: str) -> bytes:
    try:
        return value.to_bytes(2, "little", signed=True)
    except OverflowError as e:
        raise EncodingError(f"{name} must fit in int16, got {value}", e) from e


def encode_command(command: int) -> bytes:
    """Encode a payload-less command as its 2-byte identifier."""
    return _int16(command, "command")


def encode_talk(
    message: str,
    speed: int,
    tone: int,
    volume: int,
    voice: int,
    code: int,
) -> bytes:
    """Encode a talk packet.

    Values are written verbatim; range checks are left to the application.

    Raises:
        EncodingError: If the message is not valid UTF-8 text, is longer
            than 2**32 - 1 bytes, or a field overflows its wire width.
    """
    try:
        body = message.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError(f"Message is not encodable as UTF-8: {e}", e) from e
    if len(body) > MAX_MESSAGE_LENGTH:
        raise EncodingError(f"Message too long: {len(body)} bytes")
    if not 0 <= code <= 0xFF:
        raise EncodingError(f"code must fit in uint8, got {code}")

    header = (
        encode_command(TALK_COMMAND)
        + _int16(speed, "speed")
        + _int16(tone, "tone")
        + _int16(volume, "volume")
        + _int16(voice, "voice")
        + bytes([code])
        + len(body).to_bytes(4, "little")
    )
    return header + body


def parse_packet(data: bytes) -> Packet | None:
    """Decode a captured packet.

    Returns:
        A ``Packet``, or ``None`` if the data is truncated, carries a
        payload it should not, or its length field disagrees with the
        message that follows.
    """
    if len(data) < COMMAND_SIZE:
        return None

    command = int.from_bytes(data[0:2], "little", signed=True)
    if command != TALK_COMMAND:
        if len(data) != COMMAND_SIZE:
            return None
        return Packet(command=command)

    if len(data) < TALK_HEADER_SIZE:
        return None

    length = int.from_bytes(data[11:15], "little")
    body = data[TALK_HEADER_SIZE:]
    if len(body) != length:
        return None

    try:
        message = body.decode("utf-8")
    except UnicodeDecodeError:
        return None

    return Packet(
        command=command,
        speed=int.from_bytes(data[2:4], "little", signed=True),
        tone=int.from_bytes(data[4:6], "little", signed=True),
        volume=int.from_bytes(data[6:8], "little", signed=True),
        voice=int.from_bytes(data[8:10], "little", signed=True),
        code=data[10],
        message=message,
    )
