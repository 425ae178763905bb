"""Client for remote-controlling BouyomiChan over its TCP application link."""

from .client import BouyomiClient
from .errors import (
    BouyomiConnectionError,
    BouyomiError,
    EncodingError,
    ProtocolError,
    TransportError,
)
from .models.talk_config import TalkConfig
from .protocol.commands import Command
