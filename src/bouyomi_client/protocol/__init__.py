"""Protocol layer: packet encoding, command builders, and response parsing."""

from .framing import Packet, encode_command, encode_talk, parse_packet
from .commands import Command, build_command, build_talk
from .parser import parse_flag, parse_response_byte, parse_task_count
