"""MCP server entry point for BouyomiChan.

Exposes speech, playback control, and status tools via the Model Context
Protocol using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .client import BouyomiClient
from .errors import BouyomiError
from .models.talk_config import TalkConfig
from .protocol.commands import Command

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "bouyomi",
    instructions="MCP server for the BouyomiChan text-to-speech application",
)

# Target and default voice used by every tool
_client = BouyomiClient()


def _error(e: BouyomiError) -> dict[str, Any]:
    logger.info("BouyomiChan request failed: %s", e)
    return {"error": str(e)}


# ─── CONFIGURATION TOOLS ─────────────────────────────────────────────

@mcp.tool()
def configure(
    host: str | None = None,
    port: int | None = None,
    voice: int | None = None,
    volume: int | None = None,
    speed: int | None = None,
    tone: int | None = None,
    code: int | None = None,
) -> dict[str, Any]:
    """Change the BouyomiChan address or the default voice.

    Omitted arguments keep their current value.

    Args:
        host: Host BouyomiChan listens on (default 127.0.0.1).
        port: Application link port (default 50001).
        voice: 0 = app default, 1-8 AquesTalk, 10001+ SAPI5.
        volume: 0-100, or -1 for the app setting.
        speed: 50-300, or -1 for the app setting.
        tone: 50-200, or -1 for the app setting.
        code: Voice database selector (0-255).
    """
    global _client
    client = _client
    if host is not None:
        client = client.with_host(host)
    if port is not None:
        client = client.with_port(port)
    client = client.with_config(_merge_config(
        client.config, voice, volume, speed, tone, code
    ))
    _client = client
    return {"host": client.host, "port": client.port, **client.config.to_dict()}


def _merge_config(
    config: TalkConfig,
    voice: int | None,
    volume: int | None,
    speed: int | None,
    tone: int | None,
    code: int | None,
) -> TalkConfig:
    if voice is not None:
        config = config.with_voice(voice)
    if volume is not None:
        config = config.with_volume(volume)
    if speed is not None:
        config = config.with_speed(speed)
    if tone is not None:
        config = config.with_tone(tone)
    if code is not None:
        config = config.with_code(code)
    return config


# ─── SPEECH TOOLS ────────────────────────────────────────────────────

@mcp.tool()
def talk(
    message: str,
    voice: int | None = None,
    volume: int | None = None,
    speed: int | None = None,
    tone: int | None = None,
    code: int | None = None,
) -> dict[str, Any]:
    """Have BouyomiChan read a message aloud.

    Voice arguments override the configured default for this message only.
    Returns as soon as the message is queued.

    Args:
        message: Text to speak.
    """
    config = _merge_config(_client.config, voice, volume, speed, tone, code)
    try:
        _client.talk_with_config(message, config)
    except BouyomiError as e:
        return _error(e)
    # length as sent on the wire, in UTF-8 bytes
    return {"queued": True, "length": len(message.encode("utf-8"))}


@mcp.tool()
def wait(limit_sec: int = 60) -> dict[str, Any]:
    """Block until BouyomiChan finishes speaking or the time limit passes.

    Args:
        limit_sec: Upper bound on the wait in seconds.
    """
    return {"finished": _client.wait(limit_sec)}


# ─── PLAYBACK CONTROL TOOLS ──────────────────────────────────────────

def _control(action: str, fn) -> dict[str, Any]:
    try:
        fn()
    except BouyomiError as e:
        return _error(e)
    return {action: True}


@mcp.tool()
def pause() -> dict[str, Any]:
    """Pause speech playback."""
    return _control("paused", _client.pause)


@mcp.tool()
def resume() -> dict[str, Any]:
    """Resume paused speech playback."""
    return _control("resumed", _client.resume)


@mcp.tool()
def skip() -> dict[str, Any]:
    """Skip the message currently being spoken."""
    return _control("skipped", _client.skip)


@mcp.tool()
def clear() -> dict[str, Any]:
    """Remove every queued message."""
    return _control("cleared", _client.clear)


@mcp.tool()
def get_status() -> dict[str, Any]:
    """Report whether BouyomiChan is paused or speaking, and its queue length.

    The queue length is reported in one byte, so it saturates at 255.
    """
    try:
        return {
            "paused": _client.is_pause(),
            "playing": _client.is_now_playing(),
            "remaining_tasks": _client.get_remaining_tasks(),
        }
    except BouyomiError as e:
        return _error(e)


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("bouyomi://commands")
def resource_commands() -> str:
    """Command identifiers of the application link protocol."""
    return json.dumps({
        "commands": [
            {
                "name": cmd.name.lower(),
                "id": f"0x{cmd.value:04X}",
                "response": cmd.expects_response,
            }
            for cmd in Command
        ]
    })


@mcp.resource("bouyomi://config")
def resource_config() -> str:
    """Current target address and default voice."""
    return json.dumps({
        "host": _client.host,
        "port": _client.port,
        "config": _client.config.to_dict(),
    })


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
