"""Tests for the MCP tool wrappers."""

from __future__ import annotations

import json
import sys
from unittest.mock import MagicMock, patch

from bouyomi_client.errors import BouyomiConnectionError
from bouyomi_client.models.talk_config import TalkConfig


def _get_server_module():
    """Import server module with FastMCP mocked to avoid init issues."""
    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the @mcp.tool() decorator a no-op that returns the function unchanged
    mock_fastmcp_instance.tool.return_value = lambda fn: fn
    mock_fastmcp_instance.resource.return_value = lambda fn: fn
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    with patch.dict(sys.modules, {}):
        with patch("mcp.server.fastmcp.FastMCP", mock_fastmcp_cls):
            # Remove cached server module so it re-imports with our mock
            sys.modules.pop("bouyomi_client.server", None)
            import bouyomi_client.server as server_mod

    return server_mod


def _mock_client(config: TalkConfig | None = None) -> MagicMock:
    client = MagicMock()
    client.config = config or TalkConfig()
    return client


def test_configure_changes_target_and_voice():
    server = _get_server_module()

    result = server.configure(host="10.0.0.2", port=50002, voice=3, volume=60)

    assert result["host"] == "10.0.0.2"
    assert result["port"] == 50002
    assert result["voice"] == 3
    assert result["volume"] == 60
    assert result["speed"] == 100
    assert server._client.config == TalkConfig(voice=3, volume=60)


def test_talk_merges_overrides():
    """Per-call voice arguments override the configured default."""
    server = _get_server_module()
    client = _mock_client(TalkConfig(voice=1, volume=90))

    with patch.object(server, "_client", client):
        result = server.talk("hello", speed=200)

    assert result == {"queued": True, "length": 5}
    client.talk_with_config.assert_called_once_with(
        "hello", TalkConfig(voice=1, volume=90, speed=200)
    )


def test_talk_length_is_utf8_bytes():
    """Reported length matches the wire length field, not the character count."""
    server = _get_server_module()
    client = _mock_client()

    with patch.object(server, "_client", client):
        result = server.talk("魔理沙")

    assert result == {"queued": True, "length": 9}


def test_talk_reports_error():
    server = _get_server_module()
    client = _mock_client()
    client.talk_with_config.side_effect = BouyomiConnectionError("refused")

    with patch.object(server, "_client", client):
        result = server.talk("hello")

    assert result == {"error": "refused"}


def test_control_tools():
    server = _get_server_module()
    client = _mock_client()

    with patch.object(server, "_client", client):
        assert server.pause() == {"paused": True}
        assert server.resume() == {"resumed": True}
        assert server.skip() == {"skipped": True}
        assert server.clear() == {"cleared": True}

    client.pause.assert_called_once()
    client.resume.assert_called_once()
    client.skip.assert_called_once()
    client.clear.assert_called_once()


def test_control_tool_error():
    server = _get_server_module()
    client = _mock_client()
    client.clear.side_effect = BouyomiConnectionError("refused")

    with patch.object(server, "_client", client):
        assert server.clear() == {"error": "refused"}


def test_get_status():
    server = _get_server_module()
    client = _mock_client()
    client.is_pause.return_value = False
    client.is_now_playing.return_value = True
    client.get_remaining_tasks.return_value = 4

    with patch.object(server, "_client", client):
        result = server.get_status()

    assert result == {"paused": False, "playing": True, "remaining_tasks": 4}


def test_wait_tool():
    server = _get_server_module()
    client = _mock_client()
    client.wait.return_value = True

    with patch.object(server, "_client", client):
        assert server.wait(30) == {"finished": True}

    client.wait.assert_called_once_with(30)


def test_commands_resource():
    server = _get_server_module()
    data = json.loads(server.resource_commands())
    by_name = {c["name"]: c for c in data["commands"]}
    assert by_name["talk"]["id"] == "0x0001"
    assert by_name["get_now_playing"]["response"] is True
    assert by_name["pause"]["response"] is False


def test_fastmcp_available():
    """The installed MCP SDK still ships the FastMCP server used by main()."""
    from mcp.server.fastmcp import FastMCP

    assert callable(FastMCP)
