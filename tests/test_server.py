"""
Tests for the server entry point.

The transports are replaced so no server is started.
"""

import os
import sys
from pathlib import Path

import pytest

from chuk_mcp_chords import async_server, server


@pytest.fixture
def runs(monkeypatch: pytest.MonkeyPatch) -> list:
    """Record transport calls instead of serving."""
    calls: list = []
    monkeypatch.setattr(async_server.mcp, "run_stdio", lambda **kw: calls.append(("stdio", kw)))
    monkeypatch.setattr(async_server.mcp, "run", lambda **kw: calls.append(("http", kw)))
    monkeypatch.setenv("CHUK_CHORDS_LEVELS_DIR", "")
    monkeypatch.delenv("CHUK_CHORDS_LEVELS_DIR")
    return calls


class TestMain:
    """Tests for argument handling in main."""

    def test_stdio_is_default(self, monkeypatch: pytest.MonkeyPatch, runs: list) -> None:
        """Without arguments the stdio transport runs."""
        monkeypatch.setattr(sys, "argv", ["chuk-mcp-chords"])
        server.main()
        assert runs == [("stdio", {})]
        assert "CHUK_CHORDS_LEVELS_DIR" not in os.environ

    def test_http_port(self, monkeypatch: pytest.MonkeyPatch, runs: list) -> None:
        """The http transport runs on the requested port."""
        argv = ["chuk-mcp-chords", "--transport", "http", "--port", "9001"]
        monkeypatch.setattr(sys, "argv", argv)
        server.main()
        assert runs == [("http", {"port": 9001, "stdio": False})]

    def test_levels_dir(
        self, monkeypatch: pytest.MonkeyPatch, runs: list, temp_dir: Path
    ) -> None:
        """--levels-dir points the server at a project levels directory."""
        monkeypatch.setattr(sys, "argv", ["chuk-mcp-chords", "--levels-dir", str(temp_dir)])
        server.main()
        assert os.environ["CHUK_CHORDS_LEVELS_DIR"] == str(temp_dir)
        assert runs == [("stdio", {})]


class TestServerModule:
    """Tests for the server module wiring."""

    def test_every_tool_is_exported(self) -> None:
        """The server module exports each registered tool."""
        for name in (*async_server.chord_tools, *async_server.progression_tools):
            assert getattr(async_server, name) is not None, name

    def test_project_levels_dir(self) -> None:
        """Project levels live under the configured directory."""
        assert async_server.level_loader.project_path == async_server.LEVELS_DIR
