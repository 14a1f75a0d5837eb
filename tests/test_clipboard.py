"""Tests for the clipboard adapters."""

import base64
import io

import pytest
from rich.console import Console

from adapters.clipboard import SystemClipboard, TerminalClipboard
from core.errors import ClipboardError


@pytest.mark.asyncio
class TestSystemClipboard:
    async def test_no_tool_on_path(self):
        clipboard = SystemClipboard(commands=[("definitely-not-a-clipboard-tool-9f2c",)])

        assert clipboard.find_command() is None
        with pytest.raises(ClipboardError):
            await clipboard.write_text("abc123")

    async def test_first_available_tool_wins(self, monkeypatch):
        available = {"xsel": "/usr/bin/xsel", "xclip": "/usr/bin/xclip"}
        monkeypatch.setattr("adapters.clipboard.shutil.which", available.get)

        clipboard = SystemClipboard()

        assert clipboard.find_command() == ("xclip", "-selection", "clipboard")


@pytest.mark.asyncio
class TestTerminalClipboard:
    async def test_writes_osc52_sequence(self):
        buffer = io.StringIO()
        clipboard = TerminalClipboard(Console(file=buffer, force_terminal=True))

        await clipboard.write_text("abc123")

        payload = base64.b64encode(b"abc123").decode("ascii")
        assert buffer.getvalue() == f"\x1b]52;c;{payload}\x07"

    async def test_refuses_non_terminal_output(self):
        clipboard = TerminalClipboard(Console(file=io.StringIO()))

        with pytest.raises(ClipboardError):
            await clipboard.write_text("abc123")
