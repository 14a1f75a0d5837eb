"""Clipboard mechanisms.

- `SystemClipboard`: the platform's clipboard tool (pbcopy, clip, wl-copy,
  xclip, xsel), fed through stdin. This is the primary mechanism.
- `TerminalClipboard`: the legacy OSC 52 escape sequence. The terminal
  emulator puts the payload on the clipboard. This is the fallback for SSH
  sessions and headless boxes without a clipboard tool.
"""

from __future__ import annotations

import asyncio
import base64
import shutil
import sys
from typing import Sequence

from rich.console import Console

from core.errors import ClipboardError

DEFAULT_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("clip",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
)


class SystemClipboard:
    name = "system"

    def __init__(self, commands: Sequence[Sequence[str]] = DEFAULT_COMMANDS) -> None:
        self._commands = [tuple(c) for c in commands]

    def find_command(self) -> tuple[str, ...] | None:
        for command in self._commands:
            if shutil.which(command[0]):
                return command
        return None

    async def write_text(self, text: str) -> None:
        command = self.find_command()
        if command is None:
            raise ClipboardError("No clipboard tool found on PATH")

        try:
            proc = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await proc.communicate(text.encode("utf-8"))
        except OSError as exc:
            raise ClipboardError(f"{command[0]} could not run: {exc}") from exc

        if proc.returncode != 0:
            detail = stderr.decode("utf-8", "replace").strip() if stderr else ""
            raise ClipboardError(f"{command[0]} exited with {proc.returncode} {detail}".strip())


class TerminalClipboard:
    name = "osc52"

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(file=sys.stdout)

    async def write_text(self, text: str) -> None:
        if not self._console.is_terminal:
            raise ClipboardError("Output is not a terminal")

        payload = base64.b64encode(text.encode("utf-8")).decode("ascii")
        try:
            self._console.file.write(f"\x1b]52;c;{payload}\x07")
            self._console.file.flush()
        except OSError as exc:
            raise ClipboardError(f"Terminal write failed: {exc}") from exc
