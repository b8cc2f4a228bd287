"""Live host that drives a focused VS Code window with keyboard shortcuts.

The window must already be in the foreground. Line counts and snippet text
come from the files on disk; the keystrokes only reproduce what is visible.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, List, Optional

import pyperclip
from rich.console import Console

from ..control import Controller
from ..discovery import scan_workspace
from ..errors import HostError
from ..interfaces import Editor, EditorHost
from ..selector import LineRange
from .memory import split_lines


logger = logging.getLogger("budgie.hosts.keyboard")

REVERT_AND_CLOSE = "View: Revert and Close Editor"


def _send(controller: Controller, keys: List[str]) -> None:
    if not controller.press_keys(keys):
        raise HostError(code="input_blocked", message=f"could not press {'+'.join(keys)}")


def _type(controller: Controller, text: str) -> None:
    if not controller.type_text(text):
        raise HostError(code="input_blocked", message="could not type text")


async def _send_off_loop(controller: Controller, keys: List[str]) -> None:
    await asyncio.to_thread(_send, controller, keys)


async def _type_off_loop(controller: Controller, text: str) -> None:
    await asyncio.to_thread(_type, controller, text)


class KeyboardEditor(Editor):
    def __init__(
        self,
        path: Optional[str],
        lines: List[str],
        controller: Controller,
        copy_text: Callable[[str], None],
    ) -> None:
        self.path = path
        self.lines = lines
        self._controller = controller
        self._copy_text = copy_text
        self._selection: Optional[LineRange] = None

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_text(self, line: int) -> str:
        return self.lines[line]

    def _goto(self, line: int) -> None:
        _send(self._controller, ["ctrl", "g"])
        _type(self._controller, str(line + 1))
        _send(self._controller, ["enter"])

    def set_selection(self, line_range: LineRange) -> None:
        if line_range.is_empty:
            self._selection = None
            return
        self._goto(line_range.start)
        _send(self._controller, ["home"])
        for _ in range(line_range.end - line_range.start):
            _send(self._controller, ["shift", "down"])
        _send(self._controller, ["shift", "end"])
        self._selection = line_range

    def collapse_selection(self) -> None:
        if self._selection is None:
            return
        # Right collapses onto the active (bottom) end.
        _send(self._controller, ["right"])
        self._selection = None

    def reveal(self, line_range: LineRange) -> None:
        if line_range == self._selection:
            # Building the selection already scrolled it into view.
            return
        middle = (line_range.start + line_range.end) // 2
        self._goto(middle)
        self._selection = None

    async def insert_text(self, line: int, column: int, text: str) -> None:
        if line != 0 or column != 0:
            self._goto(line)
            _send(self._controller, ["home"])
            for _ in range(column):
                _send(self._controller, ["right"])
        self._copy_text(text)
        await _send_off_loop(self._controller, ["ctrl", "v"])
        current = self.lines[line] if line < len(self.lines) else ""
        self.lines[line:line + 1] = split_lines(current[:column] + text + current[column:])


class KeyboardHost(EditorHost):
    """EditorHost for a real VS Code window on this desktop."""

    def __init__(
        self,
        root: Path,
        controller: Optional[Controller] = None,
        console: Optional[Console] = None,
        settle_s: float = 0.3,
        copy_text: Callable[[str], None] = pyperclip.copy,
    ) -> None:
        self.root = Path(root).resolve()
        self.controller = controller or Controller()
        self.console = console or Console()
        self.settle_s = settle_s
        self._copy_text = copy_text

    def _require_backend(self) -> None:
        if not self.controller.available:
            raise HostError(code="no_backend", message="pyautogui is not available on this system")

    async def _settle(self) -> None:
        await asyncio.sleep(self.settle_s)

    def find_files(self, include: str, exclude: str) -> List[str]:
        return scan_workspace(self.root, include, exclude)

    async def open(self, path: str) -> KeyboardEditor:
        self._require_backend()
        try:
            text = Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise HostError(code="open_failed", message=str(exc), details={"path": path}) from exc
        try:
            rel = Path(path).resolve().relative_to(self.root).as_posix()
        except ValueError:
            rel = str(path)
        await _send_off_loop(self.controller, ["ctrl", "p"])
        await self._settle()
        await _type_off_loop(self.controller, rel)
        await self._settle()
        await _send_off_loop(self.controller, ["enter"])
        await self._settle()
        logger.debug("opened", extra={"path": rel})
        return KeyboardEditor(path, split_lines(text), self.controller, self._copy_text)

    async def open_untitled(self) -> KeyboardEditor:
        self._require_backend()
        await _send_off_loop(self.controller, ["ctrl", "n"])
        await self._settle()
        return KeyboardEditor(None, [""], self.controller, self._copy_text)

    async def close_active(self, discard: bool = True) -> None:
        self._require_backend()
        if discard:
            await _send_off_loop(self.controller, ["ctrl", "shift", "p"])
            await self._settle()
            await _type_off_loop(self.controller, REVERT_AND_CLOSE)
            await self._settle()
            await _send_off_loop(self.controller, ["enter"])
        else:
            await _send_off_loop(self.controller, ["ctrl", "w"])
        await self._settle()

    async def write_clipboard(self, text: str) -> None:
        self._copy_text(text)
        await asyncio.sleep(0)

    def show_info(self, message: str) -> None:
        self.console.print(f"[cyan]{message}[/cyan]")

    def show_warning(self, message: str) -> None:
        self.console.print(f"[yellow]{message}[/yellow]")
