"""In-memory editor host.

Documents are read from disk (or supplied directly) and every editor
operation is recorded in `MemoryHost.events`. Nothing outside the process
is touched, so this host backs dry runs and tests.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from rich.console import Console

from ..discovery import matches_any, scan_workspace, split_globs
from ..errors import HostError
from ..interfaces import Editor, EditorHost
from ..selector import LineRange


Position = Tuple[int, int]


def split_lines(text: str) -> List[str]:
    return text.replace("\r\n", "\n").split("\n")


class MemoryEditor(Editor):
    def __init__(self, path: Optional[str], text: str = "", label: str = "") -> None:
        self.path = path
        self.label = label or (path or "untitled")
        self.lines: List[str] = split_lines(text)
        self.anchor: Position = (0, 0)
        self.active: Position = (0, 0)
        self.revealed: List[LineRange] = []
        self.dirty = False

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def has_selection(self) -> bool:
        return self.anchor != self.active

    def line_text(self, line: int) -> str:
        return self.lines[line]

    def set_selection(self, line_range: LineRange) -> None:
        if line_range.is_empty:
            self.anchor = self.active = (0, 0)
            return
        self.anchor = (line_range.start, 0)
        self.active = (line_range.end, len(self.lines[line_range.end]))

    def collapse_selection(self) -> None:
        self.anchor = self.active

    def reveal(self, line_range: LineRange) -> None:
        self.revealed.append(line_range)

    async def insert_text(self, line: int, column: int, text: str) -> None:
        await asyncio.sleep(0)
        if not 0 <= line < len(self.lines):
            raise HostError(message=f"line {line} out of range", details={"label": self.label})
        current = self.lines[line]
        merged = current[:column] + text + current[column:]
        self.lines[line:line + 1] = split_lines(merged)
        self.dirty = True


class MemoryHost(EditorHost):
    """Editor host that keeps its tabs, clipboard and notifications in memory."""

    def __init__(
        self,
        root: Optional[Path] = None,
        documents: Optional[Dict[str, str]] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.root = Path(root) if root is not None else None
        self.documents = dict(documents or {})
        self.console = console
        self.editors: List[MemoryEditor] = []
        self.clipboard = ""
        self.messages: List[Tuple[str, str]] = []
        self.events: List[Tuple[str, str]] = []
        self._untitled = 0

    @property
    def active(self) -> Optional[MemoryEditor]:
        return self.editors[-1] if self.editors else None

    def find_files(self, include: str, exclude: str) -> List[str]:
        if self.root is not None:
            return scan_workspace(self.root, include, exclude)
        includes = split_globs(include)
        excludes = split_globs(exclude)
        return [
            p
            for p in self.documents
            if matches_any(p, includes) and not (excludes and matches_any(p, excludes))
        ]

    def _read(self, path: str) -> str:
        if path in self.documents:
            return self.documents[path]
        try:
            return Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise HostError(code="open_failed", message=str(exc), details={"path": path}) from exc

    async def open(self, path: str) -> MemoryEditor:
        await asyncio.sleep(0)
        for editor in self.editors:
            if editor.path == path:
                # Re-showing an open document brings its tab to the front.
                self.editors.remove(editor)
                self.editors.append(editor)
                self.events.append(("open", path))
                return editor
        editor = MemoryEditor(path, self._read(path))
        self.editors.append(editor)
        self.events.append(("open", path))
        return editor

    async def open_untitled(self) -> MemoryEditor:
        await asyncio.sleep(0)
        self._untitled += 1
        editor = MemoryEditor(None, "", label=f"Untitled-{self._untitled}")
        self.editors.append(editor)
        self.events.append(("open_untitled", editor.label))
        return editor

    async def close_active(self, discard: bool = True) -> None:
        await asyncio.sleep(0)
        editor = self.active
        if editor is None:
            raise HostError(code="no_active_editor", message="nothing to close")
        if editor.dirty and not discard:
            raise HostError(code="unsaved_changes", message=f"{editor.label} has unsaved changes")
        self.editors.pop()
        self.events.append(("close", editor.label))

    async def write_clipboard(self, text: str) -> None:
        await asyncio.sleep(0)
        self.clipboard = text
        self.events.append(("clipboard", str(len(text))))

    def show_info(self, message: str) -> None:
        self.messages.append(("info", message))
        if self.console is not None:
            self.console.print(f"[cyan]{message}[/cyan]")

    def show_warning(self, message: str) -> None:
        self.messages.append(("warning", message))
        if self.console is not None:
            self.console.print(f"[yellow]{message}[/yellow]")
