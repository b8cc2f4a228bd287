from __future__ import annotations

import asyncio
import threading
from pathlib import Path
from typing import List

import pytest

from budgie.errors import HostError
from budgie.hosts.keyboard import REVERT_AND_CLOSE, KeyboardEditor, KeyboardHost
from budgie.hosts.memory import MemoryEditor, MemoryHost
from budgie.selector import LineRange


class RecordingController:
    """Stands in for the pyautogui-backed Controller."""

    def __init__(self, allow: bool = True) -> None:
        self.allow = allow
        self.available = True
        self.actions: List[str] = []

    def press_keys(self, keys: List[str]) -> bool:
        if not self.allow:
            return False
        self.actions.append("+".join(keys))
        return True

    def type_text(self, text: str) -> bool:
        if not self.allow:
            return False
        self.actions.append(f"type:{text}")
        return True


def test_memory_editor_selection_spans_whole_lines() -> None:
    editor = MemoryEditor("a.ts", "zero\none\ntwo\nthree")
    editor.set_selection(LineRange(1, 2))
    assert editor.anchor == (1, 0)
    assert editor.active == (2, 3)
    assert editor.get_text(LineRange(1, 2)) == "one\ntwo"

    editor.collapse_selection()
    assert editor.has_selection is False
    assert editor.anchor == (2, 3)


def test_memory_editor_insert_splits_lines() -> None:
    editor = MemoryEditor(None, "")
    asyncio.run(editor.insert_text(0, 0, "a\nb"))
    assert editor.lines == ["a", "b"]
    assert editor.dirty is True


def test_memory_host_reads_files_from_disk(tmp_path: Path) -> None:
    (tmp_path / "notes.txt").write_text("hello\nworld\n", encoding="utf-8")
    host = MemoryHost(root=tmp_path)

    files = host.find_files("**/*", "")
    editor = asyncio.run(host.open(files[0]))

    assert editor.line_count == 3
    assert editor.line_text(1) == "world"


def test_memory_host_open_missing_file_raises(tmp_path: Path) -> None:
    host = MemoryHost(root=tmp_path)
    with pytest.raises(HostError):
        asyncio.run(host.open(str(tmp_path / "missing.ts")))


def test_memory_host_close_active_discards_scratch() -> None:
    host = MemoryHost(documents={"a.ts": "x"})

    async def scenario() -> None:
        await host.open("a.ts")
        scratch = await host.open_untitled()
        await scratch.insert_text(0, 0, "pasted")
        with pytest.raises(HostError):
            await host.close_active(discard=False)
        await host.close_active(discard=True)

    asyncio.run(scenario())

    assert host.active is not None and host.active.path == "a.ts"
    assert host.events[-1] == ("close", "Untitled-1")


def test_memory_host_close_without_editor_raises() -> None:
    with pytest.raises(HostError):
        asyncio.run(MemoryHost().close_active())


def test_keyboard_editor_builds_selection_with_keys() -> None:
    ctl = RecordingController()
    editor = KeyboardEditor("a.ts", ["l0", "l1", "l2", "l3", "l4"], ctl, lambda text: None)

    editor.set_selection(LineRange(2, 4))
    editor.reveal(LineRange(2, 4))
    editor.collapse_selection()

    assert ctl.actions == [
        "ctrl+g",
        "type:3",
        "enter",
        "home",
        "shift+down",
        "shift+down",
        "shift+end",
        "right",
    ]


def test_keyboard_editor_reveal_moves_to_middle_line() -> None:
    ctl = RecordingController()
    editor = KeyboardEditor("a.ts", ["x"] * 50, ctl, lambda text: None)

    editor.reveal(LineRange(20, 20))

    assert ctl.actions == ["ctrl+g", "type:21", "enter"]


def test_keyboard_host_open_and_discard(tmp_path: Path) -> None:
    target = tmp_path / "src" / "app.ts"
    target.parent.mkdir()
    target.write_text("a\nb\nc", encoding="utf-8")
    ctl = RecordingController()
    copied: List[str] = []
    host = KeyboardHost(tmp_path, controller=ctl, settle_s=0, copy_text=copied.append)

    async def scenario() -> KeyboardEditor:
        editor = await host.open(str(target))
        scratch = await host.open_untitled()
        await scratch.insert_text(0, 0, "snippet")
        await host.close_active(discard=True)
        return editor

    editor = asyncio.run(scenario())

    assert editor.line_count == 3
    assert ctl.actions == [
        "ctrl+p",
        "type:src/app.ts",
        "enter",
        "ctrl+n",
        "ctrl+v",
        "ctrl+shift+p",
        f"type:{REVERT_AND_CLOSE}",
        "enter",
    ]
    assert copied == ["snippet"]


def test_keyboard_host_blocked_input_raises(tmp_path: Path) -> None:
    target = tmp_path / "a.md"
    target.write_text("x", encoding="utf-8")
    host = KeyboardHost(tmp_path, controller=RecordingController(allow=False), settle_s=0, copy_text=lambda t: None)

    with pytest.raises(HostError) as excinfo:
        asyncio.run(host.open(str(target)))
    assert excinfo.value.code == "input_blocked"


def test_keyboard_host_sends_input_off_the_loop_thread(tmp_path: Path) -> None:
    target = tmp_path / "a.md"
    target.write_text("x", encoding="utf-8")
    ctl = RecordingController()
    threads: List[int] = []
    send = ctl.press_keys

    def press_keys(keys: List[str]) -> bool:
        threads.append(threading.get_ident())
        return send(keys)

    ctl.press_keys = press_keys  # type: ignore[method-assign]
    host = KeyboardHost(tmp_path, controller=ctl, settle_s=0, copy_text=lambda t: None)

    async def scenario() -> int:
        await host.open(str(target))
        await host.open_untitled()
        return threading.get_ident()

    loop_thread = asyncio.run(scenario())

    assert ctl.actions == ["ctrl+p", "type:a.md", "enter", "ctrl+n"]
    assert len(threads) == 3
    assert loop_thread not in threads
