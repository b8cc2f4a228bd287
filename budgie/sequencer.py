from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple

from .config import BudgieOptions
from .errors import ExhaustedSelection
from .interfaces import Editor, EditorHost
from .jsonlog import JsonActionLogger
from .scheduler import AsyncioScheduler, Scheduler
from .scroll import ScrollAnimator
from .selector import LineRange, pick_random, pick_random_range


logger = logging.getLogger("budgie.sequencer")

STEP_NAMES = ("select", "switch", "copy", "paste", "discard", "scroll")


@dataclass
class CycleResult:
    completed: bool
    steps: List[str] = field(default_factory=list)
    reason: str = ""
    files: List[str] = field(default_factory=list)
    copied_text: str = ""


@dataclass
class _CycleState:
    files: Sequence[str]
    first_file: Optional[str] = None
    copied_text: str = ""
    touched: List[str] = field(default_factory=list)


StepFn = Callable[[_CycleState], Awaitable[bool]]


class ActivitySequencer:
    """Runs the six-step activity cycle against an editor host.

    Each step returns False when the run gate closed at one of its
    checkpoints; the cycle then ends where it is without undoing anything.
    """

    def __init__(
        self,
        host: EditorHost,
        is_running: Callable[[], bool],
        *,
        scheduler: Optional[Scheduler] = None,
        rng: Any = None,
        options: Optional[BudgieOptions] = None,
        action_log: Optional[JsonActionLogger] = None,
    ) -> None:
        self._host = host
        self._is_running = is_running
        self._scheduler = scheduler or AsyncioScheduler()
        self._rng = rng if rng is not None else random.Random()
        self._options = options or BudgieOptions()
        self._action_log = action_log
        self._scroller = ScrollAnimator(
            self._scheduler,
            is_running,
            stride=self._options.scroll_stride,
            step_ms=self._options.timings.scroll_step_ms,
        )

    def _steps(self) -> Tuple[Tuple[str, StepFn], ...]:
        return (
            ("select", self._step_select),
            ("switch", self._step_switch),
            ("copy", self._step_copy),
            ("paste", self._step_paste),
            ("discard", self._step_discard),
            ("scroll", self._step_scroll),
        )

    async def run(self, files: Sequence[str]) -> int:
        """Repeat cycles while the gate is open; return the number of completed cycles."""
        cycles = 0
        while self._is_running():
            try:
                result = await self.run_cycle(files)
            except ExhaustedSelection:
                logger.debug("no files left to pick, leaving loop")
                break
            if not result.completed:
                logger.info("cycle aborted", extra={"steps": result.steps, "reason": result.reason})
                break
            cycles += 1
            logger.debug("cycle completed", extra={"cycle": cycles, "files": result.files})
        return cycles

    async def run_cycle(self, files: Sequence[str]) -> CycleResult:
        state = _CycleState(files=files)
        done: List[str] = []
        for name, step in self._steps():
            done.append(name)
            if not await step(state):
                return CycleResult(
                    completed=False,
                    steps=done,
                    reason="stopped",
                    files=list(state.touched),
                    copied_text=state.copied_text,
                )
        return CycleResult(completed=True, steps=done, files=list(state.touched), copied_text=state.copied_text)

    # --- helpers --------------------------------------------------------
    def _pick(self, files: Sequence[str], exclude: Optional[str] = None) -> str:
        picked = pick_random(files, exclude=exclude, rng=self._rng)
        if picked is None:
            raise ExhaustedSelection(details={"candidates": len(files)})
        return picked

    async def _open(self, state: _CycleState, path: str) -> Editor:
        editor = await self._host.open(path)
        state.touched.append(path)
        return editor

    def _select_window(self, editor: Editor, window: int) -> LineRange:
        line_range = pick_random_range(editor.line_count, window, rng=self._rng)
        editor.set_selection(line_range)
        editor.reveal(line_range)
        return line_range

    async def _hold(self, ms: int) -> bool:
        await self._scheduler.sleep_ms(ms)
        return self._is_running()

    def _record(self, step: str, **data: Any) -> None:
        logger.debug("step %s", step, extra={"step": step, **data})
        if self._action_log is not None:
            self._action_log.log("step", step=step, **data)

    # --- steps ----------------------------------------------------------
    async def _step_select(self, state: _CycleState) -> bool:
        path = self._pick(state.files)
        if not self._is_running():
            return False
        state.first_file = path
        editor = await self._open(state, path)
        line_range = self._select_window(editor, self._options.select_window)
        self._record("select", path=path, start=line_range.start, end=line_range.end)
        if not await self._hold(self._options.timings.select_hold_ms):
            return False
        editor.collapse_selection()
        return True

    async def _step_switch(self, state: _CycleState) -> bool:
        path = pick_random(state.files, exclude=state.first_file, rng=self._rng) or state.first_file
        if path is None:
            raise ExhaustedSelection()
        if not self._is_running():
            return False
        await self._open(state, path)
        self._record("switch", path=path, reused=path == state.first_file)
        return await self._hold(self._options.timings.switch_hold_ms)

    async def _step_copy(self, state: _CycleState) -> bool:
        path = self._pick(state.files)
        if not self._is_running():
            return False
        editor = await self._open(state, path)
        line_range = self._select_window(editor, self._options.copy_window)
        state.copied_text = editor.get_text(line_range)
        await self._host.write_clipboard(state.copied_text)
        self._record("copy", path=path, start=line_range.start, end=line_range.end, chars=len(state.copied_text))
        return await self._hold(self._options.timings.copy_hold_ms)

    async def _step_paste(self, state: _CycleState) -> bool:
        scratch = await self._host.open_untitled()
        await scratch.insert_text(0, 0, state.copied_text)
        self._record("paste", chars=len(state.copied_text))
        return await self._hold(self._options.timings.paste_hold_ms)

    async def _step_discard(self, state: _CycleState) -> bool:
        await self._host.close_active(discard=True)
        self._record("discard")
        return await self._hold(self._options.timings.discard_hold_ms)

    async def _step_scroll(self, state: _CycleState) -> bool:
        path = self._pick(state.files)
        if not self._is_running():
            return False
        editor = await self._open(state, path)
        reveals = await self._scroller.run(editor, self._options.timings.scroll_duration_ms)
        self._record("scroll", path=path, reveals=reveals)
        return True
