from __future__ import annotations

import logging
from typing import Callable

from .interfaces import Editor
from .scheduler import Scheduler
from .selector import LineRange


logger = logging.getLogger("budgie.scroll")


class ScrollAnimator:
    """Scroll an editor up and down for a fixed time budget.

    The viewport is centred on a tracked line that moves `stride` lines per
    step, bouncing between the first and last line. The run gate and the
    deadline are checked once per step.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        is_running: Callable[[], bool],
        *,
        stride: int = 10,
        step_ms: int = 200,
    ) -> None:
        if stride < 1:
            raise ValueError("stride must be >= 1")
        self._scheduler = scheduler
        self._is_running = is_running
        self.stride = stride
        self.step_ms = step_ms

    async def run(self, editor: Editor, duration_ms: int) -> int:
        """Animate until the deadline passes or the gate closes; return the number of reveals."""
        last_line = max(0, editor.line_count - 1)
        deadline = self._scheduler.now() + duration_ms / 1000.0
        going_down = True
        current = 0
        reveals = 0

        while self._scheduler.now() < deadline and self._is_running():
            editor.reveal(LineRange(current, current))
            reveals += 1

            if going_down:
                current += self.stride
                if current >= last_line:
                    current = last_line
                    going_down = False
            else:
                current -= self.stride
                if current <= 0:
                    current = 0
                    going_down = True

            await self._scheduler.sleep_ms(self.step_ms)

        logger.debug("scroll finished", extra={"path": editor.path, "reveals": reveals})
        return reveals
