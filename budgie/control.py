from __future__ import annotations

import time
from collections import deque
from typing import List, Optional

from .config import SafetyLimits

try:
    import pyautogui  # type: ignore
    pyautogui.FAILSAFE = True
    # Pacing comes from the activity loop's own pauses.
    pyautogui.PAUSE = 0
except Exception:
    pyautogui = None


class Controller:
    """Keyboard input with a per-minute action budget.

    Every method returns False instead of sending input when the backend is
    missing or the budget for the last minute is used up.
    """

    def __init__(self, limits: Optional[SafetyLimits] = None, type_interval: float = 0.01):
        self.limits = limits or SafetyLimits()
        self.type_interval = type_interval
        self._keys = 0
        self._window_t = time.time()
        self._action_times: deque = deque()

    @property
    def available(self) -> bool:
        return pyautogui is not None

    def _window_reset_if_needed(self) -> None:
        if time.time() - self._window_t > 60:
            self._window_t = time.time()
            self._keys = 0

    def _check_global_rate_limit(self) -> bool:
        cutoff = time.time() - 60.0
        while self._action_times and self._action_times[0] < cutoff:
            self._action_times.popleft()
        return len(self._action_times) < self.limits.max_total_actions_per_min

    def _allowed(self, key_cost: int) -> bool:
        self._window_reset_if_needed()
        if pyautogui is None:
            return False
        if self._keys + key_cost > self.limits.max_keys_per_min:
            return False
        return self._check_global_rate_limit()

    def _record(self, key_cost: int) -> None:
        self._keys += key_cost
        self._action_times.append(time.time())

    def press_keys(self, keys: List[str]) -> bool:
        """Press one key, or a chord when several are given."""
        if not keys or not self._allowed(len(keys)):
            return False
        if len(keys) == 1:
            pyautogui.press(keys[0])
        else:
            pyautogui.hotkey(*keys)
        self._record(len(keys))
        return True

    def type_text(self, text: str) -> bool:
        if not text:
            return True
        if not self._allowed(len(text)):
            return False
        # write() only types characters present on the keyboard layout
        pyautogui.write(text, interval=self.type_interval)
        self._record(len(text))
        return True
