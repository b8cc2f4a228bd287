from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, List


START_COMMAND = "budgie.startRandomFiles"
STOP_COMMAND = "budgie.stopRandomFiles"

Handler = Callable[[], Any]


class CommandRegistry:
    """Named commands the outside world can invoke.

    Handlers may be plain callables or coroutine functions.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}

    def register(self, name: str, handler: Handler) -> None:
        if not name:
            raise ValueError("name must be non-empty")
        if name in self._handlers:
            raise ValueError(f"command already registered: {name}")
        self._handlers[name] = handler

    def names(self) -> List[str]:
        return sorted(self._handlers)

    async def invoke(self, name: str) -> Any:
        try:
            handler = self._handlers[name]
        except KeyError as exc:
            raise KeyError(f"unknown command: {name}") from exc
        result = handler()
        if inspect.isawaitable(result):
            result = await result
        return result
