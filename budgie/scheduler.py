from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod


class Scheduler(ABC):
    """Source of time and suspension points for the activity loop."""

    @abstractmethod
    def now(self) -> float:
        """Monotonic time in seconds."""
        raise NotImplementedError

    @abstractmethod
    async def sleep(self, seconds: float) -> None:
        raise NotImplementedError

    async def sleep_ms(self, ms: int) -> None:
        await self.sleep(max(ms, 0) / 1000.0)


class AsyncioScheduler(Scheduler):
    """Real-time scheduler backed by the running event loop."""

    def now(self) -> float:
        return asyncio.get_running_loop().time()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(max(seconds, 0.0))
