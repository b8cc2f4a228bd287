from __future__ import annotations

import asyncio
import random
from typing import Callable, List, Optional

import pytest

from budgie.scheduler import Scheduler


class FakeScheduler(Scheduler):
    """Virtual clock: sleeping advances time instantly.

    Time is kept in whole milliseconds so deadline comparisons are exact.
    `on_sleep` runs after every sleep, which lets tests flip the run gate at
    a precise checkpoint.
    """

    def __init__(self) -> None:
        self.ms = 0
        self.sleeps: List[float] = []
        self.on_sleep: Optional[Callable[["FakeScheduler"], None]] = None

    def now(self) -> float:
        return self.ms / 1000

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.ms += int(round(seconds * 1000))
        if self.on_sleep is not None:
            self.on_sleep(self)
        await asyncio.sleep(0)


class Gate:
    def __init__(self, running: bool = True) -> None:
        self.running = running

    def __call__(self) -> bool:
        return self.running


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def gate() -> Gate:
    return Gate()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


def numbered(n: int, prefix: str = "line") -> str:
    return "\n".join(f"{prefix} {i}" for i in range(n))
