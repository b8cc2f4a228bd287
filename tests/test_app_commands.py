from __future__ import annotations

import asyncio
import random

import pytest

from budgie import START_COMMAND, STOP_COMMAND, CommandRegistry, RunState, activate
from budgie.hosts.memory import MemoryHost

from conftest import FakeScheduler, numbered


def test_registry_rejects_duplicates_and_empty_names() -> None:
    reg = CommandRegistry()
    reg.register("x", lambda: 1)
    with pytest.raises(ValueError):
        reg.register("x", lambda: 2)
    with pytest.raises(ValueError):
        reg.register("", lambda: 3)


def test_registry_invoke_awaits_coroutines() -> None:
    reg = CommandRegistry()

    async def coro() -> str:
        return "async"

    reg.register("sync", lambda: "sync")
    reg.register("async", coro)

    assert asyncio.run(reg.invoke("sync")) == "sync"
    assert asyncio.run(reg.invoke("async")) == "async"


def test_registry_unknown_command() -> None:
    with pytest.raises(KeyError):
        asyncio.run(CommandRegistry().invoke("nope"))


def test_activate_registers_start_and_stop(scheduler: FakeScheduler) -> None:
    host = MemoryHost(documents={"a.ts": numbered(30), "b.ts": numbered(30)})
    app = activate(host, scheduler=scheduler, rng=random.Random(2))

    assert app.commands.names() == [START_COMMAND, STOP_COMMAND]

    async def scenario() -> None:
        started = await app.commands.invoke(START_COMMAND)
        assert started.code == "started"
        stopped = await app.commands.invoke(STOP_COMMAND)
        assert stopped.code == "stopped"
        again = await app.commands.invoke(STOP_COMMAND)
        assert again.code == "already_stopped"
        await app.controller.wait()

    asyncio.run(scenario())

    assert [m for _, m in host.messages] == [
        'Budgie started! Use "Budgie: Stop" to stop.',
        "Budgie stopped!",
        "Budgie is not running.",
    ]


def test_deactivate_forces_stopped(scheduler: FakeScheduler) -> None:
    host = MemoryHost(documents={"a.ts": numbered(30)})
    app = activate(host, scheduler=scheduler)

    async def scenario() -> None:
        await app.commands.invoke(START_COMMAND)
        app.deactivate()
        await app.controller.wait()

    asyncio.run(scenario())
    assert app.controller.state is RunState.STOPPED
