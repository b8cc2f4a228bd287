from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .commands import START_COMMAND, STOP_COMMAND, CommandRegistry
from .config import BudgieOptions
from .controller import RunController
from .interfaces import EditorHost
from .jsonlog import JsonActionLogger
from .scheduler import Scheduler


logger = logging.getLogger("budgie.app")


@dataclass
class Budgie:
    controller: RunController
    commands: CommandRegistry

    def deactivate(self) -> None:
        self.controller.shutdown()


def activate(
    host: EditorHost,
    options: Optional[BudgieOptions] = None,
    *,
    scheduler: Optional[Scheduler] = None,
    rng: Any = None,
    action_log: Optional[JsonActionLogger] = None,
) -> Budgie:
    """Wire a controller to `host` and register the start/stop commands."""
    controller = RunController(
        host,
        options=options,
        scheduler=scheduler,
        rng=rng,
        action_log=action_log,
    )
    commands = CommandRegistry()
    commands.register(START_COMMAND, controller.start)
    commands.register(STOP_COMMAND, controller.stop)
    logger.info("budgie active", extra={"commands": commands.names()})
    return Budgie(controller=controller, commands=commands)
