from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from .config import BudgieOptions
from .discovery import filter_supported
from .interfaces import EditorHost
from .jsonlog import JsonActionLogger
from .scheduler import Scheduler
from .sequencer import ActivitySequencer


logger = logging.getLogger("budgie.controller")


class RunState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass
class CommandResult:
    ok: bool
    code: str
    message: str = ""


class RunController:
    """Owns the running/stopped state and the background activity task.

    start() and stop() are meant to be called from the event loop thread;
    the loop re-reads the state at each checkpoint, so no locking is needed.
    """

    def __init__(
        self,
        host: EditorHost,
        *,
        options: Optional[BudgieOptions] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Any = None,
        action_log: Optional[JsonActionLogger] = None,
    ) -> None:
        self._host = host
        self._options = options or BudgieOptions()
        self._state = RunState.STOPPED
        self._files: Tuple[str, ...] = ()
        self._task: Optional[asyncio.Task] = None
        self._generation = 0
        self._scheduler = scheduler
        self._rng = rng
        self._action_log = action_log
        self.sequencer: Optional[ActivitySequencer] = None
        self.cycles_completed = 0

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def files(self) -> Tuple[str, ...]:
        return self._files

    def is_running(self) -> bool:
        return self._state is RunState.RUNNING

    def start(self) -> CommandResult:
        """Snapshot the workspace files and launch the activity loop in the background."""
        if self.is_running():
            msg = "Budgie is already running!"
            self._host.show_info(msg)
            return CommandResult(ok=False, code="already_running", message=msg)

        # Raises RuntimeError outside an event loop, before any state changes.
        loop = asyncio.get_running_loop()

        found = self._host.find_files(self._options.include, self._options.exclude)
        files = tuple(filter_supported(found, self._options.extensions))
        if not files:
            msg = "No files found in workspace"
            logger.warning("start refused: empty workspace", extra={"candidates": len(found)})
            self._host.show_warning(msg)
            return CommandResult(ok=False, code="empty_workspace", message=msg)

        self._files = files
        self._state = RunState.RUNNING
        self._log_state("start", files=len(files))
        msg = 'Budgie started! Use "Budgie: Stop" to stop.'
        self._host.show_info(msg)
        self._generation += 1
        self.sequencer = self._make_sequencer(self._generation)
        previous = self._task
        if previous is not None:
            previous.add_done_callback(_retrieve_outcome)
        self._task = loop.create_task(self._run(self.sequencer, files, self._generation))
        return CommandResult(ok=True, code="started", message=msg)

    def stop(self) -> CommandResult:
        if not self.is_running():
            msg = "Budgie is not running."
            self._host.show_info(msg)
            return CommandResult(ok=False, code="already_stopped", message=msg)
        self._state = RunState.STOPPED
        self._log_state("stop")
        msg = "Budgie stopped!"
        self._host.show_info(msg)
        return CommandResult(ok=True, code="stopped", message=msg)

    def shutdown(self) -> None:
        """Force the stopped state, whatever it was."""
        if self._state is not RunState.STOPPED:
            self._log_state("shutdown")
        self._state = RunState.STOPPED

    async def wait(self) -> None:
        """Wait for the background loop to finish; re-raises a loop failure."""
        task = self._task
        if task is None:
            return
        await task

    def _make_sequencer(self, generation: int) -> ActivitySequencer:
        # A loop left over from an earlier run must not resume after a quick stop/start.
        def gate() -> bool:
            return self._generation == generation and self.is_running()

        return ActivitySequencer(
            self._host,
            gate,
            scheduler=self._scheduler,
            rng=self._rng,
            options=self._options,
            action_log=self._action_log,
        )

    async def _run(self, sequencer: ActivitySequencer, files: Tuple[str, ...], generation: int) -> None:
        try:
            cycles = await sequencer.run(files)
        except Exception:
            logger.exception("activity loop crashed")
            raise
        else:
            self.cycles_completed += cycles
            logger.info("activity loop ended", extra={"cycles": cycles, "state": self._state.value})
        finally:
            # Covers crashes, cancellation and running out of files.
            if self._generation == generation and self._state is RunState.RUNNING:
                self._state = RunState.STOPPED

    def _log_state(self, event: str, **data: Any) -> None:
        logger.info("budgie %s", event, extra=data)
        if self._action_log is not None:
            self._action_log.log(event, **data)


def _retrieve_outcome(task: "asyncio.Task") -> None:
    # A superseded run is never awaited; its failure was already logged by _run.
    if not task.cancelled():
        task.exception()
