from .app import Budgie, activate
from .commands import START_COMMAND, STOP_COMMAND, CommandRegistry
from .config import BudgieOptions
from .controller import CommandResult, RunController, RunState
from .errors import BudgieError, ExhaustedSelection, HostError
from .selector import LineRange, pick_random, pick_random_range

__all__ = [
    "Budgie",
    "BudgieError",
    "BudgieOptions",
    "CommandRegistry",
    "CommandResult",
    "ExhaustedSelection",
    "HostError",
    "LineRange",
    "RunController",
    "RunState",
    "START_COMMAND",
    "STOP_COMMAND",
    "activate",
    "pick_random",
    "pick_random_range",
]
