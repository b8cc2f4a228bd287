from __future__ import annotations

import argparse
import asyncio
import json
import logging
import random
from dataclasses import replace
from pathlib import Path

from budgie import START_COMMAND, STOP_COMMAND, BudgieOptions, activate
from budgie.config import StepTimings
from budgie.hosts.memory import MemoryHost


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _fast_options(speedup: float) -> BudgieOptions:
    base = StepTimings()
    scaled = StepTimings(**{k: max(1, int(v / speedup)) for k, v in vars(base).items()})
    return replace(BudgieOptions(), timings=scaled, action_log=None)


async def _demo(root: Path, seconds: float, speedup: float, seed: int) -> dict:
    host = MemoryHost(root=root)
    app = activate(host, _fast_options(speedup), rng=random.Random(seed))
    started = await app.commands.invoke(START_COMMAND)
    if not started.ok:
        return {"ok": False, "code": started.code}
    await asyncio.sleep(seconds)
    await app.commands.invoke(STOP_COMMAND)
    await app.controller.wait()
    app.deactivate()
    return {
        "ok": True,
        "cycles": app.controller.cycles_completed,
        "events": [list(e) for e in host.events],
        "open_tabs": [e.label for e in host.editors],
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Budgie demo against an in-memory editor (no side effects)")
    parser.add_argument("--root", type=str, default=".")
    parser.add_argument("--seconds", type=float, default=2.0)
    parser.add_argument("--speedup", type=float, default=20.0, help="Divide every pause by this factor")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    _setup_logging(args.verbose)
    out = asyncio.run(_demo(Path(args.root), args.seconds, args.speedup, args.seed))
    print(json.dumps(out, indent=2, sort_keys=True))
    return 0 if out["ok"] else 2


if __name__ == "__main__":
    raise SystemExit(main())
