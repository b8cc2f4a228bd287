from __future__ import annotations

import argparse
import asyncio
import json
import logging
import random
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console

from .app import activate
from .commands import START_COMMAND, STOP_COMMAND
from .config import BudgieOptions
from .control import Controller
from .interfaces import EditorHost
from .jsonlog import JsonActionLogger


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")


def _resolve_under(root: Path, path: str) -> Path:
    p = Path(path)
    return p if p.is_absolute() else root / p


def _load_options(root: Path, config: Optional[str]) -> BudgieOptions:
    if not config:
        return BudgieOptions.load(root)
    path = Path(config)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:
        raise SystemExit(f"Invalid JSON config: {path} ({exc})")
    if not isinstance(raw, dict):
        raise SystemExit(f"Invalid JSON config: {path} (expected an object)")
    return BudgieOptions.from_dict(raw)


def _build_host(root: Path, options: BudgieOptions, live: bool, console: Console) -> EditorHost:
    if live:
        from .hosts.keyboard import KeyboardHost

        return KeyboardHost(root, controller=Controller(options.limits), console=console)
    from .hosts.memory import MemoryHost

    return MemoryHost(root=root, console=console)


async def _run(
    host: EditorHost,
    options: BudgieOptions,
    *,
    rng: Any,
    action_log: Optional[JsonActionLogger],
    duration_s: float,
) -> Dict[str, Any]:
    app = activate(host, options, rng=rng, action_log=action_log)
    started = await app.commands.invoke(START_COMMAND)
    if not started.ok:
        return {"ok": False, "code": started.code, "cycles": 0}
    try:
        if duration_s > 0:
            await asyncio.sleep(duration_s)
        else:
            await app.controller.wait()
    finally:
        if app.controller.is_running():
            await app.commands.invoke(STOP_COMMAND)
        app.deactivate()
    await app.controller.wait()
    return {
        "ok": True,
        "code": "stopped",
        "cycles": app.controller.cycles_completed,
        "files": len(app.controller.files),
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Budgie: look busy in your editor (dry-run by default)")
    parser.add_argument("--root", type=str, default=".", help="Workspace folder to pick files from")
    parser.add_argument("--config", type=str, default=None, help="JSON options file (default: <root>/config/budgie.json)")
    parser.add_argument("--duration-s", type=float, default=0.0, help="Stop after this many seconds (0 = until Ctrl+C)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible picks")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Force dry-run mode (safe). This is already the default unless --live is set.",
    )
    parser.add_argument("--live", action="store_true", help="Drive the focused VS Code window with real keystrokes")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    if args.live and args.dry_run:
        raise SystemExit("Invalid flags: --live and --dry-run are mutually exclusive")

    _setup_logging(args.verbose)

    root = Path(args.root)
    options = _load_options(root, args.config)
    console = Console()
    host = _build_host(root, options, bool(args.live), console)
    action_log = JsonActionLogger(_resolve_under(root, options.action_log)) if options.action_log else None
    rng = random.Random(args.seed) if args.seed is not None else None

    try:
        out = asyncio.run(_run(host, options, rng=rng, action_log=action_log, duration_s=args.duration_s))
    except KeyboardInterrupt:
        console.print("[yellow]Interrupted.[/yellow]")
        return 130

    out["dry_run"] = not args.live
    if action_log is not None:
        out["events"] = action_log.event_counts()
    print(json.dumps(out, indent=2, sort_keys=True))
    return 0 if out["ok"] else 2


if __name__ == "__main__":
    raise SystemExit(main())
