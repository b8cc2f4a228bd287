from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .discovery import ALLOWED_EXTENSIONS, DEFAULT_EXCLUDE, DEFAULT_INCLUDE


CONFIG_FILENAME = "budgie.json"


@dataclass
class StepTimings:
    """Pauses (milliseconds) held at the end of each cycle step."""

    select_hold_ms: int = 2000
    switch_hold_ms: int = 3000
    copy_hold_ms: int = 500
    paste_hold_ms: int = 6000
    discard_hold_ms: int = 500
    scroll_duration_ms: int = 5000
    scroll_step_ms: int = 200


@dataclass
class SafetyLimits:
    max_keys_per_min: int = 2400
    max_total_actions_per_min: int = 1200


@dataclass
class BudgieOptions:
    timings: StepTimings = field(default_factory=StepTimings)
    select_window: int = 3
    copy_window: int = 5
    scroll_stride: int = 10
    include: str = DEFAULT_INCLUDE
    exclude: str = DEFAULT_EXCLUDE
    extensions: List[str] = field(default_factory=lambda: list(ALLOWED_EXTENSIONS))
    action_log: Optional[str] = "logs/budgie_actions.jsonl"
    limits: SafetyLimits = field(default_factory=SafetyLimits)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BudgieOptions":
        t_raw = data.get("timings") or {}
        defaults = StepTimings()
        timings = StepTimings(
            select_hold_ms=int(t_raw.get("select_hold_ms", defaults.select_hold_ms)),
            switch_hold_ms=int(t_raw.get("switch_hold_ms", defaults.switch_hold_ms)),
            copy_hold_ms=int(t_raw.get("copy_hold_ms", defaults.copy_hold_ms)),
            paste_hold_ms=int(t_raw.get("paste_hold_ms", defaults.paste_hold_ms)),
            discard_hold_ms=int(t_raw.get("discard_hold_ms", defaults.discard_hold_ms)),
            scroll_duration_ms=int(t_raw.get("scroll_duration_ms", defaults.scroll_duration_ms)),
            scroll_step_ms=int(t_raw.get("scroll_step_ms", defaults.scroll_step_ms)),
        )

        l_raw = data.get("limits") or {}
        limits = SafetyLimits(
            max_keys_per_min=int(l_raw.get("max_keys_per_min", SafetyLimits.max_keys_per_min)),
            max_total_actions_per_min=int(
                l_raw.get("max_total_actions_per_min", SafetyLimits.max_total_actions_per_min)
            ),
        )

        action_log = data.get("action_log", "logs/budgie_actions.jsonl")
        return cls(
            timings=timings,
            select_window=max(1, int(data.get("select_window", 3))),
            copy_window=max(1, int(data.get("copy_window", 5))),
            scroll_stride=max(1, int(data.get("scroll_stride", 10))),
            include=str(data.get("include", DEFAULT_INCLUDE)),
            exclude=str(data.get("exclude", DEFAULT_EXCLUDE)),
            extensions=[str(e).lower() for e in (data.get("extensions") or ALLOWED_EXTENSIONS)],
            action_log=str(action_log) if action_log else None,
            limits=limits,
        )

    @classmethod
    def load(cls, root: Optional[Path] = None, path: Optional[Path] = None) -> "BudgieOptions":
        """Load options from `path` or `<root>/config/budgie.json`.

        A missing or unreadable file yields the defaults.
        """
        base = Path(root) if root is not None else Path.cwd()
        cfg_path = Path(path) if path is not None else base / "config" / CONFIG_FILENAME
        data: Dict[str, Any] = {}
        try:
            if cfg_path.is_file():
                data = json.loads(cfg_path.read_text(encoding="utf-8")) or {}
        except Exception:
            data = {}
        if not isinstance(data, dict):
            data = {}
        return cls.from_dict(data)
