from __future__ import annotations

import json
import threading
import time
from collections import Counter
from pathlib import Path
from typing import Any, Dict


def _now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime()) + f".{int((time.time() % 1) * 1000):03d}"


class JsonActionLogger:
    """Append-only JSON-lines log of automation steps.

    One record per line: {"ts": ..., "event": ..., **data}. Writes are best
    effort; a failing disk never stops the activity loop.
    """

    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._counts: Counter = Counter()

    def log(self, event: str, **data: Any) -> None:
        rec: Dict[str, Any] = {
            "ts": _now_iso(),
            "event": event,
            **data,
        }
        line = json.dumps(rec, ensure_ascii=False, separators=(",", ":"), default=str)
        with self._lock:
            self._counts[event] += 1
            try:
                with open(self.file_path, "a", encoding="utf-8") as f:
                    f.write(line + "\n")
            except OSError:
                pass

    def event_counts(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)
