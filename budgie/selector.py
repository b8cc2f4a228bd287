"""Random picks over files and line windows.

Both helpers take an optional `rng` (anything with `randrange`, normally a
seeded `random.Random`) so callers and tests can make them reproducible.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Optional, Sequence, TypeVar


T = TypeVar("T")

_default_rng = random.Random()


@dataclass(frozen=True)
class LineRange:
    """Inclusive range of zero-based line indices."""

    start: int
    end: int
    is_empty: bool = False

    @classmethod
    def empty(cls) -> "LineRange":
        return cls(0, 0, is_empty=True)

    @property
    def line_count(self) -> int:
        if self.is_empty:
            return 0
        return self.end - self.start + 1


def pick_random(items: Sequence[T], exclude: Optional[T] = None, rng: Any = None) -> Optional[T]:
    """Return a uniformly random element of `items`, or None when nothing is left.

    The first item equal to `exclude` is dropped before picking. File
    snapshots hold unique paths, so that is the only match there.
    """
    r = rng if rng is not None else _default_rng
    available = list(items)
    if exclude is not None and exclude in available:
        available.remove(exclude)
    if not available:
        return None
    return available[r.randrange(len(available))]


def pick_random_range(total_lines: int, window_size: int, rng: Any = None) -> LineRange:
    """Pick a window of up to `window_size` lines inside a document of `total_lines`."""
    if window_size < 1:
        raise ValueError(f"window_size must be >= 1, got {window_size}")
    if total_lines < 0:
        raise ValueError(f"total_lines must be >= 0, got {total_lines}")
    if total_lines == 0:
        return LineRange.empty()

    r = rng if rng is not None else _default_rng
    max_start = max(0, total_lines - window_size)
    start = r.randrange(max_start + 1)
    end = min(start + window_size - 1, total_lines - 1)
    return LineRange(start, end)
