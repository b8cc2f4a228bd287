from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import Iterable, List, Sequence


ALLOWED_EXTENSIONS = (".ts", ".js", ".json", ".md", ".txt", ".html", ".css", ".tsx", ".jsx")

DEFAULT_INCLUDE = "**/*"
DEFAULT_EXCLUDE = "**/node_modules/**,**/.git/**,**/dist/**,**/out/**,**/*.vsix"


def split_globs(spec: str) -> List[str]:
    """Split a comma-separated glob list, dropping blanks."""
    return [p.strip() for p in (spec or "").split(",") if p.strip()]


def matches_any(rel_path: str, patterns: Sequence[str]) -> bool:
    """Match a posix relative path against glob patterns.

    The path is also tried with a leading slash so `**/dir/**` covers a
    top-level `dir/`.
    """
    candidates = (rel_path, "/" + rel_path)
    for pattern in patterns:
        for cand in candidates:
            if fnmatch.fnmatchcase(cand, pattern):
                return True
    return False


def filter_supported(paths: Iterable[str], extensions: Sequence[str] = ALLOWED_EXTENSIONS) -> List[str]:
    allowed = tuple(e.lower() for e in extensions)
    return [p for p in paths if str(p).lower().endswith(allowed)]


def scan_workspace(root: Path, include: str = DEFAULT_INCLUDE, exclude: str = DEFAULT_EXCLUDE) -> List[str]:
    """Return absolute paths of files under `root` matching include and not exclude."""
    base = Path(root).resolve()
    if not base.is_dir():
        return []
    includes = split_globs(include) or [DEFAULT_INCLUDE]
    excludes = split_globs(exclude)

    out: List[str] = []
    for p in base.rglob("*"):
        if not p.is_file():
            continue
        rel = p.relative_to(base).as_posix()
        if not matches_any(rel, includes):
            continue
        if excludes and matches_any(rel, excludes):
            continue
        out.append(str(p))
    return sorted(out)
