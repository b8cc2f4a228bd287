from __future__ import annotations

from pathlib import Path

from budgie.discovery import filter_supported, matches_any, scan_workspace, split_globs


def _touch(root: Path, rel: str) -> None:
    p = root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("x", encoding="utf-8")


def test_split_globs_drops_blanks() -> None:
    assert split_globs(" **/a/** , ,**/*.vsix") == ["**/a/**", "**/*.vsix"]


def test_matches_any_top_level_dir() -> None:
    assert matches_any("node_modules/pkg/index.js", ["**/node_modules/**"])
    assert matches_any("web/node_modules/pkg/index.js", ["**/node_modules/**"])
    assert not matches_any("src/index.js", ["**/node_modules/**"])


def test_filter_supported_is_case_insensitive_and_ordered() -> None:
    paths = ["b/README.MD", "a/logo.png", "c/app.TSX", "d/notes.txt", "e/archive.vsix"]
    assert filter_supported(paths) == ["b/README.MD", "c/app.TSX", "d/notes.txt"]


def test_scan_workspace_applies_default_excludes(tmp_path: Path) -> None:
    for rel in [
        "src/app.ts",
        "README.md",
        "node_modules/lib/index.js",
        ".git/config",
        "dist/bundle.js",
        "out/main.js",
        "budgie-0.1.0.vsix",
        "assets/logo.png",
    ]:
        _touch(tmp_path, rel)

    found = [Path(p).relative_to(tmp_path.resolve()).as_posix() for p in scan_workspace(tmp_path)]
    assert found == ["README.md", "assets/logo.png", "src/app.ts"]


def test_scan_workspace_missing_root(tmp_path: Path) -> None:
    assert scan_workspace(tmp_path / "nope") == []
