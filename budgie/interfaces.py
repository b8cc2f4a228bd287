from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from .selector import LineRange


class Editor(ABC):
    """A visible editor showing one document.

    Contract:
    - Line indices are zero-based.
    - A selection runs from column 0 of `range.start` to the end of
      `range.end`.
    - Only `insert_text` is a suspension point; the rest are immediate.
    """

    path: Optional[str]

    @property
    @abstractmethod
    def line_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def line_text(self, line: int) -> str:
        raise NotImplementedError

    @abstractmethod
    def set_selection(self, line_range: LineRange) -> None:
        raise NotImplementedError

    @abstractmethod
    def collapse_selection(self) -> None:
        """Collapse the selection to its active end (the cursor stays put)."""
        raise NotImplementedError

    @abstractmethod
    def reveal(self, line_range: LineRange) -> None:
        """Scroll so that `line_range` is centred in the viewport."""
        raise NotImplementedError

    def get_text(self, line_range: LineRange) -> str:
        if line_range.is_empty:
            return ""
        return "\n".join(self.line_text(i) for i in range(line_range.start, line_range.end + 1))

    @abstractmethod
    async def insert_text(self, line: int, column: int, text: str) -> None:
        raise NotImplementedError


class EditorHost(ABC):
    """Everything the core needs from the surrounding editor environment."""

    @abstractmethod
    def find_files(self, include: str, exclude: str) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    async def open(self, path: str) -> Editor:
        raise NotImplementedError

    @abstractmethod
    async def open_untitled(self) -> Editor:
        raise NotImplementedError

    @abstractmethod
    async def close_active(self, discard: bool = True) -> None:
        raise NotImplementedError

    @abstractmethod
    async def write_clipboard(self, text: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_info(self, message: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_warning(self, message: str) -> None:
        raise NotImplementedError
