from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass
class BudgieError(Exception):
    """Base error for budgie.

    `code` is a short machine-readable tag; `message` is for humans.
    """

    code: str = "error"
    message: str = ""
    details: Optional[Mapping[str, Any]] = None

    def __str__(self) -> str:  # pragma: no cover
        base = self.code
        if self.message:
            base += f": {self.message}"
        return base


@dataclass
class ExhaustedSelection(BudgieError):
    """No candidate file was left to pick from.

    Only reachable when the file snapshot was empty to begin with; the loop
    treats it as a silent stop.
    """

    code: str = "exhausted_selection"
    message: str = "no file available to pick"


@dataclass
class HostError(BudgieError):
    """Raised by a host when an editor operation cannot be carried out."""

    code: str = "host_error"
