"""Core types: Slot (logical ledger time)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

from swapsettle.core.result import Err, Ok


@final
@dataclass(frozen=True, slots=True, order=True)
class Slot:
    """A point on the ledger's logical clock. Exact equality, no wall-clock meaning."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Slot requires int, got {type(self.value).__name__}")
        if self.value < 0:
            raise TypeError(f"Slot requires >= 0, got {self.value}")

    @staticmethod
    def parse(raw: int) -> Ok[Slot] | Err[str]:
        if isinstance(raw, bool) or not isinstance(raw, int):
            return Err(f"Slot requires int, got {type(raw).__name__}")
        if raw < 0:
            return Err(f"Slot requires >= 0, got {raw}")
        return Ok(Slot(value=raw))
