"""Error value hierarchy — no domain function raises exceptions.

Every error is a frozen dataclass value that can be pattern-matched and
serialized. Errors carry no wall-clock timestamp: evaluating the same
settlement twice must yield equal values, failures included.

Settlement hard failures are SignatureError, SlotMismatchError and
TransactionShapeError. A clean rejection is never an error; it is Ok(False).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import final


@dataclass(frozen=True, slots=True)
class SwapError:
    """Base error value. NOT @final — has subclasses."""

    message: str
    code: str
    source: str  # "module.function" that produced this error

    def with_context(self, context: str) -> SwapError:
        """Return a copy with context prepended to message."""
        return replace(self, message=f"{context}: {self.message}")

    def to_dict(self) -> dict[str, object]:
        """Serialize to dict with stable keys."""
        return {
            "message": self.message,
            "code": self.code,
            "source": self.source,
        }


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """Describes a single field validation failure."""

    path: str  # e.g. "terms.margin"
    constraint: str  # e.g. "must be >= 0"
    actual_value: str


@final
@dataclass(frozen=True, slots=True)
class ValidationError(SwapError):
    """One or more fields failed validation at construction time."""

    fields: tuple[FieldViolation, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            **SwapError.to_dict(self),
            "fields": [
                {"path": f.path, "constraint": f.constraint, "actual_value": f.actual_value}
                for f in self.fields
            ],
        }


# ---------------------------------------------------------------------------
# Settlement hard failures
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class SignatureError(SwapError):
    """The oracle observation failed signature verification or decoding."""

    reason: str

    def to_dict(self) -> dict[str, object]:
        return {**SwapError.to_dict(self), "reason": self.reason}


@final
@dataclass(frozen=True, slots=True)
class SlotMismatchError(SwapError):
    """The observation was stamped at a slot other than the contract's."""

    expected: int
    actual: int

    def to_dict(self) -> dict[str, object]:
        return {**SwapError.to_dict(self), "expected": self.expected, "actual": self.actual}


@final
@dataclass(frozen=True, slots=True)
class TransactionShapeError(SwapError):
    """The transaction does not have exactly two inputs or two outputs."""

    side: str  # "inputs" | "outputs"
    expected: int
    actual: int

    def to_dict(self) -> dict[str, object]:
        return {
            **SwapError.to_dict(self),
            "side": self.side,
            "expected": self.expected,
            "actual": self.actual,
        }


type SettlementError = SignatureError | SlotMismatchError | TransactionShapeError
