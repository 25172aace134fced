"""In-process transaction context: TxInInfo, TxOut, TxInfo.

These structurally implement infra.protocols.InputView / OutputView /
TransactionView. Hosts with their own transaction model can pass any
object satisfying the protocols instead.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import final

from swapsettle.core.identifiers import PubKeyHash
from swapsettle.core.result import Err, Ok


def _check_amount(amount: object, owner: str) -> Err[str] | None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        return Err(f"{owner}.amount must be int, got {type(amount).__name__}")
    if amount < 0:
        return Err(f"{owner}.amount must be >= 0, got {amount}")
    return None


@final
@dataclass(frozen=True, slots=True)
class TxInInfo:
    """A spent input: amount in the smallest unit and the parties who authorized it."""

    amount: int
    signatories: frozenset[PubKeyHash]

    @staticmethod
    def create(amount: int, signatories: Iterable[PubKeyHash] = ()) -> Ok[TxInInfo] | Err[str]:
        if (err := _check_amount(amount, "TxInInfo")) is not None:
            return err
        return Ok(TxInInfo(amount=amount, signatories=frozenset(signatories)))

    def is_signed_by(self, party: PubKeyHash) -> bool:
        return party in self.signatories


@final
@dataclass(frozen=True, slots=True)
class TxOut:
    """A payment output. pay_to is None when the output is locked by a script."""

    amount: int
    pay_to: PubKeyHash | None

    @staticmethod
    def create(amount: int, pay_to: PubKeyHash | None) -> Ok[TxOut] | Err[str]:
        if (err := _check_amount(amount, "TxOut")) is not None:
            return err
        return Ok(TxOut(amount=amount, pay_to=pay_to))

    def destination(self) -> PubKeyHash | None:
        return self.pay_to


@final
@dataclass(frozen=True, slots=True)
class TxInfo:
    """Ordered inputs and outputs of a proposed transaction."""

    inputs: tuple[TxInInfo, ...]
    outputs: tuple[TxOut, ...]

    def swapped_inputs(self) -> TxInfo:
        """Same transaction with the input order reversed."""
        return replace(self, inputs=tuple(reversed(self.inputs)))

    def swapped_outputs(self) -> TxInfo:
        """Same transaction with the output order reversed."""
        return replace(self, outputs=tuple(reversed(self.outputs)))
