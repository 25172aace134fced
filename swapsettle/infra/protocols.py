"""Capability protocols the settlement predicate consumes from its host.

Domain code depends on these abstractions. The host ledger/runtime supplies
the implementations; ledger.transactions and infra.ed25519_adapter ship the
in-process ones.

Party checks are capability checks against an opaque identity: an input
answers "were you authorized by X", an output answers "who receives you".
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from swapsettle.core.identifiers import PubKeyHash, PublicKey


@runtime_checkable
class SignatureVerifier(Protocol):
    """Detached signature verification, trusted as correct and constant-time.

    verify() returns False for ANY failure (bad key, bad encoding, wrong
    signature). It never raises.
    """

    def verify(self, public_key: PublicKey, message: bytes, signature: str) -> bool: ...


@runtime_checkable
class InputView(Protocol):
    """A spent funding source: its amount and who authorized spending it."""

    @property
    def amount(self) -> int: ...

    def is_signed_by(self, party: PubKeyHash) -> bool: ...


@runtime_checkable
class OutputView(Protocol):
    """A payment destination. destination() is None for script-locked outputs."""

    @property
    def amount(self) -> int: ...

    def destination(self) -> PubKeyHash | None: ...


@runtime_checkable
class TransactionView(Protocol):
    """Read-only view of a proposed settlement transaction."""

    @property
    def inputs(self) -> Sequence[InputView]: ...

    @property
    def outputs(self) -> Sequence[OutputView]: ...
