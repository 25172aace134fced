"""Structural matching of a settlement transaction against the swap owners.

The validator runs once per spent margin input and cannot know which
party's input triggered it, so every check accepts either ordering:

    check_pair(a, b, p, q) = (p(a) and q(b)) or (p(b) and q(a))

A transaction without exactly two inputs and two outputs is malformed, not
rejected: require_pair() returns Err[TransactionShapeError].
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from swapsettle.core.errors import TransactionShapeError
from swapsettle.core.identifiers import PubKeyHash
from swapsettle.core.result import Err, Ok
from swapsettle.infra.protocols import InputView, OutputView, TransactionView
from swapsettle.instrument.swap import SwapOwners
from swapsettle.ledger.payments import PaymentSchedule

_SOURCE = "ledger.matching.require_pair"
_CARDINALITY_CODES = {"inputs": "INPUT_CARDINALITY", "outputs": "OUTPUT_CARDINALITY"}


def require_pair[T](items: Sequence[T], side: str) -> Ok[tuple[T, T]] | Err[TransactionShapeError]:
    """Destructure exactly two items, or fail hard."""
    if len(items) != 2:
        return Err(TransactionShapeError(
            message=f"settlement transaction must have exactly 2 {side}, got {len(items)}",
            code=_CARDINALITY_CODES[side],
            source=_SOURCE,
            side=side,
            expected=2,
            actual=len(items),
        ))
    first, second = items
    return Ok((first, second))


def check_pair[T](a: T, b: T, p: Callable[[T], bool], q: Callable[[T], bool]) -> bool:
    """True iff p and q hold for the pair in one order or the other."""
    return (p(a) and q(b)) or (p(b) and q(a))


# ---------------------------------------------------------------------------
# Inputs: each party spends exactly its margin
# ---------------------------------------------------------------------------


def is_leg_margin(inp: InputView, party: PubKeyHash, margin: int) -> bool:
    return inp.is_signed_by(party) and inp.amount == margin


def is_fixed_leg_margin(inp: InputView, owners: SwapOwners, margin: int) -> bool:
    return is_leg_margin(inp, owners.fixed_leg, margin)


def is_floating_leg_margin(inp: InputView, owners: SwapOwners, margin: int) -> bool:
    return is_leg_margin(inp, owners.floating_leg, margin)


def match_inputs(
    tx: TransactionView, owners: SwapOwners, margin: int,
) -> Ok[bool] | Err[TransactionShapeError]:
    """Both margins are spent, one by each party, in either order."""
    match require_pair(tx.inputs, "inputs"):
        case Err() as e:
            return e
        case Ok((t1, t2)):
            pass
    return Ok(check_pair(
        t1, t2,
        lambda i: is_fixed_leg_margin(i, owners, margin),
        lambda i: is_floating_leg_margin(i, owners, margin),
    ))


# ---------------------------------------------------------------------------
# Outputs: each party receives at most its remainder
# ---------------------------------------------------------------------------


def is_leg_payout(out: OutputView, party: PubKeyHash, remainder: int) -> bool:
    """Paid to party and not above remainder. Paying out less is tolerated."""
    return out.destination() == party and out.amount <= remainder


def is_fixed_leg_payout(out: OutputView, owners: SwapOwners, schedule: PaymentSchedule) -> bool:
    return is_leg_payout(out, owners.fixed_leg, schedule.fixed_remainder)


def is_floating_leg_payout(
    out: OutputView, owners: SwapOwners, schedule: PaymentSchedule,
) -> bool:
    return is_leg_payout(out, owners.floating_leg, schedule.float_remainder)


def match_outputs(
    tx: TransactionView, owners: SwapOwners, schedule: PaymentSchedule,
) -> Ok[bool] | Err[TransactionShapeError]:
    """One payout to each party within its remainder, in either order."""
    match require_pair(tx.outputs, "outputs"):
        case Err() as e:
            return e
        case Ok((o1, o2)):
            pass
    return Ok(check_pair(
        o1, o2,
        lambda o: is_fixed_leg_payout(o, owners, schedule),
        lambda o: is_floating_leg_payout(o, owners, schedule),
    ))
