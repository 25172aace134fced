"""Swap settlement validator — does this transaction legally close out the swap?

evaluate() returns:
    Ok(True)   the transaction settles the contract
    Ok(False)  well-formed, but the margins or payouts do not match (soft reject)
    Err(...)   hard failure: bad oracle signature, wrong observation slot,
               or not exactly two inputs and two outputs

Steps, in order:
    1. authenticate the oracle observation, then require its slot to equal
       terms.observation_slot
    2-3. compute payments and clamped remainders (ledger.payments)
    4. require two inputs, each party spending exactly its margin
    5. require two outputs, each party receiving at most its remainder
    6. accept iff 4 and 5 both hold

Both cardinalities are checked before either pairing result is used, so a
malformed transaction always fails hard.

Trust assumption: there is no check that the observation slot lies after
contract start. The slot is part of the signed observation and the oracle
is trusted to stamp it.

The validator is pure: the host may run it once per spent margin input,
concurrently, and must get the same verdict each time.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import final

from swapsettle.core.errors import SettlementError, SignatureError, SlotMismatchError
from swapsettle.core.result import Err, Ok
from swapsettle.infra.config import DEFAULT_SETTLEMENT_CONFIG, SettlementConfig
from swapsettle.infra.ed25519_adapter import ED25519_VERIFIER
from swapsettle.infra.protocols import SignatureVerifier, TransactionView
from swapsettle.instrument.swap import SwapOwners, SwapTerms
from swapsettle.ledger.matching import match_inputs, match_outputs
from swapsettle.ledger.payments import PaymentSchedule, compute_payments
from swapsettle.oracle.observation import SignedObservation, verify_signed_observation


@final
@dataclass(frozen=True, slots=True)
class SettlementReport:
    """Everything evaluate() decided, for logging and dispute resolution."""

    rate: Fraction
    schedule: PaymentSchedule
    inputs_ok: bool
    outputs_ok: bool

    @property
    def accepted(self) -> bool:
        return self.inputs_ok and self.outputs_ok


def authenticate_rate(
    terms: SwapTerms,
    signed: SignedObservation,
    verifier: SignatureVerifier = ED25519_VERIFIER,
) -> Ok[Fraction] | Err[SignatureError | SlotMismatchError]:
    """Verify the oracle's signature and slot; return the observed rate."""
    match verify_signed_observation(terms.oracle, signed, verifier):
        case Err() as e:
            return e
        case Ok(obs):
            pass
    if obs.slot != terms.observation_slot:
        return Err(SlotMismatchError(
            message=(
                f"wrong slot: observation at {obs.slot.value}, "
                f"contract observes at {terms.observation_slot.value}"
            ),
            code="WRONG_SLOT",
            source="ledger.validator.authenticate_rate",
            expected=terms.observation_slot.value,
            actual=obs.slot.value,
        ))
    return Ok(obs.value)


def explain(
    terms: SwapTerms,
    owners: SwapOwners,
    observation: SignedObservation,
    tx: TransactionView,
    config: SettlementConfig = DEFAULT_SETTLEMENT_CONFIG,
    verifier: SignatureVerifier = ED25519_VERIFIER,
) -> Ok[SettlementReport] | Err[SettlementError]:
    """Run the full settlement check and report every intermediate."""
    match authenticate_rate(terms, observation, verifier):
        case Err() as e:
            return e
        case Ok(rate):
            pass

    schedule = compute_payments(terms, rate, config)

    match match_inputs(tx, owners, terms.margin):
        case Err() as e:
            return e
        case Ok(inputs_ok):
            pass
    match match_outputs(tx, owners, schedule):
        case Err() as e:
            return e
        case Ok(outputs_ok):
            pass

    return Ok(SettlementReport(
        rate=rate, schedule=schedule, inputs_ok=inputs_ok, outputs_ok=outputs_ok,
    ))


def evaluate(
    terms: SwapTerms,
    owners: SwapOwners,
    observation: SignedObservation,
    tx: TransactionView,
    config: SettlementConfig = DEFAULT_SETTLEMENT_CONFIG,
    verifier: SignatureVerifier = ED25519_VERIFIER,
) -> Ok[bool] | Err[SettlementError]:
    """Decide whether tx settles the swap. See module docstring."""
    return explain(terms, owners, observation, tx, config, verifier).map(
        lambda report: report.accepted,
    )


@final
@dataclass(frozen=True, slots=True)
class SettlementValidator:
    """A validator bound to one contract's terms.

    Holds no mutable state; one instance can serve every settlement attempt
    of the contract, from any thread.
    """

    terms: SwapTerms
    config: SettlementConfig = DEFAULT_SETTLEMENT_CONFIG
    verifier: SignatureVerifier = ED25519_VERIFIER

    def __call__(
        self, owners: SwapOwners, observation: SignedObservation, tx: TransactionView,
    ) -> Ok[bool] | Err[SettlementError]:
        return evaluate(self.terms, owners, observation, tx, self.config, self.verifier)

    def explain(
        self, owners: SwapOwners, observation: SignedObservation, tx: TransactionView,
    ) -> Ok[SettlementReport] | Err[SettlementError]:
        return explain(self.terms, owners, observation, tx, self.config, self.verifier)
