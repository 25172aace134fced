"""Activity input/output types for the settlement boundary.

Wire types carry only JSON-native values (int, str, bool, lists) so the
default Temporal data converter handles them. Domain values are rebuilt
with smart constructors inside the activity (parse_request).

All types: @final @dataclass(frozen=True, slots=True).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import final

from swapsettle.core.errors import FieldViolation, ValidationError
from swapsettle.core.identifiers import PubKeyHash, PublicKey
from swapsettle.core.rational import RoundingMode, format_rational
from swapsettle.core.result import Err, Ok
from swapsettle.infra.config import ClampMode, SettlementConfig
from swapsettle.instrument.swap import SwapOwners, SwapTerms
from swapsettle.ledger.transactions import TxInfo, TxInInfo, TxOut
from swapsettle.oracle.observation import SignedObservation

_SOURCE = "workflow.types.parse_request"


@final
@dataclass(frozen=True, slots=True)
class InputSpec:
    amount: int
    signatories: list[str] = field(default_factory=list)


@final
@dataclass(frozen=True, slots=True)
class OutputSpec:
    amount: int
    pay_to: str | None = None


@final
@dataclass(frozen=True, slots=True)
class SettlementRequest:
    """One settlement attempt as submitted by the host."""

    notional_amount: int
    observation_slot: int
    fixed_rate: str  # "n/d"
    floating_rate: str  # "n/d"
    margin: int
    oracle_public_key: str
    fixed_leg: str
    floating_leg: str
    observation_public_key: str
    observation_signature: str
    observation_payload: str  # canonical JSON text of the Observation
    inputs: list[InputSpec] = field(default_factory=list)
    outputs: list[OutputSpec] = field(default_factory=list)
    rounding: str = RoundingMode.HALF_EVEN.value
    clamp: str = ClampMode.LITERAL.value

    @staticmethod
    def from_domain(
        terms: SwapTerms,
        owners: SwapOwners,
        observation: SignedObservation,
        tx: TxInfo,
        config: SettlementConfig | None = None,
    ) -> SettlementRequest:
        cfg = config or SettlementConfig()
        return SettlementRequest(
            notional_amount=terms.notional_amount,
            observation_slot=terms.observation_slot.value,
            fixed_rate=format_rational(terms.fixed_rate),
            floating_rate=format_rational(terms.floating_rate),
            margin=terms.margin,
            oracle_public_key=terms.oracle.value,
            fixed_leg=owners.fixed_leg.value,
            floating_leg=owners.floating_leg.value,
            observation_public_key=observation.public_key.value,
            observation_signature=observation.signature,
            observation_payload=observation.payload.decode("utf-8"),
            inputs=[
                InputSpec(amount=i.amount, signatories=sorted(s.value for s in i.signatories))
                for i in tx.inputs
            ],
            outputs=[
                OutputSpec(amount=o.amount, pay_to=o.pay_to.value if o.pay_to else None)
                for o in tx.outputs
            ],
            rounding=cfg.rounding.value,
            clamp=cfg.clamp.value,
        )


@final
@dataclass(frozen=True, slots=True)
class SettlementOutcome:
    """Verdict of evaluate_settlement.

    accepted is False both for a soft rejection and for a hard failure; the
    two are told apart by error_code (None for a clean verdict).
    """

    accepted: bool
    error_code: str | None = None
    error_message: str | None = None
    fixed_remainder: int | None = None
    float_remainder: int | None = None


@final
@dataclass(frozen=True, slots=True)
class ParsedRequest:
    terms: SwapTerms
    owners: SwapOwners
    observation: SignedObservation
    tx: TxInfo
    config: SettlementConfig


def _violation(path: str, constraint: str, actual: object) -> FieldViolation:
    return FieldViolation(path=path, constraint=constraint, actual_value=repr(actual))


def parse_request(req: SettlementRequest) -> Ok[ParsedRequest] | Err[ValidationError]:  # noqa: PLR0912
    """Rebuild domain values from a wire request, collecting every violation."""
    violations: list[FieldViolation] = []

    terms: SwapTerms | None = None
    match SwapTerms.create(
        req.notional_amount, req.observation_slot, req.fixed_rate,
        req.floating_rate, req.margin, req.oracle_public_key,
    ):
        case Err(e):
            violations.extend(e.fields)
        case Ok(t):
            terms = t

    owners: SwapOwners | None = None
    match SwapOwners.create(req.fixed_leg, req.floating_leg):
        case Err(e):
            violations.extend(e.fields)
        case Ok(o):
            owners = o

    observation: SignedObservation | None = None
    match PublicKey.parse(req.observation_public_key):
        case Err(e):
            violations.append(_violation("observation_public_key", e, req.observation_public_key))
        case Ok(k):
            observation = SignedObservation(
                public_key=k,
                signature=req.observation_signature,
                payload=req.observation_payload.encode("utf-8"),
            )

    inputs: list[TxInInfo] = []
    for n, spec in enumerate(req.inputs):
        signers: list[PubKeyHash] = []
        for raw in spec.signatories:
            match PubKeyHash.parse(raw):
                case Err(e):
                    violations.append(_violation(f"inputs[{n}].signatories", e, raw))
                case Ok(h):
                    signers.append(h)
        match TxInInfo.create(spec.amount, signers):
            case Err(e):
                violations.append(_violation(f"inputs[{n}].amount", e, spec.amount))
            case Ok(i):
                inputs.append(i)

    outputs: list[TxOut] = []
    for n, out_spec in enumerate(req.outputs):
        pay_to: PubKeyHash | None = None
        if out_spec.pay_to is not None:
            match PubKeyHash.parse(out_spec.pay_to):
                case Err(e):
                    violations.append(_violation(f"outputs[{n}].pay_to", e, out_spec.pay_to))
                case Ok(h):
                    pay_to = h
        match TxOut.create(out_spec.amount, pay_to):
            case Err(e):
                violations.append(_violation(f"outputs[{n}].amount", e, out_spec.amount))
            case Ok(o):
                outputs.append(o)

    try:
        config = SettlementConfig(
            rounding=RoundingMode(req.rounding), clamp=ClampMode(req.clamp),
        )
    except ValueError as e:
        violations.append(_violation("config", str(e), (req.rounding, req.clamp)))
        config = SettlementConfig()

    if violations or terms is None or owners is None or observation is None:
        return Err(ValidationError(
            message="SettlementRequest validation failed",
            code="INVALID_REQUEST",
            source=_SOURCE,
            fields=tuple(violations),
        ))
    return Ok(ParsedRequest(
        terms=terms,
        owners=owners,
        observation=observation,
        tx=TxInfo(inputs=tuple(inputs), outputs=tuple(outputs)),
        config=config,
    ))
