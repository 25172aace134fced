"""Interest-rate swap contract data: SwapTerms and SwapOwners.

SwapTerms are fixed when the contract is created and never change.
SwapOwners (who holds each leg) may be reassigned over the contract's life
when a party sells its position; reassignment returns a new record and is
never performed by the settlement validator.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from fractions import Fraction
from typing import final

from swapsettle.core.errors import FieldViolation, ValidationError
from swapsettle.core.identifiers import PubKeyHash, PublicKey
from swapsettle.core.rational import parse_rational
from swapsettle.core.result import Err, Ok
from swapsettle.core.types import Slot


def _non_negative_int(
    raw: object, path: str, violations: list[FieldViolation],
) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        violations.append(FieldViolation(
            path=path, constraint="must be int", actual_value=repr(raw),
        ))
        return 0
    if raw < 0:
        violations.append(FieldViolation(
            path=path, constraint="must be >= 0", actual_value=str(raw),
        ))
    return raw


def _rational(raw: object, path: str, violations: list[FieldViolation]) -> Fraction:
    match parse_rational(raw):
        case Err(e):
            violations.append(FieldViolation(path=path, constraint=e, actual_value=repr(raw)))
            return Fraction(0)
        case Ok(r):
            return r


@final
@dataclass(frozen=True, slots=True)
class SwapTerms:
    """Immutable swap parameters.

    notional_amount: principal in the smallest currency unit, never transferred.
    observation_slot: the slot at which the oracle must observe the rate.
    fixed_rate: rate agreed at contract start.
    floating_rate: contractual placeholder only; settlement uses the observed rate.
    margin: collateral each party posts; bounds the payout swing.
    oracle: key the rate observation must be signed with.
    """

    notional_amount: int
    observation_slot: Slot
    fixed_rate: Fraction
    floating_rate: Fraction
    margin: int
    oracle: PublicKey

    def __post_init__(self) -> None:
        for name in ("notional_amount", "margin"):
            amount = getattr(self, name)
            if isinstance(amount, bool) or not isinstance(amount, int):
                raise TypeError(f"SwapTerms.{name} requires int, got {type(amount).__name__}")
            if amount < 0:
                raise TypeError(f"SwapTerms.{name} must be >= 0, got {amount}")
        for name in ("fixed_rate", "floating_rate"):
            if not isinstance(getattr(self, name), Fraction):
                raise TypeError(f"SwapTerms.{name} must be Fraction")

    @staticmethod
    def create(
        notional_amount: int,
        observation_slot: int,
        fixed_rate: object,
        floating_rate: object,
        margin: int,
        oracle: str,
    ) -> Ok[SwapTerms] | Err[ValidationError]:
        violations: list[FieldViolation] = []
        notional = _non_negative_int(notional_amount, "notional_amount", violations)
        mgn = _non_negative_int(margin, "margin", violations)
        fixed = _rational(fixed_rate, "fixed_rate", violations)
        floating = _rational(floating_rate, "floating_rate", violations)
        slot: Slot | None = None
        match Slot.parse(observation_slot):
            case Err(e):
                violations.append(FieldViolation(
                    path="observation_slot", constraint=e, actual_value=repr(observation_slot),
                ))
            case Ok(s):
                slot = s
        key: PublicKey | None = None
        match PublicKey.parse(oracle):
            case Err(e):
                violations.append(FieldViolation(
                    path="oracle", constraint=e, actual_value=repr(oracle),
                ))
            case Ok(k):
                key = k
        if violations or slot is None or key is None:
            return Err(ValidationError(
                message="SwapTerms validation failed",
                code="SWAP_TERMS_VALIDATION",
                source="instrument.swap.SwapTerms.create",
                fields=tuple(violations),
            ))
        return Ok(SwapTerms(
            notional_amount=notional,
            observation_slot=slot,
            fixed_rate=fixed,
            floating_rate=floating,
            margin=mgn,
            oracle=key,
        ))


@final
@dataclass(frozen=True, slots=True)
class SwapOwners:
    """Current holders of the fixed and floating legs. Always distinct."""

    fixed_leg: PubKeyHash
    floating_leg: PubKeyHash

    def __post_init__(self) -> None:
        if self.fixed_leg == self.floating_leg:
            raise TypeError(
                f"SwapOwners: fixed and floating leg must differ, both are {self.fixed_leg.value!r}"
            )

    @staticmethod
    def create(fixed_leg: str, floating_leg: str) -> Ok[SwapOwners] | Err[ValidationError]:
        violations: list[FieldViolation] = []
        parsed: dict[str, PubKeyHash] = {}
        for path, raw in (("fixed_leg", fixed_leg), ("floating_leg", floating_leg)):
            match PubKeyHash.parse(raw):
                case Err(e):
                    violations.append(FieldViolation(path=path, constraint=e, actual_value=repr(raw)))
                case Ok(h):
                    parsed[path] = h
        if not violations and parsed["fixed_leg"] == parsed["floating_leg"]:
            violations.append(FieldViolation(
                path="floating_leg", constraint="must differ from fixed_leg",
                actual_value=floating_leg,
            ))
        if violations:
            return Err(ValidationError(
                message="SwapOwners validation failed",
                code="SWAP_OWNERS_VALIDATION",
                source="instrument.swap.SwapOwners.create",
                fields=tuple(violations),
            ))
        return Ok(SwapOwners(fixed_leg=parsed["fixed_leg"], floating_leg=parsed["floating_leg"]))

    def transfer_fixed_leg(self, new_owner: PubKeyHash) -> Ok[SwapOwners] | Err[str]:
        """Reassign the fixed leg to a new holder."""
        if new_owner == self.floating_leg:
            return Err("transfer_fixed_leg: new owner already holds the floating leg")
        return Ok(replace(self, fixed_leg=new_owner))

    def transfer_floating_leg(self, new_owner: PubKeyHash) -> Ok[SwapOwners] | Err[str]:
        """Reassign the floating leg to a new holder."""
        if new_owner == self.fixed_leg:
            return Err("transfer_floating_leg: new owner already holds the fixed leg")
        return Ok(replace(self, floating_leg=new_owner))
