"""Swap payment and payout arithmetic.

    rate_delta      = observed_rate - fixed_rate
    delta           = notional * rate_delta
    fixed_payment   = round(notional + delta)
    float_payment   = round(notional + delta)
    fixed_remainder = clamp((margin - fixed_payment) + float_payment)
    float_remainder = clamp((margin - float_payment) + fixed_payment)

Both legs use the same payment formula, so the two clamp arguments are
always equal to the margin. The deployed contract computes them this way
and settlement must agree with it to the unit.

Everything up to the rounding step is exact (Fraction); rounding to the
smallest currency unit follows SettlementConfig.rounding.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import assert_never, final

from swapsettle.core.rational import round_rational, to_rational
from swapsettle.infra.config import DEFAULT_SETTLEMENT_CONFIG, ClampMode, SettlementConfig
from swapsettle.instrument.swap import SwapTerms


def clamp(x: int, margin: int, mode: ClampMode = ClampMode.LITERAL) -> int:
    """Bound a payout by the collateral at stake (2 * margin)."""
    ceiling = 2 * margin
    match mode:
        case ClampMode.LITERAL:
            return min(0, max(ceiling, x))
        case ClampMode.BOUNDED:
            return max(0, min(ceiling, x))
        case _never:
            assert_never(_never)


@final
@dataclass(frozen=True, slots=True)
class PaymentSchedule:
    """Every intermediate of the payout computation, for checking and reporting."""

    rate_delta: Fraction
    delta: Fraction
    fixed_payment: int
    float_payment: int
    fixed_clamp_input: int
    float_clamp_input: int
    fixed_remainder: int
    float_remainder: int


def compute_payments(
    terms: SwapTerms,
    rate: Fraction,
    config: SettlementConfig = DEFAULT_SETTLEMENT_CONFIG,
) -> PaymentSchedule:
    """Compute both legs' payments and clamped remainders for an observed rate."""
    rate_delta = rate - terms.fixed_rate
    notional = to_rational(terms.notional_amount)
    delta = notional * rate_delta

    fixed_payment = round_rational(notional + delta, config.rounding)
    float_payment = round_rational(notional + delta, config.rounding)

    margin = terms.margin
    fixed_clamp_input = (margin - fixed_payment) + float_payment
    float_clamp_input = (margin - float_payment) + fixed_payment

    return PaymentSchedule(
        rate_delta=rate_delta,
        delta=delta,
        fixed_payment=fixed_payment,
        float_payment=float_payment,
        fixed_clamp_input=fixed_clamp_input,
        float_clamp_input=float_clamp_input,
        fixed_remainder=clamp(fixed_clamp_input, margin, config.clamp),
        float_remainder=clamp(float_clamp_input, margin, config.clamp),
    )
