"""Activity wrapper that hands a settlement attempt to the validator.

The activity is a thin IO boundary. All decision logic lives in
swapsettle.ledger.validator.

- Decorated with @activity.defn
- Takes a single frozen-dataclass input, returns a frozen-dataclass output
- Idempotent: same request -> same outcome, no side effects beyond logging
"""

from __future__ import annotations

from temporalio import activity

from swapsettle.core.result import Err, Ok
from swapsettle.ledger.validator import explain
from swapsettle.oracle.observation import SignedObservation
from swapsettle.workflow.types import SettlementOutcome, SettlementRequest, parse_request


@activity.defn(name="evaluate_settlement")
async def evaluate_settlement(req: SettlementRequest) -> SettlementOutcome:
    """Evaluate one settlement attempt.

    Timeout: 10s | Retries: none (deterministic, one-shot)
    """
    match parse_request(req):
        case Err(e):
            activity.logger.warning(
                "Rejecting malformed settlement request: %s (%d field violations)",
                e.message, len(e.fields),
            )
            return SettlementOutcome(accepted=False, error_code=e.code, error_message=e.message)
        case Ok(parsed):
            pass

    activity.logger.info(
        "Evaluating settlement for observation %s (%d inputs, %d outputs)",
        _short_hash(parsed.observation),
        len(parsed.tx.inputs),
        len(parsed.tx.outputs),
    )

    match explain(
        parsed.terms, parsed.owners, parsed.observation, parsed.tx, parsed.config,
    ):
        case Err(e):
            activity.logger.warning(
                "Settlement hard failure %s: %s", e.code, e.message,
            )
            return SettlementOutcome(accepted=False, error_code=e.code, error_message=e.message)
        case Ok(report):
            pass

    activity.logger.info(
        "Settlement verdict accepted=%s (inputs_ok=%s, outputs_ok=%s, "
        "fixed_remainder=%d, float_remainder=%d)",
        report.accepted,
        report.inputs_ok,
        report.outputs_ok,
        report.schedule.fixed_remainder,
        report.schedule.float_remainder,
    )
    return SettlementOutcome(
        accepted=report.accepted,
        fixed_remainder=report.schedule.fixed_remainder,
        float_remainder=report.schedule.float_remainder,
    )


def _short_hash(observation: SignedObservation) -> str:
    return observation.message_hash[:12]
