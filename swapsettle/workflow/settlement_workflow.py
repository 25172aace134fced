"""Durable workflow wrapping one settlement evaluation.

Steps: receive request -> evaluate_settlement activity -> outcome.

Determinism contract: this module contains NO I/O, NO randomness,
NO system clock access, NO mutable globals. The decision itself runs in
the activity.
"""

from __future__ import annotations

from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from swapsettle.infra.config import ActivityConfig
    from swapsettle.workflow.activities import evaluate_settlement
    from swapsettle.workflow.types import SettlementOutcome, SettlementRequest

EVALUATION_CONFIG = ActivityConfig()


def evaluation_retry(config: ActivityConfig = EVALUATION_CONFIG) -> RetryPolicy:
    return RetryPolicy(maximum_attempts=config.maximum_attempts)


def evaluation_timeout(config: ActivityConfig = EVALUATION_CONFIG) -> timedelta:
    return timedelta(seconds=config.start_to_close_timeout_s)


@workflow.defn(name="SwapSettlement")
class SwapSettlementWorkflow:
    """Evaluate one settlement attempt durably.

    Every request reaches exactly one SettlementOutcome.
    """

    def __init__(self) -> None:
        self._status: str = "RECEIVED"

    @workflow.query
    def get_status(self) -> str:
        """Current workflow phase."""
        return self._status

    @workflow.run
    async def run(self, req: SettlementRequest) -> SettlementOutcome:
        self._status = "EVALUATING"
        outcome = await workflow.execute_activity(
            evaluate_settlement,
            req,
            start_to_close_timeout=evaluation_timeout(),
            retry_policy=evaluation_retry(),
        )
        self._status = "ACCEPTED" if outcome.accepted else "REJECTED"
        return outcome
