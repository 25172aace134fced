"""Tests for the evaluate_settlement activity and the settlement workflow wiring.

Activities run under temporalio.testing.ActivityEnvironment; no server needed.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import timedelta
from fractions import Fraction

import pytest
from temporalio.testing import ActivityEnvironment

from swapsettle.core.types import Slot
from swapsettle.infra.config import TASK_QUEUE, ActivityConfig, ClampMode, SettlementConfig
from swapsettle.infra.ed25519_adapter import OracleSigningKey
from swapsettle.instrument.swap import SwapOwners, SwapTerms
from swapsettle.ledger.transactions import TxInfo, TxInInfo, TxOut
from swapsettle.oracle.observation import Observation, sign_observation
from swapsettle.workflow.activities import evaluate_settlement
from swapsettle.workflow.settlement_workflow import (
    SwapSettlementWorkflow,
    evaluation_retry,
    evaluation_timeout,
)
from swapsettle.workflow.types import SettlementOutcome, SettlementRequest

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _request(
    terms: SwapTerms,
    owners: SwapOwners,
    key: OracleSigningKey,
    *,
    slot: int = 42,
    payout: int = 0,
    config: SettlementConfig | None = None,
) -> SettlementRequest:
    obs = sign_observation(key, Observation(value=Fraction(3, 40), slot=Slot(value=slot)))
    tx = TxInfo(
        inputs=(
            TxInInfo(amount=100_000, signatories=frozenset({owners.floating_leg})),
            TxInInfo(amount=100_000, signatories=frozenset({owners.fixed_leg})),
        ),
        outputs=(
            TxOut(amount=payout, pay_to=owners.fixed_leg),
            TxOut(amount=payout, pay_to=owners.floating_leg),
        ),
    )
    return SettlementRequest.from_domain(terms, owners, obs, tx, config)


async def _run(req: SettlementRequest) -> SettlementOutcome:
    return await ActivityEnvironment().run(evaluate_settlement, req)


# ---------------------------------------------------------------------------
# evaluate_settlement
# ---------------------------------------------------------------------------


class TestEvaluateSettlement:
    @pytest.mark.asyncio
    async def test_accepted(
        self, terms: SwapTerms, owners: SwapOwners, oracle_key: OracleSigningKey,
    ) -> None:
        outcome = await _run(_request(terms, owners, oracle_key))
        assert outcome == SettlementOutcome(accepted=True, fixed_remainder=0, float_remainder=0)

    @pytest.mark.asyncio
    async def test_soft_rejection_has_no_error_code(
        self, terms: SwapTerms, owners: SwapOwners, oracle_key: OracleSigningKey,
    ) -> None:
        outcome = await _run(_request(terms, owners, oracle_key, payout=1))
        assert not outcome.accepted
        assert outcome.error_code is None

    @pytest.mark.asyncio
    async def test_bounded_config_reports_remainders(
        self, terms: SwapTerms, owners: SwapOwners, oracle_key: OracleSigningKey,
    ) -> None:
        cfg = SettlementConfig(clamp=ClampMode.BOUNDED)
        outcome = await _run(_request(terms, owners, oracle_key, payout=100_000, config=cfg))
        assert outcome.accepted
        assert (outcome.fixed_remainder, outcome.float_remainder) == (100_000, 100_000)

    @pytest.mark.asyncio
    async def test_hard_failure_sets_error_code(
        self, terms: SwapTerms, owners: SwapOwners, oracle_key: OracleSigningKey,
    ) -> None:
        outcome = await _run(_request(terms, owners, oracle_key, slot=43))
        assert not outcome.accepted
        assert outcome.error_code == "WRONG_SLOT"
        assert outcome.error_message is not None
        assert outcome.fixed_remainder is None

    @pytest.mark.asyncio
    async def test_cardinality_failure(
        self, terms: SwapTerms, owners: SwapOwners, oracle_key: OracleSigningKey,
    ) -> None:
        req = dataclasses.replace(_request(terms, owners, oracle_key), outputs=[])
        outcome = await _run(req)
        assert outcome.error_code == "OUTPUT_CARDINALITY"

    @pytest.mark.asyncio
    async def test_invalid_request(
        self, terms: SwapTerms, owners: SwapOwners, oracle_key: OracleSigningKey,
    ) -> None:
        req = dataclasses.replace(_request(terms, owners, oracle_key), margin=-1)
        outcome = await _run(req)
        assert outcome == SettlementOutcome(
            accepted=False,
            error_code="INVALID_REQUEST",
            error_message="SettlementRequest validation failed",
        )

    @pytest.mark.asyncio
    async def test_idempotent(
        self, terms: SwapTerms, owners: SwapOwners, oracle_key: OracleSigningKey,
    ) -> None:
        req = _request(terms, owners, oracle_key, payout=7)
        assert await _run(req) == await _run(req)

    @pytest.mark.asyncio
    async def test_hard_failure_logged(
        self,
        terms: SwapTerms,
        owners: SwapOwners,
        oracle_key: OracleSigningKey,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING):
            await _run(_request(terms, owners, oracle_key, slot=43))
        assert "Settlement hard failure WRONG_SLOT" in caplog.text


# ---------------------------------------------------------------------------
# Workflow wiring
# ---------------------------------------------------------------------------


class TestWorkflowWiring:
    def test_task_queue(self) -> None:
        assert ActivityConfig().task_queue == TASK_QUEUE == "swap-settlement"

    def test_single_attempt(self) -> None:
        assert evaluation_retry().maximum_attempts == 1

    def test_timeout(self) -> None:
        assert evaluation_timeout() == timedelta(seconds=10)
        assert evaluation_timeout(ActivityConfig(start_to_close_timeout_s=3)) == timedelta(seconds=3)

    def test_initial_status(self) -> None:
        assert SwapSettlementWorkflow().get_status() == "RECEIVED"
