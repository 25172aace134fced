"""Hypothesis profiles and pytest fixtures for swapsettle.

Keys are derived from fixed seeds so signatures are reproducible across runs.
"""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, settings

from swapsettle.core.identifiers import PubKeyHash
from swapsettle.core.result import unwrap
from swapsettle.infra.ed25519_adapter import OracleSigningKey
from swapsettle.instrument.swap import SwapOwners, SwapTerms

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")


# ===================================================================
# FIXTURES
# ===================================================================

ORACLE_SEED = bytes(range(32))


@pytest.fixture(scope="session")
def oracle_key() -> OracleSigningKey:
    return OracleSigningKey.from_seed(ORACLE_SEED)


@pytest.fixture(scope="session")
def terms(oracle_key: OracleSigningKey) -> SwapTerms:
    """Reference contract: 1,000,000 notional, 1/20 fixed, 100,000 margin, slot 42."""
    return unwrap(SwapTerms.create(
        notional_amount=1_000_000,
        observation_slot=42,
        fixed_rate="1/20",
        floating_rate="1/25",
        margin=100_000,
        oracle=oracle_key.public_key.value,
    ))


@pytest.fixture(scope="session")
def owners() -> SwapOwners:
    return SwapOwners(
        fixed_leg=PubKeyHash(value="aa" * 28),
        floating_leg=PubKeyHash(value="bb" * 28),
    )
