"""Settlement and activity configuration.

No environment or file loading. Pure configuration data with defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import final

from swapsettle.core.rational import RoundingMode

# ---------------------------------------------------------------------------
# Payout clamp variants
# ---------------------------------------------------------------------------


class ClampMode(Enum):
    """Which payout clamp formula is active.

    LITERAL:  min(0, max(2 * margin, x)): the deployed formula, min and max inverted.
              For margin >= 0 it always yields 0.
    BOUNDED:  max(0, min(2 * margin, x)): keeps x within [0, 2 * margin].
    """

    LITERAL = "Literal"
    BOUNDED = "Bounded"


# ---------------------------------------------------------------------------
# Settlement configuration
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class SettlementConfig:
    """Knobs that change settlement amounts. Defaults match the deployed contract."""

    rounding: RoundingMode = RoundingMode.HALF_EVEN
    clamp: ClampMode = ClampMode.LITERAL


DEFAULT_SETTLEMENT_CONFIG = SettlementConfig()


# ---------------------------------------------------------------------------
# Temporal activity configuration
# ---------------------------------------------------------------------------

TASK_QUEUE: str = "swap-settlement"


@final
@dataclass(frozen=True, slots=True)
class ActivityConfig:
    """Scheduling options for the evaluate_settlement activity.

    maximum_attempts is 1: an evaluation is one-shot and deterministic, so a
    retry can only reproduce the same verdict.
    """

    task_queue: str = TASK_QUEUE
    start_to_close_timeout_s: int = 10
    maximum_attempts: int = 1
