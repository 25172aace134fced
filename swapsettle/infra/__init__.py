"""swapsettle.infra — Capability protocols, adapters, and configuration."""

from swapsettle.infra.config import DEFAULT_SETTLEMENT_CONFIG as DEFAULT_SETTLEMENT_CONFIG
from swapsettle.infra.config import TASK_QUEUE as TASK_QUEUE
from swapsettle.infra.config import ActivityConfig as ActivityConfig
from swapsettle.infra.config import ClampMode as ClampMode
from swapsettle.infra.config import SettlementConfig as SettlementConfig
from swapsettle.infra.ed25519_adapter import ED25519_VERIFIER as ED25519_VERIFIER
from swapsettle.infra.ed25519_adapter import Ed25519Verifier as Ed25519Verifier
from swapsettle.infra.ed25519_adapter import OracleSigningKey as OracleSigningKey
from swapsettle.infra.protocols import InputView as InputView
from swapsettle.infra.protocols import OutputView as OutputView
from swapsettle.infra.protocols import SignatureVerifier as SignatureVerifier
from swapsettle.infra.protocols import TransactionView as TransactionView
