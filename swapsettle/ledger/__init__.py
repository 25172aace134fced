"""swapsettle.ledger — Transaction context, payout arithmetic, and the settlement validator."""

from swapsettle.ledger.matching import check_pair as check_pair
from swapsettle.ledger.matching import match_inputs as match_inputs
from swapsettle.ledger.matching import match_outputs as match_outputs
from swapsettle.ledger.matching import require_pair as require_pair
from swapsettle.ledger.payments import PaymentSchedule as PaymentSchedule
from swapsettle.ledger.payments import clamp as clamp
from swapsettle.ledger.payments import compute_payments as compute_payments
from swapsettle.ledger.transactions import TxInfo as TxInfo
from swapsettle.ledger.transactions import TxInInfo as TxInInfo
from swapsettle.ledger.transactions import TxOut as TxOut
from swapsettle.ledger.validator import SettlementReport as SettlementReport
from swapsettle.ledger.validator import SettlementValidator as SettlementValidator
from swapsettle.ledger.validator import authenticate_rate as authenticate_rate
from swapsettle.ledger.validator import evaluate as evaluate
from swapsettle.ledger.validator import explain as explain
