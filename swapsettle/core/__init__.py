"""swapsettle.core — public API for all core types."""

from swapsettle.core.errors import FieldViolation as FieldViolation
from swapsettle.core.errors import SettlementError as SettlementError
from swapsettle.core.errors import SignatureError as SignatureError
from swapsettle.core.errors import SlotMismatchError as SlotMismatchError
from swapsettle.core.errors import SwapError as SwapError
from swapsettle.core.errors import TransactionShapeError as TransactionShapeError
from swapsettle.core.errors import ValidationError as ValidationError
from swapsettle.core.identifiers import PubKeyHash as PubKeyHash
from swapsettle.core.identifiers import PublicKey as PublicKey
from swapsettle.core.rational import RoundingMode as RoundingMode
from swapsettle.core.rational import format_rational as format_rational
from swapsettle.core.rational import parse_rational as parse_rational
from swapsettle.core.rational import round_rational as round_rational
from swapsettle.core.rational import to_rational as to_rational
from swapsettle.core.result import Err as Err
from swapsettle.core.result import Ok as Ok
from swapsettle.core.result import Result as Result
from swapsettle.core.result import unwrap as unwrap
from swapsettle.core.serialization import canonical_bytes as canonical_bytes
from swapsettle.core.serialization import content_hash as content_hash
from swapsettle.core.types import Slot as Slot
