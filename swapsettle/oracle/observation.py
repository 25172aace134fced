"""Oracle rate observations and their signed envelopes.

An Observation is the oracle's claim "the floating rate was `value` at
`slot`". The oracle signs canonical_bytes(observation); the signed envelope
carries those exact bytes so verification never depends on re-encoding.

verify_signed_observation() is the only way to get an Observation out of a
SignedObservation: authenticity first, then decoding.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from fractions import Fraction
from typing import final

from swapsettle.core.errors import SignatureError
from swapsettle.core.identifiers import PublicKey
from swapsettle.core.rational import parse_rational
from swapsettle.core.result import Err, Ok, unwrap
from swapsettle.core.serialization import canonical_bytes
from swapsettle.core.types import Slot
from swapsettle.infra.ed25519_adapter import ED25519_VERIFIER, OracleSigningKey
from swapsettle.infra.protocols import SignatureVerifier

_SOURCE = "oracle.observation.verify_signed_observation"


@final
@dataclass(frozen=True, slots=True)
class Observation:
    """A rate observed by the oracle at a given slot."""

    value: Fraction
    slot: Slot

    def __post_init__(self) -> None:
        if not isinstance(self.value, Fraction):
            raise TypeError(f"Observation.value must be Fraction, got {type(self.value).__name__}")

    @staticmethod
    def create(value: object, slot: int) -> Ok[Observation] | Err[str]:
        match parse_rational(value):
            case Err(e):
                return Err(f"Observation.value: {e}")
            case Ok(rate):
                pass
        match Slot.parse(slot):
            case Err(e):
                return Err(f"Observation.slot: {e}")
            case Ok(s):
                pass
        return Ok(Observation(value=rate, slot=s))


@final
@dataclass(frozen=True, slots=True)
class SignedObservation:
    """Observation payload bytes plus the oracle's detached signature.

    public_key is the key the oracle claims to have signed with; it must
    match the contract's oracle key for verification to succeed.
    """

    public_key: PublicKey
    signature: str
    payload: bytes

    @property
    def message_hash(self) -> str:
        """SHA-256 hex of the signed payload."""
        return hashlib.sha256(self.payload).hexdigest()


def sign_observation(key: OracleSigningKey, observation: Observation) -> SignedObservation:
    """Oracle side: encode and sign an observation."""
    payload = unwrap(canonical_bytes(observation))
    return SignedObservation(
        public_key=key.public_key,
        signature=key.sign(payload),
        payload=payload,
    )


def decode_observation(payload: bytes) -> Ok[Observation] | Err[str]:
    """Parse canonical Observation bytes back into an Observation."""
    try:
        data = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        return Err(f"Observation payload is not canonical JSON: {e}")
    if not isinstance(data, dict) or data.get("_type") != "Observation":
        return Err("Observation payload must be a tagged Observation object")
    if set(data) != {"_type", "slot", "value"}:
        return Err(f"Observation payload has unexpected keys: {sorted(data)}")
    if not isinstance(data["value"], str):
        return Err("Observation payload value must be a 'n/d' string")
    return Observation.create(data["value"], data["slot"])


def _sig_err(message: str, reason: str) -> Err[SignatureError]:
    return Err(SignatureError(
        message=message, code="SIGNATURE_CHECK_FAILED", source=_SOURCE, reason=reason,
    ))


def verify_signed_observation(
    public_key: PublicKey,
    signed: SignedObservation,
    verifier: SignatureVerifier = ED25519_VERIFIER,
) -> Ok[Observation] | Err[SignatureError]:
    """Authenticate a signed observation against the expected oracle key.

    Err if the envelope names a different key, the signature does not verify
    over exactly the payload bytes, or the payload does not decode.
    """
    if signed.public_key != public_key:
        return _sig_err(
            "checkSignatureAndDecode failed: observation signed by unexpected key",
            "wrong_key",
        )
    if not verifier.verify(public_key, signed.payload, signed.signature):
        return _sig_err(
            "checkSignatureAndDecode failed: signature does not verify",
            "bad_signature",
        )
    match decode_observation(signed.payload):
        case Err(e):
            return _sig_err(f"checkSignatureAndDecode failed: {e}", "bad_payload")
        case Ok(obs):
            return Ok(obs)
