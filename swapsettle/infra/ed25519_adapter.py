"""Ed25519 implementation of SignatureVerifier, plus the oracle-side signer.

Signatures travel as base64url strings without padding (86 characters for
the 64 raw signature bytes).
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import final

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from swapsettle.core.identifiers import PublicKey

_SIGNATURE_BYTES = 64
_SEED_BYTES = 32


def encode_signature(raw: bytes) -> str:
    """base64url, '=' padding stripped."""
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _decode_signature(signature: str) -> bytes | None:
    padded = signature + "=" * (-len(signature) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, UnicodeEncodeError, ValueError):
        return None
    return raw if len(raw) == _SIGNATURE_BYTES else None


@final
class Ed25519Verifier:
    """SignatureVerifier over raw Ed25519 (not prehashed)."""

    __slots__ = ()

    def verify(self, public_key: PublicKey, message: bytes, signature: str) -> bool:
        if not isinstance(signature, str):
            return False
        raw_sig = _decode_signature(signature)
        if raw_sig is None:
            return False
        try:
            key = Ed25519PublicKey.from_public_bytes(public_key.raw)
            key.verify(raw_sig, message)
        except (InvalidSignature, ValueError):
            return False
        return True


ED25519_VERIFIER = Ed25519Verifier()


@final
@dataclass(frozen=True, slots=True)
class OracleSigningKey:
    """An oracle's private key. Used by oracle tooling and tests, never by the validator."""

    private_key: Ed25519PrivateKey

    @staticmethod
    def generate() -> OracleSigningKey:
        return OracleSigningKey(private_key=Ed25519PrivateKey.generate())

    @staticmethod
    def from_seed(seed: bytes) -> OracleSigningKey:
        """Load from a raw 32-byte seed. Raises ValueError on wrong length."""
        if len(seed) != _SEED_BYTES:
            raise ValueError(f"Ed25519 seed must be 32 bytes, got {len(seed)}")
        return OracleSigningKey(private_key=Ed25519PrivateKey.from_private_bytes(seed))

    @property
    def public_key(self) -> PublicKey:
        raw = self.private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
        return PublicKey(value=raw.hex())

    def sign(self, message: bytes) -> str:
        return encode_signature(self.private_key.sign(message))
