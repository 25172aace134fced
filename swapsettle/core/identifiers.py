"""Validated identifier newtypes: PublicKey, PubKeyHash.

PublicKey is a raw 32-byte Ed25519 public key as 64 lowercase hex chars.
PubKeyHash is the BLAKE2b-224 digest of such a key (56 hex chars) and is the
opaque identity handle used for swap parties.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import final

from swapsettle.core.result import Err, Ok

_HEX = frozenset("0123456789abcdef")
_PUBLIC_KEY_HEX_LEN = 64
_PUB_KEY_HASH_BYTES = 28


def _is_lower_hex(raw: str) -> bool:
    return bool(raw) and all(c in _HEX for c in raw)


@final
@dataclass(frozen=True, slots=True)
class PublicKey:
    """Raw Ed25519 public key, 64 lowercase hex characters."""

    value: str

    @staticmethod
    def parse(raw: str) -> Ok[PublicKey] | Err[str]:
        if not isinstance(raw, str):
            return Err(f"PublicKey must be str, got {type(raw).__name__}")
        if len(raw) != _PUBLIC_KEY_HEX_LEN:
            return Err(f"PublicKey must be 64 hex characters, got {len(raw)}")
        if not _is_lower_hex(raw):
            return Err(f"PublicKey must be lowercase hex, got '{raw}'")
        return Ok(PublicKey(value=raw))

    @property
    def raw(self) -> bytes:
        return bytes.fromhex(self.value)


@final
@dataclass(frozen=True, slots=True)
class PubKeyHash:
    """Party identity handle: BLAKE2b-224 of a public key, 56 lowercase hex chars."""

    value: str

    @staticmethod
    def parse(raw: str) -> Ok[PubKeyHash] | Err[str]:
        if not isinstance(raw, str):
            return Err(f"PubKeyHash must be str, got {type(raw).__name__}")
        if len(raw) != 2 * _PUB_KEY_HASH_BYTES:
            return Err(f"PubKeyHash must be 56 hex characters, got {len(raw)}")
        if not _is_lower_hex(raw):
            return Err(f"PubKeyHash must be lowercase hex, got '{raw}'")
        return Ok(PubKeyHash(value=raw))

    @staticmethod
    def of_public_key(key: PublicKey) -> PubKeyHash:
        """Derive the identity handle of a public key."""
        digest = hashlib.blake2b(key.raw, digest_size=_PUB_KEY_HASH_BYTES).hexdigest()
        return PubKeyHash(value=digest)
