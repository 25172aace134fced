"""Tests for swapsettle.oracle.observation and swapsettle.infra.ed25519_adapter."""

from __future__ import annotations

import dataclasses
import hashlib
from fractions import Fraction

import pytest

from swapsettle.core.errors import SignatureError
from swapsettle.core.identifiers import PublicKey
from swapsettle.core.result import Err, Ok, unwrap
from swapsettle.core.types import Slot
from swapsettle.infra.ed25519_adapter import ED25519_VERIFIER, Ed25519Verifier, OracleSigningKey
from swapsettle.infra.protocols import SignatureVerifier
from swapsettle.oracle.observation import (
    Observation,
    SignedObservation,
    decode_observation,
    sign_observation,
    verify_signed_observation,
)

_OBS = Observation(value=Fraction(3, 40), slot=Slot(value=42))


class _AlwaysValid:
    def verify(self, public_key: PublicKey, message: bytes, signature: str) -> bool:  # noqa: ARG002
        return True


# ---------------------------------------------------------------------------
# Observation
# ---------------------------------------------------------------------------


class TestObservation:
    def test_create_from_text(self) -> None:
        assert unwrap(Observation.create("3/40", 42)) == _OBS

    def test_create_rejects_float(self) -> None:
        assert isinstance(Observation.create(0.075, 42), Err)

    def test_create_rejects_negative_slot(self) -> None:
        assert isinstance(Observation.create("3/40", -1), Err)

    def test_constructor_rejects_non_fraction(self) -> None:
        with pytest.raises(TypeError):
            Observation(value=0.075, slot=Slot(value=1))  # type: ignore[arg-type]


class TestDecodeObservation:
    def test_canonical_payload(self) -> None:
        payload = b'{"_type":"Observation","slot":42,"value":"3/40"}'
        assert decode_observation(payload) == Ok(_OBS)

    def test_not_json(self) -> None:
        assert isinstance(decode_observation(b"\xff\xfe"), Err)

    def test_wrong_tag(self) -> None:
        assert isinstance(decode_observation(b'{"_type":"Other","slot":42,"value":"3/40"}'), Err)

    def test_extra_keys(self) -> None:
        payload = b'{"_type":"Observation","extra":1,"slot":42,"value":"3/40"}'
        assert isinstance(decode_observation(payload), Err)

    def test_numeric_value_rejected(self) -> None:
        assert isinstance(decode_observation(b'{"_type":"Observation","slot":42,"value":0.075}'), Err)

    def test_list_rejected(self) -> None:
        assert isinstance(decode_observation(b"[1,2]"), Err)


# ---------------------------------------------------------------------------
# Signing and verification
# ---------------------------------------------------------------------------


class TestSignObservation:
    def test_payload_is_canonical(self, oracle_key: OracleSigningKey) -> None:
        signed = sign_observation(oracle_key, _OBS)
        assert signed.payload == b'{"_type":"Observation","slot":42,"value":"3/40"}'

    def test_signature_is_unpadded_base64url(self, oracle_key: OracleSigningKey) -> None:
        signed = sign_observation(oracle_key, _OBS)
        assert len(signed.signature) == 86
        assert "=" not in signed.signature

    def test_deterministic(self, oracle_key: OracleSigningKey) -> None:
        assert sign_observation(oracle_key, _OBS) == sign_observation(oracle_key, _OBS)

    def test_message_hash(self, oracle_key: OracleSigningKey) -> None:
        signed = sign_observation(oracle_key, _OBS)
        assert signed.message_hash == hashlib.sha256(signed.payload).hexdigest()

    def test_frozen(self, oracle_key: OracleSigningKey) -> None:
        signed = sign_observation(oracle_key, _OBS)
        with pytest.raises(dataclasses.FrozenInstanceError):
            signed.signature = "x"  # type: ignore[misc]


class TestVerifySignedObservation:
    def test_valid(self, oracle_key: OracleSigningKey) -> None:
        signed = sign_observation(oracle_key, _OBS)
        assert verify_signed_observation(oracle_key.public_key, signed) == Ok(_OBS)

    def test_tampered_payload(self, oracle_key: OracleSigningKey) -> None:
        signed = sign_observation(oracle_key, _OBS)
        forged = dataclasses.replace(
            signed, payload=b'{"_type":"Observation","slot":42,"value":"1/2"}',
        )
        match verify_signed_observation(oracle_key.public_key, forged):
            case Err(SignatureError(reason=reason)):
                assert reason == "bad_signature"
            case _:
                pytest.fail("tampered payload must not verify")

    def test_tampered_signature(self, oracle_key: OracleSigningKey) -> None:
        signed = sign_observation(oracle_key, _OBS)
        flipped = ("B" if signed.signature[0] == "A" else "A") + signed.signature[1:]
        forged = dataclasses.replace(signed, signature=flipped)
        assert isinstance(verify_signed_observation(oracle_key.public_key, forged), Err)

    def test_signed_by_other_key(self, oracle_key: OracleSigningKey) -> None:
        impostor = OracleSigningKey.from_seed(b"\x07" * 32)
        signed = sign_observation(impostor, _OBS)
        match verify_signed_observation(oracle_key.public_key, signed):
            case Err(SignatureError(reason=reason)):
                assert reason == "wrong_key"
            case _:
                pytest.fail("observation signed by another key must not verify")

    def test_impostor_claiming_oracle_key(self, oracle_key: OracleSigningKey) -> None:
        impostor = OracleSigningKey.from_seed(b"\x07" * 32)
        signed = dataclasses.replace(sign_observation(impostor, _OBS), public_key=oracle_key.public_key)
        match verify_signed_observation(oracle_key.public_key, signed):
            case Err(SignatureError(reason=reason)):
                assert reason == "bad_signature"
            case _:
                pytest.fail("impostor signature must not verify")

    def test_error_code(self, oracle_key: OracleSigningKey) -> None:
        signed = SignedObservation(public_key=oracle_key.public_key, signature="", payload=b"{}")
        match verify_signed_observation(oracle_key.public_key, signed):
            case Err(e):
                assert e.code == "SIGNATURE_CHECK_FAILED"
            case _:
                pytest.fail("empty signature must not verify")

    def test_undecodable_payload_after_valid_signature(self, oracle_key: OracleSigningKey) -> None:
        payload = b"not an observation"
        signed = SignedObservation(
            public_key=oracle_key.public_key, signature=oracle_key.sign(payload), payload=payload,
        )
        match verify_signed_observation(oracle_key.public_key, signed):
            case Err(SignatureError(reason=reason)):
                assert reason == "bad_payload"
            case _:
                pytest.fail("undecodable payload must fail")

    def test_injected_verifier(self, oracle_key: OracleSigningKey) -> None:
        signed = SignedObservation(
            public_key=oracle_key.public_key,
            signature="anything",
            payload=b'{"_type":"Observation","slot":42,"value":"3/40"}',
        )
        result = verify_signed_observation(oracle_key.public_key, signed, _AlwaysValid())
        assert result == Ok(_OBS)


# ---------------------------------------------------------------------------
# Ed25519Verifier
# ---------------------------------------------------------------------------


class TestEd25519Verifier:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(ED25519_VERIFIER, SignatureVerifier)

    def test_valid(self, oracle_key: OracleSigningKey) -> None:
        sig = oracle_key.sign(b"msg")
        assert Ed25519Verifier().verify(oracle_key.public_key, b"msg", sig)

    def test_padded_signature_accepted(self, oracle_key: OracleSigningKey) -> None:
        sig = oracle_key.sign(b"msg") + "=="
        assert ED25519_VERIFIER.verify(oracle_key.public_key, b"msg", sig)

    def test_wrong_message(self, oracle_key: OracleSigningKey) -> None:
        sig = oracle_key.sign(b"msg")
        assert not ED25519_VERIFIER.verify(oracle_key.public_key, b"other", sig)

    def test_garbage_never_raises(self, oracle_key: OracleSigningKey) -> None:
        for sig in ("", "!!!", "A" * 86, "é" * 10, "AAAA"):
            assert not ED25519_VERIFIER.verify(oracle_key.public_key, b"msg", sig)

    def test_non_str_signature(self, oracle_key: OracleSigningKey) -> None:
        assert not ED25519_VERIFIER.verify(oracle_key.public_key, b"msg", None)  # type: ignore[arg-type]


class TestOracleSigningKey:
    def test_from_seed_deterministic(self) -> None:
        a = OracleSigningKey.from_seed(b"\x01" * 32)
        b = OracleSigningKey.from_seed(b"\x01" * 32)
        assert a.public_key == b.public_key

    def test_bad_seed_length(self) -> None:
        with pytest.raises(ValueError):
            OracleSigningKey.from_seed(b"\x01" * 31)

    def test_generate_gives_valid_public_key(self) -> None:
        key = OracleSigningKey.generate()
        assert isinstance(PublicKey.parse(key.public_key.value), Ok)
