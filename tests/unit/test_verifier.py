"""
Signature Verifier Tests
Tests for core/verification/verifier.py

Covers:
- valid signatures verify
- any altered byte of the canonical payload fails
- structural errors (missing payload / signature)
- operational errors become VERIFICATION_ERROR outcomes
- idempotence and timestamping
"""

import base64

import pytest

from core.config.runtime import KeyConfig
from core.schemas import (
    KeyInitializationError,
    SignedSmsRequest,
    SmsPayload,
    VerificationOutcome,
    VerificationStatus,
)
from core.verification import SignatureVerifier
from fixtures import (
    BOGUS_SIGNATURE_B64,
    FIXED_NOW_MILLIS,
    make_payload,
    make_private_key,
    make_signed_request,
    public_key_pem,
)


class TestValidSignatures:

    def test_concrete_valid_scenario(self, verifier, private_key):
        request = make_signed_request(
            SmsPayload(message_id="msg-1", sender="+1", recipient="+2", content="hi"),
            private_key,
        )

        outcome = verifier.verify(request)

        assert outcome.identifier == "msg-1"
        assert outcome.verified is True
        assert outcome.status == VerificationStatus.VALID
        assert outcome.message == "Signature is valid"
        assert outcome.verified_at_epoch_millis == FIXED_NOW_MILLIS

    @pytest.mark.parametrize(
        "payload",
        [
            make_payload(),
            make_payload(message_id="ü-42", content="naïve ☃ message"),
            make_payload(timestamp=1_767_225_600_123),
            make_payload(timestamp=-5),
            SmsPayload(message_id="only-id"),
            SmsPayload(),
        ],
    )
    def test_various_payloads_verify(self, verifier, private_key, payload):
        outcome = verifier.verify(make_signed_request(payload, private_key))

        assert outcome.status == VerificationStatus.VALID
        assert outcome.verified is True

    def test_is_signature_valid(self, verifier, signed_request):
        assert verifier.is_signature_valid(signed_request) is True


class TestTampering:

    @pytest.mark.parametrize(
        "field,value",
        [
            ("message_id", "msg-2"),
            ("sender", "+9"),
            ("recipient", "+3"),
            ("content", "hI"),
            ("timestamp", 1),
        ],
    )
    def test_altered_field_fails(self, verifier, signed_request, field, value):
        tampered = SignedSmsRequest(
            payload=signed_request.payload.model_copy(update={field: value}),
            message_signature=signed_request.message_signature,
        )

        outcome = verifier.verify(tampered)

        assert outcome.status == VerificationStatus.INVALID_SIGNATURE
        assert outcome.verified is False

    def test_fixed_bogus_signature(self, verifier, payload):
        request = SignedSmsRequest(payload=payload, message_signature=BOGUS_SIGNATURE_B64)

        outcome = verifier.verify(request)

        assert outcome.identifier == "msg-1"
        assert outcome.status == VerificationStatus.INVALID_SIGNATURE
        assert outcome.message == "Signature is invalid"

    def test_flipped_signature_bit(self, verifier, signed_request):
        raw = bytearray(base64.b64decode(signed_request.message_signature))
        raw[0] ^= 0x01
        request = SignedSmsRequest(
            payload=signed_request.payload,
            message_signature=base64.b64encode(bytes(raw)).decode(),
        )

        assert verifier.verify(request).status == VerificationStatus.INVALID_SIGNATURE

    def test_wrong_key(self, verifier, other_private_key, payload):
        request = make_signed_request(payload, other_private_key)

        assert verifier.verify(request).status == VerificationStatus.INVALID_SIGNATURE


class TestStructuralErrors:

    def test_none_request(self, verifier):
        outcome = verifier.verify(None)

        assert outcome.status == VerificationStatus.MISSING_PAYLOAD
        assert outcome.identifier == "unknown"
        assert outcome.verified is False

    def test_missing_payload(self, verifier):
        outcome = verifier.verify(SignedSmsRequest(message_signature=BOGUS_SIGNATURE_B64))

        assert outcome.status == VerificationStatus.MISSING_PAYLOAD
        assert outcome.identifier == "unknown"
        assert outcome.message == "Payload is missing"

    def test_empty_signature(self, verifier, payload):
        outcome = verifier.verify(SignedSmsRequest(payload=payload, message_signature=""))

        assert outcome.identifier == "msg-1"
        assert outcome.verified is False
        assert outcome.status == VerificationStatus.MISSING_SIGNATURE

    def test_absent_signature(self, verifier, payload):
        outcome = verifier.verify(SignedSmsRequest(payload=payload))

        assert outcome.status == VerificationStatus.MISSING_SIGNATURE

    def test_structural_outcomes_are_timestamped(self, verifier):
        assert verifier.verify(None).verified_at_epoch_millis == FIXED_NOW_MILLIS


class TestOperationalErrors:

    def test_malformed_base64(self, verifier, payload):
        outcome = verifier.verify(SignedSmsRequest(payload=payload, message_signature="%%%not-base64%%%"))

        assert outcome.status == VerificationStatus.VERIFICATION_ERROR
        assert outcome.verified is False
        assert outcome.identifier == "msg-1"
        assert outcome.message.startswith("Verification error:")
        assert outcome.verified_at_epoch_millis == FIXED_NOW_MILLIS

    def test_wrong_key_type(self, signed_request):
        verifier = SignatureVerifier(public_key="not a key", clock=lambda: 1)

        outcome = verifier.verify(signed_request)

        assert outcome.status == VerificationStatus.VERIFICATION_ERROR
        assert "RSA public key" in outcome.message

    def test_unexpected_runtime_error(self, verifier, signed_request, monkeypatch):
        def boom(_payload):
            raise RuntimeError("digest unavailable")

        monkeypatch.setattr("core.verification.verifier.hash_canonical", boom)

        outcome = verifier.verify(signed_request)

        assert outcome.status == VerificationStatus.VERIFICATION_ERROR
        assert "digest unavailable" in outcome.message


class TestOutcomeProperties:

    def test_idempotent(self, verifier, signed_request):
        first = verifier.verify(signed_request)
        second = verifier.verify(signed_request)

        assert (first.status, first.verified) == (second.status, second.verified)

    def test_default_clock_stamps_wall_time(self, public_key, signed_request):
        import time

        before = time.time_ns() // 1_000_000
        outcome = SignatureVerifier(public_key).verify(signed_request)
        after = time.time_ns() // 1_000_000

        assert before <= outcome.verified_at_epoch_millis <= after

    @pytest.mark.parametrize("status", list(VerificationStatus))
    def test_verified_iff_valid(self, status):
        outcome = VerificationOutcome.build(status, "m", 0, "id")

        assert outcome.verified is (status == VerificationStatus.VALID)

    def test_verified_in_dump(self):
        outcome = VerificationOutcome.build(VerificationStatus.VALID, "ok", 5, "id")

        assert outcome.model_dump(mode="json")["verified"] is True
        assert outcome.model_dump(mode="json")["status"] == "VALID"


class TestFromConfig:

    def test_builds_from_path(self, public_key_file, signed_request):
        verifier = SignatureVerifier.from_config(KeyConfig(public_key_path=str(public_key_file)))

        assert verifier.verify(signed_request).verified is True

    def test_builds_from_inline_pem(self, private_key, signed_request):
        pem = public_key_pem(private_key).decode("ascii")
        verifier = SignatureVerifier.from_config(KeyConfig(public_key_path=None, public_key_pem=pem))

        assert verifier.verify(signed_request).verified is True

    def test_missing_key_is_fatal(self, tmp_path):
        with pytest.raises(KeyInitializationError):
            SignatureVerifier.from_config(KeyConfig(public_key_path=str(tmp_path / "none.pem")))


class TestDefaultSigningKey:

    def test_default_key_is_fixture_key(self, private_key):
        assert make_private_key() is make_private_key(0)
        assert make_private_key() is private_key

    def test_request_signed_with_default_key_verifies(self, verifier):
        request = make_signed_request(make_payload(message_id="default-key"))

        assert verifier.verify(request).status == VerificationStatus.VALID
