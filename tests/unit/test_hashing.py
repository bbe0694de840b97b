"""
Hashing Unit Tests
Tests for core/crypto/hashing.py
"""
import hashlib

from core.crypto.hashing import hash_canonical, sha256, to_hex
from core.schemas import SmsPayload, encode_canonical


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        """Test sha256 produces correct hash for known input."""
        result = sha256(b"hello")

        assert result.hex() == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        assert len(result) == 32

    def test_sha256_empty_bytes(self):
        assert sha256(b"") == hashlib.sha256(b"").digest()


class TestHashCanonical:
    """Tests for hash_canonical() function."""

    def test_hashes_canonical_bytes(self):
        payload = SmsPayload(message_id="msg-1", content="hi")

        assert hash_canonical(payload) == hashlib.sha256(encode_canonical(payload)).digest()

    def test_equal_payloads_equal_digests(self):
        a = SmsPayload(message_id="m", sender="+1")
        b = SmsPayload.model_validate({"sender": "+1", "messageId": "m"})

        assert hash_canonical(a) == hash_canonical(b)


class TestToHex:
    def test_prefix(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_empty(self):
        assert to_hex(b"") == "0x"
