"""
Public Key Loading Tests
Tests for core/crypto/keys.py
"""

import base64
import hashlib

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from core.crypto.keys import (
    key_fingerprint,
    key_to_base64,
    load_public_key,
    load_public_key_file,
    load_public_key_pem,
)
from core.schemas import ErrorCodes, KeyInitializationError
from fixtures import public_key_pem


class TestLoadPublicKeyPem:

    def test_loads_rsa_pem(self, private_key):
        key = load_public_key_pem(public_key_pem(private_key))

        assert key.public_numbers() == private_key.public_key().public_numbers()

    def test_accepts_str(self, private_key):
        key = load_public_key_pem(public_key_pem(private_key).decode("ascii"))

        assert key.key_size == 2048

    def test_garbage_raises(self):
        with pytest.raises(KeyInitializationError) as exc_info:
            load_public_key_pem(b"-----BEGIN PUBLIC KEY-----\nnope\n-----END PUBLIC KEY-----\n")

        assert exc_info.value.code == ErrorCodes.KEY_INITIALIZATION_ERROR

    def test_non_rsa_key_raises(self):
        pem = ec.generate_private_key(ec.SECP256R1()).public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

        with pytest.raises(KeyInitializationError, match="must be RSA"):
            load_public_key_pem(pem)


class TestLoadPublicKeyFile:

    def test_loads_file(self, public_key_file, public_key):
        key = load_public_key_file(public_key_file)

        assert key.public_numbers() == public_key.public_numbers()

    def test_missing_file(self, tmp_path):
        with pytest.raises(KeyInitializationError, match="not found") as exc_info:
            load_public_key_file(tmp_path / "absent.pem")

        assert exc_info.value.details["source"].endswith("absent.pem")


class TestLoadPublicKey:

    def test_inline_pem_wins_over_path(self, private_key, tmp_path):
        key = load_public_key(
            pem=public_key_pem(private_key).decode("ascii"),
            path=tmp_path / "absent.pem",
        )

        assert key.public_numbers() == private_key.public_key().public_numbers()

    def test_path_used_without_pem(self, public_key_file, public_key):
        key = load_public_key(path=public_key_file)

        assert key.public_numbers() == public_key.public_numbers()

    def test_nothing_configured(self):
        with pytest.raises(KeyInitializationError, match="No public key configured"):
            load_public_key()


class TestKeyRendering:

    def test_key_to_base64_is_der(self, public_key):
        der = public_key.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

        assert base64.b64decode(key_to_base64(public_key)) == der

    def test_fingerprint(self, public_key):
        der = base64.b64decode(key_to_base64(public_key))

        assert key_fingerprint(public_key) == "0x" + hashlib.sha256(der).hexdigest()
