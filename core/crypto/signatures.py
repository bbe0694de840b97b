"""
Crypto - RSA Signature Checks

Low-level primitives used by the verifier. Only verification lives here;
this service never holds a private key.

Scheme: RSA PKCS#1 v1.5 with SHA-256 (JCA name "SHA256withRSA"), applied
to the SHA-256 digest of the canonical payload bytes.
"""
from __future__ import annotations

import base64
import binascii

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from core.schemas.errors import SignatureDecodingException

SIGNING_ALGORITHM = "SHA256withRSA"
DIGEST_ALGORITHM = "SHA-256"


def decode_signature(signature_b64: str) -> bytes:
    """
    Decode a base64 transport signature into raw bytes.

    Decoding is strict: characters outside the base64 alphabet are rejected
    rather than skipped. Trailing '=' padding is optional, as signers
    commonly strip it.

    Raises:
        SignatureDecodingException: If the text is not valid base64
    """
    padded = signature_b64 + "=" * (-len(signature_b64) % 4)
    try:
        raw = base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SignatureDecodingException(
            message=f"Signature is not valid base64: {e}",
            details={"length": len(signature_b64)},
        ) from e
    if not raw:
        raise SignatureDecodingException(message="Signature decodes to zero bytes")
    return raw


def verify_rsa_sha256(public_key: RSAPublicKey, data: bytes, signature: bytes) -> bool:
    """
    Check an RSA-PKCS1v15-SHA256 signature over `data`.

    Returns:
        True on a cryptographic match, False on mismatch

    Raises:
        TypeError: If the key is not an RSA public key
    """
    if not isinstance(public_key, RSAPublicKey):
        raise TypeError(
            f"Expected an RSA public key, got {type(public_key).__name__}"
        )
    try:
        public_key.verify(signature, data, padding.PKCS1v15(), hashes.SHA256())
    except InvalidSignature:
        return False
    return True


__all__ = [
    "SIGNING_ALGORITHM",
    "DIGEST_ALGORITHM",
    "decode_signature",
    "verify_rsa_sha256",
]
