"""
Common test fixtures shared by all modules.

Provides:
- RSA key pairs (the signer side exists only in tests)
- A reference signer matching the companion signer service
- Factories for SmsPayload / SignedSmsRequest
"""

import base64
import hashlib
from functools import lru_cache
from typing import Optional

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from core.schemas.canonical import encode_canonical
from core.schemas.messages import SignedSmsRequest, SmsPayload

FIXED_NOW_MILLIS = 1_767_225_600_000

# 16 fixed bytes; never a valid RSA-2048 signature
BOGUS_SIGNATURE_B64 = base64.b64encode(bytes(range(16))).decode("ascii")


# =============================================================================
# Keys & Signing
# =============================================================================

@lru_cache(maxsize=4)
def _generate_key(slot: int) -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def make_private_key(seed: int = 0) -> rsa.RSAPrivateKey:
    """
    RSA-2048 private key for a numbered slot.

    Keys are random but cached per slot, so every caller asking for the
    same slot (including the default) gets the same key.
    """
    return _generate_key(int(seed))


def public_key_pem(private_key: rsa.RSAPrivateKey) -> bytes:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def sign_payload(payload: SmsPayload, private_key: rsa.RSAPrivateKey) -> str:
    """
    Sign the way the companion signer does: SHA256withRSA over the
    SHA-256 digest of the canonical payload bytes.
    """
    digest = hashlib.sha256(encode_canonical(payload)).digest()
    signature = private_key.sign(digest, padding.PKCS1v15(), hashes.SHA256())
    return base64.b64encode(signature).decode("ascii")


# =============================================================================
# Message Factories
# =============================================================================

def make_payload(
    message_id: str = "msg-1",
    sender: str = "+1",
    recipient: str = "+2",
    content: str = "hi",
    timestamp: int = 0,
) -> SmsPayload:
    return SmsPayload(
        message_id=message_id,
        sender=sender,
        recipient=recipient,
        content=content,
        timestamp=timestamp,
    )


def make_signed_request(
    payload: Optional[SmsPayload] = None,
    private_key: Optional[rsa.RSAPrivateKey] = None,
    signature: Optional[str] = None,
) -> SignedSmsRequest:
    """
    Build a signed request. Signs with `private_key` (default test key)
    unless an explicit `signature` is given.
    """
    payload = payload or make_payload()
    if signature is None:
        signature = sign_payload(payload, private_key or make_private_key())
    return SignedSmsRequest(payload=payload, message_signature=signature)


def to_wire_json(request: SignedSmsRequest) -> str:
    """Serialize a request the way clients send it (camelCase)."""
    return request.model_dump_json(by_alias=True, exclude_none=True)
