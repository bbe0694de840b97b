"""
Crypto - Hashing Utilities
Digest helpers for signed payloads.

This module provides:
- SHA-256 hashing for raw bytes
- Canonical hashing for payloads (via encode_canonical)
- Hex encoding with 0x prefix for fingerprints and logs

Security/Determinism Notes:
- Always hash raw bytes exactly as specified
- The canonical digest is what the signer signs
"""
from __future__ import annotations

import hashlib

from core.schemas.canonical import CanonicalModel, encode_canonical


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_canonical(model: CanonicalModel) -> bytes:
    """
    Hash a payload's canonical binary encoding.

    Rule: digest = sha256(encode_canonical(model))

    Raises:
        CanonicalizationException: If the model cannot be encoded
    """
    return sha256(encode_canonical(model))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


__all__ = [
    "sha256",
    "hash_canonical",
    "to_hex",
]
