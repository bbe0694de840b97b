"""
Crypto - Public Key Loading

Loads the verification key once at startup. Any failure here raises
KeyInitializationError, which callers treat as fatal.
"""
from __future__ import annotations

import base64
import logging
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from core.crypto.hashing import sha256, to_hex
from core.schemas.errors import KeyInitializationError


logger = logging.getLogger(__name__)


def load_public_key_pem(pem: bytes | str, source: str = "inline") -> RSAPublicKey:
    """
    Parse a PEM-encoded SubjectPublicKeyInfo RSA public key.

    Raises:
        KeyInitializationError: If the PEM is malformed or not an RSA key
    """
    data = pem.encode("utf-8") if isinstance(pem, str) else pem
    try:
        key = serialization.load_pem_public_key(data)
    except (ValueError, TypeError) as e:
        raise KeyInitializationError(
            f"Could not parse public key PEM: {e}", source=source
        ) from e

    if not isinstance(key, RSAPublicKey):
        raise KeyInitializationError(
            f"Public key must be RSA, got {type(key).__name__}", source=source
        )
    return key


def load_public_key_file(path: str | Path) -> RSAPublicKey:
    """Read and parse a PEM public key file."""
    path = Path(path)
    if not path.exists():
        raise KeyInitializationError(
            f"Public key file not found: {path}", source=str(path)
        )
    try:
        data = path.read_bytes()
    except OSError as e:
        raise KeyInitializationError(
            f"Could not read public key file {path}: {e}", source=str(path)
        ) from e
    return load_public_key_pem(data, source=str(path))


def load_public_key(
    pem: str | None = None,
    path: str | Path | None = None,
) -> RSAPublicKey:
    """
    Load the process-wide verification key.

    Inline PEM wins over a file path.

    Raises:
        KeyInitializationError: If neither source is set or loading fails
    """
    if pem:
        key = load_public_key_pem(pem, source="inline")
    elif path:
        key = load_public_key_file(path)
    else:
        raise KeyInitializationError("No public key configured")

    logger.info(
        f"RSA public key initialized for verification "
        f"({key.key_size} bits, fingerprint {key_fingerprint(key)})"
    )
    logger.debug(f"Public key (Base64): {key_to_base64(key)}")
    return key


def key_to_der(key: RSAPublicKey) -> bytes:
    return key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def key_to_base64(key: RSAPublicKey) -> str:
    """Base64 of the DER SubjectPublicKeyInfo, for logging/debugging."""
    return base64.b64encode(key_to_der(key)).decode("ascii")


def key_fingerprint(key: RSAPublicKey) -> str:
    """SHA-256 of the DER SubjectPublicKeyInfo, 0x-prefixed hex."""
    return to_hex(sha256(key_to_der(key)))


__all__ = [
    "load_public_key_pem",
    "load_public_key_file",
    "load_public_key",
    "key_to_base64",
    "key_fingerprint",
]
