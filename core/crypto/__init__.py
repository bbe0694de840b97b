"""
Core cryptographic utilities.

Hashing of canonical payloads, RSA signature checks, and public key loading.
"""
from .hashing import (
    sha256,
    hash_canonical,
    to_hex,
)
from .keys import (
    key_fingerprint,
    key_to_base64,
    load_public_key,
    load_public_key_file,
    load_public_key_pem,
)
from .signatures import (
    decode_signature,
    verify_rsa_sha256,
)

__all__ = [
    "sha256",
    "hash_canonical",
    "to_hex",
    "key_fingerprint",
    "key_to_base64",
    "load_public_key",
    "load_public_key_file",
    "load_public_key_pem",
    "decode_signature",
    "verify_rsa_sha256",
]
