"""
Verification - Signature Verifier

Verifies the RSA signature attached to a signed SMS request.

Algorithm (must match the signer byte for byte):
1. Absent request or payload      -> MISSING_PAYLOAD
2. Absent or empty signature      -> MISSING_SIGNATURE
3. canonical = encode_canonical(payload)
4. digest = SHA-256(canonical)
5. signature = base64 decode (strict)
6. RSA-PKCS1v15-SHA256 verify(signature, digest) with the public key
7. match -> VALID, mismatch -> INVALID_SIGNATURE,
   any other failure -> VERIFICATION_ERROR
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from core.config.runtime import KeyConfig
from core.crypto.hashing import hash_canonical
from core.crypto.keys import load_public_key
from core.crypto.signatures import decode_signature, verify_rsa_sha256
from core.schemas.messages import SignedSmsRequest
from core.schemas.outcome import (
    VerificationOutcome,
    VerificationStatus,
    now_epoch_millis,
)


logger = logging.getLogger(__name__)


class SignatureVerifier:
    """
    Verifies signed SMS requests against one public key.

    The key is injected at construction and never changes, so a single
    instance can serve any number of concurrent calls.
    """

    def __init__(
        self,
        public_key: RSAPublicKey,
        clock: Callable[[], int] = now_epoch_millis,
    ):
        """
        Args:
            public_key: RSA public key matching the signer's private key
            clock: Returns wall-clock epoch millis for outcome timestamps
        """
        self._public_key = public_key
        self._clock = clock

    @classmethod
    def from_config(cls, keys: KeyConfig) -> "SignatureVerifier":
        """
        Load the public key described by `keys` and build a verifier.

        Raises:
            KeyInitializationError: If the key cannot be loaded
        """
        return cls(load_public_key(pem=keys.public_key_pem, path=keys.public_key_path))

    @property
    def public_key(self) -> RSAPublicKey:
        return self._public_key

    def verify(self, request: Optional[SignedSmsRequest]) -> VerificationOutcome:
        """
        Verify a signed request.

        Never raises: every failure is reported through the outcome status.
        """
        if request is None or request.payload is None:
            logger.warning("SMS request payload is missing")
            return self._outcome(
                VerificationStatus.MISSING_PAYLOAD, "Payload is missing"
            )

        message_id = request.payload.message_id

        if not request.message_signature:
            logger.warning(
                f"Signature is missing or empty for message ID: {message_id}"
            )
            return self._outcome(
                VerificationStatus.MISSING_SIGNATURE,
                "Signature is missing or empty",
                message_id,
            )

        try:
            is_valid = self._check_signature(request)
        except Exception as e:
            logger.error(
                f"Error verifying signature for message ID {message_id}: {e}",
                exc_info=True,
            )
            return self._outcome(
                VerificationStatus.VERIFICATION_ERROR,
                f"Verification error: {e}",
                message_id,
            )

        if is_valid:
            logger.info(f"Signature verification successful for message ID: {message_id}")
            return self._outcome(
                VerificationStatus.VALID, "Signature is valid", message_id
            )

        logger.warning(f"Signature verification failed for message ID: {message_id}")
        return self._outcome(
            VerificationStatus.INVALID_SIGNATURE, "Signature is invalid", message_id
        )

    def is_signature_valid(self, request: Optional[SignedSmsRequest]) -> bool:
        """Simplified verification that returns only the boolean result."""
        return self.verify(request).verified

    def _check_signature(self, request: SignedSmsRequest) -> bool:
        digest = hash_canonical(request.payload)
        signature = decode_signature(request.message_signature)
        logger.debug(
            f"Digest length: {len(digest)}, signature length: {len(signature)}"
        )
        return verify_rsa_sha256(self._public_key, digest, signature)

    def _outcome(
        self,
        status: VerificationStatus,
        message: str,
        identifier: str | None = None,
    ) -> VerificationOutcome:
        return VerificationOutcome.build(
            status=status,
            message=message,
            verified_at_epoch_millis=self._clock(),
            identifier=identifier,
        )
