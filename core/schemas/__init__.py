"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Canonical encoding API
from .canonical import (
    CanonicalModel,
    encode_canonical,
    encode_field,
    encode_varint,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ErrorCodes,
    KeyInitializationError,
    SessionClosedError,
    SignatureDecodingException,
    VerifierError,
    VerifierException,
)

# Messages
from .messages import (
    UNKNOWN_IDENTIFIER,
    SignedSmsRequest,
    SmsPayload,
)

# Outcomes
from .outcome import (
    BulkSummary,
    VerificationOutcome,
    VerificationStatus,
    now_epoch_millis,
)

__all__ = [
    # Canonical
    "CanonicalModel",
    "encode_canonical",
    "encode_field",
    "encode_varint",
    # Errors
    "CanonicalizationException",
    "ErrorCodes",
    "KeyInitializationError",
    "SessionClosedError",
    "SignatureDecodingException",
    "VerifierError",
    "VerifierException",
    # Messages
    "UNKNOWN_IDENTIFIER",
    "SignedSmsRequest",
    "SmsPayload",
    # Outcomes
    "BulkSummary",
    "VerificationOutcome",
    "VerificationStatus",
    "now_epoch_millis",
]
