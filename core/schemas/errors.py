"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error codes and exceptions for the verifier.

Verification failures are reported as VerificationOutcome values, never as
exceptions. The exceptions below are raised by the building blocks
(canonical encoding, signature decoding, key loading, bulk sessions) and
converted to outcomes at the verifier boundary, or are fatal at startup.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the verifier."""

    # Encoding errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    SIGNATURE_DECODING_ERROR = "SIGNATURE_DECODING_ERROR"

    # Key errors
    KEY_INITIALIZATION_ERROR = "KEY_INITIALIZATION_ERROR"

    # Session errors
    SESSION_CLOSED = "SESSION_CLOSED"


class VerifierError(BaseModel):
    """
    Structured error model, used when an error has to travel as data
    (API error bodies, CLI JSON output).
    """

    model_config = ConfigDict(extra="forbid")

    code: str = Field(..., description="Stable machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)
    retryable: bool = Field(default=False)


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class VerifierException(Exception):
    """
    Base exception for all verifier errors.

    Carries structured error information and converts to a VerifierError.
    """

    def __init__(
        self,
        message: str,
        code: str = "VERIFIER_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> VerifierError:
        """Convert this exception to a VerifierError model."""
        return VerifierError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class CanonicalizationException(VerifierException):
    """Raised when a payload cannot be encoded to canonical bytes."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class SignatureDecodingException(VerifierException):
    """Raised when a signature is not valid base64."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.SIGNATURE_DECODING_ERROR,
            details=details,
            retryable=False,
        )


class KeyInitializationError(VerifierException):
    """
    Raised when the public key cannot be loaded.

    Fatal at startup: the service refuses to start without a key.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if source:
            full_details["source"] = source
        super().__init__(
            message=message,
            code=ErrorCodes.KEY_INITIALIZATION_ERROR,
            details=full_details,
            retryable=False,
        )


class SessionClosedError(VerifierException):
    """Raised when a message is fed to a bulk session that already completed."""

    def __init__(self, message: str = "Bulk session is closed") -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.SESSION_CLOSED,
            retryable=False,
        )
