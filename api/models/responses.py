"""
API Response Models

Pydantic models for API response serialization. Verification responses use
camelCase field names on the wire.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.schemas.outcome import BulkSummary, VerificationOutcome, VerificationStatus


_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    status: str = "UP"
    service: str = "SMS Verifier Service"
    version: str = "1.0.0"


class InfoResponse(BaseModel):
    """Response for GET /info endpoint."""

    service: str = "SMS Verifier Service"
    description: str = "Digital signature verification for SMS/Notification platforms"
    version: str = "1.0.0"
    capabilities: list[str] = Field(default_factory=lambda: ["signature-verification"])
    endpoints: dict[str, str] = Field(default_factory=dict)


class VerifyResponse(BaseModel):
    """Response for POST /verify endpoint."""

    model_config = _CAMEL

    message_id: str = Field(..., description="Identifier of the verified message")
    verified: bool = Field(..., description="True only when status is VALID")
    status: VerificationStatus = Field(..., description="Verification status")
    status_message: str = Field(..., description="Human-readable result")
    verified_at: int = Field(..., description="Verification time, epoch milliseconds")

    @classmethod
    def from_outcome(cls, outcome: VerificationOutcome) -> "VerifyResponse":
        return cls(
            message_id=outcome.identifier,
            verified=outcome.verified,
            status=outcome.status,
            status_message=outcome.message,
            verified_at=outcome.verified_at_epoch_millis,
        )


class SimpleVerifyResponse(BaseModel):
    """Response for POST /verify/simple endpoint."""

    model_config = _CAMEL

    verified: bool
    message_id: str
    timestamp: int


class BulkVerifyResponse(BaseModel):
    """Response for POST /verify/bulk endpoint."""

    model_config = _CAMEL

    total_processed: int = Field(..., description="Messages received on the stream")
    verified: int = Field(..., description="Messages with a VALID signature")
    failed: int = Field(..., description="Messages that did not verify")
    failed_message_ids: list[str] = Field(
        default_factory=list,
        description="Identifiers of failed messages, in arrival order",
    )

    @classmethod
    def from_summary(cls, summary: BulkSummary) -> "BulkVerifyResponse":
        return cls(
            total_processed=summary.total_processed,
            verified=summary.verified_count,
            failed=summary.failed_count,
            failed_message_ids=list(summary.failed_identifiers),
        )


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
