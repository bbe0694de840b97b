"""
Schemas - Verification Outcomes
File: outcome.py

Purpose: Value types returned by the verifier and the bulk session.
A verification attempt always yields an outcome; it never raises.
"""

import time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from .messages import UNKNOWN_IDENTIFIER


class VerificationStatus(str, Enum):
    """Wire-stable verification status vocabulary."""

    VALID = "VALID"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    MISSING_SIGNATURE = "MISSING_SIGNATURE"
    MISSING_PAYLOAD = "MISSING_PAYLOAD"
    VERIFICATION_ERROR = "VERIFICATION_ERROR"


def now_epoch_millis() -> int:
    """Wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class VerificationOutcome(BaseModel):
    """
    Result of one verification attempt.

    `verified` is derived from `status`, so it cannot disagree with it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    identifier: str = Field(default=UNKNOWN_IDENTIFIER)
    status: VerificationStatus
    message: str = Field(default="")
    verified_at_epoch_millis: int = Field(..., ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def verified(self) -> bool:
        return self.status is VerificationStatus.VALID

    @classmethod
    def build(
        cls,
        status: VerificationStatus,
        message: str,
        verified_at_epoch_millis: int,
        identifier: str | None = None,
    ) -> "VerificationOutcome":
        """Create an outcome, substituting the sentinel for a missing identifier."""
        return cls(
            identifier=identifier if identifier is not None else UNKNOWN_IDENTIFIER,
            status=status,
            message=message,
            verified_at_epoch_millis=verified_at_epoch_millis,
        )


class BulkSummary(BaseModel):
    """Aggregate result of one bulk verification stream."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_processed: int = Field(default=0, ge=0)
    verified_count: int = Field(default=0, ge=0)
    failed_count: int = Field(default=0, ge=0)
    failed_identifiers: tuple[str, ...] = Field(
        default=(),
        description="Identifiers of failed messages, in arrival order",
    )

    @model_validator(mode="after")
    def _check_counts(self) -> "BulkSummary":
        if self.total_processed != self.verified_count + self.failed_count:
            raise ValueError(
                f"total_processed ({self.total_processed}) != verified_count "
                f"({self.verified_count}) + failed_count ({self.failed_count})"
            )
        if len(self.failed_identifiers) != self.failed_count:
            raise ValueError(
                f"failed_identifiers has {len(self.failed_identifiers)} entries, "
                f"expected {self.failed_count}"
            )
        return self
