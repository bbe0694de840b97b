"""API request and response models."""

from api.models.requests import SignedSmsRequest, SmsPayload
from api.models.responses import (
    HealthResponse,
    InfoResponse,
    VerifyResponse,
    SimpleVerifyResponse,
    BulkVerifyResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "SignedSmsRequest",
    "SmsPayload",
    "HealthResponse",
    "InfoResponse",
    "VerifyResponse",
    "SimpleVerifyResponse",
    "BulkVerifyResponse",
    "ErrorDetail",
    "ErrorResponse",
]
