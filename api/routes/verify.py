"""
Verify Routes

Unary and client-streaming verification of signed SMS requests.
These handlers only adapt the wire format; all verification logic lives in
core.verification.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.requests import ClientDisconnect

from api.deps import get_verifier
from api.errors import APIError
from api.models.responses import (
    BulkVerifyResponse,
    SimpleVerifyResponse,
    VerifyResponse,
)
from core.schemas.messages import SignedSmsRequest
from core.schemas.outcome import now_epoch_millis
from core.verification import BulkSession, SignatureVerifier


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/sms", tags=["verification"])


class StreamAbortedError(APIError):
    """The bulk request stream ended abnormally."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            code="STREAM_ABORTED",
            message=message,
            status_code=400,
            details=details,
        )


async def iter_ndjson_lines(chunks: AsyncIterator[bytes]) -> AsyncIterator[bytes]:
    """Yield non-blank lines from a chunked byte stream as they complete."""
    buffer = b""
    async for chunk in chunks:
        buffer += chunk
        *lines, buffer = buffer.split(b"\n")
        for line in lines:
            if line.strip():
                yield line
    if buffer.strip():
        yield buffer


def parse_line(line: bytes) -> Optional[SignedSmsRequest]:
    """Parse one NDJSON line; None when it is not a valid request."""
    try:
        return SignedSmsRequest.model_validate_json(line)
    except ValidationError as e:
        logger.warning(f"Unparsable message in bulk stream: {e.error_count()} error(s)")
        return None


@router.post("/verify", response_model=VerifyResponse)
async def verify_sms_signature(
    sms_request: SignedSmsRequest,
    verifier: SignatureVerifier = Depends(get_verifier),
) -> JSONResponse:
    """
    Verify a signed SMS request.

    Returns 200 when the signature is VALID, 401 for every other status.
    The body always carries the detailed outcome.
    """
    logger.info(f"Received verification request for message ID: {sms_request.identifier}")

    outcome = verifier.verify(sms_request)
    response = VerifyResponse.from_outcome(outcome)

    logger.info(
        f"Verification result for message {outcome.identifier}: "
        f"{outcome.verified} - {outcome.status.value}"
    )

    return JSONResponse(
        status_code=200 if outcome.verified else 401,
        content=response.model_dump(mode="json", by_alias=True),
    )


@router.post("/verify/simple", response_model=SimpleVerifyResponse, response_model_by_alias=True)
async def simple_verify(
    sms_request: SignedSmsRequest,
    verifier: SignatureVerifier = Depends(get_verifier),
) -> SimpleVerifyResponse:
    """Verify a signed SMS request and return only true/false."""
    logger.info("Received simple SMS verification request")
    return SimpleVerifyResponse(
        verified=verifier.is_signature_valid(sms_request),
        message_id=sms_request.identifier,
        timestamp=now_epoch_millis(),
    )


@router.post("/verify/bulk", response_model=BulkVerifyResponse, response_model_by_alias=True)
async def verify_bulk_sms(
    request: Request,
    verifier: SignatureVerifier = Depends(get_verifier),
) -> BulkVerifyResponse:
    """
    Verify a stream of signed SMS requests.

    The body is NDJSON, one signed request per line, read incrementally.
    Each line is verified before the next is read. A line that does not
    parse counts as a failure with identifier 'unknown'.
    """
    logger.info("Starting bulk verification stream")
    session = BulkSession(verifier)

    try:
        async for line in iter_ndjson_lines(request.stream()):
            # RSA verification is CPU-bound; keep it off the event loop
            await run_in_threadpool(session.on_message, parse_line(line))
    except ClientDisconnect as e:
        session.on_upstream_error(e)
        partial = session.snapshot()
        logger.warning(f"Bulk stream aborted; partial summary discarded: {partial.model_dump()}")
        raise StreamAbortedError(
            "Client disconnected before the stream completed",
            details={"partial": BulkVerifyResponse.from_summary(partial).model_dump(by_alias=True)},
        )

    return BulkVerifyResponse.from_summary(session.on_complete())
