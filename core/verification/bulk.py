"""
Verification - Bulk Session

Aggregates verification results over one client stream.

Lifecycle: OPEN (accepting messages) -> CLOSED (after on_complete).
The transport delivers messages one at a time, in order, so the counters
are single-writer and need no locking.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from core.schemas.errors import SessionClosedError
from core.schemas.messages import SignedSmsRequest, UNKNOWN_IDENTIFIER
from core.schemas.outcome import BulkSummary
from core.verification.verifier import SignatureVerifier


logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class BulkSession:
    """One stream's worth of verifications, folded into a BulkSummary."""

    def __init__(self, verifier: SignatureVerifier):
        self._verifier = verifier
        self.state = SessionState.OPEN
        self.total_processed = 0
        self.verified_count = 0
        self.failed_count = 0
        self.failed_identifiers: list[str] = []
        self.upstream_error: Optional[BaseException] = None
        self._summary: Optional[BulkSummary] = None
        logger.info("Starting bulk verification session")

    @property
    def is_open(self) -> bool:
        return self.state is SessionState.OPEN

    def on_message(self, request: Optional[SignedSmsRequest]) -> None:
        """
        Verify one message and fold the result into the counters.

        An exception from the verifier counts as a failure; it never stops
        the session.

        Raises:
            SessionClosedError: If the session already completed
        """
        if not self.is_open:
            raise SessionClosedError("Bulk session is closed; no further messages accepted")

        identifier = request.identifier if request is not None else UNKNOWN_IDENTIFIER
        self.total_processed += 1

        try:
            outcome = self._verifier.verify(request)
        except Exception as e:
            logger.warning(f"Bulk verification error for message {identifier}: {e}")
            self._record_failure(identifier)
            return

        if outcome.verified:
            self.verified_count += 1
            logger.debug(f"Bulk verification: message {identifier} verified")
        else:
            self._record_failure(outcome.identifier)
            logger.debug(
                f"Bulk verification: message {identifier} failed ({outcome.status.value})"
            )

    def on_upstream_error(self, error: BaseException) -> None:
        """Record a stream-level error. Does not finalize the summary."""
        self.upstream_error = error
        logger.error(
            f"Error in bulk verification stream after {self.total_processed} messages: {error}"
        )

    def on_complete(self) -> BulkSummary:
        """
        Finalize the session and return its summary.

        Calls after the first return the same summary without recounting.
        """
        if self._summary is not None:
            return self._summary

        self._summary = self.snapshot()
        self.state = SessionState.CLOSED
        logger.info(
            f"Bulk verification completed: total={self._summary.total_processed}, "
            f"verified={self._summary.verified_count}, failed={self._summary.failed_count}"
        )
        return self._summary

    def snapshot(self) -> BulkSummary:
        """Summary of what has been processed so far, without closing."""
        return BulkSummary(
            total_processed=self.total_processed,
            verified_count=self.verified_count,
            failed_count=self.failed_count,
            failed_identifiers=tuple(self.failed_identifiers),
        )

    def _record_failure(self, identifier: str) -> None:
        self.failed_count += 1
        self.failed_identifiers.append(identifier)
