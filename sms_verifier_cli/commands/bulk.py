"""
CLI Bulk Command

Verify a stream of signed SMS requests from an NDJSON file (one request
per line) and print the aggregate summary.

Usage:
    sms-verifier bulk requests.ndjson [--json]
    cat requests.ndjson | sms-verifier bulk -
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import IO, Iterator, Optional

from pydantic import ValidationError

from core.schemas.messages import SignedSmsRequest
from core.schemas.outcome import BulkSummary
from core.verification import BulkSession
from sms_verifier_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    load_verifier,
)


logger = logging.getLogger(__name__)


def iter_requests(stream: IO[bytes]) -> Iterator[Optional[SignedSmsRequest]]:
    """
    Yield one parsed request per non-blank line; None for unparsable lines.

    Lines are read as bytes so that invalid UTF-8 fails only its own line.
    """
    for lineno, line in enumerate(stream, start=1):
        if not line.strip():
            continue
        try:
            yield SignedSmsRequest.model_validate_json(line)
        except ValidationError as e:
            logger.warning(f"Line {lineno}: unparsable request ({e.error_count()} error(s))")
            yield None


def print_summary_human(summary: BulkSummary) -> None:
    print(f"total_processed: {summary.total_processed}")
    print(f"verified: {summary.verified_count}")
    print(f"failed: {summary.failed_count}")
    if summary.failed_identifiers:
        print(f"\nfailed messages ({summary.failed_count}):")
        for identifier in summary.failed_identifiers[:50]:
            print(f"  ✗ {identifier}")
        if summary.failed_count > 50:
            print(f"  ... and {summary.failed_count - 50} more")


def print_summary_json(summary: BulkSummary) -> None:
    print(json.dumps(summary.model_dump(mode="json"), indent=2))


def bulk_cmd(args: Namespace) -> int:
    """
    Execute the bulk command.

    Returns:
        0 when every message verified, 2 when any failed,
        1 on a runtime error
    """
    verifier = load_verifier(args)
    if verifier is None:
        return EXIT_RUNTIME_ERROR

    session = BulkSession(verifier)

    try:
        if args.requests_path == "-":
            for request in iter_requests(sys.stdin.buffer):
                session.on_message(request)
        else:
            with open(Path(args.requests_path), "rb") as f:
                for request in iter_requests(f):
                    session.on_message(request)
    except OSError as e:
        session.on_upstream_error(e)
        print(f"Error: Could not read requests: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = session.on_complete()

    if args.json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.failed_count == 0 else EXIT_VERIFICATION_FAILED
