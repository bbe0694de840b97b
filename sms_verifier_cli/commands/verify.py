"""
CLI Verify Command

Verify one signed SMS request read from a JSON file.

Usage:
    sms-verifier verify request.json [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from pydantic import ValidationError

from core.schemas.messages import SignedSmsRequest
from core.schemas.outcome import VerificationOutcome
from sms_verifier_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    load_verifier,
    read_input,
)


logger = logging.getLogger(__name__)


def print_outcome_human(outcome: VerificationOutcome) -> None:
    """Print outcome in human-readable format."""
    mark = "✓" if outcome.verified else "✗"
    print(f"{mark} message_id: {outcome.identifier}")
    print(f"  verified: {str(outcome.verified).lower()}")
    print(f"  status: {outcome.status.value}")
    print(f"  message: {outcome.message}")
    print(f"  verified_at: {outcome.verified_at_epoch_millis}")


def print_outcome_json(outcome: VerificationOutcome) -> None:
    """Print outcome as JSON."""
    print(json.dumps(outcome.model_dump(mode="json"), indent=2))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        0 when the signature is VALID, 2 when it is rejected,
        1 on a runtime error
    """
    try:
        raw = read_input(args.request_path)
    except OSError as e:
        print(f"Error: Could not read request: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        request = SignedSmsRequest.model_validate_json(raw)
    except ValidationError as e:
        print(f"Error: Invalid request format: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    verifier = load_verifier(args)
    if verifier is None:
        return EXIT_RUNTIME_ERROR

    outcome = verifier.verify(request)

    if args.json:
        print_outcome_json(outcome)
    else:
        print_outcome_human(outcome)

    if outcome.verified:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning(f"Verification failed: {outcome.status.value}")
    return EXIT_VERIFICATION_FAILED
