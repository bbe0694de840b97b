"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path

from core.config.runtime import RuntimeConfig
from core.schemas.errors import KeyInitializationError, VerifierException
from core.verification import SignatureVerifier


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def runtime_config(args: Namespace) -> RuntimeConfig:
    config = getattr(args, "runtime_config", None)
    return config if config is not None else RuntimeConfig()


def load_verifier(args: Namespace) -> SignatureVerifier | None:
    """
    Build the verifier for a command, or print why it could not be built.

    Returns:
        The verifier, or None after reporting a key initialization failure
    """
    try:
        return SignatureVerifier.from_config(runtime_config(args).keys)
    except KeyInitializationError as e:
        if getattr(args, "json", False):
            print_error_json(e)
        else:
            print(f"Error: Could not initialize verification key: {e.message}", file=sys.stderr)
        return None


def print_error_json(error: VerifierException) -> None:
    """Print a verifier error as a JSON document on stdout."""
    print(json.dumps({"ok": False, "error": error.to_error_model().model_dump()}, indent=2))


def read_input(path: str) -> bytes:
    """Read a file, or stdin when path is '-'."""
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()
