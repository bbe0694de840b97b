"""
API Dependencies

Dependency injection for the API.
The verifier is built once at startup and stored on the application state.
"""

from __future__ import annotations

import logging

from fastapi import Request

from api.errors import ServiceUnavailableError
from core.config.runtime import RuntimeConfig, load_runtime_config
from core.verification import SignatureVerifier

logger = logging.getLogger(__name__)


def build_verifier(config: RuntimeConfig | None = None) -> SignatureVerifier:
    """
    Create the process-wide verifier from runtime configuration.

    Raises:
        KeyInitializationError: If the public key cannot be loaded
    """
    config = config or load_runtime_config()
    return SignatureVerifier.from_config(config.keys)


def get_verifier(request: Request) -> SignatureVerifier:
    """FastAPI dependency returning the verifier built at startup."""
    verifier = getattr(request.app.state, "verifier", None)
    if verifier is None:
        raise ServiceUnavailableError()
    return verifier
