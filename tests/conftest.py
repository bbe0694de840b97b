"""
Pytest configuration and shared fixtures for SMS verifier tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from fixtures.common import (  # noqa: E402
    FIXED_NOW_MILLIS,
    make_payload,
    make_private_key,
    make_signed_request,
    public_key_pem,
)

from core.verification import SignatureVerifier  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(scope="session")
def private_key():
    """The signer's key pair used throughout the tests."""
    return make_private_key(0)


@pytest.fixture(scope="session")
def other_private_key():
    """A second, unrelated key pair."""
    return make_private_key(1)


@pytest.fixture(scope="session")
def public_key(private_key):
    return private_key.public_key()


@pytest.fixture
def verifier(public_key):
    """Verifier bound to the test public key with a fixed clock."""
    return SignatureVerifier(public_key, clock=lambda: FIXED_NOW_MILLIS)


@pytest.fixture
def payload():
    return make_payload()


@pytest.fixture
def signed_request(payload, private_key):
    return make_signed_request(payload, private_key)


@pytest.fixture
def public_key_file(tmp_path, private_key):
    """PEM public key written to a temp file."""
    path = tmp_path / "public_key.pem"
    path.write_bytes(public_key_pem(private_key))
    return path


@pytest.fixture(autouse=True)
def _clear_verifier_env(monkeypatch):
    """Keep host environment variables out of config tests."""
    for name in (
        "SMS_VERIFIER_PUBLIC_KEY_PATH",
        "SMS_VERIFIER_PUBLIC_KEY",
        "SMS_VERIFIER_HOST",
        "SMS_VERIFIER_PORT",
        "SMS_VERIFIER_LOG_LEVEL",
        "SMS_VERIFIER_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
