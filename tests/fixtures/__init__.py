"""
Test fixtures package for SMS verifier tests.

Usage:
    from fixtures import make_signed_request, make_private_key

    def test_something():
        request = make_signed_request(make_payload(message_id="m-7"))
"""

from .common import (
    BOGUS_SIGNATURE_B64,
    FIXED_NOW_MILLIS,
    make_payload,
    make_private_key,
    make_signed_request,
    public_key_pem,
    sign_payload,
    to_wire_json,
)

__all__ = [
    "BOGUS_SIGNATURE_B64",
    "FIXED_NOW_MILLIS",
    "make_payload",
    "make_private_key",
    "make_signed_request",
    "public_key_pem",
    "sign_payload",
    "to_wire_json",
]
