"""
Signature verification: the unary verifier and the bulk stream session.
"""

from .bulk import BulkSession, SessionState
from .verifier import SignatureVerifier

__all__ = [
    "BulkSession",
    "SessionState",
    "SignatureVerifier",
]
