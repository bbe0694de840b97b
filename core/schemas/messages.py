"""
Schemas - Signed SMS Messages
File: messages.py

Purpose: The structured payload the signer signs, and the request that
carries it together with its base64 signature.

Field numbers on SmsPayload are part of the canonical encoding and must
never be reused or renumbered.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .canonical import CanonicalModel

UNKNOWN_IDENTIFIER = "unknown"

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
    frozen=True,
)


class SmsPayload(CanonicalModel):
    """The signed portion of an SMS message."""

    model_config = _WIRE_CONFIG

    __canonical_fields__: ClassVar[tuple[tuple[int, str], ...]] = (
        (1, "message_id"),
        (2, "sender"),
        (3, "recipient"),
        (4, "content"),
        (5, "timestamp"),
    )

    message_id: str = Field(default="", description="Stable message identifier")
    sender: str = Field(default="", description="Sender address, e.g. +15550100")
    recipient: str = Field(default="", description="Recipient address")
    content: str = Field(default="", description="Message body")
    timestamp: int = Field(default=0, description="Send time, epoch milliseconds")


class SignedSmsRequest(BaseModel):
    """
    A payload plus its signature as produced by the signer.

    Either part may be absent on the wire; the verifier reports which.
    """

    model_config = _WIRE_CONFIG

    payload: SmsPayload | None = Field(default=None)
    message_signature: str | None = Field(
        default=None,
        description="Base64 RSA-SHA256 signature over the canonical payload digest",
    )

    @property
    def identifier(self) -> str:
        """Message id of the payload, or the 'unknown' sentinel."""
        if self.payload is None:
            return UNKNOWN_IDENTIFIER
        return self.payload.message_id
