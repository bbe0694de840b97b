"""
API Request Models

Request bodies are the signed messages themselves; the wire schema lives in
core.schemas.messages so the CLI and the API parse identically.

Example body for POST /api/v1/sms/verify:

    {
      "payload": {
        "messageId": "msg-1",
        "sender": "+1",
        "recipient": "+2",
        "content": "hi"
      },
      "messageSignature": "<base64>"
    }

POST /api/v1/sms/verify/bulk takes one such object per line (NDJSON).
"""

from core.schemas.messages import SignedSmsRequest, SmsPayload

__all__ = ["SignedSmsRequest", "SmsPayload"]
