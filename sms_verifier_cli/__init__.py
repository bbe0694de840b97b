"""
SMS Verifier CLI

Command-line interface for the SMS signature verifier.

Usage:
    python -m sms_verifier_cli verify request.json
    python -m sms_verifier_cli bulk requests.ndjson
    python -m sms_verifier_cli serve --port 8081
    python -m sms_verifier_cli config --init
"""

__version__ = "1.0.0"
