"""
CLI command modules.
"""

from sms_verifier_cli.commands import bulk, serve, verify

__all__ = ["bulk", "serve", "verify"]
