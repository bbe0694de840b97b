"""
CLI Serve Command

Run the HTTP API under uvicorn.

Usage:
    sms-verifier serve [--host HOST] [--port PORT]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from sms_verifier_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    load_verifier,
    runtime_config,
)


logger = logging.getLogger(__name__)


def serve_cmd(args: Namespace) -> int:
    """Load the key, then serve until interrupted."""
    import uvicorn

    from api.app import create_app

    config = runtime_config(args)
    host = args.host or config.server.host
    port = args.port or config.server.port

    # Fail before binding the port if the key is unusable
    verifier = load_verifier(args)
    if verifier is None:
        return EXIT_RUNTIME_ERROR

    logger.info(f"REST API available at: http://{host}:{port}/api/v1/sms")
    uvicorn.run(create_app(verifier=verifier, config=config), host=host, port=port)
    return EXIT_SUCCESS
