"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --port 8081

    # Or run directly
    python -m api.app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from api.deps import build_verifier
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    validation_error_handler,
    verifier_error_handler,
)
from api.routes import health, verify
from core.config.runtime import RuntimeConfig, load_runtime_config
from core.schemas.errors import VerifierException
from core.verification import SignatureVerifier


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(config: RuntimeConfig) -> None:
    """Configure root logging from runtime config, defaulting to INFO."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def create_app(
    verifier: SignatureVerifier | None = None,
    config: RuntimeConfig | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        verifier: Prebuilt verifier. When omitted, one is built from
            `config` (or the loaded runtime config) at startup, and a key
            loading failure aborts startup.
        config: Runtime configuration used when building the verifier.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if verifier is not None:
            app.state.verifier = verifier
        else:
            # Standalone server (uvicorn api.app:app); nothing else set up logging
            runtime_config = config or load_runtime_config()
            configure_logging(runtime_config)
            # KeyInitializationError propagates and stops the server
            app.state.verifier = build_verifier(runtime_config)
        logger.info("SMS Verifier Service started")
        yield
        app.state.verifier = None

    app = FastAPI(
        title="SMS Verifier Service",
        description="""
Digital signature verification for SMS/Notification platforms.

## Endpoints

- **POST /api/v1/sms/verify** - Verify a signed SMS (detailed response)
- **POST /api/v1/sms/verify/simple** - Verify a signed SMS (true/false)
- **POST /api/v1/sms/verify/bulk** - Verify an NDJSON stream of signed SMS
- **GET /api/v1/sms/health** - Health check
- **GET /api/v1/sms/info** - Service information
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(VerifierException, verifier_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    app.include_router(health.router)
    app.include_router(verify.router)

    return app


# Create the application instance; the key is loaded at startup
app = create_app()


if __name__ == "__main__":
    import uvicorn

    runtime_config = load_runtime_config()
    uvicorn.run(
        create_app(config=runtime_config),
        host=runtime_config.server.host,
        port=runtime_config.server.port,
    )
