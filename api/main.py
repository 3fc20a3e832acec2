"""
AI Pipe Service - FastAPI Application

Main entry point for the API server.
Environment-agnostic: configuration reads from settings (.env file).
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from aipipe.errors import AIPipeError, NotFoundError
from aipipe.logging_setup import setup_logging
from aipipe.settings import SERVICE_VERSION, Settings, get_settings
from aipipe.utils.timestamps import elapsed_ms, monotonic_ms
from api.routers import health, run

# Get settings
cfg = get_settings()

# Configure logging (keeps the level already chosen by aipipe-serve)
setup_logging(cfg.log_level, override=False)
logger = logging.getLogger(__name__)
access_logger = logging.getLogger("api.access")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


async def handle_aipipe_error(request: Request, exc: AIPipeError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return _error_response(exc.status_code, exc.message)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unmatched routes and unsupported methods both surface as "Not found"
    if exc.status_code in (404, 405):
        return _error_response(NotFoundError.status_code, NotFoundError.default_message)
    return _error_response(exc.status_code, str(exc.detail))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _error_response(500, "Internal server error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        settings: Optional settings override (defaults to get_settings())

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or cfg

    app = FastAPI(
        title="AI Pipe Service",
        description="Deterministic toy text pipeline: parse, analyze, summarize",
        version=SERVICE_VERSION,
    )

    # CORS configuration from settings
    logger.info(f"Configuring CORS with origins: {settings.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Access log in the compact 'tiny' format and request arrival time."""
        started = monotonic_ms()
        request.state.started_ms = started
        response = await call_next(request)
        length = response.headers.get("content-length", "-")
        access_logger.info(
            f"{request.method} {request.url.path} {response.status_code} {length} - "
            f"{elapsed_ms(started)} ms"
        )
        return response

    app.add_exception_handler(AIPipeError, handle_aipipe_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # Mount routers
    app.include_router(run.router, tags=["run"])
    app.include_router(health.router, tags=["health"])

    if settings.auth_enabled:
        logger.info("Bearer auth enabled on /run")
    else:
        logger.info("Bearer auth disabled (no token configured)")

    logger.info(f"FastAPI application created (env={settings.env})")

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"AI Pipe service listening on {cfg.api_host}:{cfg.api_port}")
    logger.info(f"Environment: {cfg.env}")

    uvicorn.run(
        "api.main:app",
        host=cfg.api_host,
        port=cfg.api_port,
        reload=cfg.api_reload,
        workers=cfg.api_workers if not cfg.api_reload else 1,  # Workers only work without reload
        log_level=cfg.log_level.lower()
    )
