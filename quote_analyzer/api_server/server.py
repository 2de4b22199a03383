"""
FastAPI server — quote analysis façade over the AI service.

Builds the app: lifespan-managed AI service client, CORS for the frontend,
request logging middleware, the /quotes router and consistent JSON errors.
Config via env (see quote_analyzer.config).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quote_analyzer import __version__
from quote_analyzer.ai_service.client import AIServiceClient
from quote_analyzer.analyzer_logging import get_logger
from quote_analyzer.api_server.middleware import request_logging_middleware
from quote_analyzer.api_server.routes import router as quotes_router
from quote_analyzer.config import get_settings
from quote_analyzer.core.exceptions import QuoteAnalyzerError, UpstreamUnknown

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Lifespan: one AI service client per process
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the AI service client from settings on startup; close it on shutdown."""
    settings = get_settings()
    client = AIServiceClient(settings)
    app.state.ai_client = client
    logger.info(
        "api_started",
        ai_service_url=settings.ai_service_url,
        ai_service_timeout_sec=settings.ai_service_timeout_sec,
    )
    try:
        yield
    finally:
        client.close()
        logger.info("api_stopped")


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="Quote Analyzer API",
    description="Comparative analysis of vendor quotes via the AI service, with business scoring rules.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_credentials=True,
    allow_headers=["Content-Type", "Authorization"],
)
app.middleware("http")(request_logging_middleware)

app.include_router(quotes_router)


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness: API is up."""
    return {"status": "ok"}


# -----------------------------------------------------------------------------
# Error handlers
# -----------------------------------------------------------------------------


@app.exception_handler(QuoteAnalyzerError)
def quote_analyzer_error_handler(request: Request, exc: QuoteAnalyzerError) -> JSONResponse:
    """Render domain errors as {"detail", "error"} with the error's status code."""
    if isinstance(exc, UpstreamUnknown):
        logger.error("quote_analysis_internal_error", path=request.url.path, error=str(exc.__cause__ or exc))
    else:
        logger.warning(
            "quote_analysis_error",
            path=request.url.path,
            error_code=exc.error_code,
            status_code=exc.status_code,
            detail=exc.message,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.error_code},
    )


@app.exception_handler(RequestValidationError)
def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body/field validation failures are 400, not FastAPI's default 422."""
    errors: list[dict[str, Any]] = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]
    logger.info("request_validation_failed", path=request.url.path, error_count=len(errors))
    return JSONResponse(
        status_code=400,
        content={"detail": errors, "error": "validation_error"},
    )


@app.exception_handler(StarletteHTTPException)
def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (404, 405, ...) in the same {"detail", "error"} shape; headers such as Allow are kept."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": "http_error"},
        headers=exc.headers,
    )
