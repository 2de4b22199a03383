"""
Main entrypoint: run the Quote Analyzer API with uvicorn.

Env: AI_SERVICE_URL, API_HOST, PORT, LOG_LEVEL, LOG_FORMAT, CORS_ORIGINS.

Equivalent: uvicorn quote_analyzer.api_server.app:app --host 0.0.0.0 --port 3000
"""

# Configure structured JSON logging before other imports that may log
from quote_analyzer.analyzer_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Resolve settings and serve the FastAPI app in the main thread."""
    from quote_analyzer.config import get_settings

    settings = get_settings()

    from quote_analyzer.api_server.app import app
    import uvicorn

    logger.info(
        "main_server_starting",
        host=settings.api_host,
        port=settings.api_port,
        ai_service_url=settings.ai_service_url,
        endpoints=[
            "POST /quotes/analyze",
            "GET /quotes/categories",
            "GET /quotes/health",
            "GET /quotes/stats",
        ],
    )
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
