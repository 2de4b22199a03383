"""
API route definitions — /quotes endpoints.

- POST /quotes/analyze: comparative analysis of 2-10 quotes.
- GET  /quotes/categories: fixed category list.
- GET  /quotes/health: own liveness plus AI service reachability.
- GET  /quotes/stats: placeholder counters.

Handlers are plain `def`: FastAPI runs them on its threadpool, so the
blocking AI service call does not stall the event loop.
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from quote_analyzer.ai_service.client import AIServiceClient
from quote_analyzer.analyzer_logging import get_logger
from quote_analyzer.quotes.models import (
    AnalysisBatchResult,
    AnalyzeQuotesRequest,
    CategoriesResponse,
    HealthResponse,
    StatsResponse,
)
from quote_analyzer.quotes.service import QuotesService

logger = get_logger(__name__)

router = APIRouter(prefix="/quotes", tags=["quotes"])


def get_ai_client(request: Request) -> AIServiceClient:
    """Dependency: the process-wide AI service client created in the app lifespan."""
    return request.app.state.ai_client


def get_quotes_service(ai_client: AIServiceClient = Depends(get_ai_client)) -> QuotesService:
    return QuotesService(ai_client)


@router.post("/analyze", response_model=AnalysisBatchResult)
def analyze_quotes(
    body: AnalyzeQuotesRequest,
    service: QuotesService = Depends(get_quotes_service),
) -> AnalysisBatchResult:
    """
    Submit several quotes for comparative analysis.

    Returns analyses sorted by adjusted score (best first) and an overall
    recommendation. 400 on validation errors; 502/503/504 or the AI service's
    own status on upstream failures.
    """
    logger.info("analyze_request_received", quote_count=len(body.quotes))
    result = service.analyze_quotes(body.quotes)
    logger.info("analyze_response_sent", analysis_count=len(result.analyses))
    return result


@router.get("/categories", response_model=CategoriesResponse)
def get_categories(service: QuotesService = Depends(get_quotes_service)) -> CategoriesResponse:
    return CategoriesResponse(categories=service.get_available_categories())


@router.get("/health", response_model=HealthResponse)
def check_health(service: QuotesService = Depends(get_quotes_service)) -> HealthResponse:
    """Backend is up if this answers; status is degraded when the AI service health check fails."""
    ai_healthy = service.check_ai_service()
    if not ai_healthy:
        logger.warning("ai_service_degraded")
    return HealthResponse(
        status="ok" if ai_healthy else "degraded",
        backend="ok",
        ai_service=ai_healthy,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/stats", response_model=StatsResponse)
def get_stats(service: QuotesService = Depends(get_quotes_service)) -> StatsResponse:
    return StatsResponse.model_validate(service.get_analysis_stats())
