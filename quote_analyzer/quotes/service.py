"""
Quotes service — business orchestration for quote analysis.

Validates the batch, calls the AI service, applies the business rules and
ranks the result. Holds no state between calls.
"""

from __future__ import annotations

from typing import Sequence

from quote_analyzer.ai_service.client import AIServiceClient
from quote_analyzer.analyzer_logging import get_logger
from quote_analyzer.core.exceptions import InvalidBatchSize
from quote_analyzer.quotes.models import AnalysisBatchResult, QuoteSubmission
from quote_analyzer.quotes.rules import adjust, rank

logger = get_logger(__name__)

MIN_QUOTES_PER_BATCH = 2
# Bounds response latency; not a technical limit of the AI service
MAX_QUOTES_PER_BATCH = 10

AVAILABLE_CATEGORIES: tuple[str, ...] = (
    "Cloud & Infrastructure",
    "Cybersecurity",
    "Software Development",
    "Data Analytics",
    "IT Support & Managed Services",
    "Networking & Connectivity",
    "DevOps & CI/CD",
    "Business Software (CRM, ERP)",
)


def validate_batch_size(size: int) -> None:
    """Raise InvalidBatchSize unless MIN_QUOTES_PER_BATCH <= size <= MAX_QUOTES_PER_BATCH."""
    if size < MIN_QUOTES_PER_BATCH:
        raise InvalidBatchSize(
            f"Submit at least {MIN_QUOTES_PER_BATCH} quotes for a meaningful comparison",
            size=size,
        )
    if size > MAX_QUOTES_PER_BATCH:
        raise InvalidBatchSize(
            f"Maximum {MAX_QUOTES_PER_BATCH} quotes per analysis to keep response time acceptable",
            size=size,
        )


class QuotesService:
    """Analyze batches of quotes through the AI service plus business rules."""

    def __init__(self, ai_client: AIServiceClient) -> None:
        self._ai_client = ai_client

    def analyze_quotes(self, submissions: Sequence[QuoteSubmission]) -> AnalysisBatchResult:
        """
        Analyze a batch and return it adjusted and ranked (best score first).

        Raises:
            InvalidBatchSize: fewer than 2 or more than 10 quotes.
            UpstreamError: any AI service failure; no partial results.
        """
        logger.info("quotes_analysis_started", quote_count=len(submissions))
        validate_batch_size(len(submissions))

        result = self._ai_client.analyze(submissions)

        adjusted = [adjust(a) for a in result.analyses]
        ranked = rank(adjusted)
        result = result.model_copy(update={"analyses": ranked})

        logger.info(
            "quotes_analysis_completed",
            quote_count=len(ranked),
            top_vendor=ranked[0].vendor_name if ranked else None,
            top_score=ranked[0].score if ranked else None,
        )
        return result

    def check_ai_service(self) -> bool:
        return self._ai_client.check_health()

    def get_available_categories(self) -> list[str]:
        """Fixed category list for the frontend's dropdown."""
        return list(AVAILABLE_CATEGORIES)

    def get_analysis_stats(self) -> dict[str, float]:
        """
        Placeholder counters. Analyses are not persisted, so there is nothing
        to aggregate yet.
        """
        return {"totalAnalyses": 0, "averageScore": 0}
