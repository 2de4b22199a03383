"""
HTTP client for the AI analysis service.

Responsibilities:
- Translate quote submissions to the service's snake_case request shape.
- Perform exactly one POST /analyze per batch (no retries) with a long timeout.
- Decode the response strictly and translate it back to QuoteAnalysis models.
- Map transport and protocol failures to the UpstreamError taxonomy.
- Call GET / for health with its own short timeout, reduced to a boolean.

This is the only place where the AI service is called.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from typing import Any, Sequence

import httpx
from pydantic import ValidationError as PydanticValidationError

from quote_analyzer.ai_service.models import (
    UpstreamAnalyzeRequest,
    UpstreamAnalyzeResponse,
    UpstreamQuote,
)
from quote_analyzer.analyzer_logging import get_logger
from quote_analyzer.config import Settings
from quote_analyzer.core.exceptions import (
    MalformedUpstreamResponse,
    UpstreamRejected,
    UpstreamTimeout,
    UpstreamUnavailable,
    UpstreamUnknown,
)
from quote_analyzer.quotes.models import AnalysisBatchResult, QuoteAnalysis, QuoteSubmission

logger = get_logger(__name__)

ANALYZE_PATH = "/analyze"
HEALTH_PATH = "/"
HEALTH_OK_STATUS = "ok"


def _upstream_detail(resp: httpx.Response) -> Any:
    """Return the 'detail' field of a JSON error body, or None."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("detail")
    return None


def _vendor_key(name: str) -> str:
    """Vendor identity used to match analyses to submissions: case and surrounding spaces ignored."""
    return name.strip().casefold()


def _to_analysis(item: Any) -> QuoteAnalysis:
    return QuoteAnalysis(
        vendor_name=item.vendor_name,
        price=item.price,
        currency=item.currency,
        strengths=list(item.strengths),
        weaknesses=list(item.weaknesses),
        risks=list(item.risks),
        score=item.score,
        score_reasoning=item.score_reasoning,
    )


class AIServiceClient:
    """
    Synchronous client for the AI analysis service.

    One httpx.Client is shared across requests (it is safe to use from
    FastAPI's worker threads). Call close() on shutdown, or use as a
    context manager.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            settings: Resolved settings; base URL and timeouts are read once here.
            transport: Optional httpx transport (tests pass httpx.MockTransport).
        """
        if not settings.ai_service_url.strip():
            raise ValueError("ai_service_url must be non-empty")
        self._base_url = settings.ai_service_url.rstrip("/")
        self._timeout = settings.ai_service_timeout_sec
        self._health_timeout = settings.ai_service_health_timeout_sec
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "AIServiceClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def analyze(self, submissions: Sequence[QuoteSubmission]) -> AnalysisBatchResult:
        """
        Send the batch to POST /analyze and return the decoded result.

        Raises:
            ValueError: submissions is empty.
            UpstreamUnavailable: connection refused / host not found.
            UpstreamTimeout: no answer within the analyze timeout.
            UpstreamRejected: non-2xx answer; upstream status preserved.
            MalformedUpstreamResponse: body is not the expected schema, or its
                analyses do not match the submitted vendors one-to-one.
            UpstreamUnknown: anything else.
        """
        if not submissions:
            raise ValueError("submissions must be non-empty")

        payload = UpstreamAnalyzeRequest(
            quotes=[
                UpstreamQuote(vendor_name=q.vendor_name, content=q.content, category=q.category)
                for q in submissions
            ]
        )
        logger.info(
            "ai_service_analyze_request",
            base_url=self._base_url,
            quote_count=len(submissions),
        )

        try:
            resp = self._client.post(ANALYZE_PATH, json=payload.model_dump())
        except httpx.TimeoutException as e:
            logger.warning("ai_service_timeout", timeout_sec=self._timeout, error=str(e))
            raise UpstreamTimeout(
                "The AI service took too long to respond. "
                "Reduce the number of quotes or retry later."
            ) from e
        except httpx.ConnectError as e:
            logger.warning("ai_service_unavailable", base_url=self._base_url, error=str(e))
            raise UpstreamUnavailable(
                "The AI service is unavailable. Please retry later."
            ) from e
        except Exception as e:
            logger.exception("ai_service_request_failed", error=str(e))
            raise UpstreamUnknown("Error while analyzing quotes") from e

        if not resp.is_success:
            detail = _upstream_detail(resp)
            logger.warning(
                "ai_service_rejected",
                status_code=resp.status_code,
                detail=detail,
            )
            shown = detail if detail is not None else resp.reason_phrase
            raise UpstreamRejected(
                f"AI service error: {shown}",
                status_code=resp.status_code,
                detail=detail,
            )

        try:
            decoded = UpstreamAnalyzeResponse.model_validate_json(resp.content)
        except PydanticValidationError as e:
            logger.error(
                "ai_service_malformed_response",
                error_count=e.error_count(),
                errors=e.errors(include_url=False, include_input=False),
            )
            raise MalformedUpstreamResponse(
                "The AI service returned an unexpected response"
            ) from e

        if len(decoded.analyses) != len(submissions):
            logger.error(
                "ai_service_cardinality_mismatch",
                expected=len(submissions),
                received=len(decoded.analyses),
            )
            raise MalformedUpstreamResponse(
                f"The AI service returned {len(decoded.analyses)} analyses "
                f"for {len(submissions)} quotes"
            )

        submitted_vendors = Counter(_vendor_key(q.vendor_name) for q in submissions)
        returned_vendors = Counter(_vendor_key(a.vendor_name) for a in decoded.analyses)
        if submitted_vendors != returned_vendors:
            logger.error(
                "ai_service_vendor_mismatch",
                submitted=sorted(q.vendor_name for q in submissions),
                returned=sorted(a.vendor_name for a in decoded.analyses),
            )
            raise MalformedUpstreamResponse(
                "The AI service returned analyses that do not match the submitted vendors"
            )

        result = AnalysisBatchResult(
            analyses=[_to_analysis(a) for a in decoded.analyses],
            recommendation=decoded.recommendation,
            analyzed_at=datetime.now(timezone.utc),
        )
        logger.info("ai_service_analyze_ok", analysis_count=len(result.analyses))
        return result

    def check_health(self) -> bool:
        """
        Call GET / with the short health timeout.

        Returns True only for a JSON object whose status is "ok". Never raises.
        """
        try:
            resp = self._client.get(HEALTH_PATH, timeout=self._health_timeout)
            if not resp.is_success:
                logger.info("ai_service_health_bad_status", status_code=resp.status_code)
                return False
            body = resp.json()
        except Exception as e:
            logger.info("ai_service_health_failed", error=str(e))
            return False
        return isinstance(body, dict) and body.get("status") == HEALTH_OK_STATUS
