"""
Data models for quote submissions and analysis results.

Public JSON uses camelCase field names (vendorName, scoreReasoning, ...);
Python attributes are snake_case. Models accept either name on input and
FastAPI serializes responses by alias.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

MIN_CONTENT_LENGTH = 50
MAX_CONTENT_LENGTH = 5000
MAX_LABEL_LENGTH = 100


class QuoteSubmission(BaseModel):
    """One vendor quote submitted for analysis. Immutable."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    vendor_name: str = Field(
        ...,
        alias="vendorName",
        min_length=1,
        max_length=MAX_LABEL_LENGTH,
        description="Vendor name (e.g. AWS, Microsoft Azure)",
    )
    content: str = Field(
        ...,
        min_length=MIN_CONTENT_LENGTH,
        max_length=MAX_CONTENT_LENGTH,
        description="Quote text: prices, services, conditions",
    )
    category: str = Field(
        ...,
        min_length=1,
        max_length=MAX_LABEL_LENGTH,
        description="Service category (e.g. Cloud & Infrastructure)",
    )


class AnalyzeQuotesRequest(BaseModel):
    """POST /quotes/analyze body. Batch size bounds are enforced by QuotesService."""

    model_config = ConfigDict(extra="forbid")

    quotes: list[QuoteSubmission]


class QuoteAnalysis(BaseModel):
    """Analysis of one quote. price is None when the AI could not extract it."""

    model_config = ConfigDict(populate_by_name=True)

    vendor_name: str = Field(..., alias="vendorName")
    price: int | float | None = Field(None, description="Total price; null if not found in text")
    currency: str = Field(..., description="Currency code (EUR, USD, ...)")
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    score: int | float = Field(..., description="Quality score; 0-100 after business adjustment")
    score_reasoning: str = Field(..., alias="scoreReasoning")


class AnalysisBatchResult(BaseModel):
    """Comparative analysis of a batch. analyses are sorted by descending score."""

    model_config = ConfigDict(populate_by_name=True)

    analyses: list[QuoteAnalysis]
    recommendation: str
    analyzed_at: datetime = Field(..., alias="analyzedAt")


class CategoriesResponse(BaseModel):
    categories: list[str]


class HealthResponse(BaseModel):
    """GET /quotes/health: own liveness plus AI service reachability."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(..., description="ok, or degraded when the AI service is unreachable")
    backend: str = "ok"
    ai_service: bool = Field(..., alias="aiService")
    timestamp: str


class StatsResponse(BaseModel):
    """GET /quotes/stats: placeholder counters (analyses are not persisted)."""

    model_config = ConfigDict(populate_by_name=True)

    total_analyses: int = Field(0, alias="totalAnalyses")
    average_score: float = Field(0, alias="averageScore")
