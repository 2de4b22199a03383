"""
Quotes package — submission/analysis models, business rules and the
orchestrating service.
"""

from quote_analyzer.quotes.models import (
    AnalysisBatchResult,
    AnalyzeQuotesRequest,
    QuoteAnalysis,
    QuoteSubmission,
)
from quote_analyzer.quotes.rules import adjust, rank

__all__ = [
    "AnalysisBatchResult",
    "AnalyzeQuotesRequest",
    "QuoteAnalysis",
    "QuoteSubmission",
    "adjust",
    "rank",
]
