"""
Business rules applied on top of the AI service's raw analysis.

Fixed, explainable penalties (no ML):
- price not found           -10
- fewer than 2 strengths     -5
- more than 3 risks         -10

All rules are evaluated independently against the upstream score; the total
is clamped to a floor of 0. There is no ceiling: the upstream score is
trusted to stay within 0-100.

adjust() must be applied exactly once per analysis. Running it on its own
output applies the penalties a second time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from quote_analyzer.analyzer_logging import get_logger
from quote_analyzer.quotes.models import QuoteAnalysis

logger = get_logger(__name__)

MIN_SCORE = 0
MIN_STRENGTHS = 2
MAX_RISKS = 3
ADJUSTMENT_SEPARATOR = " | Ajustements métier : "
PENALTY_DELIMITER = ", "


@dataclass(frozen=True)
class PenaltyRule:
    """One deterministic deduction triggered by a content condition."""

    name: str
    points: int
    note: str
    applies: Callable[[QuoteAnalysis], bool]


PENALTY_RULES: tuple[PenaltyRule, ...] = (
    PenaltyRule(
        name="missing_price",
        points=10,
        note="Prix non spécifié (-10 pts)",
        applies=lambda a: a.price is None,
    ),
    PenaltyRule(
        name="few_strengths",
        points=5,
        note="Peu d'avantages identifiés (-5 pts)",
        applies=lambda a: len(a.strengths) < MIN_STRENGTHS,
    ),
    PenaltyRule(
        name="many_risks",
        points=10,
        note="Nombreux risques détectés (-10 pts)",
        applies=lambda a: len(a.risks) > MAX_RISKS,
    ),
)


def adjust(analysis: QuoteAnalysis) -> QuoteAnalysis:
    """
    Apply the penalty rules to one analysis and return an adjusted copy.

    Only score and score_reasoning change. When no rule fires the reasoning
    is returned verbatim.
    """
    score = analysis.score
    notes: list[str] = []
    for rule in PENALTY_RULES:
        if rule.applies(analysis):
            score -= rule.points
            notes.append(rule.note)
            logger.debug(
                "penalty_applied",
                vendor_name=analysis.vendor_name,
                rule=rule.name,
                points=rule.points,
            )

    score = max(MIN_SCORE, score)
    reasoning = analysis.score_reasoning
    if notes:
        reasoning = f"{reasoning}{ADJUSTMENT_SEPARATOR}{PENALTY_DELIMITER.join(notes)}"

    return analysis.model_copy(update={"score": score, "score_reasoning": reasoning})


def rank(analyses: Iterable[QuoteAnalysis]) -> list[QuoteAnalysis]:
    """Return analyses sorted by descending score. Equal scores keep their input order."""
    return sorted(analyses, key=lambda a: a.score, reverse=True)
