"""
Wire schema of the AI analysis service (snake_case on both directions).

Responses are decoded strictly: a missing or mistyped required field is a
pydantic ValidationError, which the client turns into MalformedUpstreamResponse.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr


class UpstreamQuote(BaseModel):
    vendor_name: str
    content: str
    category: str


class UpstreamAnalyzeRequest(BaseModel):
    quotes: list[UpstreamQuote]


class UpstreamQuoteAnalysis(BaseModel):
    model_config = ConfigDict(extra="ignore")

    vendor_name: StrictStr
    # Omitted and null both mean "price not found in text"; booleans and strings are rejected
    price: StrictInt | StrictFloat | None = None
    currency: StrictStr
    strengths: list[StrictStr]
    weaknesses: list[StrictStr]
    risks: list[StrictStr]
    score: StrictInt | StrictFloat
    score_reasoning: StrictStr


class UpstreamAnalyzeResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    analyses: list[UpstreamQuoteAnalysis]
    recommendation: StrictStr
