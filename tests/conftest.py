"""
Pytest fixtures for Quote Analyzer tests.

The AI service is faked with httpx.MockTransport: tests set the handler that
answers POST /analyze and GET /, and inspect the requests it received.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from quote_analyzer.ai_service.client import AIServiceClient
from quote_analyzer.config import Settings

AI_BASE_URL = "http://ai-service.test"

QUOTE_CONTENT = (
    "Hébergement cloud managé : 3 instances, stockage 500 Go, support 24/7, "
    "1 200 EUR par mois, engagement 12 mois."
)


class FakeAIService:
    """Programmable stand-in for the AI analysis service."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.analyze_handler: Callable[[httpx.Request], httpx.Response] = self._echo_analyses
        self.health_handler: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"status": "ok"})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST" and request.url.path == "/analyze":
            return self.analyze_handler(request)
        if request.method == "GET" and request.url.path == "/":
            return self.health_handler(request)
        return httpx.Response(404, json={"detail": "Not Found"})

    @property
    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)

    @staticmethod
    def _echo_analyses(request: httpx.Request) -> httpx.Response:
        """One well-formed analysis per submitted quote, scores 90, 80, 70, ..."""
        quotes = json.loads(request.content)["quotes"]
        analyses = [
            upstream_analysis(q["vendor_name"], score=90 - 10 * i)
            for i, q in enumerate(quotes)
        ]
        return httpx.Response(200, json={"analyses": analyses, "recommendation": "Choisir le premier"})


def upstream_analysis(
    vendor_name: str,
    *,
    price: float | None = 1200.0,
    currency: str = "EUR",
    strengths: list[str] | None = None,
    weaknesses: list[str] | None = None,
    risks: list[str] | None = None,
    score: float = 80,
    score_reasoning: str = "Bon rapport qualité/prix",
) -> dict[str, Any]:
    """Build one analysis in the AI service's snake_case wire format."""
    return {
        "vendor_name": vendor_name,
        "price": price,
        "currency": currency,
        "strengths": ["Support 24/7", "SLA 99.9%"] if strengths is None else strengths,
        "weaknesses": ["Engagement 12 mois"] if weaknesses is None else weaknesses,
        "risks": [] if risks is None else risks,
        "score": score,
        "score_reasoning": score_reasoning,
    }


def quote_payload(vendor_name: str, **overrides: Any) -> dict[str, Any]:
    """One quote in the public camelCase request format."""
    body = {"vendorName": vendor_name, "content": QUOTE_CONTENT, "category": "Cloud & Infrastructure"}
    body.update(overrides)
    return body


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ai_service_url=AI_BASE_URL,
        ai_service_timeout_sec=30.0,
        ai_service_health_timeout_sec=5.0,
    )


@pytest.fixture
def fake_ai() -> FakeAIService:
    return FakeAIService()


@pytest.fixture
def ai_client(settings, fake_ai):
    """AIServiceClient wired to the fake AI service."""
    client = AIServiceClient(settings, transport=httpx.MockTransport(fake_ai))
    yield client
    client.close()


@pytest.fixture
def client(ai_client):
    """FastAPI TestClient with the AI service client dependency overridden."""
    from fastapi.testclient import TestClient

    from quote_analyzer.api_server.routes import get_ai_client
    from quote_analyzer.api_server.server import app

    app.dependency_overrides[get_ai_client] = lambda: ai_client
    yield TestClient(app)
    app.dependency_overrides.clear()
