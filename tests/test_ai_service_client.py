"""
Tests for the AI service client (quote_analyzer.ai_service.client.AIServiceClient).

The AI service is faked with httpx.MockTransport (see conftest.FakeAIService);
transport failures are simulated by raising httpx exceptions from the handler.
"""

from __future__ import annotations

from datetime import datetime

import httpx
import pytest

from conftest import QUOTE_CONTENT, upstream_analysis
from quote_analyzer.ai_service.client import AIServiceClient
from quote_analyzer.config import Settings
from quote_analyzer.core.exceptions import (
    MalformedUpstreamResponse,
    UpstreamRejected,
    UpstreamTimeout,
    UpstreamUnavailable,
    UpstreamUnknown,
)
from quote_analyzer.quotes.models import QuoteSubmission


def _submissions(*vendors: str) -> list[QuoteSubmission]:
    return [
        QuoteSubmission(vendor_name=v, content=QUOTE_CONTENT, category="Cybersecurity")
        for v in vendors
    ]


def _raise(exc: Exception):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    return handler


def test_analyze_sends_snake_case_payload(ai_client, fake_ai):
    ai_client.analyze(_submissions("AWS", "Azure"))
    request = fake_ai.requests[-1]
    assert request.method == "POST"
    assert str(request.url) == "http://ai-service.test/analyze"
    assert fake_ai.last_json == {
        "quotes": [
            {"vendor_name": "AWS", "content": QUOTE_CONTENT, "category": "Cybersecurity"},
            {"vendor_name": "Azure", "content": QUOTE_CONTENT, "category": "Cybersecurity"},
        ]
    }


def test_analyze_decodes_response(ai_client, fake_ai):
    fake_ai.analyze_handler = lambda request: httpx.Response(
        200,
        json={
            "analyses": [
                upstream_analysis(
                    "AWS",
                    price=None,
                    strengths=["s2", "s1"],
                    weaknesses=["w1"],
                    risks=["r3", "r1", "r2"],
                    score=72,
                    score_reasoning="Prix absent",
                ),
                upstream_analysis("Azure", price=0, currency="USD", score=64),
            ],
            "recommendation": "AWS",
        },
    )
    result = ai_client.analyze(_submissions("AWS", "Azure"))

    assert result.recommendation == "AWS"
    assert isinstance(result.analyzed_at, datetime)
    assert result.analyzed_at.tzinfo is not None
    first, second = result.analyses
    assert first.vendor_name == "AWS"
    assert first.price is None
    assert first.strengths == ["s2", "s1"]
    assert first.weaknesses == ["w1"]
    assert first.risks == ["r3", "r1", "r2"]
    assert first.score == 72
    assert isinstance(first.score, int)
    assert first.score_reasoning == "Prix absent"
    # zero is a price, not "missing"
    assert second.price == 0
    assert second.currency == "USD"


def test_analyze_accepts_omitted_price_as_missing(ai_client, fake_ai):
    analysis = upstream_analysis("AWS")
    del analysis["price"]
    fake_ai.analyze_handler = lambda request: httpx.Response(
        200, json={"analyses": [analysis, upstream_analysis("OVH")], "recommendation": "OVH"}
    )
    result = ai_client.analyze(_submissions("AWS", "OVH"))
    assert result.analyses[0].price is None


def test_analyze_rejects_empty_batch(ai_client, fake_ai):
    with pytest.raises(ValueError, match="non-empty"):
        ai_client.analyze([])
    assert fake_ai.requests == []


def test_connection_refused_is_unavailable(ai_client, fake_ai):
    fake_ai.analyze_handler = _raise(httpx.ConnectError("[Errno 111] Connection refused"))
    with pytest.raises(UpstreamUnavailable) as exc_info:
        ai_client.analyze(_submissions("AWS", "Azure"))
    assert exc_info.value.status_code == 503
    assert "retry later" in exc_info.value.message


def test_timeout_is_distinct(ai_client, fake_ai):
    fake_ai.analyze_handler = _raise(httpx.ReadTimeout("timed out"))
    with pytest.raises(UpstreamTimeout) as exc_info:
        ai_client.analyze(_submissions("AWS", "Azure"))
    assert exc_info.value.status_code == 504
    assert "Reduce the number of quotes" in exc_info.value.message


def test_connect_timeout_is_timeout(ai_client, fake_ai):
    fake_ai.analyze_handler = _raise(httpx.ConnectTimeout("connect timed out"))
    with pytest.raises(UpstreamTimeout):
        ai_client.analyze(_submissions("AWS", "Azure"))


def test_upstream_error_status_and_detail_preserved(ai_client, fake_ai):
    fake_ai.analyze_handler = lambda request: httpx.Response(
        422, json={"detail": "quotes[0].content too short"}
    )
    with pytest.raises(UpstreamRejected) as exc_info:
        ai_client.analyze(_submissions("AWS", "Azure"))
    err = exc_info.value
    assert err.status_code == 422
    assert err.detail == "quotes[0].content too short"
    assert "quotes[0].content too short" in err.message


def test_upstream_error_without_json_detail(ai_client, fake_ai):
    fake_ai.analyze_handler = lambda request: httpx.Response(500, text="boom")
    with pytest.raises(UpstreamRejected) as exc_info:
        ai_client.analyze(_submissions("AWS", "Azure"))
    assert exc_info.value.status_code == 500
    assert exc_info.value.detail is None
    assert "Internal Server Error" in exc_info.value.message


def test_other_transport_error_is_unknown(ai_client, fake_ai):
    fake_ai.analyze_handler = _raise(httpx.RemoteProtocolError("peer closed connection"))
    with pytest.raises(UpstreamUnknown) as exc_info:
        ai_client.analyze(_submissions("AWS", "Azure"))
    assert exc_info.value.status_code == 500
    assert "peer closed" not in exc_info.value.message


@pytest.mark.parametrize(
    "body",
    [
        {"recommendation": "x"},
        {"analyses": [], "recommendation": 3},
        {"analyses": [{"vendor_name": "AWS"}], "recommendation": "x"},
        {"analyses": "nope", "recommendation": "x"},
    ],
)
def test_schema_mismatch_is_malformed(ai_client, fake_ai, body):
    fake_ai.analyze_handler = lambda request: httpx.Response(200, json=body)
    with pytest.raises(MalformedUpstreamResponse) as exc_info:
        ai_client.analyze(_submissions("AWS", "Azure"))
    assert exc_info.value.status_code == 502


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("strengths", "Support 24/7"),
        ("score", "80"),
        ("score", True),
        ("price", "1200"),
        # a boolean must not turn into a zero price
        ("price", False),
    ],
)
def test_mistyped_field_is_malformed(ai_client, fake_ai, field, value):
    bad = upstream_analysis("AWS")
    bad[field] = value
    fake_ai.analyze_handler = lambda request: httpx.Response(
        200, json={"analyses": [bad, upstream_analysis("Azure")], "recommendation": "x"}
    )
    with pytest.raises(MalformedUpstreamResponse):
        ai_client.analyze(_submissions("AWS", "Azure"))


def test_integer_numbers_are_kept_as_integers(ai_client, fake_ai):
    fake_ai.analyze_handler = lambda request: httpx.Response(
        200,
        json={
            "analyses": [
                upstream_analysis("AWS", price=1200, score=72),
                upstream_analysis("Azure", price=999.9, score=64.5),
            ],
            "recommendation": "AWS",
        },
    )
    aws, azure = ai_client.analyze(_submissions("AWS", "Azure")).analyses
    assert aws.score == 72 and isinstance(aws.score, int)
    assert aws.price == 1200 and isinstance(aws.price, int)
    assert azure.score == 64.5
    assert azure.price == 999.9


def test_duplicate_vendor_in_response_is_malformed(ai_client, fake_ai):
    fake_ai.analyze_handler = lambda request: httpx.Response(
        200,
        json={"analyses": [upstream_analysis("AWS"), upstream_analysis("AWS")], "recommendation": "AWS"},
    )
    with pytest.raises(MalformedUpstreamResponse, match="do not match the submitted vendors"):
        ai_client.analyze(_submissions("AWS", "Azure"))


def test_unknown_vendor_in_response_is_malformed(ai_client, fake_ai):
    fake_ai.analyze_handler = lambda request: httpx.Response(
        200,
        json={"analyses": [upstream_analysis("AWS"), upstream_analysis("GCP")], "recommendation": "AWS"},
    )
    with pytest.raises(MalformedUpstreamResponse):
        ai_client.analyze(_submissions("AWS", "Azure"))


def test_vendor_match_ignores_case_and_surrounding_spaces(ai_client, fake_ai):
    fake_ai.analyze_handler = lambda request: httpx.Response(
        200,
        json={
            "analyses": [upstream_analysis("aws "), upstream_analysis("AZURE")],
            "recommendation": "AWS",
        },
    )
    result = ai_client.analyze(_submissions("AWS", "Azure"))
    assert [a.vendor_name for a in result.analyses] == ["aws ", "AZURE"]


def test_non_json_body_is_malformed(ai_client, fake_ai):
    fake_ai.analyze_handler = lambda request: httpx.Response(200, text="<html>ok</html>")
    with pytest.raises(MalformedUpstreamResponse):
        ai_client.analyze(_submissions("AWS", "Azure"))


def test_cardinality_mismatch_is_malformed(ai_client, fake_ai):
    fake_ai.analyze_handler = lambda request: httpx.Response(
        200, json={"analyses": [upstream_analysis("AWS")], "recommendation": "AWS"}
    )
    with pytest.raises(MalformedUpstreamResponse, match="1 analyses for 2 quotes"):
        ai_client.analyze(_submissions("AWS", "Azure"))


def test_no_retry_on_failure(ai_client, fake_ai):
    fake_ai.analyze_handler = _raise(httpx.ConnectError("refused"))
    with pytest.raises(UpstreamUnavailable):
        ai_client.analyze(_submissions("AWS", "Azure"))
    assert len(fake_ai.requests) == 1


def test_check_health_ok(ai_client, fake_ai):
    assert ai_client.check_health() is True
    request = fake_ai.requests[-1]
    assert request.method == "GET"
    assert request.url.path == "/"


def test_check_health_uses_short_timeout(ai_client, fake_ai):
    ai_client.check_health()
    assert fake_ai.requests[-1].extensions["timeout"]["read"] == 5.0


@pytest.mark.parametrize(
    "handler",
    [
        _raise(httpx.ConnectError("refused")),
        _raise(httpx.ReadTimeout("timed out")),
        _raise(RuntimeError("unexpected")),
        lambda request: httpx.Response(503, json={"status": "ok"}),
        lambda request: httpx.Response(200, json={"status": "degraded"}),
        lambda request: httpx.Response(200, json={"state": "ok"}),
        lambda request: httpx.Response(200, json=["ok"]),
        lambda request: httpx.Response(200, text="ok"),
    ],
)
def test_check_health_false_on_any_failure(ai_client, fake_ai, handler):
    fake_ai.health_handler = handler
    assert ai_client.check_health() is False


def test_client_uses_injected_base_url(fake_ai):
    settings = Settings(ai_service_url="http://other-host:9000/")
    with AIServiceClient(settings, transport=httpx.MockTransport(fake_ai)) as client:
        assert client.base_url == "http://other-host:9000"
        client.check_health()
    assert str(fake_ai.requests[-1].url) == "http://other-host:9000/"


def test_client_rejects_empty_base_url():
    with pytest.raises(ValueError):
        AIServiceClient(Settings(ai_service_url="  "))
