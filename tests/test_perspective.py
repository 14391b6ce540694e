# tests/test_perspective.py
"""Moderation oracle client: threshold comparison and fail-open behaviour."""

import httpx
import pytest

from quadboard.services.errors import OracleUnavailableError
from quadboard.services.perspective import (
    ATTRIBUTES,
    PerspectiveClient,
    PerspectiveConfig,
    ToxicityScores,
    build_analyze_request,
    parse_scores,
)

THRESHOLDS = {
    "TOXICITY": 0.70,
    "SEVERE_TOXICITY": 0.60,
    "INSULT": 0.60,
    "PROFANITY": 0.50,
    "THREAT": 0.50,
}


def _config(api_key: str | None = "test-key") -> PerspectiveConfig:
    return PerspectiveConfig(
        api_url="https://oracle.test/v1alpha1/comments:analyze",
        api_key=api_key,
        timeout_seconds=1.0,
        thresholds=THRESHOLDS,
    )


def _body(**overrides: float) -> dict:
    scores = {attribute: 0.0 for attribute in ATTRIBUTES}
    scores.update(overrides)
    return {
        "attributeScores": {
            attribute: {"summaryScore": {"value": value, "type": "PROBABILITY"}}
            for attribute, value in scores.items()
        }
    }


def _client(handler) -> PerspectiveClient:
    return PerspectiveClient(_config(), transport=httpx.MockTransport(handler))


def test_analyze_request_asks_for_every_attribute() -> None:
    payload = build_analyze_request("hello")

    assert payload["comment"] == {"text": "hello"}
    assert payload["languages"] == ["en"]
    assert set(payload["requestedAttributes"]) == set(ATTRIBUTES)


def test_parse_scores_reads_summary_values() -> None:
    scores = parse_scores(_body(TOXICITY=0.9, THREAT=0.1))

    assert scores.toxicity == pytest.approx(0.9)
    assert scores.threat == pytest.approx(0.1)


def test_parse_scores_rejects_missing_attribute() -> None:
    body = _body()
    del body["attributeScores"]["INSULT"]

    with pytest.raises(OracleUnavailableError):
        parse_scores(body)


def test_threshold_comparison_is_strict() -> None:
    at_threshold = ToxicityScores(0.70, 0.60, 0.60, 0.50, 0.50)
    just_above = ToxicityScores(0.70, 0.60, 0.60, 0.5001, 0.50)

    assert not at_threshold.exceeds(THRESHOLDS)
    assert just_above.exceeds(THRESHOLDS)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("attribute", "value"),
    [("TOXICITY", 0.71), ("SEVERE_TOXICITY", 0.61), ("INSULT", 0.61),
     ("PROFANITY", 0.51), ("THREAT", 0.51)],
)
async def test_any_attribute_over_threshold_is_harmful(attribute, value) -> None:
    client = _client(lambda request: httpx.Response(200, json=_body(**{attribute: value})))
    try:
        assert await client.is_harmful("text") is True
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_scores_below_thresholds_are_harmless() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_body(TOXICITY=0.2, INSULT=0.3))

    client = _client(handler)
    try:
        assert await client.is_harmful("nice post") is False
    finally:
        await client.close()

    assert len(seen) == 1
    assert seen[0].url.params["key"] == "test-key"


@pytest.mark.asyncio
async def test_error_status_fails_open() -> None:
    client = _client(lambda request: httpx.Response(503, json={"error": "unavailable"}))
    try:
        assert await client.is_harmful("text") is False
        with pytest.raises(OracleUnavailableError):
            await client.score("text")
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_timeout_fails_open() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = _client(handler)
    try:
        assert await client.is_harmful("text") is False
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_non_json_body_fails_open() -> None:
    client = _client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    try:
        assert await client.is_harmful("text") is False
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_malformed_body_fails_open() -> None:
    client = _client(lambda request: httpx.Response(200, json={"attributeScores": {}}))
    try:
        assert await client.is_harmful("text") is False
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_missing_api_key_fails_open_without_calling_out() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=_body(TOXICITY=0.99))

    client = PerspectiveClient(_config(api_key=None), transport=httpx.MockTransport(handler))

    assert not client.configured
    assert await client.is_harmful("text") is False
    assert calls == []
