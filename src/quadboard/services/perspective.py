"""Moderation oracle backed by a Perspective-compatible analyze API.

The client sends the text once, reads five attribute scores and compares
each against its fixed threshold. `is_harmful` is fail-open: any transport
error, timeout, error status or malformed response yields "not harmful",
so content is never penalised because the scoring service is down.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from quadboard.core.settings import settings
from quadboard.services.errors import OracleUnavailableError

logger = logging.getLogger(__name__)

ATTRIBUTES = ("TOXICITY", "SEVERE_TOXICITY", "INSULT", "PROFANITY", "THREAT")


class ModerationOracle(Protocol):
    """Anything that can judge a piece of text."""

    async def is_harmful(self, text: str) -> bool:
        ...


@dataclass(frozen=True)
class ToxicityScores:
    """Perspective summary scores, each in [0, 1]."""

    toxicity: float
    severe_toxicity: float
    insult: float
    profanity: float
    threat: float

    def as_attributes(self) -> dict[str, float]:
        return {
            "TOXICITY": self.toxicity,
            "SEVERE_TOXICITY": self.severe_toxicity,
            "INSULT": self.insult,
            "PROFANITY": self.profanity,
            "THREAT": self.threat,
        }

    def exceeds(self, thresholds: Mapping[str, float]) -> bool:
        """Return True if any score is strictly above its threshold."""
        return any(
            score > thresholds[attribute]
            for attribute, score in self.as_attributes().items()
        )


@dataclass(frozen=True)
class PerspectiveConfig:
    """Immutable configuration for oracle calls."""

    api_url: str
    api_key: str | None
    timeout_seconds: float
    thresholds: Mapping[str, float]


def load_perspective_config() -> PerspectiveConfig:
    """Build configuration object from global settings."""
    return PerspectiveConfig(
        api_url=settings.perspective_api_url,
        api_key=settings.perspective_api_key,
        timeout_seconds=float(settings.perspective_timeout_seconds),
        thresholds=settings.harm_thresholds,
    )


def build_analyze_request(text: str) -> dict[str, Any]:
    """Return the analyze payload requesting the five scored attributes."""
    return {
        "comment": {"text": text},
        "languages": ["en"],
        "requestedAttributes": {attribute: {} for attribute in ATTRIBUTES},
    }


def parse_scores(body: Mapping[str, Any]) -> ToxicityScores:
    """Extract summary scores from an analyze response body.

    Raises:
        OracleUnavailableError: If any attribute is missing or not numeric.
    """
    try:
        attribute_scores = body["attributeScores"]
        values = {
            attribute: float(attribute_scores[attribute]["summaryScore"]["value"])
            for attribute in ATTRIBUTES
        }
    except (KeyError, TypeError, ValueError) as exc:
        raise OracleUnavailableError(f"Malformed oracle response: {exc!r}") from exc

    return ToxicityScores(
        toxicity=values["TOXICITY"],
        severe_toxicity=values["SEVERE_TOXICITY"],
        insult=values["INSULT"],
        profanity=values["PROFANITY"],
        threat=values["THREAT"],
    )


class PerspectiveClient:
    """HTTP client wrapper for the toxicity scoring service."""

    def __init__(
        self,
        config: PerspectiveConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_perspective_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def configured(self) -> bool:
        return bool(self.config.api_key)

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    async def score(self, text: str) -> ToxicityScores:
        """Score text with the oracle.

        Raises:
            OracleUnavailableError: On missing key, network failure, timeout,
                non-2xx status or malformed body.
        """
        if not self.configured:
            raise OracleUnavailableError("Perspective API key is not configured")

        client = await self._ensure_client()
        try:
            response = await client.post(
                self.config.api_url,
                json=build_analyze_request(text),
                params={"key": self.config.api_key},
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as exc:
            raise OracleUnavailableError(f"Oracle request failed: {exc}") from exc
        except ValueError as exc:
            raise OracleUnavailableError("Oracle returned a non-JSON body") from exc

        return parse_scores(body)

    async def is_harmful(self, text: str) -> bool:
        """Return the harmfulness verdict, treating oracle failure as harmless."""
        try:
            scores = await self.score(text)
        except OracleUnavailableError as exc:
            logger.warning("Moderation oracle unavailable, failing open: %s", exc)
            return False
        verdict = scores.exceeds(self.config.thresholds)
        logger.debug("Oracle scores %s -> harmful=%s", scores, verdict)
        return verdict

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""
        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None


class _PerspectiveClientSingleton:
    """Singleton wrapper for PerspectiveClient."""

    _instance: PerspectiveClient | None = None

    @classmethod
    def get_instance(cls) -> PerspectiveClient:
        """Get or create the singleton PerspectiveClient instance."""
        if cls._instance is None:
            cls._instance = PerspectiveClient()
        return cls._instance


def get_moderation_oracle() -> PerspectiveClient:
    """Return a singleton oracle client instance."""
    return _PerspectiveClientSingleton.get_instance()
