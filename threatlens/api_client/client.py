"""
Async HTTP client for the remote classification endpoints.

POST /api/scan-url, /api/detect-bot and /api/analyze-network with a JSON
body; a 2xx JSON reply shaped like a Verdict is a success. Any other
result (transport error, non-2xx, undecodable or malformed body) becomes
a failed RemoteOutcome. One attempt per call; no retries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from threatlens.analysis_engine.models import AnalysisDomain, Verdict
from threatlens.config import Settings
from threatlens.threatlens_logging import get_logger

logger = get_logger(__name__)

ENDPOINTS: dict[AnalysisDomain, str] = {
    AnalysisDomain.URL: "/api/scan-url",
    AnalysisDomain.TRANSACTION: "/api/detect-bot",
    AnalysisDomain.NETWORK: "/api/analyze-network",
}


@dataclass(frozen=True)
class RemoteOutcome:
    """Result of one remote attempt: a verdict on success, an error text otherwise."""

    domain: AnalysisDomain
    verdict: Verdict | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.verdict is not None


class RemoteClassifier:
    """
    Thin client over the classification service.

    transport is passed to httpx.AsyncClient; tests use httpx.MockTransport
    or httpx.ASGITransport to serve replies in-process.
    """

    def __init__(
        self,
        base_url: str,
        *,
        enabled: bool = True,
        timeout_sec: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.enabled = enabled
        self.timeout_sec = timeout_sec
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "RemoteClassifier":
        return cls(
            settings.api_base_url,
            enabled=settings.remote_enabled,
            timeout_sec=settings.remote_timeout_sec,
            transport=transport,
        )

    def endpoint_url(self, domain: AnalysisDomain) -> str:
        return self.base_url + ENDPOINTS[domain]

    async def classify(self, domain: AnalysisDomain, payload: dict[str, Any]) -> RemoteOutcome:
        """Single POST for domain; never raises."""
        if not self.enabled:
            return RemoteOutcome(domain=domain, error="remote classification disabled")
        url = self.endpoint_url(domain)
        try:
            async with httpx.AsyncClient(timeout=self.timeout_sec, transport=self._transport) as client:
                resp = await client.post(url, json=payload)
                resp.raise_for_status()
                body = resp.json()
            verdict = Verdict.from_dict(body, source="remote")
        except Exception as e:
            logger.warning(
                "remote_classify_failed",
                domain=domain.value,
                url=url,
                error_type=type(e).__name__,
                error=str(e),
            )
            return RemoteOutcome(domain=domain, error=f"{type(e).__name__}: {e}")
        logger.info(
            "remote_classify_ok",
            domain=domain.value,
            status=verdict.status.value,
            confidence=verdict.confidence,
        )
        return RemoteOutcome(domain=domain, verdict=verdict)
