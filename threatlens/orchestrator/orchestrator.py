"""
AnalysisOrchestrator: remote attempt, then local fallback.

For each request: one remote classification attempt; if it produced no
verdict, wait a simulated processing delay and run the local scorer of
the active profile. The remote failure is logged, never surfaced. Each
call owns its input and verdict; concurrent calls share nothing mutable
except the random source.
"""

from __future__ import annotations

import asyncio
import random
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

from threatlens.analysis_engine.models import (
    AnalysisDomain,
    NetworkFlow,
    TransactionRecord,
    Verdict,
)
from threatlens.analysis_engine.policy import ScoringProfile, get_profile
from threatlens.analysis_engine.quick_scan import (
    quick_check_ip,
    quick_check_transaction,
    quick_scan_url,
)
from threatlens.analysis_engine.scorer import score_network, score_transaction, score_url
from threatlens.api_client import RemoteClassifier
from threatlens.config import Settings, get_settings
from threatlens.threatlens_logging import bind_request

SleepFn = Callable[[float], Awaitable[Any]]


class AnalysisOrchestrator:
    """
    Entry point for the three analyzers and the dashboard quick checks.

    settings defaults to get_settings(); profile defaults to the settings'
    profile; rng defaults to a Random seeded from settings.random_seed.
    sleep is injectable so tests can record delays instead of waiting.
    """

    def __init__(
        self,
        remote: RemoteClassifier | None = None,
        *,
        settings: Settings | None = None,
        profile: ScoringProfile | None = None,
        rng: random.Random | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self.settings = settings or get_settings()
        self.profile = profile or get_profile(self.settings.profile)
        self.remote = remote or RemoteClassifier.from_settings(self.settings)
        self.rng = rng or random.Random(self.settings.random_seed)
        self._sleep = sleep

    def fallback_delay_sec(self, domain: AnalysisDomain) -> float:
        """Fixed delay for network scans; uniform in [min, max) otherwise."""
        if domain is AnalysisDomain.NETWORK:
            return self.settings.network_fallback_delay_ms / 1000.0
        low = self.settings.fallback_delay_min_ms
        high = self.settings.fallback_delay_max_ms
        if high <= low:
            return low / 1000.0
        return (low + self.rng.random() * (high - low)) / 1000.0

    async def scan_url(self, url: str) -> Verdict | None:
        """Phishing verdict for url; None (no analysis) when url is blank."""
        url = url.strip()
        if not url:
            return None
        return await self._run(
            AnalysisDomain.URL,
            {"url": url},
            lambda: score_url(url, self.profile.url),
        )

    async def detect_bot(self, record: TransactionRecord) -> Verdict:
        return await self._run(
            AnalysisDomain.TRANSACTION,
            record.to_dict(),
            lambda: score_transaction(record, self.profile.transaction, self.rng),
        )

    async def analyze_network(self, flow: NetworkFlow) -> Verdict:
        return await self._run(
            AnalysisDomain.NETWORK,
            flow.to_dict(),
            lambda: score_network(flow, self.profile.network, self.rng),
        )

    async def analyze(self, domain: AnalysisDomain | str, data: Any) -> Verdict | None:
        """
        Dispatch by domain tag. data is a URL string for "url", and a wire
        dict or a record instance for "transaction" / "network".
        Raises InvalidRecordError for structurally invalid records.
        """
        domain = AnalysisDomain(domain)
        if domain is AnalysisDomain.URL:
            return await self.scan_url(str(data))
        if domain is AnalysisDomain.TRANSACTION:
            record = data if isinstance(data, TransactionRecord) else TransactionRecord.from_dict(data)
            return await self.detect_bot(record)
        flow = data if isinstance(data, NetworkFlow) else NetworkFlow.from_dict(data)
        return await self.analyze_network(flow)

    async def quick_scan(self, domain: AnalysisDomain | str, value: str) -> Verdict | None:
        """
        Dashboard scan card: local-only quick check of a single string,
        after the same simulated delay. Blank input yields None.
        """
        domain = AnalysisDomain(domain)
        value = value.strip()
        if not value:
            return None
        log = bind_request(domain.value, uuid.uuid4().hex[:12])
        delay = self.fallback_delay_sec(AnalysisDomain.URL)
        await self._sleep(delay)
        if domain is AnalysisDomain.URL:
            verdict = quick_scan_url(value)
        elif domain is AnalysisDomain.TRANSACTION:
            verdict = quick_check_transaction(value, self.rng)
        else:
            verdict = quick_check_ip(value, self.rng)
        log.info("quick_scan_completed", status=verdict.status.value, delay_sec=round(delay, 3))
        return verdict

    async def _run(
        self,
        domain: AnalysisDomain,
        payload: dict[str, Any],
        local: Callable[[], Verdict],
    ) -> Verdict:
        log = bind_request(domain.value, uuid.uuid4().hex[:12])
        outcome = await self.remote.classify(domain, payload)
        if outcome.ok:
            verdict = outcome.verdict
        else:
            delay = self.fallback_delay_sec(domain)
            log.info(
                "fallback_local_scoring",
                profile=self.profile.name,
                delay_sec=round(delay, 3),
                reason=outcome.error,
            )
            await self._sleep(delay)
            verdict = local()
        log.info(
            "verdict_produced",
            status=verdict.status.value,
            confidence=verdict.confidence,
            source=verdict.source,
        )
        return verdict
