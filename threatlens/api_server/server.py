"""
FastAPI server — classification endpoints backed by the local scorers.

POST /api/scan-url, /api/detect-bot, /api/analyze-network return a
Verdict plus the echoed input; POST /api/quick-scan runs the dashboard
card checks. Profile and random seed come from settings (env).
"""

from __future__ import annotations

import random
from typing import Any, Literal

from fastapi import Depends, FastAPI, HTTPException
from pydantic import AliasChoices, BaseModel, Field

from threatlens import __version__
from threatlens.analysis_engine.models import NetworkFlow, TransactionRecord
from threatlens.analysis_engine.policy import ScoringProfile, get_profile
from threatlens.analysis_engine.quick_scan import (
    quick_check_ip,
    quick_check_transaction,
    quick_scan_url,
)
from threatlens.analysis_engine.scorer import score_network, score_transaction, score_url
from threatlens.config import get_settings
from threatlens.core.exceptions import InvalidRecordError
from threatlens.threatlens_logging import get_logger

logger = get_logger(__name__)

_rng: random.Random | None = None


# -----------------------------------------------------------------------------
# Config and dependency
# -----------------------------------------------------------------------------

def get_scoring_profile() -> ScoringProfile:
    return get_profile(get_settings().profile)


def get_rng() -> random.Random:
    """App-scoped random source, seeded from THREATLENS_RANDOM_SEED on first use."""
    global _rng
    if _rng is None:
        _rng = random.Random(get_settings().random_seed)
    return _rng


# -----------------------------------------------------------------------------
# Request models
# -----------------------------------------------------------------------------

class ScanUrlRequest(BaseModel):
    """POST /api/scan-url body."""

    url: str = Field(..., max_length=8192, description="URL to analyze")


class TransactionRequest(BaseModel):
    """POST /api/detect-bot body (transaction wire form; oldBalance/newBalance also accepted)."""

    step: int = Field(..., ge=0, description="Hour bucket of the transaction")
    type: str = Field(..., description="PAYMENT | TRANSFER | CASH_OUT | DEBIT | CASH_IN")
    amount: float = Field(..., ge=0)
    oldBalanceOrg: float = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("oldBalanceOrg", "oldBalance"),
        description="Origin balance before",
    )
    newBalanceOrig: float = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("newBalanceOrig", "newBalance"),
        description="Origin balance after",
    )


class NetworkFlowRequest(BaseModel):
    """POST /api/analyze-network body (flow wire form)."""

    protocol: str = Field(..., description="TCP | UDP | ICMP | HTTP | HTTPS | DNS | SSH")
    srcPort: int = Field(..., ge=0, le=65535)
    dstPort: int = Field(..., ge=0, le=65535)
    packetSize: int = Field(..., gt=0, description="Bytes")
    duration: int = Field(..., ge=0, description="Seconds")
    srcIP: str = Field(..., max_length=64)


class QuickScanRequest(BaseModel):
    """POST /api/quick-scan body: one dashboard card input."""

    kind: Literal["url", "transaction", "network"]
    value: str = Field(..., max_length=8192)


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="ThreatLens API",
    description="Rule-based phishing, bot-fraud and network threat classification.",
    version=__version__,
)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@app.post("/api/scan-url")
def scan_url(
    body: ScanUrlRequest,
    profile: ScoringProfile = Depends(get_scoring_profile),
) -> dict[str, Any]:
    url = body.url.strip()
    if not url:
        raise HTTPException(status_code=400, detail="url must be non-empty")
    verdict = score_url(url, profile.url)
    logger.info("api_scan_url", status=verdict.status.value, url=url)
    return verdict.to_dict()


@app.post("/api/detect-bot")
def detect_bot(
    body: TransactionRequest,
    profile: ScoringProfile = Depends(get_scoring_profile),
    rng: random.Random = Depends(get_rng),
) -> dict[str, Any]:
    try:
        record = TransactionRecord.from_dict(body.model_dump())
    except InvalidRecordError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    verdict = score_transaction(record, profile.transaction, rng)
    logger.info("api_detect_bot", status=verdict.status.value, tx_type=record.type.value)
    out = verdict.to_dict()
    out["prediction"] = verdict.message
    out["transaction"] = record.to_dict()
    return out


@app.post("/api/analyze-network")
def analyze_network(
    body: NetworkFlowRequest,
    profile: ScoringProfile = Depends(get_scoring_profile),
    rng: random.Random = Depends(get_rng),
) -> dict[str, Any]:
    try:
        flow = NetworkFlow.from_dict(body.model_dump())
    except InvalidRecordError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    verdict = score_network(flow, profile.network, rng)
    logger.info("api_analyze_network", status=verdict.status.value, dst_port=flow.dst_port)
    out = verdict.to_dict()
    out["prediction"] = verdict.message
    out["networkData"] = flow.to_dict()
    return out


@app.post("/api/quick-scan")
def quick_scan(
    body: QuickScanRequest,
    rng: random.Random = Depends(get_rng),
) -> dict[str, Any]:
    value = body.value.strip()
    if not value:
        raise HTTPException(status_code=400, detail="value must be non-empty")
    if body.kind == "url":
        verdict = quick_scan_url(value)
    elif body.kind == "transaction":
        verdict = quick_check_transaction(value, rng)
    else:
        verdict = quick_check_ip(value, rng)
    logger.info("api_quick_scan", kind=body.kind, status=verdict.status.value)
    return verdict.to_dict()
