"""
Score-to-tier classification and confidence.

The tier is a pure function of the score (or of the rule that fired);
confidence only expresses residual uncertainty and never changes the tier.
"""

from __future__ import annotations

import random

from threatlens.analysis_engine.models import VerdictStatus
from threatlens.analysis_engine.policy import ConfidenceBand, UrlPolicy

URL_MESSAGES = {
    VerdictStatus.THREAT: "High Risk - Potential Phishing Detected",
    VerdictStatus.WARNING: "Medium Risk - Proceed with Caution",
    VerdictStatus.SAFE: "Low Risk - URL Appears Safe",
}

URL_SCORE_NOTES = {
    VerdictStatus.THREAT: "Multiple indicators found",
    VerdictStatus.WARNING: "Some suspicious patterns",
    VerdictStatus.SAFE: "No major concerns",
}


def classify_url_score(score: int, policy: UrlPolicy) -> VerdictStatus:
    """Tier for a URL score; monotonic non-decreasing in score."""
    if score >= policy.threat_score:
        return VerdictStatus.THREAT
    if score >= policy.warning_score:
        return VerdictStatus.WARNING
    return VerdictStatus.SAFE


def url_confidence(status: VerdictStatus, score: int) -> int:
    """
    Deterministic confidence for URL verdicts.

    threat: min(95, 70 + 3*score); warning: 50 + 5*score;
    safe: max(85, 95 - 5*score). Clamped to [0, 100].
    """
    if status is VerdictStatus.THREAT:
        value = min(95, 70 + score * 3)
    elif status is VerdictStatus.WARNING:
        value = 50 + score * 5
    else:
        value = max(85, 95 - score * 5)
    return max(0, min(100, value))


def draw_confidence(band: ConfidenceBand, rng: random.Random) -> float:
    """Draw base + U[0, 1) * spread, rounded to 2 places and clamped to [0, 100]."""
    value = band.base + rng.random() * band.spread
    return round(max(0.0, min(100.0, value)), 2)
