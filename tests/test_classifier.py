"""
Tests for score classification and confidence (classifier.py).
"""

from __future__ import annotations

import random

from threatlens.analysis_engine.classifier import classify_url_score, draw_confidence, url_confidence
from threatlens.analysis_engine.models import VerdictStatus
from threatlens.analysis_engine.policy import FULL_PROFILE, QUICK_PROFILE, ConfidenceBand


def test_url_thresholds():
    policy = FULL_PROFILE.url
    assert classify_url_score(0, policy) is VerdictStatus.SAFE
    assert classify_url_score(1, policy) is VerdictStatus.SAFE
    assert classify_url_score(2, policy) is VerdictStatus.WARNING
    assert classify_url_score(3, policy) is VerdictStatus.WARNING
    assert classify_url_score(4, policy) is VerdictStatus.THREAT
    assert classify_url_score(20, policy) is VerdictStatus.THREAT


def test_tier_monotonic_in_score():
    """Raising the score never lowers the tier."""
    for policy in (FULL_PROFILE.url, QUICK_PROFILE.url):
        ranks = [classify_url_score(s, policy).rank for s in range(policy.max_score + 1)]
        assert ranks == sorted(ranks)


def test_url_confidence_formulas():
    assert url_confidence(VerdictStatus.THREAT, 4) == 82
    assert url_confidence(VerdictStatus.THREAT, 9) == 95
    assert url_confidence(VerdictStatus.WARNING, 2) == 60
    assert url_confidence(VerdictStatus.WARNING, 3) == 65
    assert url_confidence(VerdictStatus.SAFE, 0) == 95
    assert url_confidence(VerdictStatus.SAFE, 1) == 90


def test_url_confidence_in_range_for_all_scores():
    for policy in (FULL_PROFILE.url, QUICK_PROFILE.url):
        for score in range(policy.max_score + 1):
            status = classify_url_score(score, policy)
            assert 0 <= url_confidence(status, score) <= 100


def test_draw_confidence_within_band():
    band = ConfidenceBand(65.0, 20.0)
    rng = random.Random(0)
    draws = [draw_confidence(band, rng) for _ in range(200)]
    assert all(65.0 <= d <= 85.0 for d in draws)
    assert len(set(draws)) > 1


def test_draw_confidence_clamped():
    """A band reaching past 100 is clamped."""
    rng = random.Random(0)
    assert all(draw_confidence(ConfidenceBand(99.0, 50.0), rng) <= 100.0 for _ in range(50))


def test_max_scores():
    assert FULL_PROFILE.url.max_score == 20
    assert QUICK_PROFILE.url.max_score == 6
