"""
Tests for the URL phishing scorer (scorer.score_url / compute_url_score).

Covers both profiles: full counts every suspicious token and total digits,
quick counts any token once and looks for a 4+ digit run.
"""

from __future__ import annotations

import pytest

from threatlens.analysis_engine.features import extract_url_features
from threatlens.analysis_engine.models import VerdictStatus
from threatlens.analysis_engine.policy import FULL_PROFILE, QUICK_PROFILE
from threatlens.analysis_engine.scorer import compute_url_score, score_url

PHISH_URL = "http://secure-login-verify-account123456.badsite.ru"


def test_google_is_safe():
    """No suspicious words, one dot, https present -> score 0, safe."""
    verdict = score_url("https://google.com")
    assert verdict.status is VerdictStatus.SAFE
    assert verdict.message == "Low Risk - URL Appears Safe"
    assert verdict.confidence == 95
    assert verdict.details == "Threat Score: 0/20 - No major concerns"


def test_phishing_url_is_threat_full_profile():
    """Four suspicious words, six digits and no https -> threat."""
    breakdown = compute_url_score(PHISH_URL, FULL_PROFILE.url)
    assert breakdown.suspicious_words == 8
    assert breakdown.dots == 0
    assert breakdown.digits == 1
    assert breakdown.missing_https == 1
    assert breakdown.total == 10
    verdict = score_url(PHISH_URL, FULL_PROFILE.url)
    assert verdict.status is VerdictStatus.THREAT
    assert verdict.message == "High Risk - Potential Phishing Detected"
    assert verdict.confidence == 95


def test_phishing_url_is_threat_quick_profile():
    """Quick profile: any word +2, digit run +1, no https +1 -> 4, threat."""
    verdict = score_url(PHISH_URL, QUICK_PROFILE.url)
    assert verdict.status is VerdictStatus.THREAT
    assert verdict.confidence == 82
    assert verdict.details == "Threat Score: 4/6 - Multiple indicators found"


def test_many_dots_without_https_is_warning():
    """Dots > 3 (+2) and no https (+1) -> 3, warning with 50 + 5*3."""
    verdict = score_url("http://a.b.c.d.e")
    assert verdict.status is VerdictStatus.WARNING
    assert verdict.message == "Medium Risk - Proceed with Caution"
    assert verdict.confidence == 65


def test_single_word_over_https_is_warning():
    """One suspicious word over https -> 2, the warning threshold."""
    verdict = score_url("https://mybank.com/login")
    assert verdict.status is VerdictStatus.WARNING
    assert verdict.confidence == 60


def test_plain_http_is_safe_with_reduced_confidence():
    """Missing https alone -> 1, safe at 90."""
    verdict = score_url("http://example.com")
    assert verdict.status is VerdictStatus.SAFE
    assert verdict.confidence == 90


def test_repeated_token_counts_once():
    """The same token repeated still counts as one matching token."""
    features = extract_url_features("http://login.login.login/login")
    assert features.suspicious_word_count == 1
    assert compute_url_score("http://login.login.login/login").suspicious_words == 2


def test_word_matching_is_case_insensitive():
    """Tokens are matched against the lower-cased URL."""
    assert extract_url_features("https://example.com/VERIFY/Account").suspicious_word_count == 2


def test_https_is_substring_not_scheme():
    """"https" anywhere counts, even outside the scheme."""
    features = extract_url_features("http://example.com/?next=https-page")
    assert features.has_https is True


def test_profiles_disagree_on_words():
    """Two tokens: full scores 4 (threat), quick scores 2 (warning)."""
    url = "https://x.com/update-account"
    assert score_url(url, FULL_PROFILE.url).status is VerdictStatus.THREAT
    assert score_url(url, QUICK_PROFILE.url).status is VerdictStatus.WARNING


def test_profiles_disagree_on_digits():
    """Five consecutive digits: a run for quick, not above 5 total for full."""
    url = "https://shop.com/item/12345"
    assert compute_url_score(url, FULL_PROFILE.url).digits == 0
    assert compute_url_score(url, QUICK_PROFILE.url).digits == 1
    scattered = "https://a.com/1-2-3-4-5-6"
    assert compute_url_score(scattered, FULL_PROFILE.url).digits == 1
    assert compute_url_score(scattered, QUICK_PROFILE.url).digits == 0


def test_features_report_wire_keys():
    """URL verdicts carry the features object with the remote API's keys."""
    verdict = score_url("https://my-site.com/a/b/2024")
    assert verdict.features == {
        "url_length": 28,
        "num_dots": 1,
        "num_slashes": 5,
        "num_dashes": 1,
        "has_https": True,
        "num_digits": 4,
        "suspicious_words": 0,
        "has_digit_run": True,
    }


@pytest.mark.parametrize(
    "url",
    [
        "x",
        "https://google.com",
        PHISH_URL,
        "http://" + "login.secure.account.verify.signin.banking.confirm.update." * 3 + "9" * 20,
    ],
)
def test_confidence_bounds_and_idempotence(url):
    """Confidence stays in [0, 100]; rescoring gives an identical verdict."""
    for profile in (FULL_PROFILE, QUICK_PROFILE):
        first = score_url(url, profile.url)
        assert 0 <= first.confidence <= 100
        assert compute_url_score(url, profile.url).total >= 0
        assert score_url(url, profile.url) == first
