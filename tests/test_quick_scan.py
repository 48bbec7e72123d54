"""
Tests for the dashboard quick checks (quick_scan.py).
"""

from __future__ import annotations

import pytest

from threatlens.analysis_engine.models import VerdictStatus
from threatlens.analysis_engine.quick_scan import (
    parse_amount,
    quick_check_ip,
    quick_check_transaction,
    quick_scan_url,
)


def test_quick_url_uses_quick_profile():
    verdict = quick_scan_url("http://secure-login-verify-account123456.badsite.ru")
    assert verdict.status is VerdictStatus.THREAT
    assert verdict.details == "Threat Score: 4/6 - Multiple indicators found"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2500", 2500.0),
        ("  7000 USD", 7000.0),
        ("12.5abc", 12.5),
        ("-40", -40.0),
        ("1e4", 10000.0),
        ("abc", None),
        ("", None),
    ],
)
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


def test_round_high_amount_is_threat():
    verdict = quick_check_transaction("6000")
    assert verdict.status is VerdictStatus.THREAT
    assert verdict.message == "Bot Activity Detected"


def test_high_amount_is_warning():
    verdict = quick_check_transaction("6500")
    assert verdict.status is VerdictStatus.WARNING
    assert verdict.message == "Unusual Transaction Pattern"


@pytest.mark.parametrize("value", ["4000", "5000", "0.99"])
def test_low_amount_is_safe(value):
    verdict = quick_check_transaction(value)
    assert verdict.status is VerdictStatus.SAFE
    assert verdict.message == "Transaction Verified"


def test_non_numeric_amount_is_drawn(fixed_random):
    """Unparsable input -> random amount; 0.9 draws 9000, a round high amount."""
    verdict = quick_check_transaction("tx-abc", rng=fixed_random(0.9))
    assert verdict.status is VerdictStatus.THREAT
    verdict = quick_check_transaction("tx-abc", rng=fixed_random(0.25))
    assert verdict.status is VerdictStatus.SAFE


def test_malformed_ip_card():
    verdict = quick_check_ip("999.1.1.1")
    assert verdict.status is VerdictStatus.WARNING
    assert verdict.message == "Invalid IP Format"


def test_internal_ip_card():
    verdict = quick_check_ip("10.1.2.3")
    assert verdict.status is VerdictStatus.SAFE
    assert verdict.message == "Internal Network Address"


def test_public_ip_card_weighted_draw(fixed_random):
    """Draw above 0.7 flags the address; at or below clears it."""
    flagged = quick_check_ip(" 8.8.8.8 ", rng=fixed_random(0.9))
    assert flagged.status is VerdictStatus.THREAT
    assert flagged.message == "State-Sponsored Activity Suspected"
    cleared = quick_check_ip("8.8.8.8", rng=fixed_random(0.7))
    assert cleared.status is VerdictStatus.SAFE
    assert cleared.message == "No Threats Detected"


def test_zero_amount_is_drawn(fixed_random):
    """A zero amount counts as unknown, like unparsable input; 0.9 draws 9000."""
    verdict = quick_check_transaction("0", rng=fixed_random(0.9))
    assert verdict.status is VerdictStatus.THREAT
    assert verdict.message == "Bot Activity Detected"
