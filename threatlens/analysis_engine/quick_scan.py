"""
Dashboard quick checks: single-string scans used by the inline scan cards.

Lighter than the analyzer pages. The URL card is the URL scorer under
the quick profile; the transaction card sees only an amount; the IP card
sees only an address and, for public addresses, makes a weighted random
call instead of a rule-based one.
"""

from __future__ import annotations

import random
import re

from threatlens.analysis_engine.classifier import draw_confidence
from threatlens.analysis_engine.features import is_internal_address, parse_ipv4
from threatlens.analysis_engine.models import Verdict, VerdictStatus
from threatlens.analysis_engine.policy import (
    QUICK_PROFILE,
    NetworkPolicy,
    TransactionPolicy,
    UrlPolicy,
)
from threatlens.analysis_engine.scorer import (
    INTERNAL_DETAILS,
    INTERNAL_MESSAGE,
    INVALID_IP_DETAILS,
    INVALID_IP_MESSAGE,
    score_url,
)

# Upper bound for the amount drawn when the card input is not a number.
RANDOM_AMOUNT_CEILING = 10000.0

_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def quick_scan_url(url: str, policy: UrlPolicy | None = None) -> Verdict:
    return score_url(url, policy or QUICK_PROFILE.url)


def parse_amount(value: str) -> float | None:
    """Leading-number parse of a card input ("2500 USD" -> 2500.0); None when absent."""
    match = _LEADING_NUMBER.match(value)
    if match is None:
        return None
    return float(match.group())


def quick_check_transaction(
    value: str,
    rng: random.Random | None = None,
    policy: TransactionPolicy | None = None,
) -> Verdict:
    """
    Amount-only bot check.

    A non-numeric or zero input stands for an unknown transaction and is replaced
    by a random amount in [0, 10000). High value plus a round amount
    (exact multiple of round_amount_unit) reads as scripted.
    """
    policy = policy or QUICK_PROFILE.transaction
    rng = rng or random.Random()
    amount = parse_amount(value)
    if not amount:
        amount = rng.random() * RANDOM_AMOUNT_CEILING
    is_high_value = amount > policy.high_value_amount
    is_round = amount % policy.round_amount_unit == 0

    if is_high_value and is_round:
        return Verdict(
            status=VerdictStatus.THREAT,
            message="Bot Activity Detected",
            confidence=draw_confidence(policy.threat_confidence, rng),
            details="Pattern matches automated transaction behavior",
        )
    if is_high_value:
        return Verdict(
            status=VerdictStatus.WARNING,
            message="Unusual Transaction Pattern",
            confidence=draw_confidence(policy.warning_confidence, rng),
            details="Transaction flagged for review",
        )
    return Verdict(
        status=VerdictStatus.SAFE,
        message="Transaction Verified",
        confidence=draw_confidence(policy.safe_confidence, rng),
        details="No bot activity detected",
    )


def quick_check_ip(
    address: str,
    rng: random.Random | None = None,
    policy: NetworkPolicy | None = None,
) -> Verdict:
    """Address-only network check; public addresses get a weighted random call."""
    policy = policy or QUICK_PROFILE.network
    rng = rng or random.Random()
    address = address.strip()

    if parse_ipv4(address) is None:
        return Verdict(
            status=VerdictStatus.WARNING,
            message=INVALID_IP_MESSAGE,
            confidence=draw_confidence(policy.warning_confidence, rng),
            details=INVALID_IP_DETAILS,
        )
    if is_internal_address(address, policy):
        return Verdict(
            status=VerdictStatus.SAFE,
            message=INTERNAL_MESSAGE,
            confidence=draw_confidence(policy.safe_confidence, rng),
            details=INTERNAL_DETAILS,
        )
    if rng.random() > policy.quick_threat_chance:
        return Verdict(
            status=VerdictStatus.THREAT,
            message="State-Sponsored Activity Suspected",
            confidence=draw_confidence(policy.threat_confidence, rng),
            details="IP associated with known threat actors",
        )
    return Verdict(
        status=VerdictStatus.SAFE,
        message="No Threats Detected",
        confidence=draw_confidence(policy.safe_confidence, rng),
        details="IP cleared after analysis",
    )
