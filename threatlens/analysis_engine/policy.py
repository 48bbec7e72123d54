"""
Scoring policies: every threshold, weight and confidence band the local
scorers use, grouped into named profiles.

The dashboard scan cards and the dedicated analyzer pages historically
used slightly different rules. Both are kept here as explicit profiles
("quick" and "full") so call sites choose one instead of duplicating logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from threatlens.analysis_engine.models import TransactionType
from threatlens.core.exceptions import UnknownProfileError

SUSPICIOUS_WORDS: tuple[str, ...] = (
    "login",
    "secure",
    "account",
    "verify",
    "signin",
    "banking",
    "confirm",
    "update",
)


class DigitRule(str, Enum):
    """How the URL digit signal is computed."""

    COUNT = "count"
    """Total digit count above digit_count_threshold."""
    RUN = "run"
    """At least digit_run_length consecutive digits."""


@dataclass(frozen=True)
class ConfidenceBand:
    """Confidence drawn as base + U[0, 1) * spread; never moves the tier."""

    base: float
    spread: float

    @property
    def upper(self) -> float:
        return self.base + self.spread


@dataclass(frozen=True)
class UrlPolicy:
    """Weighted rules for the URL phishing score."""

    suspicious_words: tuple[str, ...] = SUSPICIOUS_WORDS
    suspicious_word_weight: int = 2
    # True: weight per matching token. False: weight once if any token matches.
    count_each_word: bool = True
    dot_threshold: int = 3
    dot_weight: int = 2
    digit_rule: DigitRule = DigitRule.COUNT
    digit_count_threshold: int = 5
    digit_run_length: int = 4
    digit_weight: int = 1
    missing_https_weight: int = 1
    warning_score: int = 2
    threat_score: int = 4

    @property
    def max_score(self) -> int:
        """Highest attainable score under this policy."""
        words = len(self.suspicious_words) if self.count_each_word else 1
        return (
            words * self.suspicious_word_weight
            + self.dot_weight
            + self.digit_weight
            + self.missing_https_weight
        )


@dataclass(frozen=True)
class TransactionPolicy:
    """Thresholds for the transaction bot-fraud rules."""

    high_value_amount: float = 10000.0
    suspicious_types: frozenset[TransactionType] = frozenset(
        {TransactionType.TRANSFER, TransactionType.CASH_OUT}
    )
    # Dashboard card: amounts that are an exact multiple of this look scripted.
    round_amount_unit: float = 1000.0
    threat_confidence: ConfidenceBand = ConfidenceBand(92.0, 6.0)
    warning_confidence: ConfidenceBand = ConfidenceBand(65.0, 20.0)
    safe_confidence: ConfidenceBand = ConfidenceBand(85.0, 12.0)


@dataclass(frozen=True)
class NetworkPolicy:
    """Thresholds for the network traffic rules."""

    internal_prefixes: tuple[str, ...] = ("192.168", "10.", "172.")
    suspicious_ports: frozenset[int] = frozenset({21, 22, 23, 25, 445, 3389})
    short_duration_sec: int = 15
    large_packet_bytes: int = 1200
    # Dashboard card: probability draw above this marks a public IP hostile.
    quick_threat_chance: float = 0.7
    threat_confidence: ConfidenceBand = ConfidenceBand(88.0, 10.0)
    warning_confidence: ConfidenceBand = ConfidenceBand(55.0, 25.0)
    safe_confidence: ConfidenceBand = ConfidenceBand(90.0, 8.0)


@dataclass(frozen=True)
class ScoringProfile:
    name: str
    url: UrlPolicy = field(default_factory=UrlPolicy)
    transaction: TransactionPolicy = field(default_factory=TransactionPolicy)
    network: NetworkPolicy = field(default_factory=NetworkPolicy)


FULL_PROFILE = ScoringProfile(name="full")

QUICK_PROFILE = ScoringProfile(
    name="quick",
    url=UrlPolicy(count_each_word=False, digit_rule=DigitRule.RUN),
    transaction=TransactionPolicy(high_value_amount=5000.0),
    network=NetworkPolicy(suspicious_ports=frozenset({22, 23, 3389, 445})),
)

PROFILES: dict[str, ScoringProfile] = {
    FULL_PROFILE.name: FULL_PROFILE,
    QUICK_PROFILE.name: QUICK_PROFILE,
}


def get_profile(name: str | None) -> ScoringProfile:
    """Return the profile registered under name (case-insensitive); None means full."""
    if name is None:
        return FULL_PROFILE
    key = name.strip().lower()
    try:
        return PROFILES[key]
    except KeyError:
        raise UnknownProfileError(
            f"unknown scoring profile {name!r}; expected one of {', '.join(sorted(PROFILES))}"
        ) from None
