"""
Local risk scoring — the offline fallback for all three analyzers.

Responsibilities:
- Score URLs for phishing with fixed weighted lexical rules.
- Classify transactions for bot fraud from value, drain and type signals.
- Classify network flows from address, port, duration and packet signals.
Every function is pure apart from the injected random source, which only
affects confidence. Every defined input yields a Verdict; none raise.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from threatlens.analysis_engine.classifier import (
    URL_MESSAGES,
    URL_SCORE_NOTES,
    classify_url_score,
    draw_confidence,
    url_confidence,
)
from threatlens.analysis_engine.features import (
    URLFeatures,
    extract_network_signals,
    extract_transaction_signals,
    extract_url_features,
)
from threatlens.analysis_engine.models import (
    NetworkFlow,
    TransactionRecord,
    Verdict,
    VerdictStatus,
)
from threatlens.analysis_engine.policy import (
    FULL_PROFILE,
    DigitRule,
    NetworkPolicy,
    TransactionPolicy,
    UrlPolicy,
)

TRANSACTION_MESSAGES = {
    VerdictStatus.THREAT: "Bot Activity Detected - Fraudulent Transaction",
    VerdictStatus.WARNING: "Suspicious Pattern - Manual Review Required",
    VerdictStatus.SAFE: "Legitimate Transaction - No Bot Activity",
}

INVALID_IP_MESSAGE = "Invalid IP Format"
INVALID_IP_DETAILS = "Please enter a valid IP address"
INTERNAL_MESSAGE = "Internal Network Address"
INTERNAL_DETAILS = "No external threat indicators"
APT_MESSAGE = "State-Sponsored Attack Detected"
APT_ATTACK_TYPE = "APT (Advanced Persistent Threat)"
SUSPICIOUS_TRAFFIC_MESSAGE = "Suspicious Network Activity"
DDOS_ATTACK_TYPE = "Potential DDoS"
PORT_SCAN_ATTACK_TYPE = "Port Scanning"
NORMAL_TRAFFIC_MESSAGE = "Normal Network Traffic"


@dataclass(frozen=True)
class UrlScore:
    """Score breakdown: points contributed by each rule."""

    features: URLFeatures
    suspicious_words: int
    dots: int
    digits: int
    missing_https: int

    @property
    def total(self) -> int:
        return self.suspicious_words + self.dots + self.digits + self.missing_https


def compute_url_score(url: str, policy: UrlPolicy | None = None) -> UrlScore:
    """
    Apply the weighted URL rules.

    score = word points + dot_weight*(dots > threshold)
            + digit_weight*(digit rule) + missing_https_weight*(no "https").
    Word points are weight per matching token, or weight once when the
    policy does not count each word.
    """
    policy = policy or FULL_PROFILE.url
    features = extract_url_features(url, policy.suspicious_words)

    if policy.count_each_word:
        word_points = features.suspicious_word_count * policy.suspicious_word_weight
    else:
        word_points = policy.suspicious_word_weight if features.suspicious_word_count else 0

    if policy.digit_rule is DigitRule.RUN:
        digit_hit = features.has_digit_run(policy.digit_run_length)
    else:
        digit_hit = features.digit_count > policy.digit_count_threshold

    return UrlScore(
        features=features,
        suspicious_words=word_points,
        dots=policy.dot_weight if features.dot_count > policy.dot_threshold else 0,
        digits=policy.digit_weight if digit_hit else 0,
        missing_https=0 if features.has_https else policy.missing_https_weight,
    )


def score_url(url: str, policy: UrlPolicy | None = None) -> Verdict:
    """Phishing verdict for a URL. Blank input is the caller's to reject."""
    policy = policy or FULL_PROFILE.url
    breakdown = compute_url_score(url, policy)
    score = breakdown.total
    status = classify_url_score(score, policy)
    return Verdict(
        status=status,
        message=URL_MESSAGES[status],
        confidence=url_confidence(status, score),
        details=f"Threat Score: {score}/{policy.max_score} - {URL_SCORE_NOTES[status]}",
        features=breakdown.features.to_dict(),
    )


def score_transaction(
    record: TransactionRecord,
    policy: TransactionPolicy | None = None,
    rng: random.Random | None = None,
) -> Verdict:
    """
    Bot-fraud verdict for one transaction.

    threat: high value AND full drain AND suspicious type.
    warning: (high value AND suspicious type) OR full drain.
    safe: anything else.
    """
    policy = policy or FULL_PROFILE.transaction
    rng = rng or random.Random()
    signals = extract_transaction_signals(record, policy)

    if signals.is_high_value and signals.is_full_drain and signals.is_suspicious_type:
        status, band = VerdictStatus.THREAT, policy.threat_confidence
    elif (signals.is_high_value and signals.is_suspicious_type) or signals.is_full_drain:
        status, band = VerdictStatus.WARNING, policy.warning_confidence
    else:
        status, band = VerdictStatus.SAFE, policy.safe_confidence

    triggered = signals.triggered()
    return Verdict(
        status=status,
        message=TRANSACTION_MESSAGES[status],
        confidence=draw_confidence(band, rng),
        details=f"Signals: {', '.join(triggered)}" if triggered else "Signals: none",
    )


def score_network(
    flow: NetworkFlow,
    policy: NetworkPolicy | None = None,
    rng: random.Random | None = None,
) -> Verdict:
    """
    Traffic verdict for one network flow.

    Malformed source IP short-circuits to a warning; internal sources are
    trusted unconditionally. Otherwise a suspicious port with a short
    session is an APT threat, and a suspicious port or a large ICMP packet
    is a warning.
    """
    policy = policy or FULL_PROFILE.network
    rng = rng or random.Random()
    signals = extract_network_signals(flow, policy)

    if not signals.is_valid_ip:
        return Verdict(
            status=VerdictStatus.WARNING,
            message=INVALID_IP_MESSAGE,
            confidence=draw_confidence(policy.warning_confidence, rng),
            details=INVALID_IP_DETAILS,
        )
    if signals.is_internal:
        return Verdict(
            status=VerdictStatus.SAFE,
            message=INTERNAL_MESSAGE,
            confidence=draw_confidence(policy.safe_confidence, rng),
            details=INTERNAL_DETAILS,
        )
    if signals.is_suspicious_port and signals.is_short_duration:
        return Verdict(
            status=VerdictStatus.THREAT,
            message=APT_MESSAGE,
            confidence=draw_confidence(policy.threat_confidence, rng),
            details=f"Port {flow.dst_port} session of {flow.duration}s from {flow.src_ip}",
            attack_type=APT_ATTACK_TYPE,
        )
    if signals.is_suspicious_port or signals.is_icmp_flood:
        attack_type = DDOS_ATTACK_TYPE if signals.is_icmp_flood else PORT_SCAN_ATTACK_TYPE
        return Verdict(
            status=VerdictStatus.WARNING,
            message=SUSPICIOUS_TRAFFIC_MESSAGE,
            confidence=draw_confidence(policy.warning_confidence, rng),
            details=f"{flow.protocol.value} to port {flow.dst_port}, {flow.packet_size} bytes",
            attack_type=attack_type,
        )
    return Verdict(
        status=VerdictStatus.SAFE,
        message=NORMAL_TRAFFIC_MESSAGE,
        confidence=draw_confidence(policy.safe_confidence, rng),
    )
