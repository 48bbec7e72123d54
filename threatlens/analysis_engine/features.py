"""
Feature extraction for the three analyzers.

Turns a raw URL string, a transaction record or a network flow into a
fixed set of named features. No scoring logic; output feeds scorer.py.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from threatlens.analysis_engine.models import NetworkFlow, Protocol, TransactionRecord
from threatlens.analysis_engine.policy import (
    SUSPICIOUS_WORDS,
    NetworkPolicy,
    TransactionPolicy,
)

_DIGIT_RUN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class URLFeatures:
    """Lexical features of a URL string."""

    length: int
    dot_count: int
    slash_count: int
    dash_count: int
    digit_count: int
    longest_digit_run: int
    has_https: bool
    """Substring "https" anywhere in the URL, not a scheme check."""
    suspicious_word_count: int
    """Number of distinct suspicious tokens present (not occurrences)."""

    def has_digit_run(self, length: int = 4) -> bool:
        return self.longest_digit_run >= length

    def to_dict(self) -> dict[str, Any]:
        """Wire keys used by the remote /api/scan-url features object."""
        return {
            "url_length": self.length,
            "num_dots": self.dot_count,
            "num_slashes": self.slash_count,
            "num_dashes": self.dash_count,
            "has_https": self.has_https,
            "num_digits": self.digit_count,
            "suspicious_words": self.suspicious_word_count,
            "has_digit_run": self.has_digit_run(),
        }


def extract_url_features(
    url: str,
    suspicious_words: tuple[str, ...] = SUSPICIOUS_WORDS,
) -> URLFeatures:
    lowered = url.lower()
    runs = [len(m.group()) for m in _DIGIT_RUN.finditer(url)]
    return URLFeatures(
        length=len(url),
        dot_count=url.count("."),
        slash_count=url.count("/"),
        dash_count=url.count("-"),
        digit_count=sum(runs),
        longest_digit_run=max(runs, default=0),
        has_https="https" in url,
        suspicious_word_count=sum(1 for word in suspicious_words if word in lowered),
    )


@dataclass(frozen=True)
class TransactionSignals:
    is_high_value: bool
    is_full_drain: bool
    """Account emptied by exactly this transaction."""
    is_suspicious_type: bool

    def triggered(self) -> list[str]:
        names = []
        if self.is_high_value:
            names.append("high value")
        if self.is_full_drain:
            names.append("full balance drain")
        if self.is_suspicious_type:
            names.append("suspicious type")
        return names


def extract_transaction_signals(
    record: TransactionRecord,
    policy: TransactionPolicy,
) -> TransactionSignals:
    return TransactionSignals(
        is_high_value=record.amount > policy.high_value_amount,
        is_full_drain=record.new_balance == 0 and record.old_balance == record.amount,
        is_suspicious_type=record.type in policy.suspicious_types,
    )


def parse_ipv4(address: str) -> tuple[int, int, int, int] | None:
    """
    Parse a dotted-quad address into four octets.

    Returns None unless there are exactly four dot-separated decimal
    segments, each in [0, 255]. Signs, spaces and empty segments are rejected.
    """
    segments = address.split(".")
    if len(segments) != 4:
        return None
    octets = []
    for segment in segments:
        if not segment.isascii() or not segment.isdigit():
            return None
        value = int(segment)
        if value > 255:
            return None
        octets.append(value)
    return octets[0], octets[1], octets[2], octets[3]


def is_internal_address(address: str, policy: NetworkPolicy) -> bool:
    """Prefix match on the raw address string (e.g. any "172." is internal)."""
    return address.startswith(policy.internal_prefixes)


@dataclass(frozen=True)
class NetworkSignals:
    is_valid_ip: bool
    is_internal: bool
    is_suspicious_port: bool
    is_short_duration: bool
    is_large_packet: bool
    is_icmp: bool

    @property
    def is_icmp_flood(self) -> bool:
        """Large ICMP packets: the DDoS clause of the warning rule."""
        return self.is_large_packet and self.is_icmp


def extract_network_signals(flow: NetworkFlow, policy: NetworkPolicy) -> NetworkSignals:
    return NetworkSignals(
        is_valid_ip=parse_ipv4(flow.src_ip) is not None,
        is_internal=is_internal_address(flow.src_ip, policy),
        is_suspicious_port=flow.dst_port in policy.suspicious_ports,
        is_short_duration=flow.duration < policy.short_duration_sec,
        is_large_packet=flow.packet_size > policy.large_packet_bytes,
        is_icmp=flow.protocol is Protocol.ICMP,
    )
