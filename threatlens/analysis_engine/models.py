"""
Data models for analyzer input and output.

Responsibilities:
- Define the Verdict shared by all three analyzers (local and remote).
- Define the transaction record and network flow inputs, validated on
  construction, with JSON wire helpers matching the remote API.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from threatlens.core.exceptions import (
    InvalidRecordError,
    InvalidVerdictError,
    MalformedResponseError,
)


class VerdictStatus(str, Enum):
    SAFE = "safe"
    WARNING = "warning"
    THREAT = "threat"

    @property
    def rank(self) -> int:
        """Ordering used for tier monotonicity: safe < warning < threat."""
        return _STATUS_ORDER.index(self)


_STATUS_ORDER = (VerdictStatus.SAFE, VerdictStatus.WARNING, VerdictStatus.THREAT)


class AnalysisDomain(str, Enum):
    URL = "url"
    TRANSACTION = "transaction"
    NETWORK = "network"


class TransactionType(str, Enum):
    PAYMENT = "PAYMENT"
    TRANSFER = "TRANSFER"
    CASH_OUT = "CASH_OUT"
    DEBIT = "DEBIT"
    CASH_IN = "CASH_IN"


class Protocol(str, Enum):
    TCP = "TCP"
    UDP = "UDP"
    ICMP = "ICMP"
    HTTP = "HTTP"
    HTTPS = "HTTPS"
    DNS = "DNS"
    SSH = "SSH"


def _coerce_enum(enum_cls: type[Enum], raw: Any, field_name: str) -> Any:
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(str(raw).strip().upper())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidRecordError(f"{field_name} must be one of {allowed}; got {raw!r}") from None


def _require_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidRecordError(f"{field_name} must be a number; got {value!r}")
    if not math.isfinite(value):
        raise InvalidRecordError(f"{field_name} must be finite; got {value!r}")
    return value


@dataclass(frozen=True)
class Verdict:
    """
    Outcome of one analysis, whether produced remotely or by a local scorer.

    The status is the tier; confidence is a percentage and never influences
    the tier. Optional fields carry domain extras (URL features, network
    attack type) and are omitted from the wire form when empty.
    """

    status: VerdictStatus
    message: str
    confidence: float
    details: str | None = None
    attack_type: str | None = None
    features: dict[str, Any] | None = None
    source: str = "local"
    """Either "local" (fallback scorer) or "remote" (classification service)."""

    def __post_init__(self) -> None:
        if not isinstance(self.status, VerdictStatus):
            try:
                object.__setattr__(self, "status", VerdictStatus(str(self.status).strip().lower()))
            except ValueError:
                raise InvalidVerdictError(f"unknown verdict status {self.status!r}") from None
        if not isinstance(self.message, str) or not self.message.strip():
            raise InvalidVerdictError("verdict message must be non-empty")
        if isinstance(self.confidence, bool) or not isinstance(self.confidence, (int, float)):
            raise InvalidVerdictError(f"confidence must be a number; got {self.confidence!r}")
        if not 0 <= self.confidence <= 100:
            raise InvalidVerdictError(f"confidence {self.confidence} outside [0, 100]")

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "status": self.status.value,
            "message": self.message,
            "confidence": self.confidence,
        }
        if self.details:
            out["details"] = self.details
        if self.attack_type:
            out["attackType"] = self.attack_type
        if self.features is not None:
            out["features"] = dict(self.features)
        return out

    @classmethod
    def from_dict(cls, body: Any, *, source: str = "remote") -> "Verdict":
        """
        Build from a remote response body.

        Accepts "message" or the analyzer pages' "prediction" key, and a
        confidence expressed either as a 0–1 fraction (float) or a percentage.
        Raises MalformedResponseError for anything that is not Verdict-shaped.
        """
        if not isinstance(body, dict):
            raise MalformedResponseError(f"expected a JSON object, got {type(body).__name__}")
        message = body.get("message") or body.get("prediction")
        confidence = body.get("confidence")
        if isinstance(confidence, float) and 0.0 <= confidence <= 1.0:
            confidence = round(confidence * 100, 2)
        features = body.get("features")
        try:
            return cls(
                status=body.get("status"),
                message=message,
                confidence=confidence,
                details=body.get("details") or None,
                attack_type=body.get("attackType") or body.get("attack_type") or None,
                features=features if isinstance(features, dict) else None,
                source=source,
            )
        except InvalidVerdictError as e:
            raise MalformedResponseError(str(e)) from e


@dataclass(frozen=True)
class TransactionRecord:
    """
    One payment-ledger style transaction submitted for bot-fraud analysis.

    All monetary fields are non-negative; step is the hour bucket.
    """

    step: int
    type: TransactionType
    amount: float
    old_balance: float
    new_balance: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", _coerce_enum(TransactionType, self.type, "type"))
        step = _require_number(self.step, "step")
        if step < 0 or int(step) != step:
            raise InvalidRecordError(f"step must be a non-negative integer; got {self.step!r}")
        for name in ("amount", "old_balance", "new_balance"):
            if _require_number(getattr(self, name), name) < 0:
                raise InvalidRecordError(f"{name} must be non-negative; got {getattr(self, name)!r}")

    def to_dict(self) -> dict[str, Any]:
        """Wire form expected by POST /api/detect-bot."""
        return {
            "step": self.step,
            "type": self.type.value,
            "amount": self.amount,
            "oldBalanceOrg": self.old_balance,
            "newBalanceOrig": self.new_balance,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransactionRecord":
        """Parse wire form; also accepts oldBalance/newBalance and snake_case keys."""
        def pick(*keys: str) -> Any:
            for key in keys:
                if key in data:
                    return data[key]
            raise InvalidRecordError(f"missing field {keys[0]!r}")

        return cls(
            step=pick("step"),
            type=pick("type"),
            amount=pick("amount"),
            old_balance=pick("oldBalanceOrg", "oldBalance", "old_balance"),
            new_balance=pick("newBalanceOrig", "newBalance", "new_balance"),
        )


@dataclass(frozen=True)
class NetworkFlow:
    """
    One observed network flow submitted for traffic analysis.

    src_ip is kept as given: a malformed address is a scoring outcome
    ("Invalid IP Format"), not a construction error.
    """

    protocol: Protocol
    src_port: int
    dst_port: int
    packet_size: int
    duration: int
    src_ip: str = field(default="")

    def __post_init__(self) -> None:
        object.__setattr__(self, "protocol", _coerce_enum(Protocol, self.protocol, "protocol"))
        for name in ("src_port", "dst_port"):
            port = _require_number(getattr(self, name), name)
            if not 0 <= port <= 65535 or int(port) != port:
                raise InvalidRecordError(f"{name} must be an integer in [0, 65535]; got {port!r}")
        if _require_number(self.packet_size, "packet_size") <= 0:
            raise InvalidRecordError(f"packet_size must be positive; got {self.packet_size!r}")
        if _require_number(self.duration, "duration") < 0:
            raise InvalidRecordError(f"duration must be non-negative; got {self.duration!r}")
        if not isinstance(self.src_ip, str):
            raise InvalidRecordError(f"src_ip must be a string; got {self.src_ip!r}")

    def to_dict(self) -> dict[str, Any]:
        """Wire form expected by POST /api/analyze-network."""
        return {
            "protocol": self.protocol.value,
            "srcPort": self.src_port,
            "dstPort": self.dst_port,
            "packetSize": self.packet_size,
            "duration": self.duration,
            "srcIP": self.src_ip,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NetworkFlow":
        def pick(*keys: str) -> Any:
            for key in keys:
                if key in data:
                    return data[key]
            raise InvalidRecordError(f"missing field {keys[0]!r}")

        return cls(
            protocol=pick("protocol"),
            src_port=pick("srcPort", "src_port"),
            dst_port=pick("dstPort", "dst_port"),
            packet_size=pick("packetSize", "packet_size"),
            duration=pick("duration"),
            src_ip=pick("srcIP", "src_ip"),
        )
