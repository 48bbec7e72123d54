"""
Application-level exceptions.

Invalid records are rejected before scoring; malformed remote bodies are
caught inside the API client and never reach callers of the orchestrator.
"""


class ThreatLensError(Exception):
    """Base class for all ThreatLens errors."""


class InvalidRecordError(ThreatLensError, ValueError):
    """A transaction record or network flow violates its field invariants."""


class InvalidVerdictError(ThreatLensError, ValueError):
    """A verdict has an unknown status, an empty message or an out-of-range confidence."""


class MalformedResponseError(ThreatLensError):
    """A remote classifier response body cannot be read as a verdict."""


class UnknownProfileError(ThreatLensError, KeyError):
    """No scoring profile is registered under the requested name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown profile"
