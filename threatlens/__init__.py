"""
ThreatLens — explainable threat scoring for a security dashboard.

Scores URLs for phishing, transactions for bot fraud and network flows for
hostile traffic. Each analyzer first asks a remote classification service and
falls back to local rule-based scorers when the service is unreachable.
"""

__version__ = "0.1.0"
