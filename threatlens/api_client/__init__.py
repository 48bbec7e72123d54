"""
Remote classification client.

Posts analyzer inputs to the classification service and reports a
RemoteOutcome (verdict or failure) without raising.
"""

from threatlens.api_client.client import ENDPOINTS, RemoteClassifier, RemoteOutcome

__all__ = ["ENDPOINTS", "RemoteClassifier", "RemoteOutcome"]
