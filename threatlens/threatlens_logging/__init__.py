"""
Structured logging for ThreatLens.

JSON logs with timestamp, event_type, domain and request_id.
Use get_logger() in all modules for aggregation-friendly output.
"""

from threatlens.threatlens_logging.logger import bind_request, get_logger

__all__ = ["bind_request", "get_logger"]
