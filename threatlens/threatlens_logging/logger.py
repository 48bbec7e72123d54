"""
Structured JSON logging for the analyzers, the remote client and the API server.

Every record carries timestamp, level, event_type and logger; analysis
records also carry domain and request_id (see bind_request). URL-valued
fields are cut to MAX_LOGGED_URL_LENGTH characters so submitted URLs
never land in logs in full. Output goes to stderr; the CLI writes its
verdict JSON to stdout.

Uses only Python stdlib logging and structlog; no threatlens imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# LOG_FORMAT=json (default) or console
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

MAX_LOGGED_URL_LENGTH = 64


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def truncate_urls(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Cut string fields named url (or ending in _url) to MAX_LOGGED_URL_LENGTH.
    The full length is kept alongside as <key>_length.
    """
    for key in list(event_dict):
        if key != "url" and not key.endswith("_url"):
            continue
        value = event_dict[key]
        if isinstance(value, str) and len(value) > MAX_LOGGED_URL_LENGTH:
            event_dict[key] = value[:MAX_LOGGED_URL_LENGTH]
            event_dict[f"{key}_length"] = len(value)
    return event_dict


def configure_structlog() -> None:
    """Configure structlog once at import."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
        truncate_urls,
    ]
    if LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("api_scan_url", status="threat", url=url)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_request(domain: str, request_id: str) -> structlog.BoundLogger:
    """Logger for one analysis: domain (url / transaction / network) and request_id on every record."""
    return get_logger("threatlens.analysis").bind(domain=domain, request_id=request_id)
