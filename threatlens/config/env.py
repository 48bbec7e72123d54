"""
Environment variable loading and validation for ThreatLens.

- THREATLENS_API_BASE_URL: remote classifier base URL (default: http://localhost:5000)
- THREATLENS_REMOTE_ENABLED: 1/true/yes/on to attempt remote calls (default: on)
- THREATLENS_REMOTE_TIMEOUT_SEC: transport timeout for remote calls
- THREATLENS_PROFILE: full | quick (default: full)
- THREATLENS_FALLBACK_DELAY_MIN_MS / _MAX_MS: simulated processing window
- THREATLENS_NETWORK_FALLBACK_DELAY_MS: fixed simulated delay for network scans
- THREATLENS_RANDOM_SEED: optional seed for confidence draws
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is threatlens/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_API_BASE_URL = "http://localhost:5000"
DEFAULT_REMOTE_TIMEOUT_SEC = 5.0
DEFAULT_PROFILE = "full"
DEFAULT_FALLBACK_DELAY_MIN_MS = 1500
DEFAULT_FALLBACK_DELAY_MAX_MS = 2500
DEFAULT_NETWORK_FALLBACK_DELAY_MS = 2000
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8000

_FALSY = ("0", "false", "no", "off")


def load_threatlens_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env."""
    load_dotenv(_ENV_PATH, override=False)


def _env_str(name: str) -> str:
    return (os.getenv(name) or "").strip()


def _env_int(name: str, fallback: int) -> int:
    raw = _env_str(name)
    if not raw:
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if value >= 0 else fallback


def _env_float(name: str, fallback: float) -> float:
    raw = _env_str(name)
    if not raw:
        return fallback
    try:
        value = float(raw)
    except ValueError:
        return fallback
    return value if value > 0 else fallback


def get_api_base_url() -> str:
    """Return THREATLENS_API_BASE_URL without a trailing slash."""
    load_threatlens_env()
    return (_env_str("THREATLENS_API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/")


def is_remote_enabled() -> bool:
    """
    Return False only when THREATLENS_REMOTE_ENABLED is explicitly falsy.
    Unrecognised values keep the default (enabled).
    """
    load_threatlens_env()
    return _env_str("THREATLENS_REMOTE_ENABLED").lower() not in _FALSY


def get_remote_timeout_sec() -> float:
    load_threatlens_env()
    return _env_float("THREATLENS_REMOTE_TIMEOUT_SEC", DEFAULT_REMOTE_TIMEOUT_SEC)


def get_profile_name() -> str:
    """Return THREATLENS_PROFILE lower-cased; default: full."""
    load_threatlens_env()
    return (_env_str("THREATLENS_PROFILE") or DEFAULT_PROFILE).lower()


def get_fallback_delay_window_ms() -> tuple[int, int]:
    """
    Return (min_ms, max_ms) for the simulated fallback delay.
    A window with max below min collapses to (min, min).
    """
    load_threatlens_env()
    low = _env_int("THREATLENS_FALLBACK_DELAY_MIN_MS", DEFAULT_FALLBACK_DELAY_MIN_MS)
    high = _env_int("THREATLENS_FALLBACK_DELAY_MAX_MS", DEFAULT_FALLBACK_DELAY_MAX_MS)
    return low, max(low, high)


def get_network_fallback_delay_ms() -> int:
    load_threatlens_env()
    return _env_int("THREATLENS_NETWORK_FALLBACK_DELAY_MS", DEFAULT_NETWORK_FALLBACK_DELAY_MS)


def get_random_seed() -> int | None:
    """Return THREATLENS_RANDOM_SEED as int, or None when unset or not an integer."""
    load_threatlens_env()
    raw = _env_str("THREATLENS_RANDOM_SEED")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def get_api_bind() -> tuple[str, int]:
    """Return (API_HOST, API_PORT) for the API server."""
    load_threatlens_env()
    host = _env_str("API_HOST") or DEFAULT_API_HOST
    port = _env_int("API_PORT", DEFAULT_API_PORT) or DEFAULT_API_PORT
    return host, port
