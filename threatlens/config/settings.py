"""
Application settings.

Aggregates the env accessors into one typed, immutable Settings object
used by the orchestrator, the remote client, the API server and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from threatlens.config import env


@dataclass(frozen=True)
class Settings:
    """Runtime configuration; construct directly in tests, or via get_settings()."""

    api_base_url: str = env.DEFAULT_API_BASE_URL
    remote_enabled: bool = True
    remote_timeout_sec: float = env.DEFAULT_REMOTE_TIMEOUT_SEC
    profile: str = env.DEFAULT_PROFILE
    fallback_delay_min_ms: int = env.DEFAULT_FALLBACK_DELAY_MIN_MS
    fallback_delay_max_ms: int = env.DEFAULT_FALLBACK_DELAY_MAX_MS
    network_fallback_delay_ms: int = env.DEFAULT_NETWORK_FALLBACK_DELAY_MS
    random_seed: int | None = None
    api_host: str = env.DEFAULT_API_HOST
    api_port: int = env.DEFAULT_API_PORT

    def with_overrides(self, **changes) -> "Settings":
        """Return a copy with the given fields replaced (CLI flags, tests)."""
        return replace(self, **changes)


def get_settings() -> Settings:
    """Return settings read from the environment (and .env) at call time."""
    delay_min, delay_max = env.get_fallback_delay_window_ms()
    host, port = env.get_api_bind()
    return Settings(
        api_base_url=env.get_api_base_url(),
        remote_enabled=env.is_remote_enabled(),
        remote_timeout_sec=env.get_remote_timeout_sec(),
        profile=env.get_profile_name(),
        fallback_delay_min_ms=delay_min,
        fallback_delay_max_ms=delay_max,
        network_fallback_delay_ms=env.get_network_fallback_delay_ms(),
        random_seed=env.get_random_seed(),
        api_host=host,
        api_port=port,
    )
