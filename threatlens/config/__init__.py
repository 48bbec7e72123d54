"""
Configuration management for ThreatLens.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for remote endpoint, profile and delays.
"""

from threatlens.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
