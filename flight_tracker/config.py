"""
Configuration management for the flight tracker.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(RuntimeError):
    """A required setting is missing or unusable."""


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back on bad input."""
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class AviationStackConfig:
    """AviationStack API configuration for flight lookups."""
    api_key: Optional[str] = field(
        default_factory=lambda: os.getenv('AVIATIONSTACK_API_KEY') or None
    )
    base_url: str = field(
        default_factory=lambda: os.getenv('AVIATIONSTACK_BASE_URL', 'https://api.aviationstack.com/v1')
    )
    timeout_seconds: float = field(
        default_factory=lambda: _env_float('AVIATIONSTACK_TIMEOUT_SECONDS', 10.0)
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def require_api_key(self) -> str:
        """Return the API key or raise ConfigurationError when unset."""
        if not self.api_key:
            raise ConfigurationError('AVIATIONSTACK_API_KEY is not configured')
        return self.api_key


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    aviationstack: AviationStackConfig

    # Flask settings
    secret_key: str
    debug: bool
    port: int


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        aviationstack=AviationStackConfig(),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
        port=int(os.getenv('PORT', '5000')),
    )


# Singleton instance
config = load_config()
