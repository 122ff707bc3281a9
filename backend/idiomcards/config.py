"""Application configuration loaded from environment variables.

Provides type-safe access to configuration with sensible defaults.
Only the composition root and the API layer read these; domain services
receive plain values.
"""

import os
from dataclasses import dataclass
from pathlib import Path


def get_cors_origins() -> list[str]:
    """Get allowed CORS origins from environment.

    Environment variable: CORS_ORIGINS (comma-separated)
    Default: localhost:3000 for development
    """
    origins_str = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


# Restricted HTTP methods - only what the API actually uses
CORS_ALLOWED_METHODS = ["GET", "POST", "PATCH", "DELETE", "OPTIONS"]


def get_log_level() -> str:
    """Get root log level (LOG_LEVEL, default INFO)."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_deck_store_type() -> str:
    """Get deck store type from environment.

    Options:
        - 'sqlite': Persist decks in a SQLite file (default)
        - 'memory': Keep decks in memory (no persistence)
    """
    return os.getenv("DECK_STORE", "sqlite").lower()


def get_deck_db_path() -> str:
    """Get deck database path from environment."""
    default_path = str(Path.home() / ".idiomcards" / "decks.db")
    return os.getenv("DECK_DB_PATH", default_path)


# =============================================================================
# AI Providers
# =============================================================================


@dataclass(frozen=True)
class ProviderConfig:
    """Connection settings for one OpenAI-compatible text provider.

    Attributes:
        name: Provider key used by the API ('gemini', 'deepseek')
        api_key: API key; empty means the provider is not configured
        model: Chat model name
        base_url: OpenAI-compatible endpoint
        timeout: Request timeout in seconds
    """

    name: str
    api_key: str
    model: str
    base_url: str
    timeout: float = 30.0

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEEPSEEK_BASE_URL = "https://api.deepseek.com"
DEFAULT_PROVIDER = "gemini"


def load_provider_configs() -> dict[str, ProviderConfig]:
    """Read provider settings from the environment once.

    Environment variables:
        GEMINI_API_KEY (or GOOGLE_API_KEY), GEMINI_MODEL
        DEEPSEEK_API_KEY, DEEPSEEK_MODEL
    """
    return {
        "gemini": ProviderConfig(
            name="gemini",
            api_key=os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or "",
            model=os.getenv("GEMINI_MODEL", "gemini-1.5-flash"),
            base_url=GEMINI_BASE_URL,
        ),
        "deepseek": ProviderConfig(
            name="deepseek",
            api_key=os.getenv("DEEPSEEK_API_KEY", ""),
            model=os.getenv("DEEPSEEK_MODEL", "deepseek-chat"),
            base_url=DEEPSEEK_BASE_URL,
        ),
    }
