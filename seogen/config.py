"""Configuration loading from environment variables"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("openai", "anthropic")

DEFAULT_MODELS = {
    "openai": {"article": "gpt-4", "short": "gpt-3.5-turbo"},
    "anthropic": {"article": "claude-3-opus-20240229", "short": "claude-3-haiku-20240307"},
}

# Provider keys that switch the completion client to mock mode
MOCK_KEYS = {"", "mock"}


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, read-only after startup."""

    llm_provider: str = "openai"
    api_key: Optional[str] = None
    article_model: str = "gpt-4"
    short_model: str = "gpt-3.5-turbo"
    google_sheet_id: Optional[str] = None
    google_service_account_path: Optional[str] = None
    google_sheet_range: str = "Sheet1!A1"
    host: str = "0.0.0.0"
    port: int = 4000

    @property
    def mock_mode(self) -> bool:
        return self.api_key is None or self.api_key.strip().lower() in MOCK_KEYS


def _parse_positive_int(env_name: str, default: int) -> int:
    """Return a positive int from the environment, or default when unset."""
    value = os.getenv(env_name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{env_name} must be a positive integer") from exc
    if parsed <= 0:
        raise ValueError(f"{env_name} must be a positive integer")
    return parsed


def load_config() -> Settings:
    """Load configuration from environment variables

    Returns:
        Settings instance
    """
    load_dotenv()

    provider = os.getenv("LLM_PROVIDER", "openai").strip().lower()
    if provider not in SUPPORTED_PROVIDERS:
        logger.error(f"Invalid LLM_PROVIDER: {provider}")
        raise ValueError("LLM_PROVIDER must be 'openai' or 'anthropic'")

    key_name = "OPENAI_API_KEY" if provider == "openai" else "ANTHROPIC_API_KEY"
    defaults = DEFAULT_MODELS[provider]

    settings = Settings(
        llm_provider=provider,
        api_key=os.getenv(key_name),
        article_model=os.getenv("ARTICLE_MODEL", defaults["article"]),
        short_model=os.getenv("SHORT_MODEL", defaults["short"]),
        google_sheet_id=os.getenv("GOOGLE_SHEET_ID") or None,
        google_service_account_path=os.getenv("GOOGLE_SERVICE_ACCOUNT_PATH") or None,
        google_sheet_range=os.getenv("GOOGLE_SHEET_RANGE", "Sheet1!A1"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_parse_positive_int("PORT", 4000),
    )

    if settings.mock_mode:
        logger.warning(f"{key_name} not set, completions will be mocked")

    if not settings.google_sheet_id:
        logger.warning("GOOGLE_SHEET_ID not set, audit log rows will be skipped")

    logger.info(f"Configuration loaded: LLM={settings.llm_provider}, "
                f"article_model={settings.article_model}, "
                f"short_model={settings.short_model}, "
                f"mock={settings.mock_mode}")

    return settings
