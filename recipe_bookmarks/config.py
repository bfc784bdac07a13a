from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # YouTube Data API (optional - enables full video descriptions)
    youtube_api_key: str | None = None

    # OpenAI (optional - enables the LLM fallback extractor)
    openai_api_key: str | None = None
    llm_model: str = "gpt-4o-mini"

    # Upstream limits
    http_timeout: float = 10.0
    llm_timeout: float = 30.0
    llm_max_input_chars: int = 8000
    youtube_description_max_chars: int = 5000

    # Sentry error monitoring
    sentry_dsn: str | None = None

    # Environment
    environment: str = "development"

    # API Settings
    api_title: str = "Recipe Bookmarks API"
    api_version: str = "1.0.0"

    @property
    def youtube_api_enabled(self) -> bool:
        """Check if the YouTube Data API is configured."""
        return bool(self.youtube_api_key)

    @property
    def llm_enabled(self) -> bool:
        """Check if the LLM fallback is configured."""
        return bool(self.openai_api_key)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
