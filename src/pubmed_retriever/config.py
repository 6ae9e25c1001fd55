"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from pubmed_retriever.constants import (
    DEFAULT_DOC_CONTENT_CHARS_MAX,
    DEFAULT_EMAIL,
    DEFAULT_INITIAL_DELAY,
    DEFAULT_MAX_QUERY_LENGTH,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    DEFAULT_TOP_K_RESULTS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # NCBI credentials
    pubmed_email: str = DEFAULT_EMAIL
    pubmed_api_key: str = ""

    # Retrieval limits
    pubmed_top_k_results: int = DEFAULT_TOP_K_RESULTS
    pubmed_max_query_length: int = DEFAULT_MAX_QUERY_LENGTH
    pubmed_doc_content_chars_max: int = DEFAULT_DOC_CONTENT_CHARS_MAX

    # Transport
    pubmed_max_retry: int = DEFAULT_MAX_RETRIES
    pubmed_sleep_time: float = DEFAULT_INITIAL_DELAY  # seconds
    http_timeout: float = DEFAULT_TIMEOUT

    # App Settings
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
