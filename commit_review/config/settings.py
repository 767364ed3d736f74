"""Application settings using Pydantic Settings for environment variable management."""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # LLM Configuration (any OpenAI-compatible chat endpoint, DeepSeek by default)
    llm_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DEEPSEEK_API_KEY", "LLM_API_KEY"),
        description="API key for the review model provider",
    )
    llm_base_url: str = Field(
        default="https://api.deepseek.com/v1",
        description="Base URL of the OpenAI-compatible chat completions API",
    )
    llm_model: str = Field(default="deepseek-chat", description="Model to use")

    # GitHub Configuration
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GH_TOKEN", "GITHUB_TOKEN"),
        description="Optional GitHub token; anonymous requests are rate limited",
    )
    github_api_base_url: str = Field(
        default="https://api.github.com", description="GitHub REST API base URL"
    )
    github_user_agent: str = Field(
        default="Code-Review-Agent/1.0",
        description="User-Agent sent with every GitHub API request",
    )
    commits_per_page: int = Field(
        default=5, ge=1, le=100, description="Commits requested from the list API"
    )
    http_timeout: float = Field(
        default=30.0, description="Timeout in seconds for outbound HTTP calls"
    )

    # Observability
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token for observability"
    )

    # Application Settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )

    # Server Configuration
    # Use a localhost default to avoid binding to all interfaces.
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")

    # Conversation memory store
    database_url: str = Field(
        default="sqlite:///./commit_review.db",
        description="SQLAlchemy URL of the conversation memory database",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


# Global settings instance
settings = Settings()

# Validate required secrets in production to avoid silent failures
if settings.is_production and not settings.llm_api_key:
    raise RuntimeError(
        "Missing required environment variables for production: DEEPSEEK_API_KEY"
    )
