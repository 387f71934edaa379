"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - default_language is always a member of supported_languages
    - Direct writes are never enabled when environment == "production"

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Write gating is an explicit flag handed to the resolver, not an env check
      buried inside a handler
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://directory:directory@db:5432/directory"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Deployment
    environment: str = "development"
    allow_direct_writes: bool = False

    # Enterprise API
    enterprise_cache_control: int = 300
    supported_languages: list[str] = ["en", "es"]
    default_language: str = "en"

    # Sessions & OAuth
    session_secret: str = "change-me-session-secret"
    login_success_redirect: str = "/"
    twitter_client_id: str = ""
    twitter_client_secret: str = ""
    instagram_client_id: str = ""
    instagram_client_secret: str = ""
    facebook_client_id: str = ""
    facebook_client_secret: str = ""

    # Permissions — identities are "<provider>:<user id>"
    directory_admins: list[str] = []
    enterprise_admins: dict[str, list[str]] = {}

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @model_validator(mode="after")
    def check_default_language(self):
        if self.default_language not in self.supported_languages:
            raise ValueError(
                f"default_language '{self.default_language}' must be one of "
                f"{self.supported_languages}",
            )
        return self

    @property
    def direct_writes_enabled(self) -> bool:
        return self.allow_direct_writes and self.environment != "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
