"""Application settings and configuration.

This module defines all configuration options for the Quadboard Stage service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Quadboard Stage", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./quadboard.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Identity provider tokens (issued externally, verified here)
    identity_secret_key: str = Field(
        default="change-me-in-production",
        alias="IDENTITY_SECRET_KEY",
    )
    identity_jwt_algorithm: str = Field(default="HS256", alias="IDENTITY_JWT_ALGORITHM")
    identity_token_expire_minutes: int = Field(
        default=60 * 24,
        alias="IDENTITY_TOKEN_EXPIRE_MINUTES",
    )

    # Moderation oracle (Perspective-compatible analyze endpoint)
    perspective_api_url: str = Field(
        default="https://commentanalyzer.googleapis.com/v1alpha1/comments:analyze",
        alias="PERSPECTIVE_API_URL",
    )
    perspective_api_key: str | None = Field(default=None, alias="PERSPECTIVE_API_KEY")
    perspective_timeout_seconds: float = Field(
        default=5.0,
        alias="PERSPECTIVE_TIMEOUT_SECONDS",
    )

    # Harmfulness thresholds; a score strictly above any of them is harmful
    toxicity_threshold: float = Field(default=0.70, alias="TOXICITY_THRESHOLD")
    severe_toxicity_threshold: float = Field(default=0.60, alias="SEVERE_TOXICITY_THRESHOLD")
    insult_threshold: float = Field(default=0.60, alias="INSULT_THRESHOLD")
    profanity_threshold: float = Field(default=0.50, alias="PROFANITY_THRESHOLD")
    threat_threshold: float = Field(default=0.50, alias="THREAT_THRESHOLD")

    # Escalation
    temp_ban_days: int = Field(default=3, alias="TEMP_BAN_DAYS")

    # CORS configuration for the mobile/web clients
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def harm_thresholds(self) -> dict[str, float]:
        """Return oracle thresholds keyed by Perspective attribute name."""
        return {
            "TOXICITY": self.toxicity_threshold,
            "SEVERE_TOXICITY": self.severe_toxicity_threshold,
            "INSULT": self.insult_threshold,
            "PROFANITY": self.profanity_threshold,
            "THREAT": self.threat_threshold,
        }


settings = Settings()
