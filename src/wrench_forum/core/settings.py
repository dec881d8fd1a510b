"""Application settings and configuration.

This module defines all configuration options for the Wrench Forum application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Wrench Forum", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./wrench-forum.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Sessions and accounts
    session_ttl_days: int = Field(default=30, alias="SESSION_TTL_DAYS")
    session_cookie_name: str = Field(default="session", alias="SESSION_COOKIE_NAME")
    password_min_length: int = Field(default=8, alias="PASSWORD_MIN_LENGTH")

    # Voting policy; the author's own auto-upvote is always recorded.
    allow_self_votes: bool = Field(default=True, alias="ALLOW_SELF_VOTES")

    # Listing limits
    posts_per_page: int = Field(default=25, alias="POSTS_PER_PAGE")
    max_per_page: int = Field(default=100, alias="MAX_PER_PAGE")
    notification_limit: int = Field(default=50, alias="NOTIFICATION_LIMIT")
    activity_log_limit: int = Field(default=50, alias="ACTIVITY_LOG_LIMIT")
    search_limit: int = Field(default=20, alias="SEARCH_LIMIT")
    suggestion_limit: int = Field(default=5, alias="SUGGESTION_LIMIT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()
