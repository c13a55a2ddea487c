"""Application settings and configuration.

This module defines all configuration options for the IdeaHub Stage application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="IdeaHub Stage", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")

    # Database configuration
    database_url: str = Field(default="sqlite:///./ideahub.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Bearer tokens issued by the identity provider
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Content constraints (measured after trimming)
    comment_max_length: int = Field(default=2000, alias="COMMENT_MAX_LENGTH")
    idea_title_min_length: int = Field(default=3, alias="IDEA_TITLE_MIN_LENGTH")
    idea_title_max_length: int = Field(default=200, alias="IDEA_TITLE_MAX_LENGTH")

    # Page sizes: default and hard maximum per listing type
    comments_page_default: int = Field(default=20, alias="COMMENTS_PAGE_DEFAULT")
    comments_page_max: int = Field(default=100, alias="COMMENTS_PAGE_MAX")
    replies_page_default: int = Field(default=10, alias="REPLIES_PAGE_DEFAULT")
    replies_page_max: int = Field(default=50, alias="REPLIES_PAGE_MAX")
    ideas_page_default: int = Field(default=10, alias="IDEAS_PAGE_DEFAULT")
    ideas_page_max: int = Field(default=50, alias="IDEAS_PAGE_MAX")
    profile_page_default: int = Field(default=10, alias="PROFILE_PAGE_DEFAULT")
    profile_page_max: int = Field(default=50, alias="PROFILE_PAGE_MAX")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

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


settings = Settings()  # type: ignore[call-arg]
