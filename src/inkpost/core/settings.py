"""Application settings and configuration.

This module defines all configuration options for the Inkpost application.
Settings are loaded from environment variables with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Inkpost", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(default="change-me", alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")

    # Database configuration
    database_url: str = Field(default="sqlite:///./inkpost.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Public address used when building absolute links (e.g. next-page URLs)
    protocol: str = Field(default="http", alias="PROTOCOL")
    host: str = Field(default="localhost:3000", alias="HOST")

    # JWT authentication settings
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_seconds: int = Field(default=300, alias="ACCESS_TOKEN_EXPIRE_SECONDS")
    refresh_token_expire_seconds: int = Field(
        default=3600,
        alias="REFRESH_TOKEN_EXPIRE_SECONDS",
    )
    hash_rounds: int = Field(default=10, alias="HASH_ROUNDS")

    # File storage
    public_folder: str = Field(default="./public", alias="PUBLIC_FOLDER")

    # Listing defaults
    default_page_size: int = Field(default=20, alias="DEFAULT_PAGE_SIZE")

    # CORS configuration for web frontend access
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
    def base_url(self) -> str:
        """Return the public ``protocol://host`` prefix for absolute links."""
        return f"{self.protocol}://{self.host}"

    @property
    def public_folder_path(self) -> Path:
        """Return the root folder for publicly served files."""
        return Path(self.public_folder).resolve()

    @property
    def temp_folder_path(self) -> Path:
        """Return the staging folder for freshly uploaded files."""
        return self.public_folder_path / "temp"

    @property
    def post_image_path(self) -> Path:
        """Return the permanent folder for post images."""
        return self.public_folder_path / "posts"


settings = Settings()
