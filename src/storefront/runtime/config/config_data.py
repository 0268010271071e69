"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, field_validator


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(default=["http://localhost:3000"])
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["Content-Type", "Authorization"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default="logs/app.log", description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./storefront.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")
    create_tables: bool = Field(
        default=True, description="Create missing tables on application startup"
    )
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def password(self) -> str | None:
        """Resolve the database password.

        A password file wins over an environment variable; when neither is
        configured the password embedded in the URL (if any) is used.
        """
        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e
        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if not password:
                raise ValueError(
                    f"Environment variable {self.password_env_var} not set"
                )
            return password
        return None

    @property
    def connection_string(self) -> str:
        """Construct the database connection string with password if provided."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        resolved_password = self.password
        if resolved_password is None:
            return self.url

        if base_url.password and base_url.password != resolved_password:
            logger.warning(
                "Database password in the URL is overridden by the configured secret."
            )
        return base_url.set(password=resolved_password).render_as_string(
            hide_password=False
        )


class MediaConfig(BaseModel):
    """Cloudinary media host configuration."""

    cloud_name: str = Field(default="", description="Cloudinary cloud name")
    api_key: str = Field(default="", description="Cloudinary API key")
    api_secret: str = Field(default="", description="Cloudinary API secret")
    folder: str = Field(default="ecommerce", description="Upload folder")
    upload_prefix: str | None = Field(
        default=None, description="Override of the Cloudinary API host"
    )
    timeout_seconds: float = Field(default=30.0, description="Per-request timeout")

    @field_validator("cloud_name", "api_key", "api_secret", mode="before")
    @classmethod
    def _credential_as_str(cls, value):
        # An empty ${VAR:-} parses as YAML null, a numeric API key as int
        return "" if value is None else str(value)

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)


class AuthConfig(BaseModel):
    """Access token verification settings.

    Tokens are issued by the auth service and signed with a shared secret.
    """

    jwt_secret: str | None = Field(
        default=None, description="Shared secret used to verify access tokens"
    )
    algorithm: Literal["HS256", "HS384", "HS512"] = Field(default="HS256")
    cookie_name: str = Field(default="accessToken")
    admin_role: str = Field(default="SUPER_ADMIN")
    clock_skew: int = Field(default=30, description="Clock skew tolerance in seconds")

    @field_validator("jwt_secret", mode="before")
    @classmethod
    def _secret_as_str(cls, value):
        if value is None or value == "":
            return None
        return str(value)


class CatalogConfig(BaseModel):
    """Product listing defaults."""

    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=3001, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    media: MediaConfig = Field(
        default_factory=MediaConfig, description="Media host configuration"
    )
    auth: AuthConfig = Field(
        default_factory=AuthConfig, description="Access token configuration"
    )
    catalog: CatalogConfig = Field(
        default_factory=CatalogConfig, description="Product listing configuration"
    )
