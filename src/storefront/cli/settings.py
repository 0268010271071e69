from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AdminCliSettings(BaseSettings):
    """Admin console settings loaded from environment variables and .env files."""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    api_url: str = Field(default="http://localhost:3001")
    access_token: str | None = Field(default=None)
    cookie_name: str = Field(default="accessToken")
    timeout_seconds: float = Field(default=10.0)
