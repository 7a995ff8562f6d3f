"""
Application settings and configuration
"""

from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Server Configuration
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=3000, description="Webhook listener port")
    WEBHOOK_PATH: str = Field(default="/webhook", description="Webhook listener path")
    DEBUG: bool = Field(default=False, description="Debug mode")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # GitHub Configuration
    GITHUB_WEBHOOK_SECRET: str = Field(..., description="GitHub webhook secret")
    GITHUB_TOKEN: Optional[str] = Field(
        default=None, description="GitHub personal access token"
    )
    GITHUB_API_URL: str = Field(
        default="https://api.github.com", description="GitHub API URL"
    )

    # Plugin Configuration
    PLUGIN_ID: str = Field(default="plugin-github", description="Origin tag for envelopes")
    EVENT_PROMPT: str = Field(
        default="", description="Extra instruction appended to event descriptions"
    )

    # Downstream Dispatch
    DOWNSTREAM_URL: Optional[str] = Field(
        default=None, description="Event consumer endpoint; envelopes are only logged when unset"
    )
    DISPATCH_TIMEOUT: float = Field(
        default=30.0, gt=0, description="Downstream dispatch timeout in seconds"
    )

    @field_validator("WEBHOOK_PATH")
    @classmethod
    def validate_webhook_path(cls, value: str) -> str:
        if not value.strip("/"):
            raise ValueError("WEBHOOK_PATH must not be the root path")
        return value

    @property
    def webhook_path(self) -> str:
        """Webhook path with a leading slash and no trailing slash"""
        return "/" + self.WEBHOOK_PATH.strip("/")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Global settings instance
settings = Settings()
