"""Configuration management using Pydantic Settings."""

from typing import Any

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_10_2) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/41.0.2272.89 Safari/537.36"
)

# Keys of the original config table that differ from the field names
KEBAB_KEYS = {
    "recovery-email": "recovery_email",
    "user-agent": "user_agent",
    "max-sleep-interval": "max_sleep_interval",
}


class Settings(BaseSettings):
    """Session settings loaded from keyword overrides, environment and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="TRENDS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Account
    email: str = Field(default="", description="Google account email")
    password: SecretStr = Field(default=SecretStr(""), description="Google account password")
    recovery_email: str = Field(default="", description="Answer for the recovery email challenge")

    # Client identity
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User agent sent with every request")
    language: str = Field(default="en_US", description="Locale stored in the Trends locale cookie")

    # Pacing (hundredths of a second, kept for downstream Trends queries)
    max_sleep_interval: int = Field(default=150, description="Maximum sleep interval between requests (in s/100)")

    # HTTP
    request_timeout: int = Field(default=30, gt=0, description="Request timeout in seconds")
    max_redirects: int = Field(default=10, ge=0, description="Maximum redirects followed per request")

    @model_validator(mode="before")
    @classmethod
    def accept_kebab_keys(cls, data: Any) -> Any:
        """Map keys like ``recovery-email`` onto their fields; they win over env values."""
        if isinstance(data, dict):
            data = dict(data)
            for kebab, name in KEBAB_KEYS.items():
                if kebab in data:
                    data[name] = data.pop(kebab)
        return data

    @field_validator("max_sleep_interval")
    @classmethod
    def check_sleep_interval(cls, v: int) -> int:
        """The sleep interval has to be > 10."""
        if v <= 10:
            raise ValueError("max_sleep_interval has to be > 10")
        return v


def load_settings(**overrides) -> Settings:
    """Load settings from environment and .env file, with keyword overrides on top."""
    return Settings(**overrides)
