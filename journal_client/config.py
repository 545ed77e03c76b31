"""
Journal Client — Configuration
==============================

What:  Where the UI finds the API, read from the environment or `.env`.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    # JOURNAL_API_URL
    api_url: str = Field(default="http://localhost:8000")

    # Seconds before an API call is abandoned
    request_timeout: float = Field(default=10.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="JOURNAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
