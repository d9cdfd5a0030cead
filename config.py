from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:5174",
    "https://catget-shop.web.app",
    "https://catget-shop.firebaseapp.com",
]


class Settings(BaseSettings):
    """Application settings from environment variables and .env."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "cattyDB"

    # Token cookie
    token_secret: str = Field(
        default="change-me",
        validation_alias=AliasChoices("access_token_secret", "token_secret"),
    )
    token_ttl_hours: int = 12

    # Deployment
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("app_env", "environment"),
    )
    auth_enabled: bool = False
    cors_origins: List[str] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
