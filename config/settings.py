from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    """Application settings - reads from environment variables"""

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_key: str = ""

    # Telegram
    telegram_bot_token: str = ""

    # Push notifications (Firebase Cloud Messaging)
    fcm_server_key: str = ""
    fcm_endpoint: str = "https://fcm.googleapis.com/fcm/send"

    # HTTP API
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    cors_origins: List[str] = []
    # Reverse proxies allowed to set X-Forwarded-For
    trusted_proxies: List[str] = []

    # App Settings
    admin_telegram_ids: List[int] = []

    # Environment
    env: str = "development"
    debug: bool = False

    @field_validator('admin_telegram_ids', mode='before')
    @classmethod
    def parse_admin_ids(cls, v):
        if isinstance(v, str):
            return [int(x.strip()) for x in v.split(",") if x.strip()]
        if isinstance(v, int):
            return [v]
        if isinstance(v, list):
            return v
        return []

    @field_validator('cors_origins', 'trusted_proxies', mode='before')
    @classmethod
    def parse_str_list(cls, v):
        if isinstance(v, str):
            return [x.strip() for x in v.split(",") if x.strip()]
        if isinstance(v, list):
            return v
        return []

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,  # SUPABASE_URL == supabase_url
    )


# Create settings instance
settings = Settings()
