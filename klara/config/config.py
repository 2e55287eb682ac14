# klara/config/config.py

"""
Client configuration

Loaded with pydantic-settings from (highest priority first):
- init kwargs
- environment variables (nested with "__", e.g. API__BASE_URL)
- .env file
- settings.yaml
- secret files

Usage:
    from klara.config import Config
    print(Config.api.base_url)
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from pathlib import Path

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Annotated
from pydantic import Field
from dotenv import load_dotenv

load_dotenv()


class ApiConfig(BaseModel):
    """REST backend location"""
    base_url: Annotated[str, Field(default="http://localhost:8080")]
    prefix: Annotated[str, Field(default="/api/v1")]
    # None leaves it to requests (no timeout)
    timeout: Annotated[Optional[float], Field(default=None)]

    @property
    def root(self) -> str:
        return self.base_url.rstrip("/") + self.prefix


class SessionConfig(BaseModel):
    """Keepalive and activity tracking"""
    refresh_interval_seconds: Annotated[int, Field(default=5 * 60, ge=1)]
    idle_threshold_seconds: Annotated[int, Field(default=10 * 60, ge=1)]
    activity_events: Annotated[
        List[str],
        Field(default=["click", "keydown", "scroll", "mousemove"]),
    ]


class ChatConfig(BaseModel):
    default_model: Annotated[str, Field(default="gpt-3.5-turbo")]


class LoggingConfig(BaseModel):
    level: Annotated[str, Field(default="INFO")]
    log_file: Annotated[Optional[str], Field(default=None)]


class Settings(BaseSettings):
    api: ApiConfig = Field(default_factory=ApiConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        def yaml_settings() -> Dict[str, Any]:
            path = Path("settings.yaml")
            if not path.exists():
                return {}
            return yaml.safe_load(path.read_text(encoding="utf-8")) or {}

        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )


Config = Settings()
