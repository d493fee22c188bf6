import json
import logging
import os
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "ANIME_API_CONFIG"
DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_DB_URL = "sqlite+aiosqlite:///data/database.db"


class ApiSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    enable_docs: bool = True
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    enable_ssl: bool = False
    ssl_key_path: Optional[str] = None
    ssl_cert_path: Optional[str] = None


class AuthSettings(BaseModel):
    jwt_secret: Optional[str] = None


class LoggingSettings(BaseModel):
    level: str = "INFO"


class AppConfig(BaseModel):
    """Runtime configuration, read from config.json and the environment."""

    db_url: str = DEFAULT_DB_URL
    api: ApiSettings = Field(default_factory=ApiSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_config(path: Optional[str] = None) -> AppConfig:
    """
    Read the config file (if any) and apply environment overrides.

    Environment variables win over the file: DATABASE_URL, JWT_SECRET,
    PORT and LOG_LEVEL.
    """
    path = path or os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)
    raw: dict = {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        logger.debug(f"Config file {path} not found, using defaults")

    config = AppConfig.model_validate(raw)

    if os.environ.get("DATABASE_URL"):
        config.db_url = os.environ["DATABASE_URL"]
    if os.environ.get("JWT_SECRET"):
        config.auth.jwt_secret = os.environ["JWT_SECRET"]
    if os.environ.get("PORT"):
        config.api.port = int(os.environ["PORT"])
    if os.environ.get("LOG_LEVEL"):
        config.logging.level = os.environ["LOG_LEVEL"]

    return config


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return load_config()
