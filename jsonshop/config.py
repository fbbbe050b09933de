# jsonshop/config.py
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration sourced from JSONSHOP_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="JSONSHOP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    products_path: str = "productos.json"
    carts_path: str = "carritos.json"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]


def load_settings() -> Settings:
    return Settings()
