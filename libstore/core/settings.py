from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "libstore"
    app_version: str = "1.0.0"
    port: int = 8000

    # Environment configuration
    environment: str = "development"  # development, staging, or production

    # Catalogue document
    data_file: str = "data/catalogue.json"
    json_indent: int = 2
    strict_document: bool = False  # Fail instead of defaulting absent kind fields to []
    skip_invalid_items: bool = False  # Drop undecodable entries with a warning

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env")

settings = Settings()
