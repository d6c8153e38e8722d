# app/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    SOURCE_URL: str = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
    SOURCE_FILE: Optional[str] = None # Local JSON file, handy when working offline
    SOURCE_TIMEOUT: float = 10.0

    DEFAULT_PER_PAGE: int = 10
    MAX_PER_PAGE: int = 100

    CORS_ALLOW_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env")

    def get_cors_origins(self):
        return [origin.strip() for origin in self.CORS_ALLOW_ORIGINS.split(",") if origin.strip()]

settings = Settings()
