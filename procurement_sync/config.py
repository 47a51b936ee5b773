# procurement_sync/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]
    ALLOWED_HOSTS: List[str] = ["*"]

    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    # Outbound ERP sync
    ERP_SYNC_BATCH_LIMIT: int = 50
    ERP_USER_AGENT: str = "Procurement-ERP-Sync/1.0"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding='utf-8', extra='ignore')

settings = Settings()
