from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    API_PREFIX: str = "/api/v1"
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    DB_POOL_TIMEOUT_SECONDS: int = 10
    DB_STATEMENT_TIMEOUT_MS: int = 5000
    LOG_LEVEL: str = "INFO"
    LOCAL_TIMEZONE: str = "Asia/Manila"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
