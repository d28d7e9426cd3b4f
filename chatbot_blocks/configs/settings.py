from typing import List
from pydantic_settings import BaseSettings
from pathlib import Path

# Project root, so the .env file is found no matter where the app is started from
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "Chatbot Block Manager"
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Security settings
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Database settings
    DATABASE_URL: str = "sqlite+aiosqlite:///./chatbot_blocks.db"
    SQL_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    # CORS settings
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = BASE_DIR / ".env"
        env_file_encoding = 'utf-8'
        case_sensitive = True

settings = Settings()
